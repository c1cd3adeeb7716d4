"""Exception hierarchy.

Only caller errors (a non-sequence item list, an unknown strategy name) and
single unusable records are raised. Malformed-but-present data is handled by
substituting defaults, and validation problems are collected as
:class:`inventory_tree.validate.ValidationError` records rather than raised.
"""


class InventoryError(Exception):
    """Base class for errors raised by this package."""


class InventoryInputError(InventoryError, TypeError):
    """The caller passed something the pipeline cannot work with at all."""


class RecordError(InventoryError, ValueError):
    """A single upstream record cannot be turned into an item.

    Batch loaders catch this per record, log it and continue with the rest.
    """

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"Record at index {index} skipped: {reason}")
        self.index = index
        self.reason = reason
