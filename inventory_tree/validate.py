"""Advisory structural validation of inventory records.

:func:`validate` inspects a batch before processing and reports problems as
structured :class:`ValidationError` records. It never raises and never
mutates its input; callers decide whether to process a batch that did not
validate cleanly (the pipeline itself tolerates most of these problems).

Both raw upstream mappings and :class:`InventoryItem` models are accepted.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Set, Tuple

from inventory_tree.models import InventoryItem


@dataclass(frozen=True)
class ValidationError:
    """One problem found in one record.

    Attributes:
        index: Position of the record in the batch.
        field: Name of the offending field (``id``, ``definition``...).
        message: Human-readable description.
        item_id: Record id when it could be read.
    """

    index: int
    field: str
    message: str
    item_id: Any = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationResult:
    errors: Tuple[ValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def messages(self) -> List[str]:
        return [str(e) for e in self.errors]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fields(record: Any) -> Optional[Tuple[Any, Any, Any, Any, Any]]:
    """Return (id, has_definition, name, weight, quantity) or None if unreadable."""
    if isinstance(record, InventoryItem):
        d = record.definition
        return record.id, d is not None, getattr(d, "name", None), getattr(
            d, "weight", None
        ), record.quantity
    if isinstance(record, Mapping):
        definition = record.get("definition")
        has_definition = isinstance(definition, Mapping)
        name = definition.get("name") if has_definition else None
        weight = definition.get("weight") if has_definition else None
        return record.get("id"), has_definition, name, weight, record.get("quantity")
    return None


def validate_record(record: Any, index: int) -> List[ValidationError]:
    """Validate a single record at ``index``."""
    read = _fields(record)
    if read is None:
        return [
            ValidationError(
                index, "record", f"Item at index {index} is not a record: {record!r}"
            )
        ]
    item_id, has_definition, name, weight, quantity = read
    errors: List[ValidationError] = []

    if not (isinstance(item_id, int) and not isinstance(item_id, bool) and item_id > 0):
        errors.append(
            ValidationError(
                index, "id", f"Item at index {index} has invalid ID: {item_id}", item_id
            )
        )

    if not has_definition:
        errors.append(
            ValidationError(
                index, "definition", f"Item at index {index} missing definition", item_id
            )
        )
    else:
        if not name:
            errors.append(
                ValidationError(
                    index, "name", f"Item at index {index} missing name", item_id
                )
            )
        if _is_number(weight) and weight < 0:
            errors.append(
                ValidationError(
                    index,
                    "weight",
                    f"Item {name or index} has negative weight: {weight}",
                    item_id,
                )
            )

    if not _is_number(quantity):
        errors.append(
            ValidationError(
                index,
                "quantity",
                f"Item {name or index} has invalid quantity: {quantity}",
                item_id,
            )
        )
    return errors


def validate(records: Sequence[Any]) -> ValidationResult:
    """Validate a batch of records.

    Besides per-record checks, ids repeated within the batch are reported on
    every occurrence after the first.
    """
    errors: List[ValidationError] = []
    seen: Set[Any] = set()
    for index, record in enumerate(records):
        errors.extend(validate_record(record, index))
        read = _fields(record)
        if read is None:
            continue
        item_id = read[0]
        try:
            duplicate = item_id in seen
        except TypeError:  # unhashable id, already reported as invalid
            continue
        if duplicate:
            errors.append(
                ValidationError(
                    index,
                    "id",
                    f"Item at index {index} has duplicate ID: {item_id}",
                    item_id,
                )
            )
        seen.add(item_id)
    return ValidationResult(errors=tuple(errors))
