"""Item definition value objects (catalog data shared by every copy of an item)."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Cost:
    """Purchase price of one item.

    Attributes:
        quantity: Number of coins.
        unit: Coin denomination (``cp``, ``sp``, ``ep``, ``gp`` or ``pp``).
    """

    quantity: float
    unit: str = "gp"


@dataclass(frozen=True)
class ItemDefinition:
    """Catalog entry describing what an item *is*.

    Attributes:
        name:
            Display name; may be empty for malformed upstream data.
        weight:
            Listed weight of one bundle in pounds. ``None`` renders and weighs
            as 0.
        bundle_size:
            Number of items the listed weight covers (e.g. 50 arrows weigh
            1 lb). Values below 1 are treated as 1.
        is_container:
            Whether other items may reference this one as their container.
        weight_multiplier:
            Scalar applied to the weight of a container's contents when it is
            carried. ``None`` behaves as 1; ``0`` marks a weightless ("magic")
            container such as a Bag of Holding.
        filter_type:
            Broad category (``Weapon``, ``Armor``, ``Adventuring Gear``...).
        sub_type:
            Finer category; preferred over ``filter_type`` when rendering.
        cost:
            Optional purchase price.
        description:
            Optional rich-text (HTML) description.
        id:
            Upstream definition id, informational only.
    """

    name: str = ""
    weight: Optional[float] = None
    bundle_size: int = 1
    is_container: bool = False
    weight_multiplier: Optional[float] = None
    filter_type: str = ""
    sub_type: Optional[str] = None
    cost: Optional[Cost] = None
    description: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_magic_container(self) -> bool:
        return self.is_container and self.weight_multiplier == 0
