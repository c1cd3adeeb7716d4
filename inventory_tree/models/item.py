from dataclasses import dataclass
from typing import Optional

from inventory_tree.models.definition import ItemDefinition
from inventory_tree.types import ItemID


@dataclass(frozen=True)
class InventoryItem:
    """One inventory line as supplied by the caller.

    Items form a tree through ``container_entity_id``: the owning character's
    id means the item is carried directly, any other value names the item id
    of the container holding it.

    Attributes:
        id:
            Positive item id, unique within a batch.
        definition:
            Catalog data for the item.
        quantity:
            Number carried. Zero or negative quantities are left out of the
            tree unless explicitly requested.
        container_entity_id:
            Character id (root level) or the id of the containing item.
        entity_type_id:
            Upstream entity type discriminator, informational only.
        is_attuned:
            Attunement flag.
        equipped:
            Whether the item is worn or wielded.
        custom_name:
            User-supplied name overriding ``definition.name`` when set.
        custom_weight:
            User-supplied weight overriding ``definition.weight`` when set.
    """

    id: ItemID
    definition: ItemDefinition
    quantity: float = 1
    container_entity_id: int = 0
    entity_type_id: Optional[int] = None
    is_attuned: bool = False
    equipped: bool = False
    custom_name: Optional[str] = None
    custom_weight: Optional[float] = None

    @property
    def name(self) -> str:
        return self.custom_name or self.definition.name
