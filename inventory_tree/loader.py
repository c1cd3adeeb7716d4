"""Conversion of raw upstream records into :mod:`inventory_tree.models`.

Character exports arrive as JSON-decoded dicts with camelCase keys. The
functions here turn each record into a frozen :class:`InventoryItem` without
touching the source dict. Conversion is lenient: missing optional fields get
their defaults, and a numeric-looking string quantity is converted. Only a
record with no definition or no usable id is rejected, and
:func:`items_from_records` logs and skips those so one bad line never aborts
the batch.
"""

from dataclasses import replace
import logging
import math
from typing import Any, Iterable, List, Mapping, Optional

from inventory_tree.errors import RecordError
from inventory_tree.models import Cost, InventoryItem, ItemDefinition
from inventory_tree.types import CostUnit

logger = logging.getLogger(__name__)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int(value: Any) -> Optional[int]:
    number = _number(value)
    if number is None or not math.isfinite(number) or number != int(number):
        return None
    return int(number)


def cost_from_raw(raw: Any) -> Optional[Cost]:
    """Parse ``{"quantity": 15, "unit": "gp"}`` or a bare gold amount."""
    if isinstance(raw, Mapping):
        quantity = _number(raw.get("quantity"))
        if quantity is None:
            return None
        return Cost(quantity=quantity, unit=str(raw.get("unit") or CostUnit.GP))
    quantity = _number(raw)
    if quantity is None:
        return None
    return Cost(quantity=quantity, unit=CostUnit.GP)


def definition_from_raw(raw: Mapping[str, Any]) -> ItemDefinition:
    bundle_size = _int(raw.get("bundleSize"))
    return ItemDefinition(
        name=str(raw.get("name") or ""),
        weight=_number(raw.get("weight")),
        bundle_size=bundle_size if bundle_size and bundle_size > 0 else 1,
        is_container=bool(raw.get("isContainer", False)),
        weight_multiplier=_number(raw.get("weightMultiplier")),
        filter_type=str(raw.get("filterType") or ""),
        sub_type=raw.get("subType") or None,
        cost=cost_from_raw(raw.get("cost")),
        description=raw.get("description") or None,
        id=_int(raw.get("id")),
    )


def item_from_record(record: Mapping[str, Any], index: int = 0) -> InventoryItem:
    """Convert one upstream record.

    Raises:
        RecordError: The record is not a mapping, has no definition or has no
            integral id.
    """
    if not isinstance(record, Mapping):
        raise RecordError(index, f"expected a mapping, got {type(record).__name__}")
    definition = record.get("definition")
    if not isinstance(definition, Mapping):
        raise RecordError(index, "missing definition")
    item_id = _int(record.get("id"))
    if item_id is None:
        raise RecordError(index, f"unusable id {record.get('id')!r}")

    quantity = _number(record.get("quantity"))
    if quantity is None:
        logger.warning(
            "Item %s has non-numeric quantity %r; treating as 0",
            item_id,
            record.get("quantity"),
        )
        quantity = 0

    container_id = _int(record.get("containerEntityId"))
    return InventoryItem(
        id=item_id,
        definition=definition_from_raw(definition),
        quantity=quantity,
        container_entity_id=container_id if container_id is not None else 0,
        entity_type_id=_int(record.get("entityTypeId")),
        is_attuned=bool(record.get("isAttuned", False)),
        equipped=bool(record.get("equipped", False)),
        custom_name=record.get("customName") or None,
        custom_weight=_number(record.get("customWeight")),
    )


def with_numeric_quantity(item: InventoryItem) -> InventoryItem:
    """Return ``item``, or a copy with quantity 0 if its quantity is not a number."""
    quantity = item.quantity
    if isinstance(quantity, str) or _number(quantity) is None:
        logger.warning(
            "Item %s has non-numeric quantity %r; treating as 0", item.id, quantity
        )
        return replace(item, quantity=0)
    return item


def items_from_records(records: Iterable[Any]) -> List[InventoryItem]:
    """Convert a batch, passing models through and skipping unusable records."""
    items: List[InventoryItem] = []
    for index, record in enumerate(records):
        try:
            if isinstance(record, InventoryItem):
                if not isinstance(record.definition, ItemDefinition):
                    raise RecordError(index, "missing definition")
                items.append(with_numeric_quantity(record))
            else:
                items.append(item_from_record(record, index))
        except RecordError as e:
            logger.warning("%s", e)
    return items
