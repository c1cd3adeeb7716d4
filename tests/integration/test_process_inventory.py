from dataclasses import replace

import pytest

from inventory_tree.errors import InventoryInputError
from inventory_tree.models import ContainerItem, InventoryItem, ItemDefinition
from inventory_tree.processor import InventoryProcessor, process_inventory
from inventory_tree.renderer.strategy import RenderContext, RenderStrategy
from inventory_tree.weight import encumbrance, encumbrance_level
from inventory_tree.types import EncumbranceLevel
from tests.test_utils import (
    CHARACTER_ID,
    make_backpack_inventory,
    make_container,
    make_item,
    make_record,
)

EXPECTED_BACKPACK_OUTPUT = (
    "\t\t<inventorylist>\n"
    "\t\t\t<id-00001>\n"
    '\t\t\t\t<count type="number">1</count>\n'
    '\t\t\t\t<name type="string">Longsword</name>\n'
    '\t\t\t\t<weight type="number">3</weight>\n'
    '\t\t\t\t<locked type="number">1</locked>\n'
    '\t\t\t\t<isidentified type="number">1</isidentified>\n'
    '\t\t\t\t<type type="string">Martial Weapon</type>\n'
    '\t\t\t\t<cost type="string">15 gp</cost>\n'
    "\t\t\t</id-00001>\n"
    "\t\t\t<id-00002>\n"
    '\t\t\t\t<count type="number">1</count>\n'
    '\t\t\t\t<name type="string">Backpack</name>\n'
    '\t\t\t\t<weight type="number">5</weight>\n'
    '\t\t\t\t<locked type="number">1</locked>\n'
    '\t\t\t\t<isidentified type="number">1</isidentified>\n'
    '\t\t\t\t<type type="string">Adventuring Gear</type>\n'
    '\t\t\t\t<cost type="string">2 gp</cost>\n'
    "\t\t\t\t<inventorylist>\n"
    "\t\t\t\t\t<id-00003>\n"
    '\t\t\t\t\t\t<count type="number">10</count>\n'
    '\t\t\t\t\t\t<name type="string">Rations (1 day)</name>\n'
    '\t\t\t\t\t\t<weight type="number">2</weight>\n'
    '\t\t\t\t\t\t<locked type="number">1</locked>\n'
    '\t\t\t\t\t\t<isidentified type="number">1</isidentified>\n'
    '\t\t\t\t\t\t<type type="string">Other Gear</type>\n'
    '\t\t\t\t\t\t<cost type="string">-</cost>\n'
    "\t\t\t\t\t</id-00003>\n"
    "\t\t\t\t\t<id-00004>\n"
    '\t\t\t\t\t\t<count type="number">1</count>\n'
    '\t\t\t\t\t\t<name type="string">Rope, Hempen (50 feet)</name>\n'
    '\t\t\t\t\t\t<weight type="number">10</weight>\n'
    '\t\t\t\t\t\t<locked type="number">1</locked>\n'
    '\t\t\t\t\t\t<isidentified type="number">1</isidentified>\n'
    '\t\t\t\t\t\t<type type="string">Other Gear</type>\n'
    '\t\t\t\t\t\t<cost type="string">-</cost>\n'
    "\t\t\t\t\t</id-00004>\n"
    "\t\t\t\t</inventorylist>\n"
    "\t\t\t</id-00002>\n"
    "\t\t</inventorylist>\n"
)


def test_backpack_inventory_renders_exactly() -> None:
    result = process_inventory(make_backpack_inventory(), CHARACTER_ID)
    assert result.rendered_output == EXPECTED_BACKPACK_OUTPUT
    stats = result.statistics
    assert stats.total_items == 4
    assert stats.container_count == 1
    assert stats.magic_containers == 0
    assert stats.total_weight == 38
    assert stats.rendered_items == 4
    assert stats.skipped_items == 0


def test_total_items_ignores_filtering() -> None:
    items = [make_item(1), make_item(2, quantity=0), make_record(3), {"id": 4}]
    result = process_inventory(items, CHARACTER_ID)
    assert result.statistics.total_items == 4
    assert result.nested_structure.total_items == 4
    assert result.statistics.rendered_items == 2
    assert result.statistics.skipped_items == 2


def test_processing_is_idempotent() -> None:
    items = make_backpack_inventory() + [make_record(9, "Sword & Shield")]
    first = process_inventory(items, CHARACTER_ID)
    second = process_inventory(items, CHARACTER_ID)
    assert first.rendered_output == second.rendered_output
    assert first.statistics == second.statistics


def test_container_current_weight() -> None:
    items = [
        make_container(10, "Chest"),
        make_item(11, "A", weight=10, quantity=1, container_id=10),
        make_item(12, "B", weight=2, quantity=10, container_id=10),
    ]
    result = process_inventory(items, CHARACTER_ID)
    assert result.nested_structure.containers["10"].current_weight == 30


def test_bundle_weight_renders_exact_fraction() -> None:
    result = process_inventory(
        [make_item(1, "Arrows", weight=1, quantity=20, bundle_size=50)], CHARACTER_ID
    )
    assert '<weight type="number">0.02</weight>' in result.rendered_output


def test_magic_container() -> None:
    items = [
        make_container(1, "Bag of Holding", weight=15, weight_multiplier=0),
        make_item(2, "Anvil", weight=100, container_id=1),
        make_item(3, "Torch", weight=1),
    ]
    result = process_inventory(items, CHARACTER_ID)
    stats = result.statistics
    assert stats.magic_containers == 1
    assert stats.magic_container_names == ("Bag of Holding",)
    assert stats.total_weight == 16
    bag = result.nested_structure.containers["1"]
    assert [child.id for child in bag.contents] == [2]
    assert "Anvil" in result.rendered_output


def test_zero_quantity_toggle() -> None:
    items = [make_item(1, "Broken Lantern", quantity=0), make_item(2, "Torch")]
    hidden = process_inventory(items, CHARACTER_ID)
    assert [n.id for n in hidden.nested_structure.root_items] == [2]
    assert "Broken Lantern" not in hidden.rendered_output

    shown = process_inventory(items, CHARACTER_ID, {"includeZeroQuantityItems": True})
    assert [n.id for n in shown.nested_structure.root_items] == [1, 2]
    assert '<count type="number">0</count>' in shown.rendered_output


def test_ampersand_is_escaped() -> None:
    result = process_inventory([make_item(1, "Sword & Shield")], CHARACTER_ID)
    output = result.rendered_output
    assert '<name type="string">Sword &amp; Shield</name>' in output
    assert "& " not in output


def test_empty_input() -> None:
    result = process_inventory([], CHARACTER_ID)
    assert result.rendered_output == "\t\t<inventorylist>\n\t\t</inventorylist>\n"
    assert list(result.nested_structure.root_items) == []
    assert result.statistics.container_count == 0
    assert result.statistics.total_items == 0
    assert result.statistics.total_weight == 0


def test_custom_strategy_output_is_used_verbatim() -> None:
    calls: list[tuple[str, int, int]] = []

    def render_item(
        item: InventoryItem, index: int, depth: int, context: RenderContext
    ) -> str:
        calls.append(("item", item.id, index))
        return f"[item {index} {item.name} d{depth}]"

    def render_container(
        container: ContainerItem,
        contents: list[str],
        index: int,
        depth: int,
        context: RenderContext,
    ) -> str:
        calls.append(("container", container.id, index))
        return f"[box {index} {'|'.join(contents)}]"

    processor = InventoryProcessor()
    processor.set_strategy(RenderStrategy(render_item, render_container))
    result = processor.process(make_backpack_inventory(), CHARACTER_ID)

    assert calls == [
        ("item", 1, 1),
        ("item", 3, 3),
        ("item", 4, 4),
        ("container", 2, 2),
    ]
    assert result.rendered_output == (
        "\t\t<inventorylist>\n"
        "[item 1 Longsword d0]"
        "[box 2 [item 3 Rations (1 day) d1]|[item 4 Rope, Hempen (50 feet) d1]]"
        "\t\t</inventorylist>\n"
    )
    assert "<count" not in result.rendered_output


def test_malformed_records_do_not_abort() -> None:
    items = [
        InventoryItem(id=1, definition=ItemDefinition(name="Mystery")),
        make_item(2, name="", weight=None),
        make_record(3, "Dagger", weight=None),
        "garbage",
        make_record(4, "Arrows", quantity="many"),
    ]
    result = process_inventory(items, CHARACTER_ID)
    output = result.rendered_output
    assert '<name type="string">Mystery</name>' in output
    assert '<name type="string"></name>' in output
    assert '<name type="string">Dagger</name>' in output
    assert output.count('<weight type="number">0</weight>') == 3
    assert "Arrows" not in output
    assert result.statistics.total_items == 5


def test_cycles_and_orphans_are_rendered_at_root() -> None:
    items = [
        make_container(1, "Sack", container_id=2),
        make_container(2, "Crate", container_id=1),
        make_item(3, "Lost Ring", container_id=777),
    ]
    result = process_inventory(items, CHARACTER_ID)
    assert [n.id for n in result.nested_structure.root_items] == [1, 3]
    assert result.statistics.rendered_items == 3


def test_flat_rendering() -> None:
    result = process_inventory(
        make_backpack_inventory(), CHARACTER_ID, {"respectContainerHierarchy": False}
    )
    assert result.rendered_output.count("\t\t\t<id-") == 4
    assert "\t\t\t\t<inventorylist>\n\t\t\t\t</inventorylist>\n" in result.rendered_output


def test_flat_rendering_keeps_magic_container_weight() -> None:
    items = [
        make_container(1, "Bag of Holding", weight=15, weight_multiplier=0),
        make_item(2, "Anvil", weight=100, container_id=1),
    ]
    nested = process_inventory(items, CHARACTER_ID)
    flat = process_inventory(items, CHARACTER_ID, {"respectContainerHierarchy": False})
    assert nested.statistics.total_weight == 15
    assert flat.statistics == nested.statistics
    assert flat.nested_structure == nested.nested_structure
    assert "\t\t\t<id-00002>\n" in flat.rendered_output


def test_long_name_with_ampersand_stays_escaped() -> None:
    result = process_inventory([make_item(1, "a" * 998 + " & b")], CHARACTER_ID)
    output = result.rendered_output
    assert "a &amp;</name>" in output
    assert "&" not in output.replace("&amp;", "")


def test_description_with_escaped_bracket_and_foreign_tag() -> None:
    items = [make_item(1, description="<p>heals if hp &lt; 5</p><div onclick=x>y</div>")]
    result = process_inventory(items, CHARACTER_ID, {"generateDetailedXML": True})
    assert (
        '<description type="formattedtext"><p>heals if hp &lt; 5</p>y</description>'
        in result.rendered_output
    )


def test_processor_forwards_sanitizers() -> None:
    processor = InventoryProcessor()
    result = processor.process(
        [make_item(1, "Torch", description="lit")],
        CHARACTER_ID,
        {"generateDetailedXML": True},
        sanitize_text=str.upper,
        sanitize_html=lambda text: f"<i>{text}</i>",
    )
    assert '<name type="string">TORCH</name>' in result.rendered_output
    assert "<i>lit</i></description>" in result.rendered_output


def test_detailed_rendering_includes_description() -> None:
    items = [make_item(1, "Potion", description="<p>Heals <b>2d4</b> & more</p>")]
    result = process_inventory(items, CHARACTER_ID, {"generateDetailedXML": True})
    assert (
        '<description type="formattedtext"><p>Heals <b>2d4</b> &amp; more</p>'
        "</description>" in result.rendered_output
    )


def test_input_records_are_not_mutated() -> None:
    record = make_record(1, "Torch")
    items = [record, make_item(2)]
    snapshot = [dict(record), items[1]]
    process_inventory(items, CHARACTER_ID)
    assert items == snapshot


def test_encumbrance_from_total_weight() -> None:
    items = [replace(make_item(1, "Plate Armor", weight=65), equipped=True)]
    weight = process_inventory(items, CHARACTER_ID).statistics.total_weight
    assert encumbrance_level(weight, encumbrance(10)) == EncumbranceLevel.ENCUMBERED
    assert encumbrance_level(weight, encumbrance(10, True)) == EncumbranceLevel.UNENCUMBERED


@pytest.mark.parametrize("items", [None, "items", {"id": 1}, 42])
def test_non_sequence_input_raises(items: object) -> None:
    with pytest.raises(InventoryInputError):
        process_inventory(items, CHARACTER_ID)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        process_inventory(items, CHARACTER_ID)  # type: ignore[arg-type]
