import pytest

from inventory_normalizer.config import CanonicalItem, InventorySummary
from inventory_normalizer.summary import items_to_frame, summarize


def _item(name, quantity, vol, wt, category):
    return CanonicalItem(
        id=name,
        name=name,
        quantity=quantity,
        volume_cu_ft=vol,
        weight_lbs=wt,
        category=category,
    )


def test_summarize_multiplies_by_quantity():
    items = [
        _item("Chair, Dining", 6, 12.0, 25.0, "Furniture"),
        _item("Box, Medium", 10, 3.0, 40.0, "Box"),
        _item("Sofa, 3 Cushion", 1, 50.0, 200.0, "Furniture"),
    ]
    summary = summarize(items)

    assert summary.line_count == 3
    assert summary.total_items == 17
    assert summary.box_count == 10
    assert summary.other_count == 7
    assert summary.total_volume_cu_ft == pytest.approx(6 * 12.0 + 10 * 3.0 + 50.0)
    assert summary.total_weight_lbs == pytest.approx(6 * 25.0 + 10 * 40.0 + 200.0)


def test_summarize_empty():
    assert summarize([]) == InventorySummary()


def test_items_to_frame_uses_wire_names():
    df = items_to_frame([_item("Desk", 1, 30.0, 150.0, "Furniture")])
    assert list(df.columns) == ["id", "name", "quantity", "volumeCuFt", "weightLbs", "category", "tags", "confidence"]
    assert df.iloc[0]["volumeCuFt"] == 30.0
