import math

import pytest

from inventory_normalizer.estimator import ESTIMATE_LABELS, ESTIMATE_RULES, estimate, estimate_rule


@pytest.mark.parametrize(
    "name,category,label,stats",
    [
        ("Old Couch", "Furniture", "Sofa (Estimated)", (70.0, 300.0)),
        ("Futon Sofa", "Misc", "Sofa (Estimated)", (70.0, 300.0)),
        ("California King Bed Frame", "Furniture", "Bed, King (Estimated)", (90.0, 300.0)),
        ("Queen Daybed", "Furniture", "Bed, Queen (Estimated)", (75.0, 260.0)),
        ("Daybed", "Furniture", "Bed (Estimated)", (70.0, 250.0)),
        ("Drafting Table", "Furniture", "Table (Estimated)", (40.0, 200.0)),
        ("Papasan Chair", "Furniture", "Chair (Estimated)", (25.0, 80.0)),
        ("Gun Cabinet", "Furniture", "Cabinet (Estimated)", (50.0, 300.0)),
        ("Mystery Crate", "Box", "Box (Estimated)", (6.0, 50.0)),
        ("Weird Antique Hutch", "Furniture", "Furniture (Estimated)", (30.0, 200.0)),
        ("Chest Freezer XL", "Appliance", "Appliance (Estimated)", (40.0, 250.0)),
        ("Arcade Cabinet Machine", "Electronics", "Cabinet (Estimated)", (50.0, 300.0)),
        ("Game Console", "Electronics", "Electronics (Estimated)", (15.0, 80.0)),
        ("Kayak", "Outdoor", "Misc (Estimated)", (10.0, 50.0)),
        ("Kayak", None, "Misc (Estimated)", (10.0, 50.0)),
    ],
)
def test_estimate_rules(name, category, label, stats):
    rule = estimate_rule(name, category)
    assert rule.label == label
    assert estimate(name, category) == stats


def test_estimate_is_deterministic():
    first = estimate("Weird Antique Hutch", "Furniture")
    second = estimate("Weird Antique Hutch", "Furniture")
    assert first == second


def test_every_rule_is_finite_and_non_negative():
    for rule in ESTIMATE_RULES:
        vol, wt = rule.stats
        assert math.isfinite(vol) and vol >= 0
        assert math.isfinite(wt) and wt >= 0


def test_labels_unique_and_total():
    assert len(ESTIMATE_LABELS) == len(ESTIMATE_RULES)
    assert estimate_rule("", "").label in ESTIMATE_LABELS
