from __future__ import annotations

"""
Deterministic fallback stats for items the catalog does not cover.

Estimates must be stable across re-scans of the same object, so there is
no model call and no randomness: the first matching rule wins. All figures
sit at the heavy end of the family to avoid under-quoting.

Each rule carries a fixed label that becomes the item's canonical name,
which keeps stats a pure function of the resolved name.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class EstimateRule:
    label: str
    volume_cu_ft: float
    weight_lbs: float
    name_terms: Tuple[str, ...] = ()
    qualifier: Optional[str] = None
    category_term: Optional[str] = None

    def applies(self, name_lower: str, category_lower: str) -> bool:
        if self.name_terms:
            if not any(t in name_lower for t in self.name_terms):
                return False
            return self.qualifier is None or self.qualifier in name_lower
        if self.category_term is not None:
            return self.category_term in category_lower
        return True

    @property
    def stats(self) -> Tuple[float, float]:
        return self.volume_cu_ft, self.weight_lbs


# Name families first, then category defaults; order matters.
NAME_RULES: Tuple[EstimateRule, ...] = (
    EstimateRule("Sofa (Estimated)", 70.0, 300.0, name_terms=("sofa", "couch")),
    EstimateRule("Bed, King (Estimated)", 90.0, 300.0, name_terms=("bed",), qualifier="king"),
    EstimateRule("Bed, Queen (Estimated)", 75.0, 260.0, name_terms=("bed",), qualifier="queen"),
    EstimateRule("Bed (Estimated)", 70.0, 250.0, name_terms=("bed",)),
    EstimateRule("Table (Estimated)", 40.0, 200.0, name_terms=("table",)),
    EstimateRule("Chair (Estimated)", 25.0, 80.0, name_terms=("chair",)),
    EstimateRule("Cabinet (Estimated)", 50.0, 300.0, name_terms=("cabinet", "dresser")),
)

CATEGORY_RULES: Tuple[EstimateRule, ...] = (
    EstimateRule("Box (Estimated)", 6.0, 50.0, category_term="box"),
    EstimateRule("Furniture (Estimated)", 30.0, 200.0, category_term="furniture"),
    EstimateRule("Appliance (Estimated)", 40.0, 250.0, category_term="appliance"),
    EstimateRule("Electronics (Estimated)", 15.0, 80.0, category_term="electronic"),
)

DEFAULT_RULE = EstimateRule("Misc (Estimated)", 10.0, 50.0)

ESTIMATE_RULES: Tuple[EstimateRule, ...] = NAME_RULES + CATEGORY_RULES + (DEFAULT_RULE,)
ESTIMATE_LABELS = frozenset(rule.label for rule in ESTIMATE_RULES)


def estimate_rule(name: str, category: str | None) -> EstimateRule:
    """Return the first rule that applies; total over all inputs."""
    name_lower = (name or "").lower()
    category_lower = (category or "").lower()
    for rule in ESTIMATE_RULES:
        if rule.applies(name_lower, category_lower):
            return rule
    return DEFAULT_RULE


def estimate(name: str, category: str | None) -> Tuple[float, float]:
    """(volume_cu_ft, weight_lbs) for an unmatched item."""
    return estimate_rule(name, category).stats
