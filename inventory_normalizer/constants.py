from __future__ import annotations

"""Static vocabularies shared by the filter, estimator and callers.

The disallow-list is matched as lowercase substrings against names the
catalog could not resolve. Catalog hits are never filtered, so terms here
may overlap catalog names (``"book"`` vs ``"Bookcase"``) without harm.
"""

from typing import Tuple

# Loose items that belong inside a box, never on their own line.
LOOSE_ITEM_TERMS: Tuple[str, ...] = (
    "book",
    "novel",
    "magazine",
    "clothes",
    "clothing",
    "shirt",
    "shoe",
    "toy",
    "dishes",
    "plates",
    "utensil",
    "cutlery",
    "glassware",
    "mugs",
    "toiletr",
    "cosmetic",
    "hair dryer",
    "alarm clock",
    "remote control",
    "kitchenware",
    "cookware",
    "pillow",
    "blanket",
    "towel",
)

# Structural fixtures attached to the house.
FIXTURE_TERMS: Tuple[str, ...] = (
    "wall shelf",
    "wall-mounted shelf",
    "floating shelf",
    "built-in",
    "built in",
    "kitchen cabinet",
    "kitchen island",
    "bathroom vanity",
    "ceiling fan",
    "chandelier",
    "sconce",
    "light fixture",
    "curtain rod",
    "blind",
    "radiator",
    "countertop",
)

# Trash / debris.
CLUTTER_TERMS: Tuple[str, ...] = (
    "trash",
    "garbage",
    "debris",
    "clutter",
)

FORBIDDEN_KEYWORDS: Tuple[str, ...] = LOOSE_ITEM_TERMS + FIXTURE_TERMS + CLUTTER_TERMS

CATEGORIES: Tuple[str, ...] = (
    "Furniture",
    "Appliance",
    "Electronics",
    "Box",
    "Misc",
)

ITEM_TAGS: Tuple[str, ...] = (
    "Fragile",
    "Heavy",
    "Disassembly",
    "High Value",
    "Oversized",
)
