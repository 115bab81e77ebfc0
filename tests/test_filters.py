from inventory_normalizer.constants import FORBIDDEN_KEYWORDS
from inventory_normalizer.filters import forbidden_term, is_forbidden


def test_loose_items_are_forbidden():
    assert is_forbidden("Paperback Book")
    assert is_forbidden("Paperback Novel")
    assert is_forbidden("Pile of CLOTHES")
    assert forbidden_term("Box of Dishes") == "dishes"


def test_fixtures_are_forbidden():
    assert is_forbidden("Ceiling Fan")
    assert is_forbidden("Crystal Chandelier")
    assert is_forbidden("Window Blinds")


def test_regular_furniture_is_not_forbidden():
    assert not is_forbidden("Weird Antique Hutch")
    assert not is_forbidden("Sofa, 3 Cushion")
    assert forbidden_term("Treadmill") is None
    assert not is_forbidden("")


def test_custom_keyword_list():
    assert is_forbidden("Hutch", keywords=["hutch"])
    assert not is_forbidden("Paperback Book", keywords=["hutch"])


def test_keywords_are_lowercase():
    assert all(k == k.lower() for k in FORBIDDEN_KEYWORDS)
