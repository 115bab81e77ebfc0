import pytest

from inventory_normalizer.catalog_build import Catalog
from inventory_normalizer.config import MatcherSettings
from inventory_normalizer.matcher import (
    STRATEGY_CASE_INSENSITIVE,
    STRATEGY_EXACT,
    STRATEGY_RAW_SIMILARITY,
    STRATEGY_SINGLE_TOKEN,
    STRATEGY_TOKEN_OVERLAP,
    STRATEGY_TOKEN_SIMILARITY,
    Matcher,
    match,
)


@pytest.fixture
def catalog():
    # Order matters: ties go to the earliest key.
    return Catalog.from_mapping(
        {
            "Sofa, 3 Cushion": (50.0, 200.0),
            "Sofa, Loveseat": (35.0, 150.0),
            "Chair, Dining": (12.0, 25.0),
            "Chair, Wing Back, Antique, Leather": (25.0, 110.0),
            "Table, Dining": (30.0, 150.0),
            "Pool Table": (100.0, 800.0),
            "Cabinet, Filing, 4 Drawer": (20.0, 140.0),
            "Box Spring, King Size": (35.0, 80.0),
            "Refrigerator": (60.0, 300.0),
        }
    )


@pytest.fixture
def matcher(catalog):
    return Matcher(catalog)


def test_exact_match(matcher):
    hit = matcher.match("Chair, Dining")
    assert hit.strategy == STRATEGY_EXACT
    assert hit.entry.canonical_name == "Chair, Dining"
    assert (hit.entry.volume_cu_ft, hit.entry.weight_lbs) == (12.0, 25.0)


def test_case_insensitive_match(matcher):
    hit = matcher.match("SOFA, 3 CUSHION")
    assert hit.strategy == STRATEGY_CASE_INSENSITIVE
    assert hit.entry.canonical_name == "Sofa, 3 Cushion"


def test_reordered_words_match_via_token_similarity(matcher):
    hit = matcher.match("Dining Chair")
    assert hit.strategy == STRATEGY_TOKEN_SIMILARITY
    assert hit.entry.canonical_name == "Chair, Dining"
    assert hit.score == pytest.approx(1.0)


def test_typo_matches_above_threshold(matcher):
    hit = matcher.match("Refridgerator")
    assert hit is not None
    assert hit.entry.canonical_name == "Refrigerator"
    assert hit.score > 0.82


def test_typo_in_word_order_matches_raw_form(matcher):
    # sorting moves "shair" after "dining", so only the unsorted form scores 12/13
    hit = matcher.match("Shair, Dining")
    assert hit.strategy == STRATEGY_RAW_SIMILARITY
    assert hit.entry.canonical_name == "Chair, Dining"
    assert hit.score == pytest.approx(12 / 13)


def test_canonical_and_raw_scores_share_one_threshold(matcher):
    hit = matcher.match("Cabinet Filing 4 Drawr")
    assert hit.entry.canonical_name == "Cabinet, Filing, 4 Drawer"
    assert hit.strategy == STRATEGY_TOKEN_SIMILARITY


def test_token_overlap_fallback(matcher):
    # too long for the edit-distance threshold, but two real words shared
    hit = matcher.match("Spring Box King")
    assert hit is not None
    assert hit.entry.canonical_name == "Box Spring, King Size"


def test_token_overlap_requires_two_shared_words(matcher):
    # only "chair" is shared with a key of similar size; the antique
    # wing back shares two words but is two tokens longer
    assert matcher.match("Leather Chair Thing") is None


def test_single_generic_word_resolves_to_standard_variant(matcher):
    hit = matcher.match("Sofa")
    assert hit.strategy == STRATEGY_SINGLE_TOKEN
    assert hit.entry.canonical_name == "Sofa, 3 Cushion"


def test_single_word_skips_much_longer_keys(matcher):
    hit = matcher.match("Chair")
    # "Chair, Wing Back, Antique, Leather" differs by more than one token
    assert hit.entry.canonical_name == "Chair, Dining"


def test_no_match_returns_none(matcher):
    assert matcher.match("Weird Antique Hutch") is None
    assert matcher.match("") is None
    assert matcher.match("   ") is None


def test_threshold_is_strictly_greater(catalog):
    # "chairs dining" vs "chair dining" scores 12/13; a threshold at that
    # exact value must reject, a lower one must accept
    strict = Matcher(catalog, MatcherSettings(similarity_threshold=12 / 13))
    hit = strict.match("Dining Chairs")
    assert hit is None or hit.strategy not in {STRATEGY_TOKEN_SIMILARITY, STRATEGY_RAW_SIMILARITY}

    loose = Matcher(catalog, MatcherSettings(similarity_threshold=0.9))
    assert loose.match("Dining Chairs").entry.canonical_name == "Chair, Dining"


def test_module_level_match_helper(catalog):
    assert match("Pool Table", catalog).strategy == STRATEGY_EXACT
    assert match("Jacuzzi", catalog) is None


def test_default_settings_pinned():
    s = MatcherSettings()
    assert s.similarity_threshold == 0.82
    assert s.min_token_overlap == 2
    assert s.max_token_count_diff == 1
    assert s.min_token_length == 3
