"""
Catalog matching for free-form item names.

Matching cascade (first success wins):
  1. Exact key match
  2. Case-insensitive key match
  3. Canonical-token similarity   } scored together per key, best key
  4. Raw lowercase similarity      } accepted when score > threshold
  5. Token-overlap fallback (>= 2 shared words, similar word count)
  6. Single-token containment ("Sofa" -> "Sofa, 3 Cushion")

"No match" is returned as ``None``; callers fall back to estimation.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from loguru import logger

from .catalog_build import Catalog
from .config import MatcherSettings
from .normalize import canonicalize, match_tokens
from .pipeline_types import CatalogKey, MatchResult
from .similarity import similarity

STRATEGY_EXACT = "exact"
STRATEGY_CASE_INSENSITIVE = "case_insensitive"
STRATEGY_TOKEN_SIMILARITY = "token_similarity"
STRATEGY_RAW_SIMILARITY = "raw_similarity"
STRATEGY_TOKEN_OVERLAP = "token_overlap"
STRATEGY_SINGLE_TOKEN = "single_token"


class Matcher:
    """Runs the cascade against one immutable :class:`Catalog`."""

    def __init__(self, catalog: Catalog, settings: Optional[MatcherSettings] = None) -> None:
        self.catalog = catalog
        self.settings = settings or MatcherSettings()

    def match(self, name: str) -> Optional[MatchResult]:
        if name is None:
            return None

        # 1. Exact
        entry = self.catalog.get(name)
        if entry is not None:
            return MatchResult(entry=entry, strategy=STRATEGY_EXACT)

        lower_name = name.lower().strip()
        if not lower_name:
            return None

        # 2. Case-insensitive exact
        entry = self.catalog.get_case_insensitive(lower_name)
        if entry is not None:
            return MatchResult(entry=entry, strategy=STRATEGY_CASE_INSENSITIVE)

        # 3 + 4. Token-sorted and raw similarity, best of both per key
        best_key, best_score, best_strategy = self._best_similarity(name, lower_name)
        if best_key is not None and best_score > self.settings.similarity_threshold:
            logger.debug("Fuzzy match {!r} -> {!r} ({} {:.3f})", name, best_key.name, best_strategy, best_score)
            return MatchResult(
                entry=self.catalog.get(best_key.name),
                strategy=best_strategy,
                score=best_score,
            )

        # 5. Token overlap
        name_tokens = match_tokens(name, self.settings.min_token_length)
        overlap_key, overlap = self._best_overlap(name_tokens)
        if overlap_key is not None and overlap >= self.settings.min_token_overlap:
            return MatchResult(
                entry=self.catalog.get(overlap_key.name),
                strategy=STRATEGY_TOKEN_OVERLAP,
                score=float(overlap),
            )

        # 6. Single generic word contained in a standard variant
        if overlap_key is not None and overlap == 1 and len(name_tokens) == 1:
            if name_tokens[0] in overlap_key.lower:
                return MatchResult(
                    entry=self.catalog.get(overlap_key.name),
                    strategy=STRATEGY_SINGLE_TOKEN,
                    score=1.0,
                )

        return None

    def _best_similarity(self, name: str, lower_name: str) -> Tuple[Optional[CatalogKey], float, str]:
        canonical_input = canonicalize(name)
        best_key: Optional[CatalogKey] = None
        best_score = 0.0
        best_strategy = STRATEGY_TOKEN_SIMILARITY

        for key in self.catalog.keys:
            token_score = similarity(canonical_input, key.canonical)
            raw_score = similarity(lower_name, key.lower)
            score = max(token_score, raw_score)
            if score > best_score:
                best_score = score
                best_key = key
                best_strategy = (
                    STRATEGY_TOKEN_SIMILARITY if token_score >= raw_score else STRATEGY_RAW_SIMILARITY
                )
        return best_key, best_score, best_strategy

    def _best_overlap(self, name_tokens: List[str]) -> Tuple[Optional[CatalogKey], int]:
        if not name_tokens:
            return None, 0

        best_key: Optional[CatalogKey] = None
        best_overlap = 0
        for key in self.catalog.keys:
            # "Chair" must not land on "Chair, Wing Back, Antique, Leather"
            if abs(len(key.tokens) - len(name_tokens)) > self.settings.max_token_count_diff:
                continue
            key_tokens = set(key.tokens)
            overlap = sum(1 for tok in name_tokens if tok in key_tokens)
            if overlap > best_overlap:
                best_overlap = overlap
                best_key = key
        return best_key, best_overlap


def match(name: str, catalog: Catalog, settings: Optional[MatcherSettings] = None) -> Optional[MatchResult]:
    """Convenience wrapper around :class:`Matcher` for one-off lookups."""
    return Matcher(catalog, settings).match(name)
