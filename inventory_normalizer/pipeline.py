from __future__ import annotations
"""
Candidate -> canonical inventory pipeline.

    Candidate -> [catalog hit | forbidden => dropped | estimated] -> resolved -> aggregated

- Malformed candidates (empty name, quantity <= 0 or unparsable) are
  skipped and counted, never raised; one bad row never affects its siblings.
  Unusable optional fields (category, tags, confidence) take their defaults.
- Names carrying a leading set count ("4 Dining Chairs") are retried
  without it when the full name has no catalog hit. The count never
  becomes the quantity.
- The pipeline owns its catalog; there is no module-level state, so
  several catalog versions can run side by side.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from loguru import logger
from pydantic import ValidationError

from .aggregate import aggregate
from .catalog_build import Catalog
from .config import (
    DEFAULT_CATEGORY,
    DEFAULT_CONFIDENCE,
    DEFAULT_QUANTITY,
    CandidateItem,
    MatcherSettings,
    NormalizationResult,
)
from .constants import FORBIDDEN_KEYWORDS
from .estimator import estimate_rule
from .filters import forbidden_term
from .matcher import Matcher
from .normalize import basic_clean
from .pipeline_types import MatchResult, ResolvedItem
from .text_utils import split_count_prefix

CandidateInput = Union[CandidateItem, Mapping[str, Any]]

FRAME_COLUMNS = ["name", "quantity", "category", "tags", "confidence"]

# fields that fall back to defaults instead of rejecting the candidate
OPTIONAL_FIELDS = ("category", "tags", "confidence")


class MalformedCandidate(ValueError):
    """Raised internally for a candidate that cannot enter the pipeline."""


def _coerce_cell(val):
    """numpy scalars -> Python scalars, NaN/None -> None."""
    if isinstance(val, (list, tuple, np.ndarray)):
        return [str(v).strip() for v in val if str(v).strip()]
    if val is None or pd.isna(val):
        return None
    if isinstance(val, np.integer):
        return int(val)
    if isinstance(val, np.floating):
        return float(val)
    return val


class InventoryNormalizer:
    """
    Resolves candidate items against one catalog.

    Instances are read-only after construction and safe to share between
    threads; every call keeps its own local state.
    """

    def __init__(
        self,
        catalog: Catalog,
        forbidden_keywords: Sequence[str] = FORBIDDEN_KEYWORDS,
        settings: Optional[MatcherSettings] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        if not isinstance(catalog, Catalog):
            raise TypeError(f"InventoryNormalizer needs a loaded Catalog, got {type(catalog).__name__}")
        self.catalog = catalog
        self.forbidden_keywords: Tuple[str, ...] = tuple(k.lower() for k in forbidden_keywords if k)
        self.settings = settings or MatcherSettings()
        self.matcher = Matcher(catalog, self.settings)
        self._id_factory = id_factory

    # ------------------------------------------------------------------
    # Boundary validation
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_record(record: dict) -> Tuple[CandidateItem, List[str]]:
        """
        Validate a raw record. Unusable optional fields fall back to their
        defaults and are reported; a bad name or quantity makes it malformed.
        """
        try:
            return CandidateItem.model_validate(record), []
        except ValidationError as e:
            bad = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            if not bad or not set(bad) <= set(OPTIONAL_FIELDS):
                raise MalformedCandidate(f"invalid field(s): {', '.join(bad) or 'unknown'}") from e
            cleaned = {k: v for k, v in record.items() if k not in bad}

        try:
            return CandidateItem.model_validate(cleaned), bad
        except ValidationError as e:
            raise MalformedCandidate(f"invalid field(s): {', '.join(bad)}") from e

    @classmethod
    def _validate(cls, raw: CandidateInput) -> Tuple[CandidateItem, str, int, List[str]]:
        """Return (candidate, cleaned name, quantity, ignored fields) or raise MalformedCandidate."""
        ignored: List[str] = []
        if isinstance(raw, CandidateItem):
            cand = raw
        elif isinstance(raw, Mapping):
            cand, ignored = cls._parse_record(dict(raw))
        else:
            raise MalformedCandidate(f"unsupported candidate type {type(raw).__name__}")

        name = basic_clean(cand.name)
        if not name:
            raise MalformedCandidate("empty name")

        # a leading count in the name is only a matching hint ("3 Cushion Sofa")
        quantity = cand.quantity if cand.quantity is not None else DEFAULT_QUANTITY
        if quantity <= 0:
            raise MalformedCandidate(f"non-positive quantity {quantity} for {name!r}")

        return cand, name, quantity, ignored

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> Optional[MatchResult]:
        """Catalog lookup with a retry on the count-stripped name."""
        hit = self.matcher.match(name)
        if hit is not None:
            return hit
        count, rest = split_count_prefix(name)
        if count is not None and rest:
            hit = self.matcher.match(rest)
            if hit is not None:
                logger.debug("Matched {!r} after dropping count prefix {}", name, count)
        return hit

    def estimate_item_stats(self, name: str, category: str | None = None) -> Tuple[float, float]:
        """
        Stats for a single manually entered item.

        Catalog first, estimator otherwise; operator entries are never
        disallow-filtered.
        """
        hit = self.lookup(basic_clean(name))
        if hit is not None:
            return hit.entry.volume_cu_ft, hit.entry.weight_lbs
        return estimate_rule(name, category).stats

    def _resolve(
        self, cand: CandidateItem, name: str, quantity: int
    ) -> Tuple[Optional[ResolvedItem], Optional[str]]:
        """Return (resolved item, None) or (None, forbidden term)."""
        category = basic_clean(cand.category) or DEFAULT_CATEGORY
        confidence = cand.confidence if cand.confidence is not None else DEFAULT_CONFIDENCE

        hit = self.lookup(name)
        if hit is not None:
            entry = hit.entry
            return (
                ResolvedItem(
                    name=entry.canonical_name,
                    quantity=quantity,
                    volume_cu_ft=entry.volume_cu_ft,
                    weight_lbs=entry.weight_lbs,
                    category=category,
                    tags=list(cand.tags),
                    confidence=confidence,
                    source=f"catalog:{hit.strategy}",
                ),
                None,
            )

        term = forbidden_term(name, self.forbidden_keywords)
        if term is not None:
            return None, term

        rule = estimate_rule(name, category)
        return (
            ResolvedItem(
                name=rule.label,
                quantity=quantity,
                volume_cu_ft=rule.volume_cu_ft,
                weight_lbs=rule.weight_lbs,
                category=category,
                tags=list(cand.tags),
                confidence=confidence,
                source="estimate",
            ),
            None,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, candidates: Iterable[CandidateInput]) -> NormalizationResult:
        resolved: List[ResolvedItem] = []
        anomalies: List[str] = []
        skipped = 0
        forbidden = 0
        estimated = 0
        total = 0

        for idx, raw in enumerate(candidates):
            total += 1
            try:
                cand, name, quantity, ignored = self._validate(raw)
            except MalformedCandidate as e:
                skipped += 1
                anomalies.append(f"candidate {idx}: {e}")
                logger.warning("Skipping malformed candidate {}: {}", idx, e)
                continue
            if ignored:
                anomalies.append(f"candidate {idx}: ignored invalid field(s): {', '.join(ignored)}")
                logger.warning("Candidate {} ({!r}): using defaults for {}", idx, name, ignored)

            item, term = self._resolve(cand, name, quantity)
            if item is None:
                forbidden += 1
                logger.info("Filtered out forbidden item: {!r} (matched {!r})", name, term)
                continue
            if item.source == "estimate":
                estimated += 1
            logger.debug("Resolved {!r} -> {!r} via {}", name, item.name, item.source)
            resolved.append(item)

        items = aggregate(resolved, id_factory=self._id_factory)
        logger.info(
            "Normalized {} candidates into {} items (malformed={}, forbidden={}, estimated={})",
            total,
            len(items),
            skipped,
            forbidden,
            estimated,
        )
        return NormalizationResult(
            items=items,
            skipped_malformed=skipped,
            dropped_forbidden=forbidden,
            estimated=estimated,
            anomalies=anomalies,
        )

    def normalize_frame(self, df: pd.DataFrame) -> NormalizationResult:
        """Batch entry point for tabular callers; missing columns count as absent."""
        if df is None or df.empty:
            return NormalizationResult()

        lower_to_original = {str(c).strip().lower(): c for c in df.columns}
        present = {col: lower_to_original[col] for col in FRAME_COLUMNS if col in lower_to_original}
        if "name" not in present:
            logger.warning("Candidate frame has no 'name' column; columns={}", list(df.columns))

        rows: List[dict] = []
        for _, row in df.iterrows():
            record = {}
            for col, src in present.items():
                val = _coerce_cell(row[src])
                if col == "tags" and isinstance(val, str):
                    val = [t.strip() for t in val.split(",") if t.strip()]
                if val is not None:
                    record[col] = val
            rows.append(record)
        return self.normalize(rows)
