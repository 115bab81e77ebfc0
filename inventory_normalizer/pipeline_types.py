"""Typed containers shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class CatalogEntry:
    """One reference item: canonical name plus per-unit stats."""

    canonical_name: str
    volume_cu_ft: float
    weight_lbs: float


@dataclass(frozen=True)
class CatalogKey:
    """Pre-computed matching views of one catalog name."""

    name: str
    lower: str
    canonical: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class MatchResult:
    """A catalog hit and the cascade step that produced it."""

    entry: CatalogEntry
    strategy: str
    score: float = 1.0


@dataclass
class ResolvedItem:
    """A surviving candidate after matching / estimation, before aggregation."""

    name: str
    quantity: int
    volume_cu_ft: float
    weight_lbs: float
    category: str
    tags: List[str] = field(default_factory=list)
    confidence: float = 0.0
    source: str = "estimate"
