from __future__ import annotations

import math
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------
# Paths
# ---------------------------

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent

DATA_DIR = PACKAGE_ROOT / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "reference_catalog.csv"

# Read-only catalog override (e.g. a newer catalog version mounted by ops)
CATALOG_PATH = Path(os.getenv("INVENTORY_CATALOG_PATH", str(DEFAULT_CATALOG_PATH)))


# ---------------------------
# Matcher thresholds (pinned)
# ---------------------------

# Empirically chosen; changing any of these changes quoted prices.
SIMILARITY_THRESHOLD = 0.82   # best score must be strictly greater
MIN_TOKEN_OVERLAP = 2         # token-overlap fallback acceptance
MAX_TOKEN_COUNT_DIFF = 1      # |len(candidate tokens) - len(key tokens)|
MIN_TOKEN_LENGTH = 3          # tokens of length <= 2 are ignored for overlap


# ---------------------------
# Candidate defaults
# ---------------------------

DEFAULT_QUANTITY = 1
DEFAULT_CATEGORY = "Misc"
DEFAULT_CONFIDENCE = 0.0

BOX_CATEGORY = "Box"


class MatcherSettings(BaseModel):
    """
    Tunable knobs for the matcher cascade.

    Defaults mirror the module constants above; tests build alternatives.
    """

    model_config = ConfigDict(frozen=True)

    similarity_threshold: float = Field(default=SIMILARITY_THRESHOLD, ge=0.0, le=1.0)
    min_token_overlap: int = Field(default=MIN_TOKEN_OVERLAP, ge=1)
    max_token_count_diff: int = Field(default=MAX_TOKEN_COUNT_DIFF, ge=0)
    min_token_length: int = Field(default=MIN_TOKEN_LENGTH, ge=1)


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class CandidateItem(BaseModel):
    """
    Untrusted item description produced by the upstream analysis step.

    Unknown fields (e.g. volume guesses from the analysis service) are ignored.
    Missing fields stay ``None`` here; defaults are applied by the pipeline.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    quantity: Optional[int] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    confidence: Optional[float] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_to_text(cls, value):
        return "" if value is None else str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_to_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(f"tags must be a string or a list, got {type(value).__name__}")
        return [str(v) for v in value if v is not None]

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: Optional[float]) -> Optional[float]:
        if value is None or math.isnan(value):
            return None
        return min(1.0, max(0.0, float(value)))


class CanonicalItem(BaseModel):
    """
    One resolved inventory row.

    ``name`` is always a catalog key or an estimate label; stats are per unit.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    quantity: int = Field(ge=1)
    volume_cu_ft: float = Field(ge=0, alias="volumeCuFt")
    weight_lbs: float = Field(ge=0, alias="weightLbs")
    category: str = DEFAULT_CATEGORY
    tags: List[str] = Field(default_factory=list)
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=1.0)


class NormalizationResult(BaseModel):
    """
    Output of one pipeline run plus the counters callers report on.
    """

    items: List[CanonicalItem] = Field(default_factory=list)
    skipped_malformed: int = Field(default=0, ge=0)
    dropped_forbidden: int = Field(default=0, ge=0)
    estimated: int = Field(default=0, ge=0)
    anomalies: List[str] = Field(default_factory=list)


class InventorySummary(BaseModel):
    """Quote totals for a list of canonical items."""

    line_count: int = 0
    total_items: int = 0
    box_count: int = 0
    other_count: int = 0
    total_volume_cu_ft: float = 0.0
    total_weight_lbs: float = 0.0
