from __future__ import annotations

import math
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import pandas as pd
from loguru import logger

from .config import CATALOG_PATH
from .normalize import basic_clean, canonicalize, match_tokens
from .pipeline_types import CatalogEntry, CatalogKey


class CatalogLoadError(RuntimeError):
    """Static catalog data is missing or corrupt; the engine cannot serve."""


# ---------------------------
# Column detection / standardization
# ---------------------------

# Catalog exports come from spreadsheets with a few header spellings.
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "name": [
        "name",
        "Name",
        "Item",
        "Item Name",
        "canonical_name",
        "canonicalName",
    ],
    "volume_cu_ft": [
        "volume_cu_ft",
        "volumeCuFt",
        "volume",
        "Volume",
        "Volume (cu ft)",
        "Cu Ft",
    ],
    "weight_lbs": [
        "weight_lbs",
        "weightLbs",
        "weight",
        "Weight",
        "Weight (lbs)",
        "Lbs",
    ],
}

CATALOG_COLUMNS = ["name", "volume_cu_ft", "weight_lbs"]


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw catalog headers to ``name`` / ``volume_cu_ft`` / ``weight_lbs``."""
    col_map: Dict[str, str] = {}
    lower_to_original = {str(c).strip().lower(): c for c in df.columns}

    for canon, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            if candidate in df.columns:
                col_map[candidate] = canon
                break
            cand_lower = candidate.lower()
            if cand_lower in lower_to_original:
                col_map[lower_to_original[cand_lower]] = canon
                break

    logger.debug("Standardizing catalog columns with map: {}", col_map)
    return df.rename(columns=col_map)


def _fail(message: str, *args) -> None:
    text = message.format(*args)
    logger.error(text)
    raise CatalogLoadError(text)


# ---------------------------
# Catalog normalization
# ---------------------------

def normalize_catalog_df(df_raw: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a raw catalog frame and return the canonical schema:

    - name (str, unique, non-empty)
    - volume_cu_ft (float, finite, >= 0)
    - weight_lbs (float, finite, >= 0)

    Any defect raises :class:`CatalogLoadError`; a partially valid catalog
    would silently misprice, so nothing is dropped.
    """
    df = _standardize_columns(df_raw.copy())

    missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
    if missing:
        _fail("Catalog is missing required columns: {} (found {})", missing, list(df_raw.columns))

    df = df[CATALOG_COLUMNS].copy()
    if df.empty:
        _fail("Catalog contains no rows")

    df["name"] = df["name"].apply(lambda v: "" if v is None or (isinstance(v, float) and pd.isna(v)) else basic_clean(v))
    blank = int((df["name"] == "").sum())
    if blank:
        _fail("Catalog has {} row(s) with an empty name", blank)

    dupes = sorted(set(df.loc[df["name"].duplicated(), "name"]))
    if dupes:
        _fail("Catalog has duplicate names: {}", dupes)

    for col in ("volume_cu_ft", "weight_lbs"):
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
        bad = df.loc[~df[col].apply(math.isfinite) | (df[col] < 0), "name"].tolist()
        if bad:
            _fail("Catalog column {} has missing, negative or non-numeric values for: {}", col, bad)

    return df.reset_index(drop=True)


# ---------------------------
# Immutable catalog
# ---------------------------

class Catalog:
    """
    Read-only name -> stats table with pre-computed matching keys.

    Built once and shared freely between threads; nothing mutates it after
    construction. Iteration follows the source order, which also decides
    ties inside the matcher.
    """

    __slots__ = ("_entries", "_keys", "_lower_index", "version")

    def __init__(self, entries: List[CatalogEntry], version: str = "") -> None:
        if not entries:
            raise CatalogLoadError("Catalog must contain at least one entry")

        by_name: Dict[str, CatalogEntry] = {}
        lower_index: Dict[str, str] = {}
        keys: List[CatalogKey] = []
        for entry in entries:
            if entry.canonical_name in by_name:
                raise CatalogLoadError(f"Duplicate catalog name: {entry.canonical_name!r}")
            by_name[entry.canonical_name] = entry
            lower = entry.canonical_name.lower()
            lower_index.setdefault(lower, entry.canonical_name)
            keys.append(
                CatalogKey(
                    name=entry.canonical_name,
                    lower=lower,
                    canonical=canonicalize(entry.canonical_name),
                    tokens=tuple(match_tokens(entry.canonical_name)),
                )
            )

        self._entries: Mapping[str, CatalogEntry] = MappingProxyType(by_name)
        self._lower_index: Mapping[str, str] = MappingProxyType(lower_index)
        self._keys: Tuple[CatalogKey, ...] = tuple(keys)
        self.version = version

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_frame(cls, df: pd.DataFrame, version: str = "") -> "Catalog":
        df_norm = normalize_catalog_df(df)
        entries = [
            CatalogEntry(canonical_name=name, volume_cu_ft=float(vol), weight_lbs=float(wt))
            for name, vol, wt in df_norm[CATALOG_COLUMNS].itertuples(index=False, name=None)
        ]
        return cls(entries, version=version)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Tuple[float, float]], version: str = "") -> "Catalog":
        """Build from ``{name: (volume_cu_ft, weight_lbs)}``; handy in tests."""
        df = pd.DataFrame(
            [(name, vol, wt) for name, (vol, wt) in data.items()],
            columns=CATALOG_COLUMNS,
        )
        return cls.from_frame(df, version=version)

    # -- lookups ---------------------------------------------------------------

    def get(self, name: str) -> Optional[CatalogEntry]:
        return self._entries.get(name)

    def get_case_insensitive(self, name: str) -> Optional[CatalogEntry]:
        key = self._lower_index.get(name.lower())
        return self._entries[key] if key is not None else None

    @property
    def keys(self) -> Tuple[CatalogKey, ...]:
        return self._keys

    def names(self) -> List[str]:
        return [k.name for k in self._keys]

    def standard_item_list(self) -> str:
        """Comma-joined names, the form upstream prompts embed."""
        return ", ".join(self.names())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[CatalogEntry]:
        return (self._entries[k.name] for k in self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"Catalog(entries={len(self)}, version={self.version!r})"


# ---------------------------
# IO helpers
# ---------------------------

def load_raw_catalog(path: Path) -> pd.DataFrame:
    """Read the raw catalog file (CSV, or Excel by extension)."""
    if not path.exists():
        _fail("Catalog file not found: {}", path)

    logger.info("Loading raw catalog from {}", path)
    try:
        if path.suffix.lower() in {".xlsx", ".xls"}:
            df = pd.read_excel(path)
        else:
            df = pd.read_csv(path, encoding="utf-8", skipinitialspace=True)
    except (ImportError, OSError, ValueError, pd.errors.ParserError) as e:
        _fail("Could not parse catalog file {}: {}", path, e)
    logger.info("Loaded {} rows from raw catalog", len(df))
    return df


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """
    End-to-end: read catalog file -> validate -> immutable :class:`Catalog`.

    Raises :class:`CatalogLoadError` on any problem.
    """
    path = Path(path) if path is not None else CATALOG_PATH
    df_raw = load_raw_catalog(path)
    catalog = Catalog.from_frame(df_raw, version=path.stem)
    logger.info("Catalog ready with {} entries (version={})", len(catalog), catalog.version)
    return catalog
