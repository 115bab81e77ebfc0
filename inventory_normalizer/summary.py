from __future__ import annotations

from typing import Sequence

import pandas as pd
from loguru import logger

from .config import BOX_CATEGORY, CanonicalItem, InventorySummary


def items_to_frame(items: Sequence[CanonicalItem]) -> pd.DataFrame:
    """One row per canonical item, wire column names (camelCase stats)."""
    rows = [item.model_dump(by_alias=True) for item in items]
    return pd.DataFrame(
        rows,
        columns=["id", "name", "quantity", "volumeCuFt", "weightLbs", "category", "tags", "confidence"],
    )


def summarize(items: Sequence[CanonicalItem]) -> InventorySummary:
    """
    Quote totals: unit volume/weight multiplied by quantity.

    Boxes are counted separately from everything else (category ``Box``).
    """
    if not items:
        return InventorySummary()

    df = items_to_frame(items)
    qty = df["quantity"].astype(int)
    is_box = df["category"].astype(str).str.strip().str.lower() == BOX_CATEGORY.lower()

    summary = InventorySummary(
        line_count=len(df),
        total_items=int(qty.sum()),
        box_count=int(qty[is_box].sum()),
        other_count=int(qty[~is_box].sum()),
        total_volume_cu_ft=float((df["volumeCuFt"] * qty).sum()),
        total_weight_lbs=float((df["weightLbs"] * qty).sum()),
    )
    logger.debug(
        "Summarized {} lines: {} pieces, {:.2f} cu ft, {:.0f} lbs",
        summary.line_count,
        summary.total_items,
        summary.total_volume_cu_ft,
        summary.total_weight_lbs,
    )
    return summary
