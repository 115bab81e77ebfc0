from __future__ import annotations
"""
Merge resolved items that share a final canonical name.

Groups keep first-seen order so identical input always yields the same
output sequence. Within a group quantities add up and the highest
confidence wins; stats come from the group (they are a pure function of
the name). Every group receives a fresh id.
"""

import uuid
from typing import Callable, Dict, Iterable, List, Optional

from .config import CanonicalItem
from .pipeline_types import ResolvedItem


def _new_id() -> str:
    return uuid.uuid4().hex


def _merge_tags(existing: List[str], extra: Iterable[str]) -> List[str]:
    seen = set(existing)
    out = list(existing)
    for tag in extra:
        if tag not in seen:
            seen.add(tag)
            out.append(tag)
    return out


def aggregate(
    items: Iterable[ResolvedItem],
    id_factory: Optional[Callable[[], str]] = None,
) -> List[CanonicalItem]:
    make_id = id_factory or _new_id

    groups: Dict[str, ResolvedItem] = {}
    for item in items:
        existing = groups.get(item.name)
        if existing is None:
            # copy so callers' ResolvedItem objects stay untouched
            groups[item.name] = ResolvedItem(
                name=item.name,
                quantity=item.quantity,
                volume_cu_ft=item.volume_cu_ft,
                weight_lbs=item.weight_lbs,
                category=item.category,
                tags=list(item.tags),
                confidence=item.confidence or 0.0,
                source=item.source,
            )
            continue
        existing.quantity += item.quantity
        existing.confidence = max(existing.confidence, item.confidence or 0.0)
        existing.tags = _merge_tags(existing.tags, item.tags)

    return [
        CanonicalItem(
            id=make_id(),
            name=g.name,
            quantity=g.quantity,
            volume_cu_ft=g.volume_cu_ft,
            weight_lbs=g.weight_lbs,
            category=g.category,
            tags=g.tags,
            confidence=g.confidence,
        )
        for g in groups.values()
    ]
