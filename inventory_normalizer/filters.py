"""Disallow-list filtering for names the catalog could not resolve."""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import FORBIDDEN_KEYWORDS


def forbidden_term(name: str, keywords: Iterable[str] = FORBIDDEN_KEYWORDS) -> Optional[str]:
    """Return the first disallow-list term contained in ``name``, if any."""
    lowered = (name or "").lower()
    for term in keywords:
        if term and term in lowered:
            return term
    return None


def is_forbidden(name: str, keywords: Iterable[str] = FORBIDDEN_KEYWORDS) -> bool:
    """
    True if ``name`` contains loose clutter or a structural fixture term.

    Only meaningful for unmatched names; catalog hits are always kept.
    """
    return forbidden_term(name, keywords) is not None
