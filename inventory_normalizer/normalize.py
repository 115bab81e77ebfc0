from __future__ import annotations

"""
Name normalisation helpers shared by the catalog, matcher and pipeline.

Public helpers:

* basic_clean(text) -> str
    Boundary clean applied to incoming candidate names (unicode + whitespace).

* canonicalize(name) -> str
    Order- and punctuation-insensitive signature used only for matching,
    never as a display name.

* canonical_tokens(name) -> List[str]
    The sorted tokens behind :func:`canonicalize`.

* match_tokens(name, min_length) -> List[str]
    Canonical tokens long enough to count towards token overlap.
"""

import re
import unicodedata
from typing import List

from .config import MIN_TOKEN_LENGTH


def _normalise_unicode(text: str) -> str:
    text = unicodedata.normalize("NFKC", text)
    text = text.replace("‘", "'").replace("’", "'")
    text = text.replace("“", '"').replace("”", '"')
    text = text.replace("–", "-").replace("—", "-")
    return text


def basic_clean(text: str | None) -> str:
    """Light-weight clean for incoming names: unicode, whitespace, trim."""
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    text = _normalise_unicode(text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def _strip_punctuation(text: str) -> str:
    # str.isalnum covers unicode letters/digits, unlike \w it excludes "_"
    return "".join(ch for ch in text if ch.isalnum() or ch.isspace())


def canonical_tokens(name: str | None) -> List[str]:
    """Lowercase, strip punctuation, split on whitespace and sort."""
    if not name:
        return []
    return sorted(_strip_punctuation(name.lower()).split())


def canonicalize(name: str | None) -> str:
    """
    Reduce a name to its token signature.

    "Chair, Dining" and "Dining Chair" both become "chair dining".
    """
    return " ".join(canonical_tokens(name))


def match_tokens(name: str | None, min_length: int = MIN_TOKEN_LENGTH) -> List[str]:
    """Canonical tokens with short words ("x", "of", "3") dropped."""
    return [tok for tok in canonical_tokens(name) if len(tok) >= min_length]
