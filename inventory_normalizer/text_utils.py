import re
from typing import Optional, Tuple

COUNT_PREFIX_PATTERN = re.compile(r"^\s*(\d{1,4})(?:\s*[x×*])?\s+([^\W\d_].*)$", re.IGNORECASE)


def split_count_prefix(name: str) -> Tuple[Optional[int], str]:
    """
    Split a leading item count off a set name.
    Returns (count, remainder); count is None when there is no prefix.
    Examples:
      '4 Dining Chairs' -> (4, 'Dining Chairs')
      '2 x Lamp, Table' -> (2, 'Lamp, Table')
      '3x Box, Small'   -> (3, 'Box, Small')
      '2door Fridge'    -> (None, '2door Fridge')
    """
    if not name:
        return None, ""
    m = COUNT_PREFIX_PATTERN.match(name)
    if not m:
        return None, name
    return int(m.group(1)), m.group(2).strip()
