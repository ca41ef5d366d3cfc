"""
Grade normalization: Minis/Mods score suppression.

Club policy is that scores for the Minis/Mods bracket (under-6 through
under-12) are never published.
"""

import re
from typing import Any

MINIS_MODS_RE = re.compile(r'\bu(?:[6-9]|1[0-2])\b')
MINIS_MODS_WORDS = ('mini', 'mod')


def is_minis_mods_grade(grade: Any) -> bool:
    """
    Check if a grade label belongs to the Minis/Mods bracket.

    Args:
        grade: Raw grade label (may be None or a number)

    Returns:
        True for U6-U12 (word-bounded) or labels mentioning mini/mod
    """
    if not grade:
        return False
    g = str(grade).lower()
    return bool(MINIS_MODS_RE.search(g)) or any(w in g for w in MINIS_MODS_WORDS)


def apply_score_suppression(record: dict[str, Any]) -> dict[str, Any]:
    """
    Return a shallow copy of a game record with Minis/Mods scores removed.

    The input record is never mutated.
    """
    out = dict(record)
    if is_minis_mods_grade(out.get('grade')):
        out['scoreHome'] = None
        out['scoreAway'] = None
    return out
