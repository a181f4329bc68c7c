"""Team name normalization for cross-source equality."""

import re

_NON_ALNUM_RE = re.compile(r'[^a-zA-Z0-9]')
_STATE_SUFFIX_RE = re.compile(r'state$', re.IGNORECASE)


def normalize(name: str) -> str:
    """
    Canonicalize a team name for equality comparison.

    Strips every character that is not an ASCII letter or digit, collapses
    a trailing "state" to "st", and lowercases the rest.

    Examples:
        "Ohio State" -> "ohiost"
        "Ohio St." -> "ohiost"
        "Texas A&M" -> "texasam"

    Args:
        name: Team name as written by any source

    Returns:
        Normalized key (empty string for None or empty input)
    """
    if not name:
        return ''
    stripped = _NON_ALNUM_RE.sub('', name)
    return _STATE_SUFFIX_RE.sub('st', stripped).lower()


def same_team(a: str, b: str) -> bool:
    """Check whether two team names normalize to the same key."""
    return normalize(a) == normalize(b)
