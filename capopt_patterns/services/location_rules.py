"""
Location rules
Extracts an Australian state or territory from a free-text location and
narrows STATE-jurisdiction compliance entries to that state.

The state is normally the last component of an address, so when several
states are named the rightmost match wins ("Victoria Point, Queensland"
is QLD). Abbreviations only match in upper case; "act", "sa" and "wa" are
ordinary words in place names.
"""
from typing import List, Optional
import re

from capopt_patterns.models.catalog import Jurisdiction, ResolvedTarget

STATE_NAMES = [
    ("NSW", re.compile(r"\bnew\s+south\s+wales\b", re.IGNORECASE)),
    ("VIC", re.compile(r"\bvictoria\b", re.IGNORECASE)),
    ("QLD", re.compile(r"\bqueensland\b", re.IGNORECASE)),
    ("WA", re.compile(r"\bwestern\s+australia\b", re.IGNORECASE)),
    ("SA", re.compile(r"\bsouth\s+australia\b", re.IGNORECASE)),
    ("TAS", re.compile(r"\btasmania\b", re.IGNORECASE)),
    ("NT", re.compile(r"\bnorthern\s+territory\b", re.IGNORECASE)),
    ("ACT", re.compile(r"\baustralian\s+capital\s+territory\b", re.IGNORECASE)),
]

STATE_ABBREVIATIONS = re.compile(r"\b(NSW|VIC|QLD|WA|SA|TAS|NT|ACT)\b")


def _state_matches(location: str):
    """Yield (end offset, state) for every full-name and abbreviation match."""
    for state, pattern in STATE_NAMES:
        for match in pattern.finditer(location):
            yield match.end(), state
    for match in STATE_ABBREVIATIONS.finditer(location):
        yield match.end(), match.group(1)


def extract_state(location: Optional[str]) -> Optional[str]:
    """
    Extract a state code from a location string.

    Example:
        >>> extract_state("Newcastle, New South Wales")
        'NSW'
        >>> extract_state("Victoria Point, Queensland")
        'QLD'
        >>> extract_state("Mackay QLD 4740")
        'QLD'
        >>> extract_state("Santiago, Chile") is None
        True
    """
    if not location:
        return None

    matches = list(_state_matches(location))
    if not matches:
        return None
    _, state = max(matches, key=lambda m: m[0])
    return state


def filter_by_state(targets: List[ResolvedTarget], state: Optional[str]) -> List[ResolvedTarget]:
    """Drop STATE-jurisdiction targets tagged for a different state."""
    if not state:
        return targets
    return [
        t for t in targets
        if t.jurisdiction != Jurisdiction.STATE or not t.state or t.state == state
    ]
