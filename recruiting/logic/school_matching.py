"""
School Matching Cache

Resolves free-text school names to an NCAA division and conference.

Matching, first hit wins, searching divisions D1 -> D2 -> D3:
1. Exact match on normalized names
2. Containment in either direction (both normalized names > 8 chars)
3. Levenshtein distance (length difference <= 3; allowed distance 2 when
   the longer name exceeds 6 chars, else 1)

Hits are memoized by normalized name. One SchoolMatchCache is created per
session or request scope; there is no module-level cache.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from .contracts import SchoolLookupResult, TargetSchool
from .ncaa_reference import DIVISION_ORDER, DIVISION_SCHOOLS

logger = logging.getLogger(__name__)


# Applied in order, each at most once
_NORMALIZE_PATTERNS = [
    re.compile(r"[-\s]+main\s+campus\b", re.IGNORECASE),
    re.compile(r"\s+\(.+\)$", re.IGNORECASE),
    re.compile(r"\s+at\s+.+$", re.IGNORECASE),
    re.compile(r"\s+university\b", re.IGNORECASE),
    re.compile(r"\s+college\b", re.IGNORECASE),
    re.compile(r"\s+institute\b", re.IGNORECASE),
    re.compile(r"\s+state\b", re.IGNORECASE),
    re.compile(r"\s+campus\b", re.IGNORECASE),
    re.compile(r"\s+technical\b", re.IGNORECASE),
    re.compile(r"\s+polytechnic\b", re.IGNORECASE),
]

CONTAINMENT_MIN_LENGTH = 8
FUZZY_MAX_LENGTH_DIFF = 3


def normalize_school_name(name: str) -> str:
    """
    Normalize a school name into a cache/match key.

    "Florida State University", "florida state" and "Florida State"
    all normalize to "florida".
    """
    key = (name or "").lower()
    for pattern in _NORMALIZE_PATTERNS:
        key = pattern.sub("", key, count=1)
    return key.strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert/delete/substitute)."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], previous[j], current[j - 1]) + 1)
        previous = current
    return previous[-1]


def names_match(normalized_query: str, normalized_known: str) -> bool:
    """Apply the exact/containment/fuzzy checks to two normalized names."""
    if not normalized_query or not normalized_known:
        return False

    if normalized_query == normalized_known:
        return True

    if (
        len(normalized_query) > CONTAINMENT_MIN_LENGTH
        and len(normalized_known) > CONTAINMENT_MIN_LENGTH
        and (normalized_query in normalized_known or normalized_known in normalized_query)
    ):
        return True

    if abs(len(normalized_query) - len(normalized_known)) <= FUZZY_MAX_LENGTH_DIFF:
        max_distance = 2 if max(len(normalized_query), len(normalized_known)) > 6 else 1
        if levenshtein_distance(normalized_query, normalized_known) <= max_distance:
            return True

    return False


class SchoolMatchCache:
    """
    Session-scoped memo of school name -> division/conference.

    Only successful lookups are cached; a miss is re-searched next time.
    `scan_count` counts reference database scans.
    """

    def __init__(self, reference: Optional[Dict[str, List[Dict[str, str]]]] = None):
        self._reference = reference if reference is not None else DIVISION_SCHOOLS
        self._entries: Dict[str, SchoolLookupResult] = {}
        self._normalized_reference = {
            division: [
                (normalize_school_name(school["name"]), school)
                for school in self._reference.get(division, [])
            ]
            for division in DIVISION_ORDER
        }
        self.scan_count = 0

    # -------------------------------------------------------------------------
    # Cache operations
    # -------------------------------------------------------------------------

    def get_cached(self, key: str) -> Optional[SchoolLookupResult]:
        return self._entries.get(key)

    def set_cached(self, key: str, result: SchoolLookupResult) -> None:
        self._entries[key] = result

    def is_cached(self, key: str) -> bool:
        return key in self._entries

    def invalidate(self, key: str) -> None:
        """Drop one entry; accepts a raw or already-normalized name."""
        self._entries.pop(key, None)
        self._entries.pop(normalize_school_name(key), None)

    def clear(self) -> None:
        self._entries.clear()

    def preload(self, entries: Iterable[Tuple[str, SchoolLookupResult]]) -> None:
        for key, result in entries:
            self._entries[key] = result

    def stats(self) -> Dict[str, object]:
        return {"size": len(self._entries), "entries": list(self._entries.keys())}

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup(self, name: Optional[str]) -> Optional[SchoolLookupResult]:
        """
        Resolve a school name to its division and conference.

        Args:
            name: Free-text school name

        Returns:
            SchoolLookupResult, or None for blank input or no match
        """
        if not name or not name.strip():
            return None

        key = normalize_school_name(name)
        cached = self.get_cached(key)
        if cached is not None:
            return cached

        self.scan_count += 1
        for division in DIVISION_ORDER:
            for known_key, school in self._normalized_reference[division]:
                if names_match(key, known_key):
                    result = SchoolLookupResult(
                        division=division,
                        conference=school.get("conference"),
                    )
                    self.set_cached(key, result)
                    return result

        logger.debug(f"No NCAA match for school name '{name}'")
        return None

    def schools_for_division(self, division: str) -> List[Dict[str, str]]:
        return list(self._reference.get(division, []))

    def reference_database(self) -> Dict[str, List[Dict[str, str]]]:
        return self._reference


def resolve_school_division(cache: SchoolMatchCache, school: TargetSchool) -> TargetSchool:
    """
    Fill a target school's missing division/conference from the cache.
    Returns the school unchanged when both are known or no match exists.
    """
    if school.division and school.conference:
        return school

    result = cache.lookup(school.name)
    if result is None:
        return school

    return school.model_copy(update={
        "division": school.division or result.division,
        "conference": school.conference or result.conference,
    })
