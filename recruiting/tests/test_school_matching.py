"""
Tests for the school matching cache and name normalization.
"""

from recruiting.logic.contracts import SchoolLookupResult, TargetSchool
from recruiting.logic.school_matching import (
    SchoolMatchCache,
    levenshtein_distance,
    names_match,
    normalize_school_name,
    resolve_school_division,
)


def test_normalize_strips_suffixes():
    assert normalize_school_name("Florida State University") == "florida"
    assert normalize_school_name("florida state") == "florida"
    assert normalize_school_name("Kent State University at Kent") == "kent"
    assert normalize_school_name("University of Miami (FL)") == "university of miami"
    assert normalize_school_name("  Duke  ") == "duke"


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("clemson", "clemson") == 0


def test_names_match_guards_short_containment():
    # "miami" is too short to match by containment
    assert not names_match("miami", "university of miami")
    assert names_match("vanderbilt commodores", "vanderbilt")


def test_equivalent_names_share_one_scan():
    """
    Input: three spellings of Florida State
    Expected: same result each time, one database scan, one cache entry
    """
    cache = SchoolMatchCache()

    first = cache.lookup("Florida State University")
    second = cache.lookup("florida state")
    third = cache.lookup("Florida State")

    assert first == SchoolLookupResult(division="D1", conference="ACC")
    assert second is first
    assert third is first
    assert cache.scan_count == 1
    assert cache.stats() == {"size": 1, "entries": ["florida"]}


def test_blank_name_returns_none_without_scanning():
    cache = SchoolMatchCache()
    assert cache.lookup("") is None
    assert cache.lookup("   ") is None
    assert cache.lookup(None) is None
    assert cache.scan_count == 0
    assert cache.stats()["size"] == 0


def test_miss_is_not_cached():
    cache = SchoolMatchCache()
    assert cache.lookup("Hogwarts School of Witchcraft") is None
    assert cache.lookup("Hogwarts School of Witchcraft") is None
    assert cache.scan_count == 2
    assert cache.stats()["size"] == 0


def test_containment_and_fuzzy_matches():
    cache = SchoolMatchCache()
    assert cache.lookup("Vanderbilt Commodores") == SchoolLookupResult(division="D1", conference="SEC")
    assert cache.lookup("Clemsen") == SchoolLookupResult(division="D1", conference="ACC")
    assert cache.lookup("Miami") is None


def test_divisions_searched_in_order():
    reference = {
        "D1": [],
        "D2": [{"name": "Valdosta State University", "conference": "Gulf South"}],
        "D3": [{"name": "Valdosta State University", "conference": "Other"}],
    }
    cache = SchoolMatchCache(reference=reference)
    result = cache.lookup("Valdosta State")
    assert result.division == "D2"
    assert result.conference == "Gulf South"


def test_invalidate_forces_rescan():
    cache = SchoolMatchCache()
    cache.lookup("Florida State")
    cache.invalidate("Florida State University")

    assert not cache.is_cached("florida")
    cache.lookup("Florida State")
    assert cache.scan_count == 2


def test_preload_and_clear():
    cache = SchoolMatchCache()
    cache.preload([("made up", SchoolLookupResult(division="D3", conference="Test"))])

    assert cache.lookup("Made Up").division == "D3"
    assert cache.scan_count == 0

    cache.clear()
    assert cache.stats()["size"] == 0
    assert cache.lookup("Made Up") is None


def test_cached_entries_by_key():
    cache = SchoolMatchCache()
    assert cache.get_cached("florida") is None

    result = cache.lookup("Florida State University")
    assert cache.get_cached("florida") is result
    assert cache.is_cached("florida")

    custom = SchoolLookupResult(division="D2", conference="Sunshine State")
    cache.set_cached("tampa", custom)
    assert cache.lookup("Tampa") is custom
    assert cache.scan_count == 1


def test_reference_queries():
    cache = SchoolMatchCache()

    assert set(cache.reference_database()) == {"D1", "D2", "D3"}
    d1 = cache.schools_for_division("D1")
    assert d1[0] == {"name": "Florida State University", "conference": "ACC"}
    assert cache.schools_for_division("D2")[0]["name"] == "University of Tampa"
    assert cache.schools_for_division("NAIA") == []

    # Callers get a copy of the division list
    d1.clear()
    assert cache.schools_for_division("D1")


def test_custom_reference_database():
    reference = {"D3": [{"name": "Emory University", "conference": "UAA"}]}
    cache = SchoolMatchCache(reference)

    assert cache.reference_database() is reference
    assert cache.schools_for_division("D1") == []
    assert cache.lookup("Emory") == SchoolLookupResult(division="D3", conference="UAA")
    assert cache.lookup("Florida State") is None


def test_resolve_school_division_fills_missing_fields():
    cache = SchoolMatchCache()
    school = TargetSchool(id="s1", athlete_id="a1", name="Florida State")

    resolved = resolve_school_division(cache, school)
    assert resolved.division == "D1"
    assert resolved.conference == "ACC"
    assert school.division is None

    partial = TargetSchool(id="s2", athlete_id="a1", name="Florida State", division="D2")
    resolved = resolve_school_division(cache, partial)
    assert resolved.division == "D2"
    assert resolved.conference == "ACC"


def test_resolve_school_division_leaves_unknown_school():
    cache = SchoolMatchCache()
    school = TargetSchool(id="s1", athlete_id="a1", name="Hogwarts School of Witchcraft")
    assert resolve_school_division(cache, school) is school
