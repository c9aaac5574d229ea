"""
Verifier name cache and the userId boundary adapter.
"""

from console.core.name_cache import (
    NameResolutionMap,
    canonical_id,
    collect_event_names,
    normalize_identity,
)


def test_earlier_names_survive_later_batches():
    names = NameResolutionMap()
    names.record_names([{"id": "u1", "name": "Alice"}])
    names.record_names([{"id": "u2", "name": "Bob"}])

    assert names.resolve_name("u1", "") == "Alice"
    assert names.resolve_name("u2", "") == "Bob"


def test_unknown_id_is_echoed_back():
    assert NameResolutionMap().resolve_name("u9", "") == "u9"


def test_inline_fallback_used_when_not_cached():
    assert NameResolutionMap().resolve_name("u9", "Inline Ivy") == "Inline Ivy"


def test_cached_name_beats_inline_fallback():
    names = NameResolutionMap()
    names.record_names([("u1", "Alice")])
    assert names.resolve_name("u1", "Stale Name") == "Alice"


def test_last_write_wins():
    names = NameResolutionMap()
    names.record_names([("u1", "Alice")])
    names.record_names([("u1", "Alice Smith")])
    assert names.resolve_name("u1") == "Alice Smith"
    assert len(names) == 1


def test_entries_without_id_or_name_are_skipped():
    names = NameResolutionMap()
    names.record_names([(None, "Ghost"), ("u3", None), ("u4", ""), {"id": "u5"}, "garbage", ("u6", "Fay")])
    assert names.snapshot() == {"u6": "Fay"}


def test_record_names_accepts_none():
    names = NameResolutionMap()
    names.record_names(None)
    assert len(names) == 0


def test_resolve_none_identifier():
    assert NameResolutionMap().resolve_name(None) == ""


def test_contains_uses_string_ids():
    names = NameResolutionMap()
    names.record_names([(42, "Answer")])
    assert 42 in names
    assert "42" in names


def test_canonical_id_shapes():
    assert canonical_id("u1") == "u1"
    assert canonical_id({"_id": "u1", "id": "x"}) == "u1"
    assert canonical_id({"id": "u2"}) == "u2"
    assert canonical_id({}) is None
    assert canonical_id(None) is None
    assert canonical_id("") is None


def test_normalize_identity_shapes():
    assert normalize_identity({"userId": "u1", "userName": "Alice"}) == ("u1", "Alice")
    assert normalize_identity({"userId": {"_id": "u2", "name": "Bob"}}) == ("u2", "Bob")
    assert normalize_identity({"userId": "u3"}) == ("u3", None)
    assert normalize_identity(None) == (None, None)


def test_collect_event_names_across_role_lists():
    event = {
        "coordinators": [{"userId": {"_id": "u1", "name": "Alice"}}],
        "inCharges": [{"userId": "u2", "userName": "Bob"}],
        "judges": None,
    }
    names = NameResolutionMap()
    names.record_names(collect_event_names(event))
    assert names.snapshot() == {"u1": "Alice", "u2": "Bob"}
