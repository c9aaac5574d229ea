"""
In-memory location: fragment writes, history and listener dispatch.
"""

from console.core.location import MemoryLocation, strip_fragment


def test_strip_fragment():
    assert strip_fragment("#claims") == "claims"
    assert strip_fragment("claims") == "claims"
    assert strip_fragment("") == ""
    assert strip_fragment(None) == ""


def test_set_fragment_notifies_only_on_change():
    location = MemoryLocation("/p")
    seen = []
    location.subscribe(seen.append)

    location.set_fragment("a")
    location.set_fragment("#a")
    location.set_fragment("b")

    assert seen == ["a", "b"]
    assert location.url == "/p#b"


def test_replace_url_is_silent():
    location = MemoryLocation("/p", "a")
    seen = []
    location.subscribe(seen.append)

    location.replace_url("/p")
    assert seen == []
    assert location.url == "/p"
    assert location.history == [("/p", "")]


def test_failing_listener_does_not_block_others():
    location = MemoryLocation("/p")
    seen = []

    def broken(fragment):
        raise RuntimeError("boom")

    location.subscribe(broken)
    location.subscribe(seen.append)
    location.set_fragment("x")
    assert seen == ["x"]


def test_unsubscribe_twice_is_harmless():
    location = MemoryLocation("/p")
    unsubscribe = location.subscribe(lambda f: None)
    unsubscribe()
    unsubscribe()
    assert location.listener_count == 0


def test_navigation_truncates_forward_history():
    location = MemoryLocation("/a")
    location.navigate("/b")
    location.navigate("/c", "x")
    location.back()
    location.navigate("/d")

    assert location.history == [("/a", ""), ("/b", ""), ("/d", "")]
    location.forward()
    assert location.path == "/d"


def test_back_at_start_is_noop():
    location = MemoryLocation("/a", "x")
    location.back()
    assert location.url == "/a#x"
