"""
Stale response handling for filter and page changes.
"""

from console.core.fetch_guard import StaleResponseGuard
from console.core.view_state import PagedRequestView


def test_latest_ticket_applies():
    guard = StaleResponseGuard()
    applied = []
    ticket = guard.issue("claims", ("", 1))
    assert guard.deliver(ticket, ("", 1), applied.append, {"ok": True})
    assert applied == [{"ok": True}]


def test_superseded_ticket_is_dropped():
    guard = StaleResponseGuard()
    applied = []
    first = guard.issue("claims", ("", 1))
    second = guard.issue("claims", ("PENDING", 1))

    assert not guard.deliver(first, ("PENDING", 1), applied.append, "old")
    assert guard.deliver(second, ("PENDING", 1), applied.append, "new")
    assert applied == ["new"]


def test_tag_mismatch_is_dropped():
    guard = StaleResponseGuard()
    ticket = guard.issue("claims", ("", 1))
    assert not guard.is_current(ticket, ("", 2))


def test_keys_are_independent():
    guard = StaleResponseGuard()
    claims = guard.issue("claims", 1)
    guard.issue("requests", 1)
    assert guard.is_current(claims, 1)


def _payload(ids, page=1, pages=3):
    return {"requests": [{"_id": i} for i in ids], "pagination": {"page": page, "limit": 20, "total": 50, "pages": pages}}


def test_status_change_discards_in_flight_response():
    view = PagedRequestView("claims", lambda s, p, l: {})

    in_flight = view.begin_fetch()
    view.set_status("APPROVED")
    newer = view.begin_fetch()

    assert not view.complete(in_flight, _payload(["old"]))
    assert view.items == []
    assert view.complete(newer, _payload(["a1", "a2"]))
    assert [r["_id"] for r in view.items] == ["a1", "a2"]
    assert view.pagination.pages == 3


def test_out_of_order_pages():
    view = PagedRequestView("claims", lambda s, p, l: {})
    view.complete(view.begin_fetch(), _payload(["p1"]))

    view.set_page(2)
    page_two = view.begin_fetch()
    view.set_page(3)
    page_three = view.begin_fetch()

    assert view.complete(page_three, _payload(["p3"], page=3))
    assert not view.complete(page_two, _payload(["p2"], page=2))
    assert [r["_id"] for r in view.items] == ["p3"]
