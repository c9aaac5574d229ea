"""
View state objects: filters, failure handling and paging.
"""

import pytest

from console.core.filter_engine import UNSET
from console.core.view_state import FilteredListView, InstitutionsView, PagedRequestView
from console.integrations.api_client import ApiError
from console.notifications.toast import get_toasts

RECORDS = [
    {"_id": "i1", "address": {"state": "MH", "district": "Pune"}, "status": "ACTIVE", "claimed": True, "kycVerified": True},
    {"_id": "i2", "address": {"state": "KA", "district": "Mysuru"}, "status": "PENDING", "claimed": False, "kycVerified": False},
    {"_id": "i3", "address": {"state": "MH", "district": "Nagpur"}, "status": "ACTIVE", "claimed": False, "kycVerified": True},
]


def _failing(message="Server exploded"):
    def fetch(*args):
        raise ApiError(500, message)
    return fetch


def test_institutions_view_options_and_filters():
    view = InstitutionsView()
    view.set_records(RECORDS)

    assert view.states == ["MH", "KA"]
    assert view.districts == ["Pune", "Mysuru", "Nagpur"]
    assert view.statuses == ["ACTIVE", "PENDING"]
    assert view.visible == RECORDS

    view.set_criterion("address.state", "MH")
    view.set_claimed_choice("unclaimed")
    assert [r["_id"] for r in view.visible] == ["i3"]

    view.set_kyc_choice("no")
    assert view.visible == []

    view.clear_criteria()
    assert all(v is UNSET for v in view.criteria.values())
    assert view.visible == RECORDS


def test_claimed_choice_all_clears_criterion():
    view = InstitutionsView()
    view.set_records(RECORDS)
    view.set_claimed_choice("claimed")
    assert [r["_id"] for r in view.visible] == ["i1"]
    view.set_claimed_choice("")
    assert len(view.visible) == 3


def test_unknown_filter_field():
    with pytest.raises(KeyError):
        InstitutionsView().set_criterion("name", "x")


def test_failed_load_keeps_records_and_raises_toast():
    view = FilteredListView(("status",))
    assert view.load(lambda: RECORDS)
    view.set_criterion("status", "ACTIVE")

    assert not view.load(_failing(), "Failed to load institutions")

    assert view.records == RECORDS
    assert [r["_id"] for r in view.visible] == ["i1", "i3"]
    toasts = get_toasts()
    assert toasts[0]["kind"] == "error"
    assert toasts[0]["message"] == "Server exploded"


def test_failed_load_uses_fallback_message():
    view = FilteredListView(("status",))
    view.load(_failing(message=""), "Failed to load institutions")
    assert get_toasts()[0]["message"] == "Failed to load institutions"


def test_paged_view_refresh_passes_status_and_page():
    calls = []

    def fetch(status, page, limit):
        calls.append((status, page, limit))
        return {"requests": [{"_id": "c1"}], "pagination": {"page": page, "limit": limit, "total": 1, "pages": 1}}

    view = PagedRequestView("claims", fetch, status="PENDING", limit=20)
    assert view.refresh()
    assert calls == [("PENDING", 1, 20)]
    assert view.items == [{"_id": "c1"}]


def test_paged_view_failed_refresh_keeps_items():
    view = PagedRequestView("claims", lambda s, p, l: {"requests": [{"_id": "c1"}], "pagination": {"pages": 1}})
    view.refresh()
    view.fetch_page = _failing()

    assert not view.refresh("Failed to load claim requests")
    assert view.items == [{"_id": "c1"}]
    assert get_toasts()[0]["kind"] == "error"


def test_set_status_resets_page_and_set_page_clamps():
    view = PagedRequestView("claims", lambda s, p, l: {})
    view._apply({"pagination": {"page": 1, "pages": 4}})

    view.set_page(3)
    assert view.page == 3
    view.set_page(10)
    assert view.page == 4
    view.set_page(0)
    assert view.page == 1

    view.set_page(2)
    view.set_status("REJECTED")
    assert view.page == 1
    assert view.tag == ("REJECTED", 1)


def test_profile_requests_next_page_goes_through_refresh():
    calls = []

    def fetch(status, page, limit):
        calls.append((status, page, limit))
        items = [{"_id": f"r{page}-{i}"} for i in range(limit if page < 2 else 3)]
        return {"requests": items, "pagination": {"page": page, "limit": limit, "total": 13, "pages": 2}}

    view = PagedRequestView("profile_requests", fetch, status="PENDING", limit=10)
    assert view.refresh()
    assert len(view.items) == 10

    view.set_page(2)
    assert view.refresh()

    assert calls == [("PENDING", 1, 10), ("PENDING", 2, 10)]
    assert [r["_id"] for r in view.items] == ["r2-0", "r2-1", "r2-2"]
    assert view.pagination.page == 2

    view.set_page(view.page + 1)
    assert view.page == 2
