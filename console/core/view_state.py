"""
Per-view state objects.

Each dashboard view owns one of these instead of scattering filter,
page and list state across the page. Derived values (filter options,
visible rows) are recomputed whenever a declared input changes.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from console.core.fetch_guard import FetchTicket, StaleResponseGuard
from console.core.filter_engine import UNSET, apply_filters, filter_options, parse_choice
from console.integrations.api_client import ApiError, Pagination
from console.notifications.toast import emit_toast, error_message

logger = logging.getLogger(__name__)


class FilteredListView:
    """
    A loaded list plus the criteria narrowing it.

    Args:
        filter_fields: field paths that accept a criterion
        option_fields: field paths whose distinct values feed dropdowns
    """

    def __init__(self, filter_fields: Sequence[str], option_fields: Optional[Sequence[str]] = None):
        self.filter_fields = tuple(filter_fields)
        self.option_fields = tuple(option_fields if option_fields is not None else filter_fields)
        self.records: List[Mapping[str, Any]] = []
        self.criteria: Dict[str, Any] = {field: UNSET for field in self.filter_fields}
        self.options: Dict[str, List[Any]] = {}
        self.visible: List[Mapping[str, Any]] = []
        self._recompute()

    def _recompute(self) -> None:
        self.options = filter_options(self.records, self.option_fields)
        self.visible = apply_filters(self.records, self.criteria)

    def set_records(self, records: Sequence[Mapping[str, Any]]) -> None:
        self.records = list(records)
        self._recompute()

    def set_criterion(self, field: str, value: Any) -> None:
        if field not in self.criteria:
            raise KeyError(f"'{field}' is not a filterable field")
        self.criteria[field] = value
        self._recompute()

    def clear_criteria(self) -> None:
        self.criteria = {field: UNSET for field in self.filter_fields}
        self._recompute()

    def load(self, fetch: Callable[[], Sequence[Mapping[str, Any]]], failure_message: str = "Failed to load data") -> bool:
        """
        Replace the records from `fetch()`. On ApiError the previous
        records stay in place and an error toast is raised.
        """
        try:
            records = fetch()
        except ApiError as e:
            logger.warning(f"Load failed, keeping {len(self.records)} records: {e}")
            emit_toast("error", error_message(e, failure_message))
            return False
        self.set_records(records or [])
        return True


class InstitutionsView(FilteredListView):

    FILTER_FIELDS = ("address.state", "address.district", "claimed", "kycVerified", "status")
    OPTION_FIELDS = ("address.state", "address.district", "status")

    def __init__(self):
        super().__init__(self.FILTER_FIELDS, self.OPTION_FIELDS)

    @property
    def states(self) -> List[Any]:
        return self.options["address.state"]

    @property
    def districts(self) -> List[Any]:
        return self.options["address.district"]

    @property
    def statuses(self) -> List[Any]:
        return self.options["status"]

    def set_claimed_choice(self, choice: str) -> None:
        """'claimed' / 'unclaimed' / ''"""
        self.set_criterion("claimed", parse_choice(choice, "claimed", "unclaimed"))

    def set_kyc_choice(self, choice: str) -> None:
        """'yes' / 'no' / ''"""
        self.set_criterion("kycVerified", parse_choice(choice, "yes", "no"))


PageFetcher = Callable[[str, int, int], Mapping[str, Any]]


class PagedRequestView:
    """
    Server-side paged list (claim requests, profile update requests)
    with a status filter.

    Every fetch is tagged with the (status, page) it was issued for; a
    response that arrives after the status or page moved on is dropped.
    """

    def __init__(
        self,
        key: str,
        fetch_page: PageFetcher,
        result_key: str = "requests",
        status: str = "",
        limit: int = 20,
        guard: Optional[StaleResponseGuard] = None,
    ):
        self.key = key
        self.fetch_page = fetch_page
        self.result_key = result_key
        self.status = status
        self.page = 1
        self.limit = limit
        self.items: List[Mapping[str, Any]] = []
        self.pagination = Pagination(limit=limit)
        self.guard = guard or StaleResponseGuard()

    @property
    def tag(self) -> Tuple[str, int]:
        return (self.status, self.page)

    def set_status(self, status: str) -> None:
        if status != self.status:
            self.status = status
            self.page = 1

    def set_page(self, page: int) -> None:
        upper = max(self.pagination.pages, 1)
        self.page = min(max(int(page), 1), upper)

    def begin_fetch(self) -> FetchTicket:
        return self.guard.issue(self.key, self.tag)

    def complete(self, ticket: FetchTicket, payload: Mapping[str, Any]) -> bool:
        return self.guard.deliver(ticket, self.tag, self._apply, payload)

    def _apply(self, payload: Mapping[str, Any]) -> None:
        self.items = list(payload.get(self.result_key) or [])
        self.pagination = Pagination.from_payload(payload, limit=self.limit)

    def refresh(self, failure_message: str = "Failed to load requests") -> bool:
        ticket = self.begin_fetch()
        try:
            payload = self.fetch_page(ticket.tag[0], ticket.tag[1], self.limit)
        except ApiError as e:
            logger.warning(f"{self.key} fetch failed for {ticket.tag}: {e}")
            emit_toast("error", error_message(e, failure_message))
            return False
        return self.complete(ticket, payload)

