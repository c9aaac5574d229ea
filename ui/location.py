"""
Streamlit Location Adapter

Streamlit cannot read the URL fragment, so the page path and the
dashboard section live in query params (?page=...&section=...). The
adapter persists in session state; poll() runs once per rerun and turns
an externally changed section (back button, pasted link) into a
fragment-change notification.
"""
import streamlit as st

from console.core.location import Location

PAGE_PARAM = "page"
SECTION_PARAM = "section"
DEFAULT_PAGE = "/admin/super-admin/dashboard"

_SESSION_KEY = "_console_location"


class StreamlitLocation(Location):

    def __init__(self, default_page: str = DEFAULT_PAGE):
        super().__init__(
            st.query_params.get(PAGE_PARAM, default_page),
            st.query_params.get(SECTION_PARAM, ""),
        )

    def _write(self, path: str, fragment: str, push: bool) -> None:
        super()._write(path, fragment, push)
        st.query_params[PAGE_PARAM] = path
        if fragment:
            st.query_params[SECTION_PARAM] = fragment
        elif SECTION_PARAM in st.query_params:
            del st.query_params[SECTION_PARAM]

    def poll(self) -> None:
        """Pick up query param changes made outside the app."""
        path = st.query_params.get(PAGE_PARAM, self._path)
        fragment = st.query_params.get(SECTION_PARAM, "")
        self._path = path
        if fragment != self._fragment:
            self._fragment = fragment
            self.notify()


def get_location() -> StreamlitLocation:
    """One location per browser session, polled on every rerun."""
    if _SESSION_KEY not in st.session_state:
        st.session_state[_SESSION_KEY] = StreamlitLocation()
    location = st.session_state[_SESSION_KEY]
    location.poll()
    return location
