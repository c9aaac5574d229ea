"""
Institute Admin Dashboard
Sections: overview, users, requests, settings (synced with ?section=)
"""
import streamlit as st

from console.core.filter_engine import records_to_frame
from console.core.tab_selector import INSTITUTE_ADMIN_SECTIONS, HashTabSelector
from console.core.view_state import FilteredListView
from console.integrations.admin_api import InstituteAdminAPI
from console.performance.data_loader import DataLoader
from console.session.profile_store import SessionProfileStore
from ui.students import STUDENT_COLUMNS, render_profile_requests

USER_FILTERS = ("role", "classLevel", "section", "house")

USER_COLUMNS = {"Role": "role", **STUDENT_COLUMNS}


def get_selector(location) -> HashTabSelector:
    selector = st.session_state.get("_institute_tabs")
    if selector is None or selector.closed or selector.location is not location:
        selector = HashTabSelector(location, INSTITUTE_ADMIN_SECTIONS)
        st.session_state["_institute_tabs"] = selector
    return selector


def teardown() -> None:
    selector = st.session_state.pop("_institute_tabs", None)
    if selector is not None:
        selector.close()


def render_institute_admin(api: InstituteAdminAPI, location):
    st.markdown("## 🏫 Institute Admin Dashboard")
    selector = get_selector(location)

    # The sidebar drives the section here; no in-page tab strip.
    section = selector.active
    users = DataLoader().get("institute_users", lambda: api.get_users(limit=100), "Failed to load users", default={}) or {}
    records = users.get("users") or []

    if section == "overview":
        col1, col2, col3 = st.columns(3)
        col1.metric("Users", len(records))
        col2.metric("Students", len([u for u in records if u.get("role") == "STUDENT"]))
        col3.metric("Verifiers", len([u for u in records if u.get("role") == "VERIFIER"]))
    elif section == "users":
        render_users(records)
    elif section == "requests":
        render_profile_requests(api)
    else:
        profile = SessionProfileStore(st.session_state)
        st.write(f"**Signed in as:** {profile.display_name} ({profile.email or 'no email'})")


def render_users(records):
    if "_institute_users_view" not in st.session_state:
        st.session_state["_institute_users_view"] = FilteredListView(USER_FILTERS)
    view: FilteredListView = st.session_state["_institute_users_view"]
    view.set_records(records)

    columns = st.columns(len(USER_FILTERS))
    for column, field in zip(columns, USER_FILTERS):
        choice = column.selectbox(field, [""] + view.options[field], format_func=lambda v: v or "All",
                                  key=f"user_filter_{field}")
        view.set_criterion(field, choice)

    st.caption(f"Showing {len(view.visible)} of {len(view.records)} users")
    st.dataframe(records_to_frame(view.visible, USER_COLUMNS), use_container_width=True)
