"""
TruePortMe Admin Console - Streamlit entry point

Run:
    streamlit run app.py
"""
import json
import logging

import streamlit as st

from console.config import API_BASE_URL, configure_logging
from console.core.navigation import INSTITUTE_DASHBOARD, SUPER_DASHBOARD, admin_type_for_path, login_path
from console.integrations.admin_api import EventsAPI, InstituteAdminAPI, SuperAdminAPI
from console.integrations.api_client import ApiClient, ApiError
from console.notifications.toast import emit_toast, error_message, get_toasts, mark_all_read
from security.access_guard import extract_admin_profile, is_super_admin
from ui.location import get_location
from ui.sidebar import render_sidebar

# ═══════════════════════════════════════════════════════════════
# PAGE CONFIG (MUST BE FIRST)
# ═══════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="TruePortMe Admin",
    layout="wide",
    initial_sidebar_state="expanded",
)

configure_logging()
logger = logging.getLogger("console.app")

location = get_location()
client = ApiClient(API_BASE_URL, token=st.session_state.get("token"))


def show_toasts() -> None:
    icons = {"success": "✅", "error": "❌", "info": "ℹ️"}
    for toast in reversed(get_toasts(unread_only=True)):
        st.toast(toast["message"], icon=icons.get(toast["kind"], "🔔"))
    mark_all_read()


def render_login() -> None:
    st.title("🔐 TruePortMe Admin")
    st.caption("Paste an access token issued by the TruePortMe backend")
    with st.form("login"):
        token = st.text_input("Access token", type="password")
        submitted = st.form_submit_button("Sign in")
    if not submitted or not token:
        return

    st.session_state["token"] = token
    api = SuperAdminAPI(ApiClient(API_BASE_URL, token=token))
    try:
        profile = extract_admin_profile(api.get_profile())
    except ApiError as e:
        emit_toast("error", error_message(e, "Sign in failed"))
        st.session_state.pop("token", None)
        return

    st.session_state["user"] = json.dumps(profile or {})
    location.navigate(SUPER_DASHBOARD if is_super_admin(profile) else INSTITUTE_DASHBOARD)
    st.rerun()


# ═══════════════════════════════════════════════════════════════
# ROUTING
# ═══════════════════════════════════════════════════════════════
path = location.path

if not st.session_state.get("token") or path.endswith("/login"):
    render_login()
else:
    render_sidebar(location)
    try:
        if path == SUPER_DASHBOARD:
            from ui.super_admin import render_super_admin
            render_super_admin(SuperAdminAPI(client), location)
        elif path == "/admin/institute-admin/students":
            from ui.students import render_students_page
            render_students_page(InstituteAdminAPI(client), location)
        elif path == "/admin/institute-admin/events":
            from ui.events import render_events
            render_events(EventsAPI(client), location)
        elif path.startswith("/admin/institute-admin/events/"):
            from ui.events import render_event_detail
            render_event_detail(EventsAPI(client), path.rsplit("/", 1)[-1], location)
        elif path == INSTITUTE_DASHBOARD:
            from ui.institute_admin import render_institute_admin
            render_institute_admin(InstituteAdminAPI(client), location)
        elif path == "/admin/institute-admin/profile-requests":
            from ui.students import render_profile_requests
            render_profile_requests(InstituteAdminAPI(client))
        else:
            st.warning(f"Unknown page: {path}")
    except ApiError as e:
        if e.is_unauthorized:
            logger.info("Session expired, returning to login")
            st.session_state.pop("token", None)
            location.navigate(login_path(admin_type_for_path(path)))
            st.rerun()
        raise

    if path != SUPER_DASHBOARD:
        from ui.super_admin import teardown
        teardown()
    if path != INSTITUTE_DASHBOARD:
        from ui.institute_admin import teardown as teardown_institute
        teardown_institute()

show_toasts()
