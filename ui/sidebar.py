"""
Admin Sidebar - menu, signed-in user, logout
"""
import streamlit as st

from console.core.navigation import SUPER, SidebarNavigator, admin_type_for_path, dashboard_base, login_path
from console.performance.data_loader import DataLoader
from console.session.profile_store import SessionProfileStore

_SESSION_KEY = "_console_sidebar"


def _base_for(location) -> str:
    return dashboard_base(admin_type_for_path(location.path)) or location.path


def get_navigator(location) -> SidebarNavigator:
    """Reuse the navigator across reruns; rebuild when the page family changes."""
    navigator = st.session_state.get(_SESSION_KEY)
    if navigator is None or navigator.location is not location or navigator.base != _base_for(location):
        if navigator is not None:
            navigator.close()
        navigator = SidebarNavigator(location)
        st.session_state[_SESSION_KEY] = navigator
    return navigator


def render_sidebar(location) -> None:
    navigator = get_navigator(location)
    profile = SessionProfileStore(st.session_state)

    with st.sidebar:
        st.markdown(f"### {'Super Admin' if navigator.admin_type == SUPER else 'Institute Admin'}")
        st.caption(f"{profile.initial} · {profile.display_name} {profile.email}")

        active = set(i.href for i in navigator.active_items())
        for item in navigator.items():
            label = f"**{item.label}**" if item.href in active else item.label
            if st.button(label, key=f"nav_{item.href}", use_container_width=True):
                navigator.activate(item)
                st.rerun()

        st.divider()
        if st.button("🔄 Refresh data", key="nav_refresh", use_container_width=True):
            DataLoader().invalidate()
            st.rerun()
        if st.button("🚪 Logout", key="nav_logout", use_container_width=True):
            st.session_state.pop("token", None)
            st.session_state.pop("user", None)
            DataLoader().invalidate()
            location.navigate(login_path(navigator.admin_type))
            st.rerun()
