"""
Institute Admin - Events list and Event detail (roles, participants, awards)
"""
import streamlit as st

from console.core.event_roles import (
    EVENT_ROLES,
    ROLE_LABELS,
    awards_by_user,
    current_user_role,
    role_members,
    student_filter_params,
)
from console.core.filter_engine import records_to_frame
from console.core.name_cache import NameResolutionMap, canonical_id, collect_event_names
from console.integrations.admin_api import EventsAPI
from console.integrations.api_client import ApiError
from console.notifications.toast import emit_toast, error_message
from console.session.profile_store import SessionProfileStore

EVENT_STATUSES = ["", "DRAFT", "PUBLISHED", "COMPLETED", "CANCELLED"]
EVENT_TYPES = ["", "COMPETITION", "WORKSHOP", "HACKATHON", "SEMINAR", "CONFERENCE", "CERTIFICATION", "OTHER"]

EVENT_COLUMNS = {
    "Title": "title",
    "Type": "eventType",
    "Status": "status",
    "Start": "startDate",
    "Location": "location",
}


def render_events(api: EventsAPI, location):
    st.markdown("## 📅 Events")

    col1, col2, col3 = st.columns(3)
    status = col1.selectbox("Status", EVENT_STATUSES, format_func=lambda v: v or "All")
    event_type = col2.selectbox("Type", EVENT_TYPES, format_func=lambda v: v or "All")
    search = col3.text_input("Search")

    try:
        events = api.list_events(status=status, event_type=event_type, search=search).get("events") or []
    except ApiError as e:
        emit_toast("error", error_message(e, "Failed to load events"))
        events = []

    st.dataframe(records_to_frame(events, EVENT_COLUMNS), use_container_width=True)
    for event in events:
        if st.button(f"Open {event.get('title')}", key=f"open_event_{event['_id']}"):
            location.navigate(f"/admin/institute-admin/events/{event['_id']}")
            st.rerun()


def _names_for(event_id: str) -> NameResolutionMap:
    """One name map per event detail view, kept across reruns."""
    key = f"_verifier_names_{event_id}"
    if key not in st.session_state:
        st.session_state[key] = NameResolutionMap()
    return st.session_state[key]


def render_event_detail(api: EventsAPI, event_id: str, location):
    try:
        event = api.get_event(event_id).get("event") or {}
    except ApiError as e:
        emit_toast("error", error_message(e, "Failed to load event details"))
        location.navigate("/admin/institute-admin/events")
        st.rerun()
        return

    names = _names_for(event_id)
    names.record_names(collect_event_names(event))

    profile = SessionProfileStore(st.session_state).profile()
    my_role = current_user_role(profile, event)

    st.markdown(f"## 📅 {event.get('title', 'Event')}")
    st.caption(f"{event.get('eventType', '')} • {event.get('status', '')} • your role: {my_role or 'viewer'}")

    for role in EVENT_ROLES:
        render_role_panel(api, event_id, event, role, names)

    render_participants(api, event_id, event)


def render_role_panel(api: EventsAPI, event_id: str, event, role: str, names: NameResolutionMap):
    st.markdown(f"### {ROLE_LABELS[role]}")
    for member in role_members(event, role, names):
        c1, c2 = st.columns([4, 1])
        c1.write(member["name"])
        if c2.button("Unassign", key=f"unassign_{role}_{member['id']}"):
            try:
                api.unassign_role(event_id, role, member["id"])
            except ApiError as e:
                emit_toast("error", error_message(e, "Failed to unassign role"))
            else:
                emit_toast("success", f"{role} unassigned")
                st.rerun()

    query = st.text_input(f"Search verifiers for {ROLE_LABELS[role]}", key=f"role_search_{role}")
    if st.button("Search", key=f"role_search_btn_{role}"):
        try:
            st.session_state[f"_role_results_{role}"] = api.search_verifiers(query)
        except ApiError as e:
            emit_toast("error", error_message(e, "Verifier search failed"))
            st.session_state[f"_role_results_{role}"] = []

    results = st.session_state.get(f"_role_results_{role}", [])
    names.record_names((canonical_id(v), v.get("name")) for v in results)
    for verifier in results:
        vid = canonical_id(verifier)
        if st.button(f"Assign {verifier.get('name', vid)}", key=f"assign_{role}_{vid}"):
            try:
                api.assign_role(event_id, role, vid)
            except ApiError as e:
                emit_toast("error", error_message(e, "Failed to assign role"))
                continue
            names.record_names([(vid, verifier.get("name"))])
            emit_toast("success", f"{role} assigned")
            st.session_state.pop(f"_role_results_{role}", None)
            st.rerun()


def render_participants(api: EventsAPI, event_id: str, event):
    st.markdown("### Participants")
    try:
        awards = awards_by_user(api.get_rankings(event_id).get("rankings"))
    except ApiError:
        awards = {}

    participants = event.get("participants") or []
    for participant in participants:
        uid = canonical_id(participant.get("userId"))
        name = (participant.get("userId") or {}).get("name") if isinstance(participant.get("userId"), dict) else uid
        award = awards.get(uid)
        c1, c2, c3 = st.columns([3, 2, 1])
        c1.write(name)
        c2.write(f"🏆 #{award.get('rank')} {award.get('label') or ''}" if award else "")
        if c3.button("Remove", key=f"remove_participant_{uid}"):
            try:
                api.remove_participant(event_id, uid)
            except ApiError as e:
                emit_toast("error", error_message(e, "Failed to remove participant"))
            else:
                emit_toast("success", "Participant removed successfully")
                st.rerun()

    with st.expander("🏆 Assign Award"):
        ids = [canonical_id(p.get("userId")) for p in participants]
        with st.form(f"award_{event_id}"):
            who = st.selectbox("Participant", ids)
            rank = st.number_input("Rank", min_value=1, value=1)
            label = st.text_input("Label")
            submitted = st.form_submit_button("Assign")
        if submitted and who:
            try:
                api.assign_position(event_id, who, int(rank), label)
            except ApiError as e:
                emit_toast("error", error_message(e, "Failed to assign award"))
            else:
                emit_toast("success", "Award assigned successfully!")
                st.rerun()

    with st.expander("➕ Add Participants"):
        c1, c2, c3 = st.columns(3)
        filters = {
            "classLevel": c1.text_input("Class", key="participant_class"),
            "house": c2.text_input("House", key="participant_house"),
            "section": c3.text_input("Section", key="participant_section"),
        }
        try:
            students = api.get_students(student_filter_params(filters))
        except ApiError as e:
            emit_toast("error", error_message(e, "Failed to fetch students"))
            students = []
        options = {canonical_id(s): s.get("name") for s in students}
        chosen = st.multiselect("Students", list(options), format_func=lambda sid: options.get(sid) or sid)
        if st.button("Add Selected", key="add_participants"):
            if not chosen:
                emit_toast("error", "Please select at least one student")
            else:
                try:
                    api.add_participants(event_id, chosen)
                except ApiError as e:
                    emit_toast("error", error_message(e, "Failed to add participants"))
                else:
                    emit_toast("success", "Participants added successfully!")
                    st.rerun()

    if participants and st.button("🚀 Push Verified Experiences", key="push_experiences"):
        try:
            response = api.push_experiences(event_id)
        except ApiError as e:
            emit_toast("error", error_message(e, "Failed to push experiences"))
        else:
            created = (response.get("results") or {}).get("success", 0)
            emit_toast("success", f"Successfully created {created} experiences!")
