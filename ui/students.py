"""
Institute Admin - Students & Profile Update Requests
"""
import streamlit as st

from console.config import PROFILE_REQUESTS_PAGE_LIMIT, STUDENTS_PAGE_LIMIT
from console.core.filter_engine import records_to_frame
from console.core.tab_selector import STUDENT_PAGE_SECTIONS, HashTabSelector
from console.core.view_state import PagedRequestView
from console.integrations.admin_api import InstituteAdminAPI
from console.integrations.api_client import ApiError, Pagination
from console.notifications.toast import emit_toast, error_message

STUDENT_COLUMNS = {
    "Name": "name",
    "Email": "email",
    "Class": "classLevel",
    "Section": "section",
    "House": "house",
}


def render_students_page(api: InstituteAdminAPI, location):
    st.markdown("## 🎓 Students")

    selector = st.session_state.get("_students_tabs")
    if selector is None or selector.closed or selector.location is not location:
        selector = HashTabSelector(location, STUDENT_PAGE_SECTIONS)
        st.session_state["_students_tabs"] = selector

    choice = st.radio("View", STUDENT_PAGE_SECTIONS, index=STUDENT_PAGE_SECTIONS.index(selector.active),
                      format_func=lambda s: "Students" if s == "students" else "Profile Requests",
                      horizontal=True, label_visibility="collapsed")
    if choice != selector.active:
        selector.select(choice)
        st.rerun()

    if selector.active == "students":
        render_student_list(api)
    else:
        render_profile_requests(api)


def render_student_list(api: InstituteAdminAPI):
    col1, col2 = st.columns([3, 1])
    search = col1.text_input("🔍 Search students", key="student_search")
    page = col2.number_input("Page", min_value=1, value=1, key="student_page")

    try:
        response = api.get_students(page=int(page), limit=STUDENTS_PAGE_LIMIT, search=search)
    except ApiError as e:
        emit_toast("error", error_message(e, "Failed to load students"))
        response = st.session_state.get("_students_last", {})
    else:
        st.session_state["_students_last"] = response

    students = response.get("users") or []
    pagination = Pagination.from_payload(response, limit=STUDENTS_PAGE_LIMIT)
    st.caption(f"Page {pagination.page} of {max(pagination.pages, 1)}")
    st.dataframe(records_to_frame(students, STUDENT_COLUMNS), use_container_width=True)

    for student in students:
        with st.expander(f"✏️ Edit {student.get('name')}"):
            render_student_edit(api, student)


def render_student_edit(api: InstituteAdminAPI, student):
    sid = student["_id"]
    with st.form(f"edit_{sid}"):
        dob = st.text_input("Date of Birth (YYYY-MM-DD)", value=(student.get("dob") or "").split("T")[0])
        class_level = st.text_input("Class", value=student.get("classLevel") or "")
        section = st.text_input("Section", value=student.get("section") or "")
        house = st.text_input("House", value=student.get("house") or "")
        submitted = st.form_submit_button("Save")

    if submitted:
        fields = {"dob": dob, "classLevel": class_level, "section": section, "house": house}
        try:
            api.update_student_profile(sid, fields)
        except ApiError as e:
            emit_toast("error", error_message(e, "Failed to update profile"))
            return
        emit_toast("success", f"{student.get('name')}'s profile updated successfully")
        st.rerun()


def render_profile_requests(api: InstituteAdminAPI):
    if "_profile_requests_view" not in st.session_state:
        st.session_state["_profile_requests_view"] = PagedRequestView(
            "profile_requests",
            lambda s, p, l: api.list_profile_update_requests(status=s, page=p, limit=l),
            status="PENDING",
            limit=PROFILE_REQUESTS_PAGE_LIMIT,
        )
    view: PagedRequestView = st.session_state["_profile_requests_view"]
    view.refresh("Failed to load profile requests")

    pages = max(view.pagination.pages, 1)
    c1, c2, c3 = st.columns([1, 2, 1])
    if c1.button("← Previous", key="profile_requests_prev", disabled=view.page <= 1):
        view.set_page(view.page - 1)
        st.rerun()
    c2.caption(f"Page {view.page} of {pages} • {view.pagination.total} requests")
    if c3.button("Next →", key="profile_requests_next", disabled=view.page >= pages):
        view.set_page(view.page + 1)
        st.rerun()

    if not view.items:
        st.info("No pending profile update requests")
        return

    for request in view.items:
        rid = request["_id"]
        student = (request.get("user") or {}).get("name", "Unknown student")
        with st.expander(f"📝 {student}"):
            st.json(request.get("changes") or {})
            comment = st.text_input("Comment", key=f"comment_{rid}")
            c1, c2 = st.columns(2)
            for column, action in ((c1, "APPROVE"), (c2, "REJECT")):
                if column.button(action.title(), key=f"{action}_{rid}"):
                    try:
                        api.decide_profile_update_request(rid, action, comment)
                    except ApiError as e:
                        emit_toast("error", error_message(e, "Failed to process request"))
                        continue
                    done = "approved" if action == "APPROVE" else "rejected"
                    emit_toast("success", f"Profile update request {done}{' with comment' if comment else ''}")
                    st.rerun()
