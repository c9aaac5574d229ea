"""
Super Admin Dashboard
Sections: overview, institutions, admins, claims, settings (synced with ?section=)
"""
import plotly.express as px
import streamlit as st

from console.config import ADMINS_PAGE_LIMIT, CLAIMS_PAGE_LIMIT, INSTITUTIONS_PAGE_LIMIT
from console.core.filter_engine import apply_filters, distinct_values, records_to_frame
from console.core.tab_selector import SUPER_ADMIN_SECTIONS, HashTabSelector
from console.core.view_state import InstitutionsView, PagedRequestView
from console.integrations.admin_api import SuperAdminAPI, institution_payload
from console.integrations.api_client import ApiError
from console.integrations.geo import districts_for, load_state_districts, sorted_states
from console.notifications.toast import emit_toast, error_message
from console.performance.data_loader import DataLoader

SECTION_LABELS = {
    "overview": "📊 Overview",
    "institutions": "🏫 Institutions",
    "admins": "👤 Institute Admins",
    "claims": "📝 Claim Requests",
    "settings": "⚙️ Settings",
}

INSTITUTION_COLUMNS = {
    "Name": "displayName",
    "State": "address.state",
    "District": "address.district",
    "Type": "institutionType",
    "Status": "status",
    "Claimed": "claimed",
    "KYC": "kycVerified",
}

ADMIN_COLUMNS = {
    "Name": "name",
    "Email": "email",
    "Phone": "phone",
    "Institution": "institution.name",
}

CLAIM_STATUSES = ["", "PENDING", "APPROVED", "REJECTED"]


def _session_object(key, factory):
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def get_selector(location) -> HashTabSelector:
    selector = st.session_state.get("_super_tabs")
    if selector is None or selector.closed or selector.location is not location:
        selector = HashTabSelector(location, SUPER_ADMIN_SECTIONS)
        st.session_state["_super_tabs"] = selector
    return selector


def teardown() -> None:
    """Release the section subscription when leaving the dashboard."""
    selector = st.session_state.pop("_super_tabs", None)
    if selector is not None:
        selector.close()


def render_super_admin(api: SuperAdminAPI, location):
    st.markdown("## 🛡️ Super Admin Dashboard")

    selector = get_selector(location)
    loader = DataLoader()

    choice = st.radio(
        "Section",
        SUPER_ADMIN_SECTIONS,
        index=SUPER_ADMIN_SECTIONS.index(selector.active),
        format_func=lambda s: SECTION_LABELS[s],
        horizontal=True,
        label_visibility="collapsed",
    )
    if choice != selector.active:
        selector.select(choice)
        st.rerun()

    st.divider()

    section = selector.active
    if section == "overview":
        render_overview(api, loader)
    elif section == "institutions":
        render_institutions(api, loader)
    elif section == "admins":
        render_admins(api, loader)
    elif section == "claims":
        render_claims(api)
    else:
        render_settings(api)


def render_overview(api: SuperAdminAPI, loader: DataLoader):
    analytics = loader.get("analytics", api.get_analytics, "Failed to load analytics", default={}) or {}
    institutions = _load_institutions(api, loader)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Institutions", analytics.get("totalInstitutions", len(institutions)))
    col2.metric("Institute Admins", analytics.get("totalAdmins", 0))
    col3.metric("Users", analytics.get("totalUsers", 0))
    col4.metric("Pending Claims", analytics.get("pendingClaims", 0))

    if institutions:
        counts = {
            state: len(apply_filters(institutions, {"address.state": state}))
            for state in distinct_values(institutions, "address.state")
        }
        if counts:
            fig = px.bar(x=list(counts.keys()), y=list(counts.values()),
                         labels={"x": "State", "y": "Institutions"}, title="Institutions by State")
            st.plotly_chart(fig, use_container_width=True)


def _load_institutions(api: SuperAdminAPI, loader: DataLoader):
    response = loader.get(
        "institutions",
        lambda: api.get_institutions(limit=INSTITUTIONS_PAGE_LIMIT),
        "Failed to load institutions",
        default={},
    ) or {}
    return response.get("institutions") or []


def render_institutions(api: SuperAdminAPI, loader: DataLoader):
    view: InstitutionsView = _session_object("_institutions_view", InstitutionsView)
    view.set_records(_load_institutions(api, loader))

    col1, col2, col3, col4, col5 = st.columns(5)
    state = col1.selectbox("State", [""] + view.states, format_func=lambda v: v or "All states")
    district = col2.selectbox("District", [""] + view.districts, format_func=lambda v: v or "All districts")
    claimed = col3.selectbox("Claimed", ["", "claimed", "unclaimed"], format_func=lambda v: v.title() or "Any")
    kyc = col4.selectbox("KYC Verified", ["", "yes", "no"], format_func=lambda v: v.title() or "Any")
    status = col5.selectbox("Status", [""] + view.statuses, format_func=lambda v: v or "All statuses")

    view.set_criterion("address.state", state)
    view.set_criterion("address.district", district)
    view.set_claimed_choice(claimed)
    view.set_kyc_choice(kyc)
    view.set_criterion("status", status)

    st.caption(f"Showing {len(view.visible)} of {len(view.records)} institutions")
    st.dataframe(records_to_frame(view.visible, INSTITUTION_COLUMNS), use_container_width=True)

    for inst in view.visible[:50]:
        with st.expander(f"🏫 {inst.get('displayName') or inst.get('name')}"):
            c1, c2 = st.columns(2)
            if inst.get("status") == "PENDING" and c1.button("Approve", key=f"approve_inst_{inst['_id']}"):
                _run(lambda: api.approve_institution(inst["_id"]), "Institution approved", "Approval failed", loader, "institutions")
            if c2.button("Delete", key=f"delete_inst_{inst['_id']}"):
                _run(lambda: api.delete_institution(inst["_id"]), "Institution deleted", "Delete failed", loader, "institutions")

    with st.expander("➕ Create Institution"):
        render_institution_form(api, loader)


def render_institution_form(api: SuperAdminAPI, loader: DataLoader):
    geo = load_state_districts()
    state = st.selectbox("State", [""] + sorted_states(geo), key="inst_form_state")
    district = st.selectbox("District", [""] + districts_for(geo, state), key="inst_form_district")

    with st.form("create_institution"):
        name = st.text_input("Name")
        display_name = st.text_input("Display Name")
        inst_type = st.selectbox("Type", ["", "SCHOOL", "COLLEGE_UNIVERSITY", "NGO", "COMPANY", "GOVT_BODY"])
        description = st.text_area("Description")
        website = st.text_input("Website")
        email = st.text_input("Contact Email")
        phone = st.text_input("Contact Phone")
        submitted = st.form_submit_button("Create")

    if submitted:
        if not name or not display_name:
            emit_toast("error", "Name and display name required")
            return
        payload = institution_payload({
            "name": name,
            "displayName": display_name,
            "type": inst_type,
            "description": description,
            "website": website,
            "address": {"state": state, "district": district},
            "contactInfo": {"email": email, "phone": phone},
            "settings": {"allowSelfRegistration": True, "requireVerifierApproval": True, "maxUsersLimit": 1000},
        })
        _run(lambda: api.create_institution(payload), "Institution created", "Failed to create institution", loader, "institutions")


def render_admins(api: SuperAdminAPI, loader: DataLoader):
    response = loader.get(
        "admins",
        lambda: api.get_institute_admins(limit=ADMINS_PAGE_LIMIT),
        "Failed to load admins",
        default={},
    ) or {}
    admins = response.get("admins") or []

    st.dataframe(records_to_frame(admins, ADMIN_COLUMNS), use_container_width=True)
    for admin in admins[:50]:
        if st.button(f"Delete {admin.get('name')}", key=f"delete_admin_{admin['_id']}"):
            _run(lambda: api.delete_institute_admin(admin["_id"]), "Admin deleted", "Delete failed", loader, "admins")


def render_claims(api: SuperAdminAPI):
    view: PagedRequestView = _session_object(
        "_claims_view",
        lambda: PagedRequestView("claims", lambda s, p, l: api.get_claim_requests(status=s, page=p, limit=l),
                                 limit=CLAIMS_PAGE_LIMIT),
    )

    col1, col2 = st.columns(2)
    view.set_status(col1.selectbox("Status", CLAIM_STATUSES, format_func=lambda v: v or "All"))
    pages = max(view.pagination.pages, 1)
    view.set_page(col2.number_input("Page", min_value=1, max_value=pages, value=min(view.page, pages),
                                  key=f"claims_page_{view.status}"))
    view.refresh("Failed to load claim requests")

    st.caption(f"{view.pagination.total} claim requests")
    for claim in view.items:
        institution = (claim.get("institution") or {}).get("name", "Unknown institution")
        with st.expander(f"📝 {institution} - {claim.get('status')}"):
            st.write(f"**Requested by:** {(claim.get('user') or {}).get('name', 'N/A')}")
            if claim.get("status") == "PENDING":
                c1, c2 = st.columns(2)
                if c1.button("Approve", key=f"approve_claim_{claim['_id']}"):
                    _run(lambda: api.approve_claim_request(claim["_id"]), "Claim approved", "Approve failed")
                reason = c2.text_input("Reason", key=f"reason_{claim['_id']}")
                if c2.button("Reject", key=f"reject_claim_{claim['_id']}"):
                    _run(lambda: api.reject_claim_request(claim["_id"], reason), "Claim rejected", "Reject failed")


def render_settings(api: SuperAdminAPI):
    with st.form("change_password"):
        current = st.text_input("Current Password", type="password")
        new = st.text_input("New Password", type="password")
        submitted = st.form_submit_button("Change Password")
    if submitted:
        if not current or not new:
            emit_toast("error", "Both current and new password required")
            return
        _run(lambda: api.change_password(current, new), "Password changed", "Password change failed")


def _run(action, success_message: str, failure_message: str, loader: DataLoader = None, invalidate: str = None):
    try:
        response = action()
    except ApiError as e:
        emit_toast("error", error_message(e, failure_message))
        return
    emit_toast("success", response.get("message") or success_message)
    if loader is not None:
        loader.invalidate(invalidate)
    st.rerun()
