"""
Admin API Wrappers

Resource-level calls used by the dashboards. Each method returns the
decoded JSON body; ApiError propagates to the view layer.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from console.integrations.api_client import ApiClient

PROFILE_DECISIONS = ("APPROVE", "REJECT")


def _params(**kwargs) -> Dict[str, Any]:
    """Drop unset query params so the backend applies its own defaults."""
    return {k: v for k, v in kwargs.items() if v not in (None, "")}


def institution_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Create/update body from the nested institution form."""
    address = form.get("address") or {}
    return {
        "name": form.get("name", ""),
        "displayName": form.get("displayName", ""),
        "description": form.get("description", ""),
        "website": form.get("website", ""),
        "logo": form.get("logo", ""),
        "district": address.get("district", ""),
        "state": address.get("state", ""),
        "institutionType": form.get("type", ""),
        "contactInfo": dict(form.get("contactInfo") or {}),
        "settings": dict(form.get("settings") or {}),
    }


def _split_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def event_payload(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Create-event body: comma separated tags, one attachment/award per line."""
    payload = dict(form)
    tags = form.get("tags") or ""
    payload["tags"] = [t.strip() for t in tags.split(",")] if tags else []
    payload["attachments"] = _split_lines(form.get("attachments", ""))
    payload["awards"] = _split_lines(form.get("awards", ""))
    return payload


class SuperAdminAPI:

    def __init__(self, client: ApiClient):
        self.client = client

    def get_profile(self) -> Dict[str, Any]:
        return self.client.get("/super-admin/profile")

    def get_analytics(self) -> Dict[str, Any]:
        return self.client.get("/super-admin/analytics")

    # ---- institutions ----
    def get_institutions(self, page: int = 1, limit: int = 100, **filters) -> Dict[str, Any]:
        return self.client.get("/super-admin/institutions", params=_params(page=page, limit=limit, **filters))

    def get_institution(self, institution_id: str) -> Dict[str, Any]:
        return self.client.get(f"/super-admin/institutions/{institution_id}")

    def create_institution(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return self.client.post("/super-admin/institutions", json=dict(payload))

    def update_institution(self, institution_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"/super-admin/institutions/{institution_id}", json=dict(payload))

    def delete_institution(self, institution_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/super-admin/institutions/{institution_id}")

    def approve_institution(self, institution_id: str) -> Dict[str, Any]:
        return self.client.post(f"/super-admin/institutions/{institution_id}/approve")

    # ---- institute admins ----
    def get_institute_admins(self, page: int = 1, limit: int = 100) -> Dict[str, Any]:
        return self.client.get("/super-admin/institute-admins", params=_params(page=page, limit=limit))

    def create_institute_admin(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return self.client.post("/super-admin/institute-admins", json=dict(payload))

    def update_institute_admin(self, admin_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"/super-admin/institute-admins/{admin_id}", json=dict(payload))

    def delete_institute_admin(self, admin_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/super-admin/institute-admins/{admin_id}")

    # ---- claim requests ----
    def get_claim_requests(self, status: str = "", page: int = 1, limit: int = 20) -> Dict[str, Any]:
        return self.client.get("/super-admin/claim-requests", params=_params(status=status, page=page, limit=limit))

    def get_claim_request(self, claim_id: str) -> Dict[str, Any]:
        return self.client.get(f"/super-admin/claim-requests/{claim_id}")

    def approve_claim_request(self, claim_id: str) -> Dict[str, Any]:
        return self.client.post(f"/super-admin/claim-requests/{claim_id}/approve")

    def reject_claim_request(self, claim_id: str, reason: str = "") -> Dict[str, Any]:
        return self.client.post(f"/super-admin/claim-requests/{claim_id}/reject", json={"reason": reason})

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self.client.post(
            "/super-admin/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )


class InstituteAdminAPI:

    def __init__(self, client: ApiClient):
        self.client = client

    def get_users(self, page: int = 1, limit: int = 12, search: str = "", **filters) -> Dict[str, Any]:
        return self.client.get("/institute-admin/users", params=_params(page=page, limit=limit, search=search, **filters))

    def get_students(self, page: int = 1, limit: int = 12, search: str = "") -> Dict[str, Any]:
        """Users page narrowed to the STUDENT role (the endpoint returns every role)."""
        response = self.get_users(page=page, limit=limit, search=search)
        users = response.get("users") or []
        return {**response, "users": [u for u in users if u.get("role") == "STUDENT"]}

    def get_student_profile(self, student_id: str) -> Dict[str, Any]:
        return self.client.get(f"/institute-admin/students/{student_id}/profile")

    def update_student_profile(self, student_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
        payload = {k: v for k, v in fields.items() if v}
        return self.client.put(f"/institute-admin/students/{student_id}/profile", json=payload)

    def list_profile_update_requests(self, status: str = "PENDING", page: int = 1, limit: int = 10) -> Dict[str, Any]:
        return self.client.get(
            "/institute-admin/profile-update-requests",
            params=_params(status=status, page=page, limit=limit),
        )

    def decide_profile_update_request(self, request_id: str, action: str, comment: str = "") -> Dict[str, Any]:
        if action not in PROFILE_DECISIONS:
            raise ValueError(f"action must be one of {PROFILE_DECISIONS}, got '{action}'")
        return self.client.post(
            f"/institute-admin/profile-update-requests/{request_id}/decision",
            json={"action": action, "comment": comment},
        )

    def approve_profile_update_request(self, request_id: str, comment: str = "") -> Dict[str, Any]:
        return self.decide_profile_update_request(request_id, "APPROVE", comment)

    def reject_profile_update_request(self, request_id: str, comment: str = "") -> Dict[str, Any]:
        return self.decide_profile_update_request(request_id, "REJECT", comment)


class EventsAPI:

    def __init__(self, client: ApiClient):
        self.client = client

    def list_events(self, status: str = "", event_type: str = "", search: str = "") -> Dict[str, Any]:
        return self.client.get("/events", params=_params(status=status, eventType=event_type, search=search))

    def get_event(self, event_id: str) -> Dict[str, Any]:
        return self.client.get(f"/events/{event_id}")

    def create_event(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        return self.client.post("/events", json=event_payload(form))

    def add_participants(self, event_id: str, user_ids: Iterable[str]) -> Dict[str, Any]:
        participants = [{"userId": uid, "role": "Participant"} for uid in user_ids]
        return self.client.post(f"/events/{event_id}/participants", json={"participants": participants})

    def remove_participant(self, event_id: str, user_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/events/{event_id}/participants/{user_id}")

    def search_verifiers(self, query: str = "") -> List[Dict[str, Any]]:
        response = self.client.get("/users/institute-verifiers", params=_params(search=query))
        return response.get("verifiers") or response.get("users") or []

    def get_students(self, params: Mapping[str, Any]) -> List[Dict[str, Any]]:
        response = self.client.get("/institute-admin/users", params=dict(params))
        return response.get("users") or []

    def assign_role(self, event_id: str, role: str, user_id: str) -> Dict[str, Any]:
        return self.client.post(f"/events/{event_id}/assign/{role}", json={"userId": user_id})

    def unassign_role(self, event_id: str, role: str, user_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/events/{event_id}/assign/{role}", json={"userId": user_id})

    def assign_position(self, event_id: str, user_id: str, rank: int, label: str = "") -> Dict[str, Any]:
        return self.client.post(
            f"/events/{event_id}/assign-position",
            json={"userId": user_id, "rank": int(rank), "label": label},
        )

    def remove_position(self, event_id: str, user_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/events/{event_id}/assign-position/{user_id}")

    def get_rankings(self, event_id: str) -> Dict[str, Any]:
        return self.client.get(f"/events/{event_id}/rankings")

    def push_experiences(self, event_id: str, payload: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.client.post(f"/events/{event_id}/push-experiences", json=dict(payload or {}))
