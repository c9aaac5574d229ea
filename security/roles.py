"""
ROLE DEFINITIONS

Declare the console's user roles and admin types.

Rules:
- No imports outside typing
- No logic, only declarations
- Roles must be explicit strings
- Used by access_guard.py and the dashboards
"""

from typing import Literal

# Account roles as returned by the backend
SUPER_ADMIN: Literal["SUPER_ADMIN"] = "SUPER_ADMIN"
INSTITUTE_ADMIN: Literal["INSTITUTE_ADMIN"] = "INSTITUTE_ADMIN"
STUDENT: Literal["STUDENT"] = "STUDENT"
VERIFIER: Literal["VERIFIER"] = "VERIFIER"

# Role label the event endpoints use for institute admins
EVENT_ADMIN: Literal["admin"] = "admin"

# Admin console variants
ADMIN_TYPE_SUPER: Literal["SUPER"] = "SUPER"
ADMIN_TYPE_INSTITUTE: Literal["INSTITUTE"] = "INSTITUTE"

# Event role assignments
COORDINATOR: Literal["coordinator"] = "coordinator"
IN_CHARGE: Literal["inCharge"] = "inCharge"
JUDGE: Literal["judge"] = "judge"

ALL_ROLES: list[str] = [
    SUPER_ADMIN,
    INSTITUTE_ADMIN,
    STUDENT,
    VERIFIER,
]

ALL_EVENT_ROLES: list[str] = [
    COORDINATOR,
    IN_CHARGE,
    JUDGE,
]
