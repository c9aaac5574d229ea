"""
Event role lists, current-user role and participant filters.
"""

import pytest

from console.core.event_roles import (
    awards_by_user,
    current_user_role,
    role_members,
    student_filter_params,
)
from console.core.name_cache import NameResolutionMap

EVENT = {
    "_id": "e1",
    "coordinators": [{"userId": {"_id": "u1", "name": "Alice"}}],
    "inCharges": [{"userId": "u2"}],
    "judges": [{"userId": "u3", "userName": "Carol"}, {"userId": None}],
}


def test_admin_role_wins():
    assert current_user_role({"_id": "u1", "role": "admin"}, EVENT) == "admin"


def test_user_found_in_role_list():
    assert current_user_role({"_id": "u2"}, EVENT) == "inCharge"
    assert current_user_role({"id": "u1"}, EVENT) == "coordinator"


def test_user_without_role():
    assert current_user_role({"_id": "u9"}, EVENT) is None
    assert current_user_role({}, EVENT) is None
    assert current_user_role(None, EVENT) is None


def test_role_members_resolve_through_cache():
    names = NameResolutionMap()
    names.record_names([("u2", "Bob")])

    assert role_members(EVENT, "coordinator", names) == [{"id": "u1", "name": "Alice"}]
    assert role_members(EVENT, "inCharge", names) == [{"id": "u2", "name": "Bob"}]
    assert role_members(EVENT, "judge", names) == [{"id": "u3", "name": "Carol"}]


def test_role_members_fall_back_to_id():
    assert role_members(EVENT, "inCharge", NameResolutionMap()) == [{"id": "u2", "name": "u2"}]


def test_role_members_unknown_role():
    with pytest.raises(KeyError):
        role_members(EVENT, "sponsor", NameResolutionMap())


def test_awards_by_user():
    rankings = [{"userId": {"_id": "u1"}, "rank": 1}, {"userId": "u2", "rank": 2}, {"userId": None}]
    awards = awards_by_user(rankings)
    assert set(awards) == {"u1", "u2"}
    assert awards["u2"]["rank"] == 2
    assert awards_by_user(None) == {}


def test_student_filter_params_only_sends_set_filters():
    assert student_filter_params({"classLevel": "10", "house": "", "section": None}) == {
        "role": "STUDENT",
        "classLevel": "10",
    }
    assert student_filter_params(None) == {"role": "STUDENT"}
