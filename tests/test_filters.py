"""Client-side filtering, sorting and grouping."""

from gramin_portal.models import ActiveSession
from gramin_portal.utils.filters import (
    filter_by_term,
    filter_families,
    group_sessions_by_user,
    member_display_name,
    sort_members_by_name,
)
from gramin_portal.vdf.matrix import FamilyRow

FAMILIES = [
    {"familyHeadName": "Ramesh Das", "memberName": "Ramesh Das"},
    {"familyHeadName": "Sita Mondal", "memberName": "Sita Mondal"},
    {"familyHeadName": "Gopal Das", "memberName": "Gopal Das"},
    {"familyHeadName": "Anil Roy", "memberName": "Anil Roy"},
    {"familyHeadName": "Mita Ghosh", "memberName": "Mita Ghosh"},
]


class TestFilterFamilies:
    """Search over loaded families."""

    def test_matches_in_original_order(self):
        assert filter_families(FAMILIES, "das") == [FAMILIES[0], FAMILIES[2]]

    def test_blank_term_returns_everything(self):
        assert filter_families(FAMILIES, "   ") == FAMILIES
        assert filter_families(FAMILIES, None) == FAMILIES

    def test_case_insensitive(self):
        assert filter_families(FAMILIES, "GHOSH") == [FAMILIES[4]]

    def test_matches_member_name(self):
        families = [{"familyHeadName": "Das family", "memberName": "Bimal"}]
        assert filter_families(families, "bimal") == families

    def test_family_rows(self):
        rows = [FamilyRow("1", family_head_name="Ramesh Das"), FamilyRow("2", member_name="Sita")]
        assert filter_families(rows, "sita") == [rows[1]]

    def test_no_match(self):
        assert filter_families(FAMILIES, "xyz") == []


class TestFilterByTerm:
    def test_skips_missing_fields(self):
        items = [{"name": None, "phone": "9876543210"}, {"name": "Ram"}]
        assert filter_by_term(items, "9876", ["name", "phone"]) == [items[0]]


class TestMembers:
    def test_display_name(self):
        assert member_display_name({"firstName": "Ram", "lastName": "Das"}) == "Ram Das"
        assert member_display_name({"memberName": "Sita"}) == "Sita"
        assert member_display_name({}) == "-"

    def test_sort_by_name(self):
        members = [{"firstName": "mita"}, {"firstName": "Anil"}, {"firstName": "Gopal"}]
        assert [m["firstName"] for m in sort_members_by_name(members)] == ["Anil", "Gopal", "mita"]


class TestGroupSessions:
    """Session list grouped per user."""

    def test_groups_in_first_seen_order(self):
        sessions = [
            {"id": "a", "userType": "MEMBER", "userId": 7, "username": "Sita"},
            {"id": "b", "userType": "ADMIN", "userId": 1, "username": "Ramesh"},
            {"id": "c", "userType": "MEMBER", "userId": 7, "username": "Sita"},
        ]
        groups = group_sessions_by_user(sessions)
        assert [(g["user_type"], g["user_id"]) for g in groups] == [("MEMBER", 7), ("ADMIN", 1)]
        assert [s["id"] for s in groups[0]["sessions"]] == ["a", "c"]
        assert groups[0]["username"] == "Sita"

    def test_same_id_different_type_kept_apart(self):
        sessions = [
            ActiveSession.model_validate({"id": "a", "userType": "MEMBER", "userId": 1}),
            ActiveSession.model_validate({"id": "b", "userType": "ADMIN", "userId": 1, "userName": "Ramesh"}),
        ]
        groups = group_sessions_by_user(sessions)
        assert len(groups) == 2
        assert groups[1]["username"] == "Ramesh"
        assert groups[1]["user_id"] == "1"
