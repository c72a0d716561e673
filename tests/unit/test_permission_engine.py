"""Tests for the permission guards."""

import pytest

from backoffice.application.services.permission_engine import (
    can_assign_role,
    can_change_ban_status,
    can_change_department,
    can_change_override,
    can_change_role,
    can_delete_user,
    can_edit_user,
    can_moderate_content,
    can_review_applications,
    can_sync_all_roles,
    can_sync_user_role,
)
from backoffice.domain.enums import Department, Role


class TestCanChangeRole:
    def test_same_role_is_not_a_change(self) -> None:
        assert can_change_role(Role.MEMBER, False, Role.ADMIN, Role.ADMIN)

    def test_only_webmaster_touches_webmaster(self) -> None:
        assert can_change_role(Role.WEBMASTER, False, Role.MEMBER, Role.WEBMASTER)
        assert not can_change_role(Role.HEAD_ADMIN, True, Role.MEMBER, Role.WEBMASTER)
        assert not can_change_role(Role.HEAD_ADMIN, False, Role.WEBMASTER, Role.MEMBER)

    def test_senior_admin_cannot_assign_head_admin(self) -> None:
        assert not can_assign_role(Role.SENIOR_ADMIN, False, Role.HEAD_ADMIN)

    def test_head_admin_can_assign_head_admin(self) -> None:
        assert can_assign_role(Role.HEAD_ADMIN, False, Role.HEAD_ADMIN)
        assert can_change_role(Role.HEAD_ADMIN, False, Role.ADMIN, Role.HEAD_ADMIN)

    def test_override_holder_can_change_head_admin(self) -> None:
        assert can_change_role(Role.ADMIN, True, Role.HEAD_ADMIN, Role.MEMBER)

    def test_administrative_roles_need_senior_admin(self) -> None:
        assert can_change_role(Role.SENIOR_ADMIN, False, Role.STAFF, Role.ADMIN)
        assert not can_change_role(Role.ADMIN, False, Role.STAFF, Role.SPECIAL_ADVISOR)
        assert not can_change_role(Role.ADMIN, False, Role.SPECIAL_ADVISOR, Role.STAFF)
        assert can_change_role(Role.JUNIOR_ADMIN, True, Role.STAFF, Role.ADMIN)

    def test_lower_roles_follow_assignable_roles(self) -> None:
        assert can_change_role(Role.ADMIN, False, Role.MEMBER, Role.JUNIOR_ADMIN)
        assert can_change_role(Role.SENIOR_STAFF, False, Role.APPLICANT, Role.MEMBER)
        assert not can_change_role(Role.STAFF, False, Role.MEMBER, Role.STAFF)
        assert not can_change_role(Role.MEMBER, False, Role.APPLICANT, Role.STAFF)

    def test_unknown_roles_are_denied(self) -> None:
        assert not can_change_role("MODERATOR", False, Role.MEMBER, Role.APPLICANT)
        assert not can_change_role(Role.ADMIN, False, Role.MEMBER, "MODERATOR")
        assert not can_change_role(Role.ADMIN, False, "MODERATOR", Role.MEMBER)


class TestCanChangeDepartment:
    @pytest.mark.parametrize("department", [Department.LEADERSHIP, Department.DEV])
    def test_reserved_departments_need_head_admin(self, department: Department) -> None:
        assert not can_change_department(Role.SENIOR_ADMIN, False, Department.CIV, department)
        assert not can_change_department(Role.SENIOR_ADMIN, False, department, Department.CIV)
        assert can_change_department(Role.HEAD_ADMIN, False, Department.CIV, department)
        assert can_change_department(Role.STAFF, True, department, Department.CIV)

    def test_other_moves_are_left_to_the_edit_gate(self) -> None:
        assert can_change_department(Role.ADMIN, False, Department.CIV, Department.FHP)
        assert can_change_department(Role.JUNIOR_ADMIN, False, Department.CIV, Department.FHP)
        assert can_change_department(Role.MEMBER, False, Department.N_A, Department.BSO)

    def test_member_cannot_enter_reserved_department(self) -> None:
        assert not can_change_department(Role.MEMBER, False, Department.N_A, Department.DEV)

    def test_no_change_is_allowed(self) -> None:
        assert can_change_department(Role.MEMBER, False, Department.CIV, Department.CIV)


def test_ban_status_needs_administrative_band() -> None:
    assert can_change_ban_status(Role.ADMIN, False)
    assert not can_change_ban_status(Role.JUNIOR_ADMIN, False)
    assert can_change_ban_status(Role.MEMBER, True)


class TestCanDeleteUser:
    def test_head_admin_can_delete_member(self) -> None:
        assert can_delete_user(Role.HEAD_ADMIN, False, Role.MEMBER)

    def test_senior_admin_cannot_delete(self) -> None:
        assert not can_delete_user(Role.SENIOR_ADMIN, False, Role.MEMBER)

    def test_only_override_holder_deletes_override_holder(self) -> None:
        assert not can_delete_user(Role.HEAD_ADMIN, False, Role.MEMBER, target_has_override=True)
        assert not can_delete_user(Role.HEAD_ADMIN, False, Role.WEBMASTER)
        assert can_delete_user(Role.MEMBER, True, Role.WEBMASTER)
        assert can_delete_user(Role.WEBMASTER, False, Role.ADMIN, target_has_override=True)


def test_moderation_needs_staff_band() -> None:
    assert can_moderate_content(Role.STAFF, False)
    assert can_moderate_content(Role.HEAD_ADMIN, False)
    assert not can_moderate_content(Role.STAFF_IN_TRAINING, False)
    assert can_moderate_content(Role.APPLICANT, True)


def test_review_board_member_can_review() -> None:
    assert not can_review_applications(Role.MEMBER, False)
    assert can_review_applications(Role.MEMBER, False, is_review_board_member=True)
    assert can_review_applications(Role.SENIOR_STAFF, False)


def test_edit_user_self_or_administrative() -> None:
    assert can_edit_user(5, Role.MEMBER, False, 5)
    assert not can_edit_user(5, Role.STAFF, False, 6)
    assert can_edit_user(5, Role.ADMIN, False, 6)


def test_sync_guards() -> None:
    assert can_sync_user_role(5, Role.APPLICANT, 5)
    assert can_sync_user_role(5, Role.JUNIOR_ADMIN, 6)
    assert not can_sync_user_role(5, Role.SENIOR_STAFF, 6)
    assert can_sync_all_roles(Role.ADMIN)
    assert not can_sync_all_roles(Role.JUNIOR_ADMIN)


def test_override_flag_is_granted_only_by_holders() -> None:
    assert can_change_override(True)
    assert not can_change_override(False)
