"""Tests for the external role and department maps, non-downgrade rule and rate-limit policy."""

import pytest

from backoffice.application.dtos.community import (
    LookupFailed,
    MemberNotFound,
    MemberRolesFound,
    RateLimited,
)
from backoffice.application.services.role_synchronizer import (
    ExternalDepartmentMap,
    ExternalRoleMap,
    RoleSynchronizer,
    is_sync_protected,
    resolve_synced_role,
)
from backoffice.core.config import Settings
from backoffice.domain.enums import Department, Role
from backoffice.domain.exceptions import ExternalSyncException

from support import ScriptedCommunityClient

ROLE_MAP = ExternalRoleMap(
    {
        Role.SENIOR_STAFF: "111",
        Role.STAFF: "222",
        Role.STAFF_IN_TRAINING: "333",
        Role.MEMBER: "444",
        Role.APPLICANT: "555",
    }
)
DEPARTMENT_MAP = ExternalDepartmentMap(
    {Department.BSO: "701", Department.FHP: "702", Department.CIV: "703"}
)


def _synchronizer(client, sleep) -> RoleSynchronizer:
    return RoleSynchronizer(
        client,
        ROLE_MAP,
        max_wait_seconds=30.0,
        margin_seconds=0.5,
        sleep=sleep,
        department_map=DEPARTMENT_MAP,
    )


class TestExternalRoleMap:
    def test_highest_internal_role_wins(self) -> None:
        assert ROLE_MAP.resolve(["555", "222", "444"]) == Role.STAFF

    def test_unmapped_roles_resolve_to_none(self) -> None:
        assert ROLE_MAP.resolve(["999"]) is None
        assert ROLE_MAP.resolve([]) is None

    def test_shared_external_id_resolves_to_highest(self) -> None:
        shared = ExternalRoleMap({Role.SENIOR_STAFF: "1", Role.APPLICANT: "1"})
        assert shared.resolve(["1"]) == Role.SENIOR_STAFF

    def test_unknown_role_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            ExternalRoleMap({"MODERATOR": "1"})

    def test_producible_roles(self) -> None:
        assert ROLE_MAP.producible_roles == {
            Role.SENIOR_STAFF,
            Role.STAFF,
            Role.STAFF_IN_TRAINING,
            Role.MEMBER,
            Role.APPLICANT,
        }


class TestNonDowngrade:
    @pytest.mark.parametrize(
        "role", [Role.WEBMASTER, Role.HEAD_ADMIN, Role.ADMIN, Role.JUNIOR_ADMIN]
    )
    def test_roles_above_the_map_are_protected(self, role: Role) -> None:
        assert is_sync_protected(role, ROLE_MAP)

    def test_mapped_roles_are_not_protected(self) -> None:
        assert not is_sync_protected(Role.SENIOR_STAFF, ROLE_MAP)
        assert not is_sync_protected(Role.APPLICANT, ROLE_MAP)

    def test_external_staff_keeps_admin(self) -> None:
        assert resolve_synced_role(Role.ADMIN, Role.STAFF, ROLE_MAP) is None

    def test_same_role_is_no_change(self) -> None:
        assert resolve_synced_role(Role.MEMBER, Role.MEMBER, ROLE_MAP) is None

    def test_member_promoted_to_staff(self) -> None:
        assert resolve_synced_role(Role.MEMBER, Role.STAFF, ROLE_MAP) == Role.STAFF

    def test_staff_demoted_to_member(self) -> None:
        assert resolve_synced_role(Role.STAFF, Role.MEMBER, ROLE_MAP) == Role.MEMBER


class TestSyncRoleFromExternal:
    async def test_found_member_maps_to_role(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(MemberRolesFound(["444", "333"]))
        role = await _synchronizer(client, recording_sleep).sync_role_from_external("42")
        assert role == Role.STAFF_IN_TRAINING
        assert client.calls == ["42"]

    @pytest.mark.parametrize(
        "result", [MemberNotFound(), MemberRolesFound([]), MemberRolesFound(["999"])]
    )
    async def test_no_role_cases_return_none(self, result, recording_sleep) -> None:
        client = ScriptedCommunityClient(result)
        assert await _synchronizer(client, recording_sleep).sync_role_from_external("42") is None

    async def test_rate_limit_retries_once(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(RateLimited(2.0), MemberRolesFound(["222"]))
        role = await _synchronizer(client, recording_sleep).sync_role_from_external("42")
        assert role == Role.STAFF
        assert recording_sleep.delays == [2.5]
        assert len(client.calls) == 2

    async def test_wait_is_capped(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(RateLimited(600.0), MemberNotFound())
        await _synchronizer(client, recording_sleep).sync_role_from_external("42")
        assert recording_sleep.delays == [30.5]

    async def test_second_rate_limit_raises(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(RateLimited(1.0))
        with pytest.raises(ExternalSyncException) as exc_info:
            await _synchronizer(client, recording_sleep).sync_role_from_external("42")
        assert exc_info.value.error_code == "EXTERNAL_SYNC_ERROR"
        assert len(client.calls) == 2
        assert len(recording_sleep.delays) == 1

    async def test_lookup_failure_raises(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(LookupFailed("boom", status_code=500))
        with pytest.raises(ExternalSyncException) as exc_info:
            await _synchronizer(client, recording_sleep).sync_role_from_external("42")
        assert exc_info.value.details == {"status_code": 500}
        assert recording_sleep.delays == []


class TestExternalDepartmentMap:
    def test_matches_in_declaration_order_without_duplicates(self) -> None:
        assert DEPARTMENT_MAP.resolve(["702", "999", "701", "702"]) == [
            Department.BSO,
            Department.FHP,
        ]

    def test_no_match_is_empty(self) -> None:
        assert DEPARTMENT_MAP.resolve(["999"]) == []

    def test_unknown_department_rejected(self) -> None:
        with pytest.raises(ValueError):
            ExternalDepartmentMap({"POLICE": "1"})

    @pytest.mark.parametrize("department", [Department.LEADERSHIP, Department.DEV])
    def test_reserved_department_rejected(self, department: Department) -> None:
        with pytest.raises(ValueError, match="Reserved"):
            ExternalDepartmentMap({department: "1"})


class TestDepartmentsFromExternal:
    async def test_found_member_maps_to_departments(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(MemberRolesFound(["222", "703"]))
        departments = await _synchronizer(client, recording_sleep).departments_from_external("42")
        assert departments == [Department.CIV]

    async def test_not_a_member_has_no_departments(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(MemberNotFound())
        assert await _synchronizer(client, recording_sleep).departments_from_external("42") == []

    async def test_rate_limit_retries_once(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(RateLimited(1.0), MemberRolesFound(["701", "702"]))
        departments = await _synchronizer(client, recording_sleep).departments_from_external("42")
        assert departments == [Department.BSO, Department.FHP]
        assert recording_sleep.delays == [1.5]

    async def test_without_department_map_nothing_matches(self, recording_sleep) -> None:
        client = ScriptedCommunityClient(MemberRolesFound(["701"]))
        synchronizer = RoleSynchronizer(client, ROLE_MAP, sleep=recording_sleep)
        assert await synchronizer.departments_from_external("42") == []


def test_maps_built_from_settings() -> None:
    settings = Settings(
        _env_file=None,
        discord_role_map={"STAFF": "222"},
        discord_department_map={"BSO": "701"},
    )
    assert ExternalRoleMap.from_settings(settings).resolve(["222"]) == Role.STAFF
    assert ExternalDepartmentMap.from_settings(settings).resolve(["701"]) == [Department.BSO]
