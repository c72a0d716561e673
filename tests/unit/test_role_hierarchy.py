"""Tests for the role hierarchy table (rank, bands, assignable roles)."""

import pytest

from backoffice.domain.enums import Role
from backoffice.domain.role_hierarchy import (
    ADMINISTRATIVE_ROLES,
    BASIC_ROLES,
    STAFF_ROLES,
    assignable_roles,
    at_or_above,
    format_role,
    highest,
    is_administrative,
    is_basic,
    is_staff,
    outranks,
    parse_role,
    rank,
)


def test_rank_follows_declaration_order() -> None:
    assert rank(Role.WEBMASTER) == 0
    assert rank(Role.APPLICANT) == len(Role) - 1
    assert rank("SENIOR_STAFF") == rank(Role.SENIOR_STAFF)


def test_unknown_role_is_tolerated() -> None:
    assert rank("MODERATOR") is None
    assert parse_role("MODERATOR") is None
    assert parse_role(None) is None
    assert not is_administrative("MODERATOR")
    assert not outranks("MODERATOR", Role.APPLICANT)
    assert not at_or_above("MODERATOR", Role.APPLICANT)
    assert assignable_roles("MODERATOR") == []


def test_bands_are_disjoint_and_exhaustive() -> None:
    assert ADMINISTRATIVE_ROLES.isdisjoint(STAFF_ROLES)
    assert ADMINISTRATIVE_ROLES.isdisjoint(BASIC_ROLES)
    assert STAFF_ROLES.isdisjoint(BASIC_ROLES)
    assert ADMINISTRATIVE_ROLES | STAFF_ROLES | BASIC_ROLES == set(Role)
    for role in Role:
        assert [is_administrative(role), is_staff(role), is_basic(role)].count(True) == 1


def test_junior_admin_is_staff_band() -> None:
    assert is_staff(Role.JUNIOR_ADMIN)
    assert not is_administrative(Role.JUNIOR_ADMIN)


def test_outranks_and_at_or_above() -> None:
    assert outranks(Role.HEAD_ADMIN, Role.SENIOR_ADMIN)
    assert not outranks(Role.SENIOR_ADMIN, Role.SENIOR_ADMIN)
    assert at_or_above(Role.SENIOR_ADMIN, Role.SENIOR_ADMIN)
    assert not at_or_above(Role.ADMIN, Role.SENIOR_ADMIN)


@pytest.mark.parametrize("role", list(Role))
def test_assignable_roles_are_strictly_below_actor(role: Role) -> None:
    roles = assignable_roles(role)
    assert role not in roles
    assert all(outranks(role, r) for r in roles)


def test_assignable_roles_for_staff() -> None:
    assert assignable_roles(Role.STAFF) == [
        Role.STAFF_IN_TRAINING,
        Role.MEMBER,
        Role.APPLICANT,
    ]
    assert assignable_roles(Role.APPLICANT) == []


def test_override_holder_may_assign_every_role() -> None:
    assert assignable_roles(Role.MEMBER, has_override=True) == list(Role)


def test_highest_picks_most_authoritative() -> None:
    assert highest([Role.MEMBER, Role.STAFF, Role.APPLICANT]) == Role.STAFF
    assert highest([]) is None


def test_format_role() -> None:
    assert format_role(Role.SENIOR_STAFF) == "Senior Staff"
    assert format_role("HEAD_ADMIN") == "Head Admin"
