"""Permission engine: pure allow/deny guards for administrative changes.

Guards never mutate anything and never raise; callers raise
AuthorizationException when a guard returns False. Every rank comparison
goes through backoffice.domain.role_hierarchy.
"""

from __future__ import annotations

from backoffice.domain.enums import Department, Role
from backoffice.domain.role_hierarchy import (
    FULL_OVERRIDE_ROLE,
    HEAD_ADMIN_ROLE,
    SENIOR_ADMIN_ROLE,
    assignable_roles,
    at_or_above,
    is_administrative,
    is_staff,
    parse_role,
)

# Only head administration may move users into or out of these.
RESERVED_DEPARTMENTS: frozenset[Department] = frozenset(
    {Department.LEADERSHIP, Department.DEV}
)


def _touches(role: Role, current: Role | None, requested: Role) -> bool:
    return role in (current, requested)


def can_change_role(
    actor_role: Role | str | None,
    actor_has_override: bool,
    target_current_role: Role | str | None,
    target_requested_role: Role | str | None,
) -> bool:
    """Decide whether the actor may move a target from one role to another.

    Rules, first applicable one decides:
      1. To/from the full override role: actor must hold that role.
      2. To/from the head administrative role: actor must hold override or
         at least that role.
      3. To/from any administrative role: actor must hold override or at
         least senior administrative rank.
      4. Otherwise the requested role must be one the actor can assign.
    Requesting the role the target already has is not a change.
    """
    actor = parse_role(actor_role)
    requested = parse_role(target_requested_role)
    current = parse_role(target_current_role)
    if actor is None or requested is None:
        return False
    if target_current_role is not None and current is None:
        return False
    if current == requested:
        return True

    if _touches(FULL_OVERRIDE_ROLE, current, requested):
        return actor == FULL_OVERRIDE_ROLE
    if _touches(HEAD_ADMIN_ROLE, current, requested):
        return actor_has_override or at_or_above(actor, HEAD_ADMIN_ROLE)
    if is_administrative(current) or is_administrative(requested):
        return actor_has_override or at_or_above(actor, SENIOR_ADMIN_ROLE)
    return requested in assignable_roles(actor, actor_has_override)


def can_assign_role(
    actor_role: Role | str | None,
    actor_has_override: bool,
    target_role: Role | str | None,
) -> bool:
    """Decide whether the actor may grant target_role (target has no role yet)."""
    return can_change_role(actor_role, actor_has_override, None, target_role)


def can_change_department(
    actor_role: Role | str | None,
    actor_has_override: bool,
    current_department: Department | None,
    requested_department: Department,
) -> bool:
    """Decide whether the actor may move a user between departments.

    Only moves touching a reserved department are restricted (override or
    head administrative rank). Any other move is allowed to whoever
    can_edit_user already admits, including users editing themselves.
    """
    if current_department == requested_department:
        return True
    if current_department in RESERVED_DEPARTMENTS or requested_department in RESERVED_DEPARTMENTS:
        return actor_has_override or at_or_above(actor_role, HEAD_ADMIN_ROLE)
    return True


def can_change_ban_status(actor_role: Role | str | None, actor_has_override: bool) -> bool:
    """Ban and unban are limited to the administrative band."""
    return actor_has_override or is_administrative(actor_role)


def can_delete_user(
    actor_role: Role | str | None,
    actor_has_override: bool,
    target_role: Role | str | None,
    target_has_override: bool = False,
) -> bool:
    """Deletion needs override or head administrative rank.

    Only an override holder may delete another override holder.
    """
    actor_is_override = actor_has_override or parse_role(actor_role) == FULL_OVERRIDE_ROLE
    target_is_override = target_has_override or parse_role(target_role) == FULL_OVERRIDE_ROLE
    if target_is_override and not actor_is_override:
        return False
    return actor_is_override or at_or_above(actor_role, HEAD_ADMIN_ROLE)


def can_change_override(actor_has_override: bool) -> bool:
    """Only holders of the override capability may grant or revoke it."""
    return actor_has_override


def can_moderate_content(actor_role: Role | str | None, actor_has_override: bool) -> bool:
    """Pin, lock and delete content: staff band and above."""
    return actor_has_override or is_administrative(actor_role) or is_staff(actor_role)


def can_review_applications(
    actor_role: Role | str | None,
    actor_has_override: bool,
    is_review_board_member: bool = False,
) -> bool:
    """Review and interview: staff band and above, or the template's review board."""
    return is_review_board_member or can_moderate_content(actor_role, actor_has_override)


def can_edit_user(
    actor_id: int,
    actor_role: Role | str | None,
    actor_has_override: bool,
    target_id: int,
) -> bool:
    """Users edit themselves; editing anyone else needs the administrative band."""
    return actor_id == target_id or actor_has_override or is_administrative(actor_role)


def can_sync_user_role(actor_id: int, actor_role: Role | str | None, target_id: int) -> bool:
    """Users sync their own role; junior administration and above sync anyone."""
    return actor_id == target_id or at_or_above(actor_role, Role.JUNIOR_ADMIN)


def can_sync_all_roles(actor_role: Role | str | None, actor_has_override: bool = False) -> bool:
    """Bulk role sync is limited to the administrative band."""
    return actor_has_override or is_administrative(actor_role)
