"""Role hierarchy table: rank order and capability bands.

Every rank comparison in the code base goes through this module. Lookups
are advisory: unknown role strings yield None/False/[] and never raise.
"""

from __future__ import annotations

from backoffice.domain.enums import Role

# Highest authority first. The position in this tuple is the rank.
ROLE_HIERARCHY: tuple[Role, ...] = tuple(Role)

ADMINISTRATIVE_ROLES: frozenset[Role] = frozenset(
    {
        Role.WEBMASTER,
        Role.HEAD_ADMIN,
        Role.SENIOR_ADMIN,
        Role.SPECIAL_ADVISOR,
        Role.ADMIN,
    }
)
STAFF_ROLES: frozenset[Role] = frozenset(
    {Role.JUNIOR_ADMIN, Role.SENIOR_STAFF, Role.STAFF}
)
BASIC_ROLES: frozenset[Role] = frozenset(
    {Role.STAFF_IN_TRAINING, Role.MEMBER, Role.APPLICANT}
)

FULL_OVERRIDE_ROLE = Role.WEBMASTER
HEAD_ADMIN_ROLE = Role.HEAD_ADMIN
SENIOR_ADMIN_ROLE = Role.SENIOR_ADMIN
LOWEST_ROLE = ROLE_HIERARCHY[-1]

_RANKS: dict[Role, int] = {role: index for index, role in enumerate(ROLE_HIERARCHY)}


def parse_role(value: Role | str | None) -> Role | None:
    """Return the Role for value, or None when it is not a known role."""
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def rank(role: Role | str | None) -> int | None:
    """Return the rank of role (0 = highest authority) or None if unknown."""
    parsed = parse_role(role)
    if parsed is None:
        return None
    return _RANKS[parsed]


def outranks(role: Role | str | None, other: Role | str | None) -> bool:
    """Return True if role has strictly more authority than other."""
    a, b = rank(role), rank(other)
    if a is None or b is None:
        return False
    return a < b


def at_or_above(role: Role | str | None, threshold: Role | str) -> bool:
    """Return True if role has at least the authority of threshold."""
    a, b = rank(role), rank(threshold)
    if a is None or b is None:
        return False
    return a <= b


def is_administrative(role: Role | str | None) -> bool:
    return parse_role(role) in ADMINISTRATIVE_ROLES


def is_staff(role: Role | str | None) -> bool:
    return parse_role(role) in STAFF_ROLES


def is_basic(role: Role | str | None) -> bool:
    return parse_role(role) in BASIC_ROLES


def assignable_roles(
    actor_role: Role | str | None, has_override: bool = False
) -> list[Role]:
    """Return the roles actor_role may grant, highest first.

    Only roles ranked strictly below the actor, never the actor's own tier.
    Holders of the override capability may grant every role. Unknown actor
    role yields [].
    """
    actor_rank = rank(actor_role)
    if actor_rank is None:
        return []
    if has_override:
        return list(ROLE_HIERARCHY)
    return [role for role in ROLE_HIERARCHY if _RANKS[role] > actor_rank]


def highest(roles: list[Role]) -> Role | None:
    """Return the most authoritative role in roles, or None for an empty list."""
    if not roles:
        return None
    return min(roles, key=lambda r: _RANKS[r])


def format_role(role: Role | str) -> str:
    """Display form of a role name, e.g. SENIOR_STAFF -> 'Senior Staff'."""
    value = role.value if isinstance(role, Role) else str(role)
    return " ".join(word.capitalize() for word in value.split("_"))
