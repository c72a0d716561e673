"""User domain entity.

Role and department change only through the permission guards; the
external (Discord) identity is linked once and never replaced.
"""

from dataclasses import dataclass

from backoffice.domain.enums import Department, Role
from backoffice.domain.exceptions import ValidationException
from backoffice.domain.value_objects import Actor


@dataclass
class UserEntity:
    """Domain entity for a community member."""

    id: int
    name: str | None
    role: Role
    department: Department
    is_banned: bool = False
    has_override: bool = False
    external_id: str | None = None

    def as_actor(self) -> Actor:
        """Return this user as the actor of an operation."""
        return Actor(user_id=self.id, role=self.role, has_override=self.has_override)

    def link_external_identity(self, external_id: str) -> bool:
        """Set the external identity on first external sign-in.

        Returns True if the identity was newly linked, False if it was
        already linked to the same id.

        Raises:
            ValidationException: If external_id is empty or the user is
                already linked to a different external identity.
        """
        external_id = (external_id or "").strip()
        if not external_id:
            raise ValidationException("External identity is required", field="external_id")
        if self.external_id == external_id:
            return False
        if self.external_id is not None:
            raise ValidationException(
                "User is already linked to a different external identity",
                field="external_id",
            )
        self.external_id = external_id
        return True
