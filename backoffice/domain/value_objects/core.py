"""Domain value objects for the back office.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from backoffice.domain.enums import Role


@dataclass(frozen=True)
class Actor:
    """The user performing an operation, passed explicitly to every guard.

    has_override is the override capability (may assign any role regardless
    of rank); it is stored on the user, independent of the role tier.
    """

    user_id: int
    role: Role
    has_override: bool = False

    def __post_init__(self) -> None:
        if self.user_id is None or self.user_id < 1:
            raise ValueError("Actor user_id must be a positive integer")
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role(self.role))


@dataclass(frozen=True)
class ApplicationResponse:
    """One answer on an application form."""

    question_id: int
    response: str

    def __post_init__(self) -> None:
        if self.question_id < 1:
            raise ValueError("question_id must be a positive integer")
