"""Domain value objects (immutable, self-validating)."""

from backoffice.domain.value_objects.core import Actor, ApplicationResponse

__all__ = ["Actor", "ApplicationResponse"]
