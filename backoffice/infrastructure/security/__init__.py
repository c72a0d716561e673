"""Security: bearer token verification."""

from backoffice.infrastructure.security.jwt import verify_token

__all__ = ["verify_token"]
