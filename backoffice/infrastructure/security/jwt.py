"""Bearer token verification.

Tokens are minted by the sign-in service with the shared SECRET_KEY; this
service only checks them and reads the user id from the sub claim.
"""

from typing import Any

from jose import JWTError, jwt

from backoffice.core.config import get_settings

_REQUIRED_CLAIMS = ("sub", "exp")


def verify_token(token: str) -> dict[str, Any]:
    """Decode token and return its claims.

    Raises:
        ValueError: Bad signature, expired, or a required claim is absent.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Token rejected: {e!s}") from e
    missing = [c for c in _REQUIRED_CLAIMS if c not in claims]
    if missing:
        raise ValueError(f"Token is missing claims: {', '.join(missing)}")
    return claims
