"""Bearer token helpers built on python-jose."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from cupid_stage.core.settings import settings
from cupid_stage.errors import UnauthenticatedError


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose subject is the user id."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str | None) -> int:
    """Validate a bearer token and return the user id it was issued for.

    Args:
        token: Encoded JWT, possibly missing.

    Returns:
        The integer user id stored in the ``sub`` claim.

    Raises:
        UnauthenticatedError: If the token is missing, malformed, expired or
            carries a non-integer subject.
    """
    if not token:
        raise UnauthenticatedError("Missing credentials")
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise UnauthenticatedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise UnauthenticatedError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise UnauthenticatedError("Could not validate credentials") from err
