"""JWT access token creation and verification.

Tokens are HS256 with claims {sub: user uuid, role, iat, exp}. Token issuance
(SMS login) lives in the separate auth service; create_access_token is kept
for tooling and tests that need a valid bearer token.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.bt_common.errors import UnauthorizedError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(user_id: str, role: str = "user") -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate a bearer token.

    Raises:
        UnauthorizedError: signature invalid, token expired or ``sub`` missing.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise UnauthorizedError() from None

    if not payload.get("sub"):
        raise UnauthorizedError()
    return payload
