"""
Bearer token issue and decode.
The rest of the system treats a token as opaque: it names exactly one user id
or it is rejected.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from taskkeeper.exceptions.http import InvalidCredentialsError

_INVALID_TOKEN = "Invalid or expired token"


def create_access_token(user_id: int, *, secret_key: str, algorithm: str, expires_minutes: int) -> str:
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": str(user_id), "exp": expire}, secret_key, algorithm=algorithm)


def decode_access_token(token: str, *, secret_key: str, algorithm: str) -> int:
    """
    Returns the user id named by the token.

    Raises:
        InvalidCredentialsError: bad signature, expired, or no usable subject.
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as exc:
        raise InvalidCredentialsError(_INVALID_TOKEN) from exc

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise InvalidCredentialsError(_INVALID_TOKEN) from exc
