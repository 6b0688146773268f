"""Password hashing and staff access tokens."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from eventcare.core.config import settings
from eventcare.policy.roles import Role

TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    user_id: str,
    role: Role,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue an HS256 token for a staff member.

    Claims are ``sub`` (user id), ``role``, ``email``, ``type``, ``iat``
    and ``exp``. The role claim lets clients render the right screens;
    the API itself re-reads the role from the database on every request.

    Args:
        user_id: Staff member ID
        role: Role at issue time
        email: Login email, if it should travel with the token
        expires_delta: Lifetime, defaulting to ACCESS_TOKEN_EXPIRE_MINUTES
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "role": Role(role).value,
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    if email:
        claims["email"] = email

    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode a staff access token.

    Returns:
        The claims, or None if the token is invalid, expired, of another
        type, or names an unknown role
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None
    try:
        Role(payload.get("role"))
    except ValueError:
        return None
    return payload
