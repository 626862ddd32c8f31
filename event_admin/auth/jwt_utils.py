"""Password hashing and the bearer tokens issued to event editors."""

from datetime import datetime, timedelta, timezone

from joserfc import jwt
from joserfc.errors import BadSignatureError, DecodeError
from joserfc.jwk import OctKey
from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..models import User

password_hash = PasswordHash((Argon2Hasher(),))
key = OctKey.import_key(settings.jwt.secret_key)


class JwtClaims(BaseModel):
    sub: str  # username
    user_id: int
    username: str
    role: str
    created_at: str
    exp: datetime


class TokenValidationError(Exception):
    pass


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return password_hash.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return password_hash.hash(password)


def get_token_expiry(expires_delta: timedelta | None = None) -> datetime:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt.access_token_expire_minutes)
    return datetime.now(timezone.utc) + expires_delta


def issue_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Sign a token whose claims identify ``user`` as the acting editor.

    Raises:
        ValueError: If the user has not been persisted yet
    """
    if user.id is None:
        raise ValueError(f"User {user.username} has no id")

    claims = JwtClaims(
        sub=user.username,
        user_id=user.id,
        username=user.username,
        role=user.role.value,
        created_at=user.created_at.isoformat(),
        exp=get_token_expiry(expires_delta),
    ).model_dump()
    claims["exp"] = int(claims["exp"].timestamp())
    return jwt.encode(header={"alg": settings.jwt.algorithm}, claims=claims, key=key)


def decode_access_token(token: str) -> JwtClaims:
    """
    Verify a token issued by ``issue_access_token``.

    Raises:
        TokenValidationError: If the signature, claims or expiry are invalid
    """
    try:
        payload = jwt.decode(token, key, [settings.jwt.algorithm])
    except (BadSignatureError, DecodeError):
        raise TokenValidationError("Could not decode jwt token")
    except Exception as e:
        raise TokenValidationError(f"Unexpected error decoding token: {e}")

    if payload.claims is None:
        raise TokenValidationError("JWT token invalid: missing claims field")

    try:
        claims = JwtClaims.model_validate(payload.claims)
    except ValidationError as e:
        raise TokenValidationError(f"JWT token invalid: {e}")

    if claims.exp < datetime.now(timezone.utc):
        raise TokenValidationError("Token expired")
    return claims
