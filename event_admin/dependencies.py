from datetime import datetime, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .auth.jwt_utils import TokenValidationError, decode_access_token
from .config import settings
from .db.database import get_session_factory
from .events import (
    EventAdminController,
    SqlCategorySource,
    SqlEventStore,
    StaticAuthProvider,
)
from .logger import logger
from .models import UserPublic, UserRole

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def _validate_token_and_get_user(token: str) -> UserPublic:
    """
    Decode a bearer token into the acting user.

    Raises:
        TokenValidationError: If token validation fails
    """
    # The master token acts as a privileged SYSTEM user
    if token == settings.master_token:
        logger.info("Master token used; acting as SYSTEM user")
        return get_system_user()

    claims = decode_access_token(token)
    return UserPublic(
        id=claims.user_id,
        username=claims.username,
        role=UserRole(claims.role),
        created_at=datetime.fromisoformat(claims.created_at),
    )


def get_current_user(token: str = Depends(oauth2_scheme)) -> UserPublic:
    try:
        return _validate_token_and_get_user(token)
    except TokenValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


def get_optional_user(
    token: str | None = Depends(optional_oauth2_scheme),
) -> UserPublic | None:
    """Resolve the actor if a valid token was sent, otherwise None.

    The events screen reports a missing actor as a notification instead of
    rejecting the request.
    """
    if token is None:
        return None
    try:
        return _validate_token_and_get_user(token)
    except TokenValidationError as e:
        logger.warning(f"Ignoring invalid bearer token: {e}")
        return None


class RequireRole:
    def __init__(self, roles: tuple[UserRole, ...] | UserRole):
        self.roles = roles if isinstance(roles, tuple) else (roles,)

    async def __call__(self, user: UserPublic = Depends(get_current_user)):
        if user.role not in self.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions"
            )
        return user


def get_system_user() -> UserPublic:
    """Return a synthetic OWNER user representing system actions.

    This user is not persisted to the database and is used when the master token
    is presented in place of a JWT bearer token.
    """
    return UserPublic(
        id=0,
        username="SYSTEM",
        role=UserRole.OWNER,
        created_at=datetime.now(timezone.utc),
    )


def get_event_admin_controller(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    user: UserPublic | None = Depends(get_optional_user),
) -> EventAdminController:
    return EventAdminController(
        events=SqlEventStore(session_factory),
        categories=SqlCategorySource(session_factory),
        auth=StaticAuthProvider(user),
        category_page_type=settings.events.category_page_type,
    )
