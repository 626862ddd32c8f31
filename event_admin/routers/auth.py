from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.jwt_utils import issue_access_token
from ..db.crud.user import authenticate_user
from ..db.database import get_db
from ..logger import logger

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
) -> Token:
    """Exchange editor credentials for a bearer token."""
    user = await authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        logger.warning(f"Failed login attempt for {form_data.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = issue_access_token(user)
    logger.info(f"User {user.username} (id {user.id}) logged in")
    return Token(access_token=token)
