from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.jwt_utils import get_password_hash
from ..db.crud.user import create_user, delete_user, get_all_users, username_taken
from ..db.database import get_db
from ..dependencies import RequireRole
from ..logger import logger
from ..models import User, UserCreate, UserPublic, UserRole

router = APIRouter(
    prefix="/admin/users",
    tags=["users"],
)

require_owner = RequireRole(UserRole.OWNER)


def _to_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,  # type: ignore[arg-type]
        username=user.username,
        role=user.role,
        created_at=user.created_at,
    )


@router.get("", response_model=list[UserPublic])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: UserPublic = Depends(require_owner),
):
    """Users allowed to manage events. Only accessible by OWNER role."""
    users = await get_all_users(db)
    return [_to_public(user) for user in users if user.id is not None]


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_new_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPublic = Depends(require_owner),
):
    if await username_taken(db, user_data.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists"
        )

    new_user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        role=user_data.role,
    )
    try:
        created_user = await create_user(db, new_user)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists"
        )

    logger.info(f"User {created_user.username} created by {current_user.username}")
    return _to_public(created_user)


@router.delete("/{user_id}")
async def delete_user_by_id(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: UserPublic = Depends(require_owner),
):
    if current_user.id == user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )

    deleted = await delete_user(db, user_id)
    if deleted is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
        )

    logger.info(f"User {deleted.username} deleted by {current_user.username}")
    return {"message": "User deleted successfully"}
