from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...auth.jwt_utils import verify_password
from ...models import User


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.scalars(select(User).where(User.username == username))
    return result.first()


async def username_taken(session: AsyncSession, username: str) -> bool:
    count = await session.scalar(
        select(func.count()).select_from(User).where(User.username == username)
    )
    return bool(count)


async def authenticate_user(
    session: AsyncSession, username: str, password: str
) -> User | None:
    """Editor whose credentials match, or None.

    Unknown usernames and wrong passwords are not told apart.
    """
    user = await get_user_by_username(session, username)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def get_all_users(session: AsyncSession) -> list[User]:
    result = await session.scalars(select(User).order_by(User.username))
    return list(result.all())


async def create_user(session: AsyncSession, user: User) -> User:
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user_id: int) -> User | None:
    """Delete an editor account. Returns the removed user, or None if unknown."""
    user = await session.get(User, user_id)
    if user is None:
        return None

    await session.delete(user)
    await session.commit()
    return user
