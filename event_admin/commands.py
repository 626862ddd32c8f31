import argparse
import asyncio

from .auth.jwt_utils import get_password_hash
from .categories import create_category
from .config import settings
from .db.crud.user import create_user, username_taken
from .db.database import AsyncSessionLocal, engine, init_db
from .logger import logger
from .models import User, UserCreate, UserRole


async def register(user: UserCreate) -> User:
    async with AsyncSessionLocal() as session:
        if await username_taken(session, user.username):
            logger.error(f"Username {user.username} already registered")
            raise ValueError("Username already registered")

        new_user = User(
            username=user.username,
            hashed_password=get_password_hash(user.password),
            role=user.role,
        )
        return await create_user(session, new_user)


async def add_category(name: str, page_type: str) -> None:
    async with AsyncSessionLocal() as session:
        category = await create_category(session, name, page_type)
        logger.info(
            f"Category {category.name} ({category.page_type}) created with id {category.id}"
        )


async def _run(args: argparse.Namespace) -> None:
    await init_db()
    try:
        if args.command == "register":
            user = await register(
                UserCreate(username=args.username, password=args.password, role=args.role)
            )
            logger.info(f"User {user.username} created with id {user.id}")
        elif args.command == "add-category":
            await add_category(args.name, args.page_type)
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(prog="event-admin")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_parser = subparsers.add_parser("register")
    register_parser.add_argument("--username", type=str, required=True)
    register_parser.add_argument("--password", type=str, required=True)
    register_parser.add_argument("--role", type=UserRole, default=UserRole.ADMIN)

    category_parser = subparsers.add_parser("add-category")
    category_parser.add_argument("--name", type=str, required=True)
    category_parser.add_argument(
        "--page-type", type=str, default=settings.events.category_page_type
    )

    asyncio.run(_run(parser.parse_args()))


if __name__ == "__main__":
    main()
