"""CRUD operations for category records."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Category


async def list_categories(session: AsyncSession, page_type: str) -> List[Category]:
    """Get the categories tagged for a page.

    Args:
        session: Database session
        page_type: Page type tag, e.g. "events"

    Returns:
        Categories ordered by name
    """
    result = await session.execute(
        select(Category).where(Category.page_type == page_type).order_by(Category.name)
    )
    return list(result.scalars().all())


async def create_category(session: AsyncSession, name: str, page_type: str) -> Category:
    category = Category(name=name, page_type=page_type)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return category
