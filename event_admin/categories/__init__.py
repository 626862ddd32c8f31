"""Categories shown alongside page content, grouped by page type."""

from .crud import create_category, list_categories

__all__ = ["create_category", "list_categories"]
