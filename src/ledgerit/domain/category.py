"""Category domain service."""

from typing import Optional
from ledgerit.database.base import Database
from ledgerit.domain.entities import Category as CategoryEntity
from ledgerit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_description_not_found,
    category_not_found,
)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, description: str) -> int:
        """Create a category.

        Args:
            description: Category description, unique regardless of case

        Returns:
            Category ID

        Raises:
            ValidationError: If description is empty
            ConflictError: If the description is already used
        """
        description = description.strip()
        if not description:
            raise ValidationError("Category description is required")
        if self.db.get_category_by_description(description) is not None:
            raise ConflictError(f"Category '{description}' already exists")
        return self.db.create_category(description=description)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def get_category_by_description(self, description: str) -> Optional[CategoryEntity]:
        """Get category by description (case-insensitive)."""
        return self.db.get_category_by_description(description)

    def require_category_by_description(self, description: str) -> CategoryEntity:
        """Get category by description or raise NotFoundError."""
        category = self.db.get_category_by_description(description)
        if category is None:
            raise NotFoundError(category_description_not_found(description))
        return category

    def list_categories(self, include_archived: bool = False) -> list[CategoryEntity]:
        """List categories, archived ones only when asked."""
        return self.db.list_categories(include_archived=include_archived)

    def archive_category(self, category_id: int) -> None:
        """Archive a category. Existing transactions keep referencing it.

        Raises:
            NotFoundError: If category doesn't exist
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        self.db.archive_category(category_id)
