"""
Category management within an event
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventboard.core.config import settings
from eventboard.domain.errors import (
    CategoryHasApprovedPostsError,
    CategoryNotFoundError,
    DuplicateCategoryNameError,
)
from eventboard.models import Category, Event
from eventboard.services.repositories import CategoryRepo

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category CRUD and ordering"""

    def __init__(self, db: Session):
        self.db = db
        self.categories = CategoryRepo(db)

    def list_for_event(self, event: Event) -> List[Category]:
        return self.categories.find_by_event(event)

    def get_for_event(self, event: Event, category_id: int) -> Category:
        category = self.categories.find_by_id(category_id)
        if category is None or category.event_id != event.id:
            raise CategoryNotFoundError(category_id)
        return category

    def create_category(
        self,
        event: Event,
        name: str,
        color: str,
        description: Optional[str] = None
    ) -> Category:
        """Append a category after the current last one"""
        if self.categories.find_by_event_and_name(event, name) is not None:
            raise DuplicateCategoryNameError(name)

        sort_order = self.categories.next_sort_order(event)
        category = Category(event, name, color, description)
        category.set_sort_order(sort_order)

        self._save(category)
        logger.info("Category %r added to event %s at position %d", name, event.slug, sort_order)
        return category

    def update_category(
        self,
        category: Category,
        name: Optional[str] = None,
        color: Optional[str] = None,
        description: Optional[str] = None,
        sort_order: Optional[int] = None
    ) -> Category:
        if name is not None and name != category.name:
            existing = self.categories.find_by_event_and_name(category.event, name)
            if existing is not None and existing.id != category.id:
                raise DuplicateCategoryNameError(name)
            category.set_name(name)
        if color is not None:
            category.set_color(color)
        if description is not None:
            category.set_description(description)
        if sort_order is not None:
            category.set_sort_order(sort_order)

        self._save(category)
        return category

    def delete_category(self, category: Category) -> None:
        """Delete a category and, through cascade, its posts and their interests"""
        approved_count = category.approved_posts_count()
        if approved_count > 0:
            logger.warning(
                "Refused to delete category %s: %d approved posts", category.id, approved_count
            )
            raise CategoryHasApprovedPostsError(category.name, approved_count)

        name = category.name
        event = category.event
        event.remove_category(category)
        self.categories.remove(category)
        logger.info("Category %r deleted from event %s", name, event.slug)

    def reorder(self, event: Event, sort_orders: Dict[int, int]) -> List[Category]:
        """Replace sort orders for the given categories in one transaction.

        Every id must belong to ``event``; otherwise nothing is changed.
        """
        owned = {category.id for category in self.categories.find_by_event(event)}
        for category_id in sort_orders:
            if category_id not in owned:
                raise CategoryNotFoundError(category_id)

        try:
            self.categories.update_sort_orders(sort_orders, commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.expire_all()
        return self.categories.find_by_event(event)

    def reorder_by_position(self, event: Event, ordered_ids: List[int]) -> List[Category]:
        """Assign 10, 20, 30, ... following the order of ordered_ids"""
        step = settings.CATEGORY_SORT_STEP
        sort_orders = {
            int(category_id): (index + 1) * step
            for index, category_id in enumerate(ordered_ids)
        }
        return self.reorder(event, sort_orders)

    def _save(self, category: Category) -> None:
        try:
            self.categories.save(category)
        except IntegrityError:
            self.db.rollback()
            raise DuplicateCategoryNameError(category.name)
