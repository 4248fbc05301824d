"""
Repository layer abstracting storage behind per-entity query helpers.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventboard.core.config import settings
from eventboard.domain.status import EventStatus, PostStatus, UserRole
from eventboard.models import BackofficeUser, Category, Event, Interest, Post

ModelT = TypeVar("ModelT")


class SqlRepo(Generic[ModelT]):
    """CRUD and filtered queries shared by every repository"""

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def save(self, entity: ModelT, commit: bool = True) -> ModelT:
        self.db.add(entity)
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        return entity

    def remove(self, entity: ModelT, commit: bool = True) -> None:
        self.db.delete(entity)
        if commit:
            self.db.commit()

    def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def find_by(self, **filters: Any) -> List[ModelT]:
        return self.db.query(self.model).filter_by(**filters).all()

    def count(self, **filters: Any) -> int:
        return self.db.query(func.count(self.model.id)).filter_by(**filters).scalar() or 0


# -------- Event repository --------

class EventRepo(SqlRepo[Event]):
    model = Event

    def find_by_slug(self, slug: str) -> Optional[Event]:
        return self.db.query(Event).filter(Event.slug == slug).first()

    def find_by_ids(self, event_ids: Iterable[int]) -> List[Event]:
        ids = list(event_ids)
        if not ids:
            return []
        return self.db.query(Event).filter(Event.id.in_(ids)).all()

    def find_publicly_visible(self) -> List[Event]:
        return self.db.query(Event).filter(
            Event.status != EventStatus.ARCHIVED
        ).order_by(Event.created_at.desc()).all()

    def find_active(self) -> List[Event]:
        return self.find_by_status(EventStatus.ACTIVE)

    def find_exportable(self) -> List[Event]:
        return self.db.query(Event).filter(
            Event.status.in_([EventStatus.CLOSED, EventStatus.ARCHIVED])
        ).order_by(Event.created_at.desc()).all()

    def find_all_ordered_by_created(self) -> List[Event]:
        return self.db.query(Event).order_by(Event.created_at.desc()).all()

    def find_by_status(self, status: EventStatus) -> List[Event]:
        return self.db.query(Event).filter(
            Event.status == status
        ).order_by(Event.created_at.desc()).all()

    def count_by_status(self, status: EventStatus) -> int:
        return self.count(status=status)

    def find_templates(self) -> List[Event]:
        return self.db.query(Event).filter(Event.is_template.is_(True)).order_by(Event.name).all()

    def find_non_templates(self) -> List[Event]:
        return self.db.query(Event).filter(
            Event.is_template.is_(False)
        ).order_by(Event.created_at.desc()).all()

    def find_derived_from(self, event_id: int) -> List[Event]:
        return self.db.query(Event).filter(Event.template_source_id == event_id).all()

    def generate_unique_slug(self, base_slug: str) -> str:
        """Return base_slug, or base_slug-1, base_slug-2, ... whichever is free first"""
        slug = base_slug
        counter = 1
        while self.find_by_slug(slug) is not None:
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug

    def clear_template_source(self, event_id: int) -> int:
        """Detach events copied from event_id; mirrors ON DELETE SET NULL"""
        derived = self.find_derived_from(event_id)
        for event in derived:
            event.template_source_id = None
        return len(derived)


# -------- Category repository --------

class CategoryRepo(SqlRepo[Category]):
    model = Category

    def find_by_event(self, event: Event) -> List[Category]:
        return self.db.query(Category).filter(
            Category.event_id == event.id
        ).order_by(Category.sort_order, Category.name).all()

    def find_by_event_and_name(self, event: Event, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(
            Category.event_id == event.id,
            Category.name == name
        ).first()

    def next_sort_order(self, event: Event) -> int:
        max_sort_order = self.db.query(func.max(Category.sort_order)).filter(
            Category.event_id == event.id
        ).scalar()
        return (max_sort_order or 0) + settings.CATEGORY_SORT_STEP

    def count_by_event(self, event: Event) -> int:
        return self.count(event_id=event.id)

    def update_sort_orders(self, category_id_to_sort_order: Dict[int, int], commit: bool = True) -> None:
        for category_id, sort_order in category_id_to_sort_order.items():
            self.db.query(Category).filter(Category.id == category_id).update(
                {Category.sort_order: sort_order}, synchronize_session="fetch"
            )
        if commit:
            self.db.commit()


# -------- Post repository --------

class PostRepo(SqlRepo[Post]):
    model = Post

    def find_by_event(self, event: Event) -> List[Post]:
        return self.db.query(Post).filter(
            Post.event_id == event.id
        ).order_by(Post.created_at.desc()).all()

    def find_approved_by_event(self, event: Event) -> List[Post]:
        return self.db.query(Post).join(Category, Post.category_id == Category.id).filter(
            Category.event_id == event.id,
            Post.status == PostStatus.APPROVED
        ).order_by(Category.sort_order, Post.created_at.desc()).all()

    def find_submitted_for_moderation(self) -> List[Post]:
        return self.db.query(Post).join(Event, Post.event_id == Event.id).filter(
            Post.status == PostStatus.SUBMITTED,
            Event.status == EventStatus.ACTIVE
        ).order_by(Post.created_at, Post.id).all()

    def find_by_event_and_status(self, event: Event, status: PostStatus) -> List[Post]:
        return self.db.query(Post).filter(
            Post.event_id == event.id,
            Post.status == status
        ).order_by(Post.created_at.desc()).all()

    def count_by_event(self, event: Event) -> int:
        return self.count(event_id=event.id)

    def count_by_event_and_status(self, event: Event, status: PostStatus) -> int:
        return self.count(event_id=event.id, status=status)

    def count_by_status(self, status: PostStatus) -> int:
        return self.count(status=status)

    def find_by_status(self, status: PostStatus, limit: Optional[int] = None) -> List[Post]:
        query = self.db.query(Post).filter(Post.status == status).order_by(Post.created_at)
        if limit:
            query = query.limit(limit)
        return query.all()

    def find_recently_moderated(self, limit: int = 10) -> List[Post]:
        return self.db.query(Post).filter(
            Post.status.in_([PostStatus.APPROVED, PostStatus.REJECTED]),
            Post.moderated_at.isnot(None)
        ).order_by(Post.moderated_at.desc()).limit(limit).all()


# -------- Interest repository --------

class InterestRepo(SqlRepo[Interest]):
    model = Interest

    def find_by_post_and_email(self, post: Post, email: str) -> Optional[Interest]:
        return self.db.query(Interest).filter(
            Interest.post_id == post.id,
            Interest.email == email
        ).first()

    def find_by_post(self, post: Post) -> List[Interest]:
        return self.db.query(Interest).filter(
            Interest.post_id == post.id
        ).order_by(Interest.created_at).all()

    def count_by_post(self, post: Post) -> int:
        return self.count(post_id=post.id)

    def is_duplicate_interest(self, post: Post, email: str) -> bool:
        return self.find_by_post_and_email(post, email) is not None


# -------- Backoffice user repository --------

class BackofficeUserRepo(SqlRepo[BackofficeUser]):
    model = BackofficeUser

    def find_by_email(self, email: str) -> Optional[BackofficeUser]:
        return self.db.query(BackofficeUser).filter(BackofficeUser.email == email).first()

    def find_active(self) -> List[BackofficeUser]:
        return self.db.query(BackofficeUser).filter(
            BackofficeUser.is_active.is_(True)
        ).order_by(BackofficeUser.name).all()

    def find_by_role(self, role: UserRole) -> List[BackofficeUser]:
        return self.db.query(BackofficeUser).filter(
            BackofficeUser.role == role,
            BackofficeUser.is_active.is_(True)
        ).order_by(BackofficeUser.name).all()
