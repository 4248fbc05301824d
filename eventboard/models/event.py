"""
Event model - aggregate root owning categories
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship

from eventboard.core.db import Base
from eventboard.domain.status import EventStatus

class Event(Base):
    __tablename__ = "events"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    slug = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(Enum(EventStatus, native_enum=False, length=20, values_callable=lambda e: [s.value for s in e]),
                    nullable=False, default=EventStatus.DRAFT)
    event_date = Column(Date, nullable=True)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)
    is_template = Column(Boolean, default=False, nullable=False)
    # Weak link to the event this one was copied from; never keeps the source alive
    template_source_id = Column(Integer, ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True)
    
    # Relationships
    categories = relationship("Category", back_populates="event", cascade="all, delete-orphan",
                              order_by="[Category.sort_order, Category.name]")
    
    def __init__(self, name, slug, description=None, event_date=None, location=None):
        self.name = name
        self.slug = slug
        self.description = description
        self.event_date = event_date
        self.location = location
        self.status = EventStatus.DRAFT
        self.is_template = False
        self.template_source_id = None
        self.created_at = datetime.utcnow()
        self.updated_at = None
    
    def __repr__(self):
        return f"<Event {self.slug} ({self.status.value})>"
    
    # -------- mutation --------
    
    def set_name(self, name: str) -> None:
        self.name = name
        self.touch()
    
    def set_description(self, description) -> None:
        self.description = description
        self.touch()
    
    def set_slug(self, slug: str) -> None:
        self.slug = slug
        self.touch()
    
    def set_event_date(self, event_date) -> None:
        self.event_date = event_date
        self.touch()
    
    def set_location(self, location) -> None:
        self.location = location
        self.touch()
    
    def set_template(self, is_template: bool) -> None:
        self.is_template = is_template
        self.touch()
    
    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
    
    # -------- lifecycle --------
    
    def activate(self) -> None:
        """Draft -> Active. Ignored in any other status."""
        if self.status == EventStatus.DRAFT:
            self.status = EventStatus.ACTIVE
            self.touch()
    
    def close(self) -> None:
        """Active -> Closed. Ignored in any other status."""
        if self.status == EventStatus.ACTIVE:
            self.status = EventStatus.CLOSED
            self.touch()
    
    def archive(self) -> None:
        """Closed -> Archived. Ignored in any other status."""
        if self.status == EventStatus.CLOSED:
            self.status = EventStatus.ARCHIVED
            self.touch()
    
    def is_publicly_visible(self) -> bool:
        return self.status.is_publicly_visible()
    
    def allows_submissions(self) -> bool:
        return self.status.allows_submissions()
    
    def allows_new_posts(self) -> bool:
        return self.status.allows_new_posts()
    
    def allows_interests(self) -> bool:
        return self.status.allows_interests()
    
    def allows_moderation(self) -> bool:
        return self.status.allows_moderation()
    
    def allows_export(self) -> bool:
        return self.status.allows_export()
    
    def is_draft_and_empty(self) -> bool:
        """Draft events may only be deleted while none of their categories holds a post"""
        if self.status != EventStatus.DRAFT:
            return False
        return not any(category.posts for category in self.categories)
    
    # -------- categories --------
    
    def add_category(self, category) -> None:
        if category not in self.categories:
            self.categories.append(category)
            self.touch()
    
    def remove_category(self, category) -> None:
        if category in self.categories:
            self.categories.remove(category)
            self.touch()
    
    # -------- templating --------
    
    def create_duplicate(self, new_name: str, new_slug: str, copy_categories: bool = True) -> "Event":
        """Build a fresh draft copy of this event.
        
        The event date is not carried over and posts are never copied.
        The caller is responsible for making ``new_slug`` globally unique.
        """
        from eventboard.models.category import Category
        
        duplicate = Event(
            name=new_name,
            slug=new_slug,
            description=self.description,
            location=self.location,
        )
        duplicate.template_source_id = self.id
        
        if copy_categories:
            for category in self.categories:
                clone = Category(duplicate, category.name, category.color, category.description)
                clone.sort_order = category.sort_order
        
        return duplicate
