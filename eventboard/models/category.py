"""
Category model - a named, coloured bucket of posts within one event
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from eventboard.core.db import Base
from eventboard.domain.status import PostStatus

class Category(Base):
    __tablename__ = "categories"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    color = Column(String(7), nullable=False)  # #rrggbb
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    event = relationship("Event", back_populates="categories")
    posts = relationship("Post", back_populates="category", cascade="all, delete-orphan")
    
    __table_args__ = (
        UniqueConstraint("event_id", "name", name="unique_category_per_event"),
    )
    
    def __init__(self, event, name, color, description=None):
        self.name = name
        self.color = color
        self.description = description
        self.sort_order = 0
        self.created_at = datetime.utcnow()
        # Bind immediately, a category never exists without its event
        self.event = event
    
    def __repr__(self):
        return f"<Category {self.name!r} sort={self.sort_order}>"
    
    def set_name(self, name: str) -> None:
        self.name = name
    
    def set_description(self, description) -> None:
        self.description = description
    
    def set_color(self, color: str) -> None:
        self.color = color
    
    def set_sort_order(self, sort_order: int) -> None:
        self.sort_order = sort_order
    
    def add_post(self, post) -> None:
        if post not in self.posts:
            self.posts.append(post)
    
    def remove_post(self, post) -> None:
        if post in self.posts:
            self.posts.remove(post)
    
    def approved_posts_count(self) -> int:
        return sum(1 for post in self.posts if post.status == PostStatus.APPROVED)
