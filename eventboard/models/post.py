"""
Post model - a submission moderated before it becomes public
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship

from eventboard.core.db import Base
from eventboard.domain.errors import PrivacyNotAcceptedError
from eventboard.domain.status import PostStatus

class Post(Base):
    __tablename__ = "posts"
    
    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    author_name = Column(String(100), nullable=True)
    author_email = Column(String(255), nullable=False)
    show_author_name = Column(Boolean, default=False, nullable=False)
    privacy_accepted = Column(Boolean, default=False, nullable=False)
    status = Column(Enum(PostStatus, native_enum=False, length=20, values_callable=lambda e: [s.value for s in e]),
                    nullable=False, default=PostStatus.SUBMITTED)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)
    moderated_at = Column(DateTime, nullable=True)
    moderated_by = Column(String(100), nullable=True)
    moderation_notes = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=False)
    user_agent = Column(String(500), nullable=False)
    
    # Relationships
    event = relationship("Event")
    category = relationship("Category", back_populates="posts")
    interests = relationship("Interest", back_populates="post", cascade="all, delete-orphan",
                             order_by="Interest.created_at")
    
    __table_args__ = (
        Index("idx_posts_status", "status"),
        Index("idx_posts_created_at", "created_at"),
    )
    
    def __init__(self, event, category, title, content, author_name, author_email,
                 show_author_name, ip_address, user_agent, privacy_accepted=True):
        if not privacy_accepted:
            raise PrivacyNotAcceptedError()
        self.event = event
        self.title = title
        self.content = content
        self.author_name = author_name
        self.author_email = author_email
        self.show_author_name = show_author_name
        self.ip_address = ip_address
        self.user_agent = user_agent
        self.privacy_accepted = True
        self.status = PostStatus.SUBMITTED
        self.created_at = datetime.utcnow()
        self.updated_at = None
        self.moderated_at = None
        self.moderated_by = None
        self.moderation_notes = None
        self.category = category
    
    def __repr__(self):
        return f"<Post {self.title!r} ({self.status.value})>"
    
    # -------- moderation --------
    
    def can_be_moderated(self) -> bool:
        return self.status.can_be_moderated()
    
    def approve(self, moderator: str) -> None:
        """Approve the post. Ignored when the post can no longer be moderated."""
        if self.can_be_moderated():
            self.status = PostStatus.APPROVED
            self.moderated_by = moderator
            self.moderated_at = datetime.utcnow()
            self.touch()
    
    def reject(self, moderator: str, notes=None) -> None:
        """Reject the post. Ignored when the post can no longer be moderated."""
        if self.can_be_moderated():
            self.status = PostStatus.REJECTED
            self.moderated_by = moderator
            self.moderated_at = datetime.utcnow()
            self.moderation_notes = notes
            self.touch()
    
    def archive(self) -> None:
        self.status = PostStatus.ARCHIVED
        self.touch()
    
    def is_approved(self) -> bool:
        return self.status == PostStatus.APPROVED
    
    def is_publicly_visible(self) -> bool:
        return self.status.is_publicly_visible()
    
    # -------- submitter details --------
    
    def set_content(self, content) -> None:
        self.content = content
        self.touch()
    
    def set_author_name(self, author_name) -> None:
        self.author_name = author_name
        self.touch()
    
    def set_author_email(self, author_email: str) -> None:
        self.author_email = author_email
        self.touch()
    
    def set_show_author_name(self, show_author_name: bool) -> None:
        self.show_author_name = show_author_name
        self.touch()
    
    def set_moderation_notes(self, notes) -> None:
        self.moderation_notes = notes
        self.touch()
    
    def display_author(self):
        """Author name as shown publicly, only when the submitter opted in"""
        return self.author_name if self.show_author_name else None
    
    def touch(self) -> None:
        self.updated_at = datetime.utcnow()
    
    # -------- interests --------
    
    def add_interest(self, interest) -> None:
        if interest not in self.interests:
            self.interests.append(interest)
    
    def remove_interest(self, interest) -> None:
        if interest in self.interests:
            self.interests.remove(interest)
    
    def interest_count(self) -> int:
        return len(self.interests)
    
    def has_interest_from_email(self, email: str) -> bool:
        return any(interest.email == email for interest in self.interests)
