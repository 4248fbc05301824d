"""
Interest model - "I'm interested" declaration on an approved post
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from eventboard.core.db import Base

class Interest(Base):
    __tablename__ = "interests"
    
    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    privacy_accepted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    # Audit trail only
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)
    
    # Relationships
    post = relationship("Post", back_populates="interests")
    
    # Authoritative guard against two concurrent submissions for the same email
    __table_args__ = (
        UniqueConstraint("post_id", "email", name="unique_interest_per_post_email"),
        Index("idx_interests_created_at", "created_at"),
    )
    
    def __init__(self, name, email, privacy_accepted, message=None, ip_address=None, user_agent=None):
        self.name = name
        self.email = email
        self.privacy_accepted = privacy_accepted
        self.message = message
        self.ip_address = ip_address
        self.user_agent = user_agent
        self.created_at = datetime.utcnow()
    
    def __repr__(self):
        return f"<Interest {self.email} on post {self.post_id}>"
    
    def belongs_to_event(self, event_id: int) -> bool:
        return self.post is not None and self.post.event_id == event_id
