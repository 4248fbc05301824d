"""
Post and interest Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from eventboard.domain.status import PostStatus

def _require_consent(value: bool) -> bool:
    if not value:
        raise ValueError("The privacy policy must be accepted")
    return value

class PostCreate(BaseModel):
    """Public post submission"""
    category_id: int
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    author_name: Optional[str] = Field(None, max_length=100)
    author_email: EmailStr
    show_author_name: bool = False
    privacy_accepted: bool

    _privacy = field_validator("privacy_accepted")(_require_consent)

class PostResponse(BaseModel):
    """Post as seen by the backoffice"""
    id: int
    event_id: int
    category_id: int
    title: str
    content: Optional[str] = None
    author_name: Optional[str] = None
    author_email: str
    show_author_name: bool
    status: PostStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    moderated_at: Optional[datetime] = None
    moderated_by: Optional[str] = None
    moderation_notes: Optional[str] = None

    class Config:
        from_attributes = True

class PublicPost(BaseModel):
    """Post as shown on the public event page"""
    id: int
    title: str
    content: Optional[str] = None
    author: Optional[str] = None
    interest_count: int

class ModerationRequest(BaseModel):
    """Optional notes attached to a rejection"""
    notes: Optional[str] = None

class InterestCreate(BaseModel):
    """Public interest declaration"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    message: Optional[str] = None
    privacy_accepted: bool

    _privacy = field_validator("privacy_accepted")(_require_consent)

class InterestResponse(BaseModel):
    """Interest as seen by the backoffice"""
    id: int
    post_id: int
    name: str
    email: str
    message: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
