"""
Event-related Pydantic schemas
"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from eventboard.domain.status import EventStatus

SLUG_PATTERN = r"^[a-z0-9\-]+$"

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=50, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    event_date: Optional[date] = None
    location: Optional[str] = Field(None, max_length=255)
    make_template: bool = False

class EventUpdate(BaseModel):
    """Schema for updating an event"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=50, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    event_date: Optional[date] = None
    location: Optional[str] = Field(None, max_length=255)

class EventDuplicate(BaseModel):
    """Schema for duplicating an event or deriving a template"""
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=50, pattern=SLUG_PATTERN)
    copy_categories: bool = True
    make_template: bool = False

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    status: EventStatus
    event_date: Optional[date] = None
    location: Optional[str] = None
    is_template: bool
    template_source_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class PostStats(BaseModel):
    """Post counts per moderation status"""
    total: int
    submitted: int
    approved: int
    rejected: int

class EventDetail(EventResponse):
    """Detailed event response with post counts"""
    post_stats: PostStats

class BulkActionRequest(BaseModel):
    """Bulk lifecycle action on several events"""
    action: str
    event_ids: List[int] = Field(default_factory=list)

class BulkActionResponse(BaseModel):
    """Outcome of a bulk action"""
    success_count: int
    error_count: int
    error_messages: List[str]
