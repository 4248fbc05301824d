"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .category import *
from .post import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "EventCreate",
    "EventUpdate",
    "EventDuplicate",
    "EventResponse",
    "EventDetail",
    "PostStats",
    "BulkActionRequest",
    "BulkActionResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryReorder",
    "CategoryResponse",
    "PostCreate",
    "PostResponse",
    "PublicPost",
    "ModerationRequest",
    "InterestCreate",
    "InterestResponse",
]
