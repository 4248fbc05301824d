from eventboard.domain.errors import DomainError, ErrorCode
from eventboard.domain.status import EventStatus, PostStatus, UserRole

__all__ = [
    "DomainError",
    "ErrorCode",
    "EventStatus",
    "PostStatus",
    "UserRole",
]
