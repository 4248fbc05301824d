"""Status enums for events, posts and backoffice users.

Permissions are answered by the status itself so callers never re-encode
status comparisons.
"""

from enum import Enum


class EventStatus(str, Enum):
    """Lifecycle of an event: draft -> active -> closed -> archived."""

    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"
    ARCHIVED = "archived"

    def is_publicly_visible(self) -> bool:
        return self is not EventStatus.ARCHIVED

    def allows_submissions(self) -> bool:
        return self is EventStatus.ACTIVE

    def allows_new_posts(self) -> bool:
        return self is EventStatus.ACTIVE

    def allows_interests(self) -> bool:
        return self is EventStatus.ACTIVE

    def allows_moderation(self) -> bool:
        return self is EventStatus.ACTIVE

    def allows_export(self) -> bool:
        return self in (EventStatus.CLOSED, EventStatus.ARCHIVED)

    @property
    def label(self) -> str:
        return _EVENT_LABELS[self]

    @property
    def color(self) -> str:
        """Display class used by the backoffice badges."""
        return _EVENT_COLORS[self]

    @property
    def order(self) -> int:
        """Position on the lifecycle timeline."""
        return _EVENT_ORDER.index(self)


_EVENT_ORDER = [EventStatus.DRAFT, EventStatus.ACTIVE, EventStatus.CLOSED, EventStatus.ARCHIVED]

_EVENT_LABELS = {
    EventStatus.DRAFT: "Draft",
    EventStatus.ACTIVE: "Active",
    EventStatus.CLOSED: "Closed",
    EventStatus.ARCHIVED: "Archived",
}

_EVENT_COLORS = {
    EventStatus.DRAFT: "secondary",
    EventStatus.ACTIVE: "success",
    EventStatus.CLOSED: "warning",
    EventStatus.ARCHIVED: "dark",
}


class PostStatus(str, Enum):
    """Moderation state of a post."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    ARCHIVED = "archived"

    def is_publicly_visible(self) -> bool:
        return self is PostStatus.APPROVED

    def can_be_moderated(self) -> bool:
        # Approved posts may be re-reviewed; rejected ones stay rejected.
        return self in (PostStatus.SUBMITTED, PostStatus.APPROVED)

    @property
    def label(self) -> str:
        return self.value.capitalize()


class UserRole(str, Enum):
    """Backoffice roles."""

    ADMIN = "admin"
    MODERATOR = "moderator"

    def can_manage_events(self) -> bool:
        return self is UserRole.ADMIN

    @property
    def label(self) -> str:
        return "Administrator" if self is UserRole.ADMIN else "Moderator"
