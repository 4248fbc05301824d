"""Domain error codes and exceptions."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    DUPLICATE_SLUG = "DUPLICATE_SLUG"
    DUPLICATE_CATEGORY_NAME = "DUPLICATE_CATEGORY_NAME"
    DUPLICATE_INTEREST = "DUPLICATE_INTEREST"
    CATEGORY_HAS_APPROVED_POSTS = "CATEGORY_HAS_APPROVED_POSTS"
    EVENT_NOT_DELETABLE = "EVENT_NOT_DELETABLE"
    POST_NOT_MODERATABLE = "POST_NOT_MODERATABLE"
    SUBMISSIONS_CLOSED = "SUBMISSIONS_CLOSED"
    INTERESTS_CLOSED = "INTERESTS_CLOSED"
    PRIVACY_NOT_ACCEPTED = "PRIVACY_NOT_ACCEPTED"
    EXPORT_NOT_ALLOWED = "EXPORT_NOT_ALLOWED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, reference: str | int) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.reference = reference


class CategoryNotFoundError(DomainError):
    """Raised when a category is missing or belongs to another event."""

    def __init__(self, category_id: int) -> None:
        super().__init__(
            code=ErrorCode.CATEGORY_NOT_FOUND,
            message="Category not found for this event",
        )
        self.category_id = category_id


class PostNotFoundError(DomainError):
    """Raised when a post is not found."""

    def __init__(self, post_id: int) -> None:
        super().__init__(
            code=ErrorCode.POST_NOT_FOUND,
            message="Post not found",
        )
        self.post_id = post_id


class DuplicateSlugError(DomainError):
    """Raised when a slug is already used by another event."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_SLUG,
            message=f'Slug "{slug}" is already in use',
        )


class DuplicateCategoryNameError(DomainError):
    """Raised when an event already has a category with the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_CATEGORY_NAME,
            message=f'A category named "{name}" already exists in this event',
        )


class DuplicateInterestError(DomainError):
    """Raised when an email has already declared interest in a post."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_INTEREST,
            message="Interest already declared for this post",
        )


class CategoryHasApprovedPostsError(DomainError):
    """Raised when deleting a category that still holds approved posts."""

    def __init__(self, name: str, approved_count: int) -> None:
        super().__init__(
            code=ErrorCode.CATEGORY_HAS_APPROVED_POSTS,
            message=f'Category "{name}" cannot be deleted, it contains {approved_count} approved posts',
        )
        self.approved_count = approved_count


class EventNotDeletableError(DomainError):
    """Raised when deleting an event that is not an empty draft."""

    def __init__(self, name: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_DELETABLE,
            message=f'Event "{name}" cannot be deleted (not empty or not in draft status)',
        )


class PostNotModeratableError(DomainError):
    """Raised when a moderation action targets a rejected or archived post."""

    def __init__(self, post_id: int) -> None:
        super().__init__(
            code=ErrorCode.POST_NOT_MODERATABLE,
            message="Post cannot be moderated in its current status",
        )
        self.post_id = post_id


class SubmissionsClosedError(DomainError):
    """Raised when an event does not accept new posts."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SUBMISSIONS_CLOSED,
            message="This event does not accept submissions",
        )


class InterestsClosedError(DomainError):
    """Raised when an event does not accept interest declarations."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INTERESTS_CLOSED,
            message="This event does not accept interest declarations",
        )


class PrivacyNotAcceptedError(DomainError):
    """Raised when a submission arrives without privacy consent."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PRIVACY_NOT_ACCEPTED,
            message="The privacy policy must be accepted",
        )


class ExportNotAllowedError(DomainError):
    """Raised when exporting an event that is still open."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EXPORT_NOT_ALLOWED,
            message="Export is only available for closed or archived events",
        )
