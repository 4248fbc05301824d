"""
Post submission, moderation and read access
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from eventboard.domain.errors import (
    PostNotFoundError,
    PostNotModeratableError,
    SubmissionsClosedError,
)
from eventboard.domain.status import PostStatus
from eventboard.models import Event, Post
from eventboard.services.category_service import CategoryService
from eventboard.services.repositories import PostRepo

logger = logging.getLogger(__name__)

FALLBACK_IP = "127.0.0.1"
FALLBACK_USER_AGENT = "Unknown"


class PostSubmissionService:
    """Public post submission"""

    def __init__(self, db: Session):
        self.posts = PostRepo(db)
        self.categories = CategoryService(db)

    def submit_post(
        self,
        event: Event,
        category_id: int,
        title: str,
        content: Optional[str],
        author_email: str,
        author_name: Optional[str] = None,
        show_author_name: bool = False,
        privacy_accepted: bool = True,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Post:
        if not event.allows_new_posts():
            raise SubmissionsClosedError()

        category = self.categories.get_for_event(event, category_id)

        post = Post(
            event,
            category,
            title,
            content,
            author_name,
            author_email,
            show_author_name,
            client_ip or FALLBACK_IP,
            user_agent or FALLBACK_USER_AGENT,
            privacy_accepted=privacy_accepted,
        )
        self.posts.save(post)
        logger.info("Post %s submitted to event %s (category %s)", post.id, event.slug, category.name)
        return post


class PostModerationService:
    """Backoffice moderation of posts"""

    def __init__(self, db: Session):
        self.posts = PostRepo(db)

    def _get_moderatable(self, post_id: int) -> Post:
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        if not post.can_be_moderated():
            raise PostNotModeratableError(post_id)
        return post

    def approve(self, post_id: int, moderator: str) -> Post:
        post = self._get_moderatable(post_id)
        post.approve(moderator)
        self.posts.save(post)
        logger.info("Post %s approved by %s", post.id, moderator)
        return post

    def reject(self, post_id: int, moderator: str, notes: Optional[str] = None) -> Post:
        post = self._get_moderatable(post_id)
        post.reject(moderator, notes)
        self.posts.save(post)
        logger.info("Post %s rejected by %s", post.id, moderator)
        return post

    def archive(self, post_id: int) -> Post:
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        post.archive()
        self.posts.save(post)
        logger.info("Post %s archived", post.id)
        return post


class PostQueryService:
    """Read-side access to posts"""

    def __init__(self, db: Session):
        self.posts = PostRepo(db)

    def get_by_id(self, post_id: int) -> Post:
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    def get_public_post(self, event: Event, post_id: int) -> Post:
        """Only approved posts of this very event are reachable publicly"""
        post = self.posts.find_by_id(post_id)
        if post is None or post.event_id != event.id or not post.is_approved():
            raise PostNotFoundError(post_id)
        return post

    def find_by_event(self, event: Event) -> List[Post]:
        return self.posts.find_by_event(event)

    def find_approved_by_event(self, event: Event) -> List[Post]:
        return self.posts.find_approved_by_event(event)

    def find_submitted_for_moderation(self) -> List[Post]:
        return self.posts.find_submitted_for_moderation()

    def find_by_event_and_status(self, event: Event, status: PostStatus) -> List[Post]:
        return self.posts.find_by_event_and_status(event, status)

    def count_by_event_and_status(self, event: Event, status: PostStatus) -> int:
        return self.posts.count_by_event_and_status(event, status)

    def get_approved_posts_grouped_by_category(self, event: Event) -> Dict[str, Dict]:
        """Approved posts keyed by category name, in category sort order"""
        grouped: Dict[str, Dict] = {}
        for post in self.find_approved_by_event(event):
            entry = grouped.setdefault(post.category.name, {"category": post.category, "posts": []})
            entry["posts"].append(post)
        return grouped
