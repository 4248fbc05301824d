"""
Backoffice dashboard queries
"""

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from eventboard.core.config import settings
from eventboard.domain.status import PostStatus
from eventboard.models import Post
from eventboard.services.repositories import EventRepo, InterestRepo, PostRepo


class ModerationQueryService:
    """Statistics and activity feeds for the moderation dashboard"""

    def __init__(self, db: Session):
        self.events = EventRepo(db)
        self.posts = PostRepo(db)
        self.interests = InterestRepo(db)

    def get_dashboard_stats(self) -> Dict[str, int]:
        return {
            "totalEvents": self.events.count(),
            "totalPosts": self.posts.count(),
            "pendingModeration": self.posts.count_by_status(PostStatus.SUBMITTED),
            "approvedPosts": self.posts.count_by_status(PostStatus.APPROVED),
            "rejectedPosts": self.posts.count_by_status(PostStatus.REJECTED),
            "totalInterests": self.interests.count(),
        }

    def get_pending_posts(self, limit: Optional[int] = None) -> List[Post]:
        return self.posts.find_by_status(PostStatus.SUBMITTED, limit or settings.DASHBOARD_LIST_LIMIT)

    def get_recent_moderation_activity(self, limit: Optional[int] = None) -> List[Dict]:
        """Recently approved or rejected posts, most recently moderated first"""
        limit = limit or settings.DASHBOARD_LIST_LIMIT
        return [
            {
                "title": f"Post moderated: {post.title}",
                "description": f'Status: {post.status.value} in category "{post.category.name}"',
                "type": post.status.value,
                "created_at": post.moderated_at,
                "post_id": post.id,
            }
            for post in self.posts.find_recently_moderated(limit)
        ]
