"""
Interest submission with duplicate prevention
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventboard.domain.errors import DuplicateInterestError, InterestsClosedError, PostNotFoundError
from eventboard.models import Event, Interest, Post
from eventboard.services.repositories import InterestRepo

logger = logging.getLogger(__name__)


class InterestSubmissionService:
    """Service for interest declarations on posts"""

    def __init__(self, db: Session):
        self.db = db
        self.interests = InterestRepo(db)

    def submit_interest(
        self,
        post: Post,
        name: str,
        email: str,
        privacy_accepted: bool,
        message: Optional[str] = None,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Interest:
        """Record an interest, refusing a second one from the same email.

        The pre-check gives a clean error in the common case; the unique
        index on (post_id, email) decides when two requests race.
        """
        if self.interests.is_duplicate_interest(post, email):
            logger.warning("Duplicate interest for post %s refused", post.id)
            raise DuplicateInterestError()

        interest = Interest(name, email, privacy_accepted, message, client_ip, user_agent)
        post.add_interest(interest)

        try:
            self.interests.save(interest)
        except IntegrityError:
            self.db.rollback()
            logger.warning("Duplicate interest for post %s caught by unique index", post.id)
            raise DuplicateInterestError()

        logger.info("Interest %s recorded for post %s", interest.id, post.id)
        return interest

    def submit_public_interest(
        self,
        event: Event,
        post: Post,
        name: str,
        email: str,
        privacy_accepted: bool,
        message: Optional[str] = None,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Interest:
        """Public entry point: the event must be open and the post approved and its own"""
        if not event.allows_interests():
            raise InterestsClosedError()
        if post.event_id != event.id or not post.is_approved():
            raise PostNotFoundError(post.id)
        return self.submit_interest(
            post, name, email, privacy_accepted, message, client_ip, user_agent
        )

    def is_duplicate_interest(self, post: Post, email: str) -> bool:
        return self.interests.is_duplicate_interest(post, email)

    def get_interests_by_post(self, post: Post) -> List[Interest]:
        return self.interests.find_by_post(post)

    def get_interest_count(self, post: Post) -> int:
        return self.interests.count_by_post(post)
