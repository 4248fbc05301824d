"""
Event lifecycle commands and queries
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventboard.domain.errors import DuplicateSlugError, EventNotDeletableError, EventNotFoundError
from eventboard.domain.status import EventStatus, PostStatus
from eventboard.models import Event
from eventboard.services.repositories import EventRepo, PostRepo

logger = logging.getLogger(__name__)

BULK_ACTIONS = ("activate", "close", "archive", "delete")


@dataclass
class BulkActionResult:
    """Outcome of a bulk action: how many events were handled and what went wrong"""
    success_count: int = 0
    error_messages: List[str] = field(default_factory=list)


class EventCommandService:
    """Service for creating and mutating events"""

    def __init__(self, db: Session):
        self.db = db
        self.events = EventRepo(db)

    def create_event(
        self,
        name: str,
        slug_base: str,
        description: Optional[str] = None,
        event_date: Optional[date] = None,
        location: Optional[str] = None,
        make_template: bool = False
    ) -> Event:
        """Create a draft event under the first free variant of slug_base"""
        slug = self.events.generate_unique_slug(slug_base)

        event = Event(name, slug, description, event_date, location)
        if make_template:
            event.set_template(True)

        self._save(event)
        logger.info("Event %s created (slug=%s)", event.id, event.slug)
        return event

    def update_event(
        self,
        event: Event,
        name: Optional[str] = None,
        slug: Optional[str] = None,
        description: Optional[str] = None,
        event_date: Optional[date] = None,
        location: Optional[str] = None
    ) -> Event:
        """Apply the given changes; None leaves a field untouched"""
        if slug is not None and slug != event.slug:
            existing = self.events.find_by_slug(slug)
            if existing is not None and existing.id != event.id:
                raise DuplicateSlugError(slug)
            event.set_slug(slug)
        if name is not None:
            event.set_name(name)
        if description is not None:
            event.set_description(description)
        if event_date is not None:
            event.set_event_date(event_date)
        if location is not None:
            event.set_location(location)

        self._save(event)
        return event

    def activate(self, event: Event) -> Event:
        event.activate()
        self.events.save(event)
        logger.info("Event %s is now %s", event.slug, event.status.value)
        return event

    def close(self, event: Event) -> Event:
        event.close()
        self.events.save(event)
        logger.info("Event %s is now %s", event.slug, event.status.value)
        return event

    def archive(self, event: Event) -> Event:
        event.archive()
        self.events.save(event)
        logger.info("Event %s is now %s", event.slug, event.status.value)
        return event

    def toggle_template(self, event: Event) -> Event:
        event.set_template(not event.is_template)
        self.events.save(event)
        return event

    def duplicate_event(
        self,
        source: Event,
        new_name: str,
        slug_base: str,
        copy_categories: bool = True,
        make_template: bool = False
    ) -> Event:
        """Copy source into a new draft event, optionally with its categories"""
        slug = self.events.generate_unique_slug(slug_base)

        duplicate = source.create_duplicate(new_name, slug, copy_categories)
        if make_template:
            duplicate.set_template(True)

        self._save(duplicate)
        logger.info(
            "Event %s duplicated from %s (%d categories copied)",
            duplicate.slug, source.slug, len(duplicate.categories)
        )
        return duplicate

    def delete_event(self, event: Event) -> None:
        if not event.is_draft_and_empty():
            logger.warning("Refused to delete event %s (status=%s)", event.slug, event.status.value)
            raise EventNotDeletableError(event.name)

        slug = event.slug
        self._remove(event)
        self.db.commit()
        logger.info("Event %s deleted", slug)

    def bulk_actions(self, event_ids: Iterable[int], action: str) -> BulkActionResult:
        """Apply one lifecycle action to many events.

        The batch is rejected as a whole when an id cannot be resolved. After
        that each event succeeds or fails on its own and all successful
        changes are committed together.
        """
        ids = list(dict.fromkeys(event_ids))
        if not ids:
            return BulkActionResult(0, ["No events selected."])
        if action not in BULK_ACTIONS:
            return BulkActionResult(0, [f"Unknown action: {action}"])

        found = {event.id: event for event in self.events.find_by_ids(ids)}
        if len(found) != len(ids):
            logger.warning("Bulk %s aborted: %d of %d events found", action, len(found), len(ids))
            return BulkActionResult(0, ["Some events were not found."])

        result = BulkActionResult()
        for event_id in ids:
            event = found[event_id]
            try:
                if action == "delete":
                    if not event.is_draft_and_empty():
                        result.error_messages.append(
                            f'Event "{event.name}" cannot be deleted (not empty or not in draft status).'
                        )
                        continue
                    self._remove(event)
                else:
                    getattr(event, action)()
                result.success_count += 1
            except Exception as exc:
                logger.exception("Bulk %s failed for event %s", action, event.id)
                result.error_messages.append(f'Event "{event.name}": {exc}')

        self.db.commit()
        logger.info(
            "Bulk %s: %d succeeded, %d failed", action, result.success_count, len(result.error_messages)
        )
        return result

    def _remove(self, event: Event) -> None:
        self.events.clear_template_source(event.id)
        self.events.remove(event, commit=False)

    def _save(self, event: Event) -> None:
        try:
            self.events.save(event)
        except IntegrityError:
            # Another request claimed the slug between lookup and insert
            self.db.rollback()
            raise DuplicateSlugError(event.slug)


class EventQueryService:
    """Read-side access to events"""

    def __init__(self, db: Session):
        self.events = EventRepo(db)
        self.posts = PostRepo(db)

    def find_by_slug(self, slug: str) -> Optional[Event]:
        return self.events.find_by_slug(slug)

    def get_by_slug(self, slug: str) -> Event:
        event = self.events.find_by_slug(slug)
        if event is None:
            raise EventNotFoundError(slug)
        return event

    def get_by_id(self, event_id: int) -> Event:
        event = self.events.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_public_event(self, slug: str) -> Event:
        """Archived events are hidden from the public as if they did not exist"""
        event = self.events.find_by_slug(slug)
        if event is None or not event.is_publicly_visible():
            raise EventNotFoundError(slug)
        return event

    def find_publicly_visible(self) -> List[Event]:
        return self.events.find_publicly_visible()

    def find_active(self) -> List[Event]:
        return self.events.find_active()

    def find_exportable(self) -> List[Event]:
        return self.events.find_exportable()

    def find_templates(self) -> List[Event]:
        return self.events.find_templates()

    def find_non_templates(self) -> List[Event]:
        return self.events.find_non_templates()

    def list_events(self, status: Optional[EventStatus] = None) -> List[Event]:
        if status is None:
            return self.events.find_all_ordered_by_created()
        return self.events.find_by_status(status)

    def get_status_counts(self) -> Dict[str, int]:
        return {status.value: self.events.count_by_status(status) for status in EventStatus}

    def get_post_stats(self, event: Event) -> Dict[str, int]:
        return {
            "total": self.posts.count_by_event(event),
            "submitted": self.posts.count_by_event_and_status(event, PostStatus.SUBMITTED),
            "approved": self.posts.count_by_event_and_status(event, PostStatus.APPROVED),
            "rejected": self.posts.count_by_event_and_status(event, PostStatus.REJECTED),
        }
