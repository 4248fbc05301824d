"""
Tests for event commands: slugs, duplication, deletion and bulk actions
"""

import pytest

from eventboard.domain.errors import DuplicateSlugError, EventNotDeletableError, EventNotFoundError
from eventboard.domain.status import EventStatus
from eventboard.models import Category, Event, Post
from eventboard.services.event_service import EventCommandService, EventQueryService
from eventboard.services.repositories import EventRepo

def test_generate_unique_slug_takes_first_free_suffix(db_session):
    for slug in ("conf", "conf-1", "conf-2"):
        db_session.add(Event("Conf", slug))
    db_session.commit()

    repo = EventRepo(db_session)
    assert repo.generate_unique_slug("conf") == "conf-3"
    assert repo.generate_unique_slug("meetup") == "meetup"

def test_create_event_never_collides(db_session):
    service = EventCommandService(db_session)
    first = service.create_event("Conf", "conf")
    second = service.create_event("Conf again", "conf")

    assert first.slug == "conf"
    assert second.slug == "conf-1"
    assert first.status == EventStatus.DRAFT

def test_update_event_rejects_taken_slug(db_session, draft_event):
    other = EventCommandService(db_session).create_event("Meetup", "meetup")

    with pytest.raises(DuplicateSlugError):
        EventCommandService(db_session).update_event(other, slug="conf")

    updated = EventCommandService(db_session).update_event(other, name="Meetup 2", slug="meetup-2")
    assert updated.slug == "meetup-2"
    assert updated.name == "Meetup 2"

def test_duplicate_event_persists_copy(db_session, active_event):
    service = EventCommandService(db_session)
    duplicate = service.duplicate_event(active_event, "Summit copy", "summit")

    assert duplicate.id is not None
    assert duplicate.slug == "summit-1"
    assert duplicate.template_source_id == active_event.id
    assert [c.name for c in duplicate.categories] == ["Tech", "Design"]

    bare = service.duplicate_event(active_event, "Bare", "bare", copy_categories=False, make_template=True)
    assert bare.categories == []
    assert bare.is_template

def test_deleting_source_detaches_duplicates(db_session, draft_event):
    service = EventCommandService(db_session)
    duplicate = service.duplicate_event(draft_event, "Copy", "copy")

    service.delete_event(draft_event)

    db_session.refresh(duplicate)
    assert duplicate.template_source_id is None

def test_delete_event_requires_empty_draft(db_session, active_event):
    with pytest.raises(EventNotDeletableError):
        EventCommandService(db_session).delete_event(active_event)

def test_toggle_template_and_template_queries(db_session, draft_event):
    service = EventCommandService(db_session)
    service.toggle_template(draft_event)

    queries = EventQueryService(db_session)
    assert [e.slug for e in queries.find_templates()] == ["conf"]
    assert queries.find_non_templates() == []

    service.toggle_template(draft_event)
    assert queries.find_templates() == []

def test_query_service_lookups(db_session, draft_event, active_event):
    queries = EventQueryService(db_session)

    assert queries.get_by_slug("conf").id == draft_event.id
    with pytest.raises(EventNotFoundError):
        queries.get_by_slug("missing")

    counts = queries.get_status_counts()
    assert counts["draft"] == 1
    assert counts["active"] == 1
    assert counts["archived"] == 0

    assert [e.slug for e in queries.list_events(EventStatus.ACTIVE)] == ["summit"]
    assert [e.slug for e in queries.find_active()] == ["summit"]

def test_archived_event_is_hidden_publicly(db_session, active_event):
    service = EventCommandService(db_session)
    service.close(active_event)
    service.archive(active_event)

    queries = EventQueryService(db_session)
    with pytest.raises(EventNotFoundError):
        queries.get_public_event("summit")
    assert queries.find_publicly_visible() == []
    assert [e.slug for e in queries.find_exportable()] == ["summit"]

def test_post_stats(db_session, active_event, make_post):
    tech = active_event.categories[0]
    make_post(active_event, tech, "One")
    make_post(active_event, tech, "Two")

    stats = EventQueryService(db_session).get_post_stats(active_event)
    assert stats == {"total": 2, "submitted": 2, "approved": 0, "rejected": 0}

# -------- bulk actions --------

def test_bulk_delete_mixed_batch(db_session, active_event):
    empty = Event("Empty", "empty")
    Category(empty, "Only", "#000000")
    db_session.add(empty)
    db_session.commit()
    category_id = empty.categories[0].id

    result = EventCommandService(db_session).bulk_actions([empty.id, active_event.id], "delete")

    assert result.success_count == 1
    assert len(result.error_messages) == 1
    assert "Summit" in result.error_messages[0]
    assert EventRepo(db_session).find_by_slug("empty") is None
    assert db_session.get(Category, category_id) is None
    assert EventRepo(db_session).find_by_slug("summit") is not None

def test_bulk_activate_applies_transition_rules(db_session, draft_event, active_event):
    result = EventCommandService(db_session).bulk_actions([draft_event.id, active_event.id], "activate")

    # Already active is a silent no-op, still counted as handled
    assert result.success_count == 2
    assert result.error_messages == []
    db_session.refresh(draft_event)
    assert draft_event.status == EventStatus.ACTIVE

def test_bulk_rejects_unknown_ids(db_session, draft_event):
    result = EventCommandService(db_session).bulk_actions([draft_event.id, 9999], "activate")

    assert result.success_count == 0
    assert result.error_messages == ["Some events were not found."]
    db_session.refresh(draft_event)
    assert draft_event.status == EventStatus.DRAFT

def test_bulk_rejects_empty_selection_and_unknown_action(db_session, draft_event):
    service = EventCommandService(db_session)

    assert service.bulk_actions([], "activate").error_messages == ["No events selected."]
    result = service.bulk_actions([draft_event.id], "publish")
    assert result.success_count == 0
    assert result.error_messages == ["Unknown action: publish"]

def test_bulk_ignores_repeated_ids(db_session, draft_event):
    result = EventCommandService(db_session).bulk_actions([draft_event.id, draft_event.id], "activate")
    assert result.success_count == 1

def test_bulk_close_then_archive(db_session, active_event):
    service = EventCommandService(db_session)
    service.bulk_actions([active_event.id], "close")
    service.bulk_actions([active_event.id], "archive")

    db_session.refresh(active_event)
    assert active_event.status == EventStatus.ARCHIVED

def test_deleting_event_removes_posts(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0])
    post_id = post.id

    db_session.delete(active_event)
    db_session.commit()

    assert db_session.get(Post, post_id) is None

def test_bulk_collects_failure_of_one_event_and_commits_the_rest(db_session, monkeypatch):
    events = [Event(name, name.lower()) for name in ("A", "B", "C")]
    db_session.add_all(events)
    db_session.commit()

    original_activate = Event.activate

    def flaky_activate(self):
        if self.name == "B":
            raise RuntimeError("storage hiccup")
        original_activate(self)

    monkeypatch.setattr(Event, "activate", flaky_activate)

    result = EventCommandService(db_session).bulk_actions([e.id for e in events], "activate")

    assert result.success_count == 2
    assert result.error_messages == ['Event "B": storage hiccup']
    db_session.expire_all()
    assert [e.status for e in events] == [EventStatus.ACTIVE, EventStatus.DRAFT, EventStatus.ACTIVE]
