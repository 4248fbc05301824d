"""
Tests for post submission and moderation
"""

import pytest

from eventboard.domain.errors import (
    CategoryNotFoundError,
    PostNotFoundError,
    PostNotModeratableError,
    PrivacyNotAcceptedError,
    SubmissionsClosedError,
)
from eventboard.domain.status import PostStatus
from eventboard.models import Category, Event, Interest, Post
from eventboard.services.event_service import EventCommandService
from eventboard.services.post_service import PostModerationService, PostQueryService

def test_submitted_post_defaults(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0], "Talk A", author_name="Alice")

    assert post.status == PostStatus.SUBMITTED
    assert post.event_id == active_event.id
    assert post.ip_address == "127.0.0.1"
    assert post.user_agent == "Unknown"
    assert post.moderated_at is None
    # Name stays hidden unless the author opted in
    assert post.display_author() is None

def test_submission_keeps_audit_trail(db_session, active_event, make_post):
    post = make_post(
        active_event, active_event.categories[0],
        author_name="Alice", show_author_name=True,
        client_ip="10.0.0.7", user_agent="pytest-agent"
    )
    assert post.ip_address == "10.0.0.7"
    assert post.user_agent == "pytest-agent"
    assert post.display_author() == "Alice"

def test_submission_requires_active_event(db_session, draft_event, make_post):
    category = Category(draft_event, "Tech", "#3366ff")
    db_session.add(category)
    db_session.commit()

    with pytest.raises(SubmissionsClosedError):
        make_post(draft_event, category)

def test_submission_requires_category_of_event(db_session, active_event, make_post):
    other = Event("Other", "other")
    foreign = Category(other, "Foreign", "#000000")
    db_session.add(other)
    db_session.commit()

    with pytest.raises(CategoryNotFoundError):
        make_post(active_event, foreign)

def test_submission_requires_privacy_consent(db_session, active_event, make_post):
    with pytest.raises(PrivacyNotAcceptedError):
        make_post(active_event, active_event.categories[0], privacy_accepted=False)

def test_approve_records_moderator(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0])

    approved = PostModerationService(db_session).approve(post.id, "mod@example.com")

    assert approved.status == PostStatus.APPROVED
    assert approved.moderated_by == "mod@example.com"
    assert approved.moderated_at is not None
    assert approved.is_publicly_visible()

def test_approved_post_can_still_be_rejected(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0])
    service = PostModerationService(db_session)
    service.approve(post.id, "mod@example.com")

    rejected = service.reject(post.id, "lead@example.com", "Off topic")

    assert rejected.status == PostStatus.REJECTED
    assert rejected.moderated_by == "lead@example.com"
    assert rejected.moderation_notes == "Off topic"

def test_rejected_post_is_final(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0])
    service = PostModerationService(db_session)
    service.reject(post.id, "mod@example.com")

    with pytest.raises(PostNotModeratableError):
        service.approve(post.id, "mod@example.com")

def test_reject_on_archived_post_changes_nothing():
    event = Event("Conf", "conf")
    category = Category(event, "Tech", "#3366ff")
    post = Post(event, category, "Talk", None, None, "a@example.com", False, "127.0.0.1", "Unknown")
    post.archive()

    post.reject("mod@example.com", "late")

    assert post.status == PostStatus.ARCHIVED
    assert post.moderated_at is None
    assert post.moderated_by is None
    assert post.moderation_notes is None

def test_archive_and_missing_posts(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0])
    service = PostModerationService(db_session)

    assert service.archive(post.id).status == PostStatus.ARCHIVED
    with pytest.raises(PostNotFoundError):
        service.approve(4242, "mod@example.com")

def test_moderation_queue_only_lists_active_events(db_session, active_event, make_post):
    make_post(active_event, active_event.categories[0], "First")
    make_post(active_event, active_event.categories[1], "Second")
    queries = PostQueryService(db_session)

    assert [p.title for p in queries.find_submitted_for_moderation()] == ["First", "Second"]

    EventCommandService(db_session).close(active_event)
    assert queries.find_submitted_for_moderation() == []

def test_approved_posts_grouped_in_category_order(db_session, active_event, make_post):
    tech, design = active_event.categories
    service = PostModerationService(db_session)
    for category, title in ((design, "Colour"), (tech, "Python"), (tech, "Rust")):
        service.approve(make_post(active_event, category, title).id, "mod@example.com")
    make_post(active_event, tech, "Pending")

    grouped = PostQueryService(db_session).get_approved_posts_grouped_by_category(active_event)

    assert list(grouped) == ["Tech", "Design"]
    assert sorted(p.title for p in grouped["Tech"]["posts"]) == ["Python", "Rust"]
    assert [p.title for p in grouped["Design"]["posts"]] == ["Colour"]

def test_public_post_lookup_hides_unapproved(db_session, active_event, make_post):
    post = make_post(active_event, active_event.categories[0])
    queries = PostQueryService(db_session)

    with pytest.raises(PostNotFoundError):
        queries.get_public_post(active_event, post.id)

    PostModerationService(db_session).approve(post.id, "mod@example.com")
    assert queries.get_public_post(active_event, post.id).id == post.id

def test_posts_move_between_categories():
    event = Event("Conf", "conf")
    tech = Category(event, "Tech", "#3366ff")
    design = Category(event, "Design", "#ff6633")
    post = Post(event, tech, "Talk", None, None, "a@example.com", False, "127.0.0.1", "Unknown")
    assert post in tech.posts

    tech.remove_post(post)
    assert post not in tech.posts

    design.add_post(post)
    design.add_post(post)
    assert post.category is design
    assert design.posts.count(post) == 1

def test_interest_links_and_moderation_notes():
    event = Event("Conf", "conf")
    category = Category(event, "Tech", "#3366ff")
    post = Post(event, category, "Talk", None, None, "a@example.com", False, "127.0.0.1", "Unknown")
    interest = Interest("Bob", "bob@example.com", True)

    post.add_interest(interest)
    assert interest.post is post
    assert post.interest_count() == 1

    post.remove_interest(interest)
    assert post.interest_count() == 0
    assert not post.has_interest_from_email("bob@example.com")

    post.set_moderation_notes("Needs a shorter abstract")
    assert post.moderation_notes == "Needs a shorter abstract"
    assert post.updated_at is not None
