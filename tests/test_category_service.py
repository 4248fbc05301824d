"""
Tests for category management and ordering
"""

import pytest

from eventboard.domain.errors import (
    CategoryHasApprovedPostsError,
    CategoryNotFoundError,
    DuplicateCategoryNameError,
)
from eventboard.models import Event, Post
from eventboard.services.category_service import CategoryService
from eventboard.services.post_service import PostModerationService

def test_new_categories_are_appended_in_steps_of_ten(db_session, draft_event):
    service = CategoryService(db_session)
    first = service.create_category(draft_event, "Tech", "#3366ff")
    second = service.create_category(draft_event, "Design", "#ff6633", "Visual things")

    assert first.sort_order == 10
    assert second.sort_order == 20
    assert [c.name for c in service.list_for_event(draft_event)] == ["Tech", "Design"]

def test_category_names_are_unique_per_event(db_session, draft_event, active_event):
    service = CategoryService(db_session)
    service.create_category(draft_event, "Tech", "#3366ff")

    with pytest.raises(DuplicateCategoryNameError):
        service.create_category(draft_event, "Tech", "#000000")

    # "Design" also exists in the other event
    assert service.create_category(draft_event, "Design", "#ff6633").event_id == draft_event.id

def test_update_category_rename_conflict(db_session, active_event):
    service = CategoryService(db_session)
    tech, design = service.list_for_event(active_event)

    with pytest.raises(DuplicateCategoryNameError):
        service.update_category(design, name="Tech")

    updated = service.update_category(design, name="UX", color="#111111")
    assert updated.name == "UX"
    assert updated.color == "#111111"

def test_get_for_event_checks_ownership(db_session, draft_event, active_event):
    service = CategoryService(db_session)
    foreign = active_event.categories[0]

    with pytest.raises(CategoryNotFoundError):
        service.get_for_event(draft_event, foreign.id)
    assert service.get_for_event(active_event, foreign.id) is foreign

def test_delete_refused_with_approved_posts(db_session, active_event, make_post):
    tech = active_event.categories[0]
    post = make_post(active_event, tech)
    PostModerationService(db_session).approve(post.id, "mod@example.com")

    with pytest.raises(CategoryHasApprovedPostsError) as exc_info:
        CategoryService(db_session).delete_category(tech)

    assert exc_info.value.approved_count == 1
    assert "Tech" in exc_info.value.message

def test_delete_cascades_unapproved_posts(db_session, active_event, make_post):
    tech = active_event.categories[0]
    post = make_post(active_event, tech)
    post_id = post.id

    CategoryService(db_session).delete_category(tech)

    assert db_session.get(Post, post_id) is None
    assert [c.name for c in CategoryService(db_session).list_for_event(active_event)] == ["Design"]

def test_reorder_with_explicit_sort_orders(db_session, active_event):
    service = CategoryService(db_session)
    tech, design = service.list_for_event(active_event)

    reordered = service.reorder(active_event, {tech.id: 30, design.id: 5})

    assert [(c.name, c.sort_order) for c in reordered] == [("Design", 5), ("Tech", 30)]

def test_reorder_by_position(db_session, active_event):
    service = CategoryService(db_session)
    tech, design = service.list_for_event(active_event)

    reordered = service.reorder_by_position(active_event, [design.id, tech.id])

    assert [(c.name, c.sort_order) for c in reordered] == [("Design", 10), ("Tech", 20)]

def test_reorder_is_all_or_nothing(db_session, active_event):
    other = Event("Other", "other")
    db_session.add(other)
    db_session.commit()
    foreign = CategoryService(db_session).create_category(other, "Foreign", "#000000")

    service = CategoryService(db_session)
    tech, design = service.list_for_event(active_event)

    with pytest.raises(CategoryNotFoundError):
        service.reorder(active_event, {tech.id: 50, foreign.id: 60})

    assert [(c.name, c.sort_order) for c in service.list_for_event(active_event)] == [
        ("Tech", 10),
        ("Design", 20),
    ]
    db_session.refresh(foreign)
    assert foreign.sort_order == 10
