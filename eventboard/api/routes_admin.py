"""
Admin API routes - requires authentication
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from eventboard.core.db import get_db
from eventboard.domain.status import EventStatus, PostStatus
from eventboard.models import BackofficeUser, Event, Post
from eventboard.schemas.event import (
    EventCreate, EventUpdate, EventDuplicate, EventResponse, EventDetail,
    BulkActionRequest, BulkActionResponse
)
from eventboard.schemas.category import CategoryCreate, CategoryUpdate, CategoryReorder, CategoryResponse
from eventboard.schemas.post import PostResponse, ModerationRequest, InterestResponse
from eventboard.services.category_service import CategoryService
from eventboard.services.event_service import EventCommandService, EventQueryService
from eventboard.services.export_service import ExportService
from eventboard.services.interest_service import InterestSubmissionService
from eventboard.services.moderation_service import ModerationQueryService
from eventboard.services.post_service import PostModerationService, PostQueryService
from eventboard.utils.security import get_current_user, require_admin
from eventboard.utils.responses import success_response

router = APIRouter()

def _event_data(event: Event) -> dict:
    return EventResponse.model_validate(event).model_dump()

def _post_data(post: Post) -> dict:
    return {
        **PostResponse.model_validate(post).model_dump(),
        "category_name": post.category.name,
        "interest_count": post.interest_count()
    }

# -------- dashboard --------

@router.get("/dashboard")
async def dashboard(
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """Moderation statistics, pending posts and recent activity"""
    moderation = ModerationQueryService(db)
    return success_response(
        message="Dashboard retrieved successfully",
        data={
            "stats": moderation.get_dashboard_stats(),
            "event_status_counts": EventQueryService(db).get_status_counts(),
            "pending_posts": [_post_data(post) for post in moderation.get_pending_posts()],
            "recent_activity": moderation.get_recent_moderation_activity()
        }
    )

# -------- events --------

@router.get("/events")
async def list_events(
    status: Optional[EventStatus] = Query(None),
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """List events, newest first, optionally filtered by status"""
    events = EventQueryService(db).list_events(status)
    return success_response(
        message="Events retrieved successfully",
        data=[_event_data(event) for event in events]
    )

@router.post("/events", status_code=201)
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Create a draft event; a taken slug gets a numeric suffix"""
    event = EventCommandService(db).create_event(
        event_data.name,
        event_data.slug,
        description=event_data.description,
        event_date=event_data.event_date,
        location=event_data.location,
        make_template=event_data.make_template
    )
    return success_response(
        message="Event created successfully",
        data=_event_data(event),
        status_code=201
    )

@router.get("/events/templates")
async def list_templates(
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """Events flagged as templates"""
    templates = EventQueryService(db).find_templates()
    return success_response(
        message="Templates retrieved successfully",
        data=[_event_data(event) for event in templates]
    )

@router.post("/events/bulk-actions")
async def bulk_actions(
    request_data: BulkActionRequest,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Activate, close, archive or delete several events at once"""
    result = EventCommandService(db).bulk_actions(request_data.event_ids, request_data.action)
    response = BulkActionResponse(
        success_count=result.success_count,
        error_count=len(result.error_messages),
        error_messages=result.error_messages
    )
    return success_response(
        message=f"{result.success_count} event(s) processed",
        data=response.model_dump()
    )

@router.get("/events/{slug}")
async def get_event_details(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """Get detailed event information"""
    queries = EventQueryService(db)
    event = queries.get_by_slug(slug)
    detail = EventDetail(
        **_event_data(event),
        post_stats=queries.get_post_stats(event)
    )
    return success_response(
        message="Event details retrieved successfully",
        data={
            **detail.model_dump(),
            "categories": [
                CategoryResponse.model_validate(category).model_dump()
                for category in CategoryService(db).list_for_event(event)
            ],
            "is_draft_and_empty": event.is_draft_and_empty()
        }
    )

@router.patch("/events/{slug}")
async def update_event(
    slug: str,
    event_data: EventUpdate,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Update event fields; omitted fields are left unchanged"""
    event = EventQueryService(db).get_by_slug(slug)
    event = EventCommandService(db).update_event(
        event,
        name=event_data.name,
        slug=event_data.slug,
        description=event_data.description,
        event_date=event_data.event_date,
        location=event_data.location
    )
    return success_response(message="Event updated successfully", data=_event_data(event))

@router.delete("/events/{slug}")
async def delete_event(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Delete an event; only empty drafts can go"""
    event = EventQueryService(db).get_by_slug(slug)
    EventCommandService(db).delete_event(event)
    return success_response(message="Event deleted successfully")

@router.post("/events/{slug}/activate")
async def activate_event(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    event = EventQueryService(db).get_by_slug(slug)
    event = EventCommandService(db).activate(event)
    return success_response(message=f"Event is {event.status.label}", data=_event_data(event))

@router.post("/events/{slug}/close")
async def close_event(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    event = EventQueryService(db).get_by_slug(slug)
    event = EventCommandService(db).close(event)
    return success_response(message=f"Event is {event.status.label}", data=_event_data(event))

@router.post("/events/{slug}/archive")
async def archive_event(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    event = EventQueryService(db).get_by_slug(slug)
    event = EventCommandService(db).archive(event)
    return success_response(message=f"Event is {event.status.label}", data=_event_data(event))

@router.post("/events/{slug}/duplicate", status_code=201)
async def duplicate_event(
    slug: str,
    duplicate_data: EventDuplicate,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Copy an event (or template) into a new draft"""
    source = EventQueryService(db).get_by_slug(slug)
    duplicate = EventCommandService(db).duplicate_event(
        source,
        duplicate_data.name,
        duplicate_data.slug,
        copy_categories=duplicate_data.copy_categories,
        make_template=duplicate_data.make_template
    )
    return success_response(
        message="Event duplicated successfully",
        data=_event_data(duplicate),
        status_code=201
    )

@router.post("/events/{slug}/toggle-template")
async def toggle_template(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    event = EventQueryService(db).get_by_slug(slug)
    event = EventCommandService(db).toggle_template(event)
    return success_response(message="Template flag updated", data=_event_data(event))

@router.get("/events/{slug}/posts")
async def list_event_posts(
    slug: str,
    status: Optional[PostStatus] = Query(None),
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """All posts of an event, optionally filtered by moderation status"""
    event = EventQueryService(db).get_by_slug(slug)
    posts_service = PostQueryService(db)
    if status is None:
        posts = posts_service.find_by_event(event)
    else:
        posts = posts_service.find_by_event_and_status(event, status)
    return success_response(
        message="Posts retrieved successfully",
        data=[_post_data(post) for post in posts]
    )

@router.get("/events/{slug}/export.xlsx")
async def export_event(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """Download posts and interests of a closed or archived event"""
    event = EventQueryService(db).get_by_slug(slug)
    excel_bytes = ExportService(db).export_event(event)
    return Response(
        content=excel_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=event_{event.slug}.xlsx"}
    )

# -------- categories --------

@router.get("/events/{slug}/categories")
async def list_categories(
    slug: str,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    event = EventQueryService(db).get_by_slug(slug)
    categories = CategoryService(db).list_for_event(event)
    return success_response(
        message="Categories retrieved successfully",
        data=[CategoryResponse.model_validate(category).model_dump() for category in categories]
    )

@router.post("/events/{slug}/categories", status_code=201)
async def create_category(
    slug: str,
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    event = EventQueryService(db).get_by_slug(slug)
    category = CategoryService(db).create_category(
        event, category_data.name, category_data.color, category_data.description
    )
    return success_response(
        message="Category created successfully",
        data=CategoryResponse.model_validate(category).model_dump(),
        status_code=201
    )

@router.post("/events/{slug}/categories/reorder")
async def reorder_categories(
    slug: str,
    reorder_data: CategoryReorder,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Reorder categories from a full id list or an explicit id -> sort order map"""
    event = EventQueryService(db).get_by_slug(slug)
    categories_service = CategoryService(db)

    if reorder_data.category_order is not None:
        categories = categories_service.reorder_by_position(event, reorder_data.category_order)
    elif reorder_data.sort_orders is not None:
        categories = categories_service.reorder(event, reorder_data.sort_orders)
    else:
        raise HTTPException(status_code=422, detail="Either category_order or sort_orders is required")

    return success_response(
        message="Categories reordered successfully",
        data=[CategoryResponse.model_validate(category).model_dump() for category in categories]
    )

@router.patch("/events/{slug}/categories/{category_id}")
async def update_category(
    slug: str,
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    event = EventQueryService(db).get_by_slug(slug)
    categories_service = CategoryService(db)
    category = categories_service.get_for_event(event, category_id)
    category = categories_service.update_category(
        category,
        name=category_data.name,
        color=category_data.color,
        description=category_data.description,
        sort_order=category_data.sort_order
    )
    return success_response(
        message="Category updated successfully",
        data=CategoryResponse.model_validate(category).model_dump()
    )

@router.delete("/events/{slug}/categories/{category_id}")
async def delete_category(
    slug: str,
    category_id: int,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(require_admin)
):
    """Delete a category together with its posts, unless one of them is approved"""
    event = EventQueryService(db).get_by_slug(slug)
    categories_service = CategoryService(db)
    category = categories_service.get_for_event(event, category_id)
    categories_service.delete_category(category)
    return success_response(message="Category deleted successfully")

# -------- moderation --------

@router.get("/moderation")
async def moderation_queue(
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """Submitted posts of active events, oldest first"""
    posts = PostQueryService(db).find_submitted_for_moderation()
    return success_response(
        message="Moderation queue retrieved successfully",
        data=[_post_data(post) for post in posts]
    )

@router.get("/posts/{post_id}")
async def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    """Post with the interests declared on it"""
    post = PostQueryService(db).get_by_id(post_id)
    interests = InterestSubmissionService(db).get_interests_by_post(post)
    return success_response(
        message="Post retrieved successfully",
        data={
            **_post_data(post),
            "interests": [InterestResponse.model_validate(interest).model_dump() for interest in interests]
        }
    )

@router.post("/posts/{post_id}/approve")
async def approve_post(
    post_id: int,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    post = PostModerationService(db).approve(post_id, user.email)
    return success_response(message="Post approved", data=_post_data(post))

@router.post("/posts/{post_id}/reject")
async def reject_post(
    post_id: int,
    moderation: Optional[ModerationRequest] = None,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    notes = moderation.notes if moderation else None
    post = PostModerationService(db).reject(post_id, user.email, notes)
    return success_response(message="Post rejected", data=_post_data(post))

@router.post("/posts/{post_id}/archive")
async def archive_post(
    post_id: int,
    db: Session = Depends(get_db),
    user: BackofficeUser = Depends(get_current_user)
):
    post = PostModerationService(db).archive(post_id)
    return success_response(message="Post archived", data=_post_data(post))
