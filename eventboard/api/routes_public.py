"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from eventboard.core.db import get_db
from eventboard.models import Event, Post
from eventboard.schemas.event import EventResponse
from eventboard.schemas.category import CategoryResponse
from eventboard.schemas.post import PostCreate, PublicPost, InterestCreate
from eventboard.services.event_service import EventQueryService
from eventboard.services.interest_service import InterestSubmissionService
from eventboard.services.post_service import PostQueryService, PostSubmissionService
from eventboard.utils.security import rate_limit_check, get_client_ip, get_user_agent
from eventboard.utils.responses import success_response, rate_limit_error

router = APIRouter()

def _public_post(post: Post) -> dict:
    return PublicPost(
        id=post.id,
        title=post.title,
        content=post.content,
        author=post.display_author(),
        interest_count=post.interest_count()
    ).model_dump()

def _check_rate_limit(request: Request) -> str:
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        raise rate_limit_error()
    return client_ip

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/events")
async def list_events(db: Session = Depends(get_db)):
    """Events visible to the public (everything but archived)"""
    events = EventQueryService(db).find_publicly_visible()
    return success_response(
        message="Events retrieved successfully",
        data=[EventResponse.model_validate(event).model_dump() for event in events]
    )

@router.get("/events/{slug}")
async def get_event(slug: str, db: Session = Depends(get_db)):
    """Event page: every category with its approved posts"""
    event = EventQueryService(db).get_public_event(slug)
    grouped = PostQueryService(db).get_approved_posts_grouped_by_category(event)

    categories = []
    for category in event.categories:
        entry = grouped.get(category.name, {"posts": []})
        categories.append({
            **CategoryResponse.model_validate(category).model_dump(),
            "posts": [_public_post(post) for post in entry["posts"]]
        })

    return success_response(
        message="Event retrieved successfully",
        data={
            "event": EventResponse.model_validate(event).model_dump(),
            "allows_submissions": event.allows_submissions(),
            "allows_interests": event.allows_interests(),
            "categories": categories
        }
    )

@router.post("/events/{slug}/posts", status_code=201)
async def submit_post(
    slug: str,
    post_data: PostCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    """Submit a post; it stays hidden until a moderator approves it"""
    client_ip = _check_rate_limit(request)
    event: Event = EventQueryService(db).get_public_event(slug)

    post = PostSubmissionService(db).submit_post(
        event,
        post_data.category_id,
        post_data.title,
        post_data.content,
        post_data.author_email,
        author_name=post_data.author_name,
        show_author_name=post_data.show_author_name,
        privacy_accepted=post_data.privacy_accepted,
        client_ip=client_ip,
        user_agent=get_user_agent(request)
    )

    return success_response(
        message="Post submitted successfully and awaits moderation",
        data={"id": post.id, "status": post.status.value},
        status_code=201
    )

@router.get("/events/{slug}/posts/{post_id}")
async def get_post(slug: str, post_id: int, db: Session = Depends(get_db)):
    """Single approved post page"""
    event = EventQueryService(db).get_public_event(slug)
    post = PostQueryService(db).get_public_post(event, post_id)

    return success_response(
        message="Post retrieved successfully",
        data={
            **_public_post(post),
            "category": post.category.name,
            "allows_interests": event.allows_interests()
        }
    )

@router.get("/events/{slug}/posts/{post_id}/interest")
async def get_interest_count(slug: str, post_id: int, db: Session = Depends(get_db)):
    """Number of people who declared interest in an approved post"""
    event = EventQueryService(db).get_public_event(slug)
    post = PostQueryService(db).get_public_post(event, post_id)

    return success_response(
        message="Interest count retrieved successfully",
        data={"post_id": post.id, "interest_count": post.interest_count()}
    )

@router.post("/events/{slug}/posts/{post_id}/interest", status_code=201)
async def declare_interest(
    slug: str,
    post_id: int,
    interest_data: InterestCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    """Declare interest in an approved post, once per email"""
    client_ip = _check_rate_limit(request)
    event = EventQueryService(db).get_public_event(slug)
    post = PostQueryService(db).get_public_post(event, post_id)

    interest = InterestSubmissionService(db).submit_public_interest(
        event,
        post,
        interest_data.name,
        interest_data.email,
        interest_data.privacy_accepted,
        message=interest_data.message,
        client_ip=client_ip,
        user_agent=get_user_agent(request)
    )

    return success_response(
        message="Interest recorded successfully",
        data={"id": interest.id, "interest_count": post.interest_count()},
        status_code=201
    )
