"""
Security utilities and authentication
"""

from fastapi import HTTPException, Depends, Header, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import time
from collections import defaultdict
from sqlalchemy.orm import Session

from eventboard.core.config import settings
from eventboard.core.db import get_db
from eventboard.models import BackofficeUser
from eventboard.services.repositories import BackofficeUserRepo

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

security = HTTPBearer()

def verify_admin_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verify admin authentication token"""
    if credentials.credentials != settings.ADMIN_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token"
        )
    return credentials.credentials

def get_current_user(
    token: str = Depends(verify_admin_token),
    x_backoffice_user: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> BackofficeUser:
    """Resolve the backoffice user acting on this request"""
    if not x_backoffice_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Backoffice-User header"
        )
    user = BackofficeUserRepo(db).find_by_email(x_backoffice_user)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unknown or inactive backoffice user"
        )
    return user

def require_admin(user: BackofficeUser = Depends(get_current_user)) -> BackofficeUser:
    """Only administrators may change events and categories"""
    if not user.role.can_manage_events():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required"
        )
    return user

def rate_limit_check(client_ip: str, limit: Optional[int] = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE
    
    current_time = time.time()
    minute_ago = current_time - 60
    
    # Forget clients with no request inside the window
    for ip in [ip for ip, times in rate_limiter.items() if not times or times[-1] <= minute_ago]:
        del rate_limiter[ip]

    # Clean old requests
    rate_limiter[client_ip] = [
        req_time for req_time in rate_limiter[client_ip]
        if req_time > minute_ago
    ]

    # Check limit
    if len(rate_limiter[client_ip]) >= limit:
        return False
    
    # Add current request
    rate_limiter[client_ip].append(current_time)
    return True

def get_client_ip(request: Request) -> Optional[str]:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    
    # Check for real IP header
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    
    # Fall back to direct client IP
    return request.client.host if request.client else None

def get_user_agent(request: Request) -> Optional[str]:
    """User-Agent header, truncated to the stored column size"""
    user_agent = request.headers.get("User-Agent")
    return user_agent[:500] if user_agent else None
