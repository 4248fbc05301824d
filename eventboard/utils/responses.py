"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from eventboard.domain.errors import DomainError, ErrorCode
from eventboard.schemas.common import StandardResponse, ErrorResponse

# HTTP status for each domain error; anything unlisted is a 409 conflict
ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.POST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SUBMISSIONS_CLOSED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INTERESTS_CLOSED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EXPORT_NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PRIVACY_NOT_ACCEPTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
}

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=data
    )
    return JSONResponse(
        content=jsonable_encoder(response),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=jsonable_encoder(response),
        status_code=status_code
    )

def domain_error_response(error: DomainError) -> JSONResponse:
    """Translate a domain error into the standard error envelope"""
    return error_response(
        message=error.message,
        error_code=error.code.value,
        status_code=ERROR_STATUS.get(error.code, status.HTTP_409_CONFLICT)
    )

def rate_limit_error():
    """Create rate limit error"""
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Please try again later."
    )
