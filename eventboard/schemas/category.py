"""
Category-related Pydantic schemas
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

COLOR_PATTERN = r"^#[a-fA-F0-9]{6}$"

class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(..., pattern=COLOR_PATTERN)
    description: Optional[str] = Field(None, max_length=500)

class CategoryUpdate(BaseModel):
    """Schema for updating a category"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)
    description: Optional[str] = Field(None, max_length=500)
    sort_order: Optional[int] = None

class CategoryReorder(BaseModel):
    """Either the full id order (drag and drop) or an explicit id -> sort order map"""
    category_order: Optional[List[int]] = None
    sort_orders: Optional[Dict[int, int]] = None

class CategoryResponse(BaseModel):
    """Category response schema"""
    id: int
    event_id: int
    name: str
    description: Optional[str] = None
    color: str
    sort_order: int
    created_at: datetime
    
    class Config:
        from_attributes = True
