"""
Photo records returned to callers.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class PhotoRecord(BaseModel):
    """Schema for a visible photo."""
    
    id: int
    album_id: Optional[int] = None
    owner_id: int
    public: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[str] = None
    location: Optional[str] = None
    model: Optional[str] = None
    taken_at: Optional[datetime] = None
    
    model_config = ConfigDict(from_attributes=True)


class SearchResponse(BaseModel):
    """Schema for search results."""
    
    terms: List[str]
    photos: List[PhotoRecord]
