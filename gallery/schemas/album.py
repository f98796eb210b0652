"""
Album records returned to callers.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AlbumRecord(BaseModel):
    """
    External view of a visible album.
    Flags are the effective values; ``owner_name`` is only set for logged
    in viewers.
    """
    
    id: int
    title: str
    description: Optional[str] = None
    owner_id: int
    
    public: bool
    viewable: bool
    nsfw: bool = False
    requires_link: bool = False
    has_password: bool = False
    
    full_photo: bool
    downloadable: bool
    share_button_visible: bool
    sorting_col: str
    sorting_order: str
    
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    # Plain albums only
    parent_id: Optional[int] = None
    # Tag albums only
    show_tags: Optional[str] = None
    
    owner_name: Optional[str] = None


class AlbumWithChildren(AlbumRecord):
    """Album with its visible sub-albums."""
    
    albums: List[AlbumRecord] = []
