"""
Pydantic schemas package.
All schemas are exported here for easy import.
"""
from gallery.schemas.user import TokenPayload
from gallery.schemas.album import AlbumRecord, AlbumWithChildren
from gallery.schemas.photo import PhotoRecord, SearchResponse

__all__ = [
    "TokenPayload",
    "AlbumRecord",
    "AlbumWithChildren",
    "PhotoRecord",
    "SearchResponse",
]
