"""
Album access service: visible album listings and album-tree traversal.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.access import ResolvedAlbum, effective_attributes
from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.core.visibility import album_visibility_filter
from gallery.exceptions import ConfigurationError
from gallery.models.album import Album

logger = logging.getLogger("gallery.access")

# Columns albums may be listed by (sorting_Albums_col)
ALBUM_SORT_COLUMNS = {
    "id": Album.id,
    "title": Album.title,
    "description": Album.description,
    "public": Album.public,
    "created_at": Album.created_at,
    "updated_at": Album.updated_at,
}

# parent_id belongs to plain albums; tag albums keep it NULL in the shared table
_parent_id = Album.__table__.c.parent_id


class AlbumAccessResolver:
    """
    Loads the albums a viewer may see.
    Visibility is applied inside the query, never after loading.
    """
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    @staticmethod
    def album_ordering(config: ConfigSnapshot) -> list:
        """ORDER BY clauses from sorting_Albums_col / sorting_Albums_order."""
        col_name = config.get_value("sorting_Albums_col")
        order = config.get_value("sorting_Albums_order").upper()
        
        column = ALBUM_SORT_COLUMNS.get(col_name)
        if column is None:
            raise ConfigurationError("sorting_Albums_col", f"cannot sort albums by {col_name!r}")
        if order not in ("ASC", "DESC"):
            raise ConfigurationError("sorting_Albums_order", f"unknown order {order!r}")
        
        primary = column.asc() if order == "ASC" else column.desc()
        # id as tie breaker keeps listings deterministic
        return [primary, Album.id.asc()]
    
    def _to_resolved(self, albums: List[Album], config: ConfigSnapshot) -> List[ResolvedAlbum]:
        return [
            ResolvedAlbum(album=album, attributes=effective_attributes(album, config))
            for album in albums
        ]
    
    async def list_albums(
        self,
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> List[ResolvedAlbum]:
        """
        Get the visible top-level albums.
        
        Args:
            viewer: Requesting identity
            config: Settings snapshot for this request
            
        Returns:
            Resolved albums in configured album order (possibly empty)
        """
        result = await self.db.execute(
            select(Album)
            .where(_parent_id.is_(None))
            .where(album_visibility_filter(viewer, config))
            .order_by(*self.album_ordering(config))
        )
        albums = list(result.scalars().all())
        logger.debug(
            "Albums listed",
            extra={"event": "access", "role": viewer.role.value, "count": len(albums)},
        )
        return self._to_resolved(albums, config)
    
    async def get_album(
        self,
        album_id: int,
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> Optional[ResolvedAlbum]:
        """
        Get a single album if the viewer may see it.
        
        Returns:
            ResolvedAlbum, or None when the album does not exist or is not visible
        """
        result = await self.db.execute(
            select(Album)
            .where(Album.id == album_id)
            .where(album_visibility_filter(viewer, config))
        )
        album = result.scalar_one_or_none()
        if album is None:
            return None
        return ResolvedAlbum(album=album, attributes=effective_attributes(album, config))
    
    async def list_children(
        self,
        parent_id: int,
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> List[ResolvedAlbum]:
        """Get the visible direct sub-albums of ``parent_id``."""
        result = await self.db.execute(
            select(Album)
            .where(_parent_id == parent_id)
            .where(album_visibility_filter(viewer, config))
            .order_by(*self.album_ordering(config))
        )
        return self._to_resolved(list(result.scalars().all()), config)
