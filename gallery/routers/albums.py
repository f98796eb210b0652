"""
Albums router: visible album listing and album tree.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.database import get_db
from gallery.dependencies.viewer import get_config_snapshot, get_viewer
from gallery.schemas.album import AlbumRecord, AlbumWithChildren
from gallery.services.album_access import AlbumAccessResolver
from gallery.services.presenter import AlbumPresenter
from gallery.utils.metrics import album_listings_total

router = APIRouter(prefix="/albums", tags=["Albums"])


@router.get(
    "/",
    response_model=List[AlbumRecord],
    response_model_exclude_none=True,
    summary="List visible top-level albums",
)
async def list_albums(
    db: AsyncSession = Depends(get_db),
    viewer: ViewerContext = Depends(get_viewer),
    config: ConfigSnapshot = Depends(get_config_snapshot),
) -> List[AlbumRecord]:
    """
    Top-level albums the caller may see, in the configured album order.
    """
    albums = await AlbumAccessResolver(db).list_albums(viewer, config)
    album_listings_total.labels(role=viewer.role.value).inc()
    return AlbumPresenter().present_many(albums, viewer, config)


@router.get(
    "/{album_id}",
    response_model=AlbumWithChildren,
    response_model_exclude_none=True,
    summary="Get a visible album with its sub-albums",
)
async def get_album(
    album_id: int,
    db: AsyncSession = Depends(get_db),
    viewer: ViewerContext = Depends(get_viewer),
    config: ConfigSnapshot = Depends(get_config_snapshot),
) -> AlbumWithChildren:
    """
    A single album and its visible children.
    Albums the caller may not see are reported as missing.
    """
    resolver = AlbumAccessResolver(db)
    resolved = await resolver.get_album(album_id, viewer, config)
    if resolved is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Album not found",
        )
    
    presenter = AlbumPresenter()
    children = await resolver.list_children(album_id, viewer, config)
    record = presenter.present(resolved, viewer, config)
    return AlbumWithChildren(
        **record.model_dump(),
        albums=presenter.present_many(children, viewer, config),
    )
