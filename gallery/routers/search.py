"""
Search router.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.database import get_db
from gallery.dependencies.viewer import get_config_snapshot, get_viewer
from gallery.schemas.photo import SearchResponse
from gallery.services.presenter import AlbumPresenter
from gallery.services.search import SearchEngine, split_terms
from gallery.utils.metrics import photo_searches_total

router = APIRouter(prefix="/search", tags=["Search"])


@router.get(
    "/",
    response_model=SearchResponse,
    summary="Search visible photos",
)
async def search_photos(
    q: Optional[str] = Query(None, max_length=200, description="Whitespace separated terms"),
    db: AsyncSession = Depends(get_db),
    viewer: ViewerContext = Depends(get_viewer),
    config: ConfigSnapshot = Depends(get_config_snapshot),
) -> SearchResponse:
    """
    Photos matching every term in title, description, tags, location,
    camera model or capture date. Results are ordered by id.
    """
    terms = split_terms(q)
    photos = await SearchEngine(db).search(terms, viewer, config)
    photo_searches_total.labels(role=viewer.role.value).inc()
    return SearchResponse(
        terms=terms,
        photos=[AlbumPresenter.present_photo(photo) for photo in sorted(photos, key=lambda p: p.id)],
    )
