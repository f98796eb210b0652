"""
Visibility rules for albums and photos.

Every rule exists in two forms that must agree:
- an in-memory check over a loaded entity (``is_*``)
- a SQLAlchemy expression that can be pushed into a query so rows the
  viewer may not see are never loaded

Album rules, first match wins:
1. admin: everything
2. logged in, single library: every non-hidden album
3. logged in: own albums, albums shared with the viewer, public non-hidden albums
4. anonymous: public non-hidden albums

Unset (NULL) flags never grant access.
"""
from typing import Collection

from sqlalchemy import ColumnElement, Select, and_, false, or_, select, true

from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.models.album import Album, album_shares
from gallery.models.photo import Photo


def is_album_visible(album: Album, viewer: ViewerContext, config: ConfigSnapshot) -> bool:
    if viewer.is_admin:
        return True
    
    if viewer.is_logged_in:
        if config.single_library:
            return album.viewable is True
        return (
            album.owner_id == viewer.user_id
            or viewer.user_id in album.shared_with_ids
            or album.is_publicly_viewable
        )
    
    return album.is_publicly_viewable


def _publicly_viewable() -> ColumnElement[bool]:
    return and_(Album.public.is_(True), Album.viewable.is_(True))


def album_visibility_filter(viewer: ViewerContext, config: ConfigSnapshot) -> ColumnElement[bool]:
    """WHERE clause over ``albums`` equivalent to is_album_visible()."""
    if viewer.is_admin:
        return true()
    
    if viewer.is_logged_in:
        if config.single_library:
            return Album.viewable.is_(True)
        shared_album_ids = (
            select(album_shares.c.album_id)
            .where(album_shares.c.user_id == viewer.user_id)
        )
        return or_(
            Album.owner_id == viewer.user_id,
            Album.id.in_(shared_album_ids),
            _publicly_viewable(),
        )
    
    return _publicly_viewable()


def visible_album_ids(viewer: ViewerContext, config: ConfigSnapshot) -> Select:
    """Subquery selecting the ids of every album the viewer may see."""
    return select(Album.id).where(album_visibility_filter(viewer, config))


def is_unsorted_or_public(photo: Photo, viewer: ViewerContext, config: ConfigSnapshot) -> bool:
    """
    Photos reachable without a visible album: unsorted photos (all of them
    for admins, own ones for uploaders) and, unless public photos are
    hidden, every public photo.
    """
    if viewer.is_admin:
        return photo.album_id is None
    
    if (
        viewer.can_upload
        and photo.album_id is None
        and photo.owner_id == viewer.user_id
    ):
        return True
    
    if not config.public_photos_hidden and photo.public is True:
        return True
    
    return False


def unsorted_or_public(viewer: ViewerContext, config: ConfigSnapshot) -> ColumnElement[bool]:
    """WHERE clause over ``photos`` equivalent to is_unsorted_or_public()."""
    if viewer.is_admin:
        return Photo.album_id.is_(None)
    
    clauses = []
    if viewer.can_upload:
        clauses.append(
            and_(Photo.album_id.is_(None), Photo.owner_id == viewer.user_id)
        )
    if not config.public_photos_hidden:
        clauses.append(Photo.public.is_(True))
    
    if not clauses:
        return false()
    return or_(*clauses)


def is_photo_visible(
    photo: Photo,
    visible_ids: Collection[int],
    viewer: ViewerContext,
    config: ConfigSnapshot,
) -> bool:
    """``visible_ids`` are the ids of the albums the viewer may see."""
    if photo.album_id is not None and photo.album_id in visible_ids:
        return True
    return is_unsorted_or_public(photo, viewer, config)


def photo_visibility_filter(viewer: ViewerContext, config: ConfigSnapshot) -> ColumnElement[bool]:
    """WHERE clause over ``photos`` equivalent to is_photo_visible()."""
    return or_(
        Photo.album_id.in_(visible_album_ids(viewer, config)),
        unsorted_or_public(viewer, config),
    )
