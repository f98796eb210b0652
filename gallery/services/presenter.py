"""
Maps resolved albums and photos to their external records.
"""
from typing import Iterable, List, Optional

from gallery.core.access import ResolvedAlbum
from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.models.photo import Photo
from gallery.schemas.album import AlbumRecord
from gallery.schemas.photo import PhotoRecord


class AlbumPresenter:
    """
    Builds AlbumRecord / PhotoRecord values.
    The stored password and the album_type discriminator are never exposed.
    """
    
    @staticmethod
    def owner_name(
        resolved: ResolvedAlbum,
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> Optional[str]:
        """
        Owner shown to logged in viewers only. In single library mode the
        whole library is presented as the viewer's own.
        """
        if not viewer.is_logged_in:
            return None
        if config.single_library:
            return viewer.display_name
        owner = resolved.album.owner
        return owner.name() if owner is not None else None
    
    def present(
        self,
        resolved: ResolvedAlbum,
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> AlbumRecord:
        album = resolved.album
        attributes = resolved.attributes
        return AlbumRecord(
            id=album.id,
            title=album.title,
            description=album.description,
            owner_id=album.owner_id,
            public=album.public is True,
            viewable=album.viewable is True,
            nsfw=album.nsfw is True,
            requires_link=resolved.requires_link,
            has_password=resolved.has_password,
            full_photo=attributes.full_photo,
            downloadable=attributes.downloadable,
            share_button_visible=attributes.share_button_visible,
            sorting_col=attributes.sorting_col,
            sorting_order=attributes.sorting_order,
            created_at=album.created_at,
            updated_at=album.updated_at,
            parent_id=resolved.parent_id,
            show_tags=getattr(album, "show_tags", None),
            owner_name=self.owner_name(resolved, viewer, config),
        )
    
    def present_many(
        self,
        albums: Iterable[ResolvedAlbum],
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> List[AlbumRecord]:
        return [self.present(resolved, viewer, config) for resolved in albums]
    
    @staticmethod
    def present_photo(photo: Photo) -> PhotoRecord:
        return PhotoRecord.model_validate(photo)
