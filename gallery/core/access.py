"""
Effective album attributes and resolution of album collections.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.core.visibility import is_album_visible
from gallery.models.album import Album


@dataclass(frozen=True)
class EffectiveAttributes:
    """Album attributes after applying the global configuration."""
    
    full_photo: bool
    downloadable: bool
    share_button_visible: bool
    sorting_col: str
    sorting_order: str


def effective_attributes(album: Album, config: ConfigSnapshot) -> EffectiveAttributes:
    """
    A public album decides its own full photo, download and share button
    flags. Any other album uses the global settings.
    
    Photo sorting falls back to the global photo sort unless the album sets
    both column and order.
    """
    if album.public is True:
        full_photo = album.full_photo is True
        downloadable = album.downloadable is True
        share_button_visible = album.share_button_visible is True
    else:
        full_photo = config.full_photo
        downloadable = config.downloadable
        share_button_visible = config.share_button_visible
    
    if album.sorting_col and album.sorting_order:
        sorting_col, sorting_order = album.sorting_col, album.sorting_order
    else:
        sorting_col = config.get_value("sorting_Photos_col")
        sorting_order = config.get_value("sorting_Photos_order")
    
    return EffectiveAttributes(
        full_photo=full_photo,
        downloadable=downloadable,
        share_button_visible=share_button_visible,
        sorting_col=sorting_col,
        sorting_order=sorting_order,
    )


@dataclass(frozen=True)
class ResolvedAlbum:
    """
    A visible album with its effective attributes.
    
    ``has_password`` and ``requires_link`` are passed through untouched for
    the unlock step that follows visibility.
    """
    
    album: Album
    attributes: EffectiveAttributes
    
    @property
    def id(self) -> int:
        return self.album.id
    
    @property
    def has_password(self) -> bool:
        return self.album.has_password
    
    @property
    def requires_link(self) -> bool:
        return self.album.requires_link is True
    
    @property
    def parent_id(self) -> Optional[int]:
        return getattr(self.album, "parent_id", None)


def resolve(
    albums: Iterable[Album],
    viewer: ViewerContext,
    config: ConfigSnapshot,
) -> List[ResolvedAlbum]:
    """Keep the visible albums, in input order, with effective attributes."""
    return [
        ResolvedAlbum(album=album, attributes=effective_attributes(album, config))
        for album in albums
        if is_album_visible(album, viewer, config)
    ]
