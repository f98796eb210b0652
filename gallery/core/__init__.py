"""
Pure access decisions: viewer identity, configuration snapshot,
visibility predicates and effective album attributes.
"""
from gallery.core.viewer import ViewerContext, ViewerRole
from gallery.core.snapshot import ConfigSnapshot, DEFAULTS
from gallery.core.visibility import (
    album_visibility_filter,
    is_album_visible,
    is_photo_visible,
    is_unsorted_or_public,
    photo_visibility_filter,
    unsorted_or_public,
    visible_album_ids,
)
from gallery.core.access import (
    EffectiveAttributes,
    ResolvedAlbum,
    effective_attributes,
    resolve,
)

__all__ = [
    "ViewerContext",
    "ViewerRole",
    "ConfigSnapshot",
    "DEFAULTS",
    "album_visibility_filter",
    "is_album_visible",
    "is_photo_visible",
    "is_unsorted_or_public",
    "photo_visibility_filter",
    "unsorted_or_public",
    "visible_album_ids",
    "EffectiveAttributes",
    "ResolvedAlbum",
    "effective_attributes",
    "resolve",
]
