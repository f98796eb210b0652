"""
Services package.
Database-backed access operations built on gallery.core.
"""
from gallery.services.config_store import ConfigStore
from gallery.services.album_access import AlbumAccessResolver
from gallery.services.search import SearchEngine
from gallery.services.presenter import AlbumPresenter

__all__ = [
    "ConfigStore",
    "AlbumAccessResolver",
    "SearchEngine",
    "AlbumPresenter",
]
