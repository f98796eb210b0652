"""
Database models package.
All models are exported here for easy import.
"""
from gallery.models.user import User
from gallery.models.album import Album, PlainAlbum, TagAlbum, album_shares
from gallery.models.photo import Photo
from gallery.models.config_entry import ConfigEntry

__all__ = [
    "User",
    "Album",
    "PlainAlbum",
    "TagAlbum",
    "album_shares",
    "Photo",
    "ConfigEntry",
]
