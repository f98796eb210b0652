"""
Utility functions package.
"""
from gallery.utils.security import (
    create_access_token,
    decode_access_token,
)

__all__ = [
    "create_access_token",
    "decode_access_token",
]
