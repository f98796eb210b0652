"""
API routers package.
"""
from gallery.routers.albums import router as albums_router
from gallery.routers.search import router as search_router
from gallery.routers.health import router as health_router

__all__ = ["albums_router", "search_router", "health_router"]
