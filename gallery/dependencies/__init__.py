"""
FastAPI dependencies.
"""
from gallery.dependencies.viewer import get_config_snapshot, get_viewer

__all__ = ["get_config_snapshot", "get_viewer"]
