"""
Prometheus metrics for the gallery access layer.
"""
from prometheus_client import REGISTRY, Counter

# --- Stability ---
db_errors_total = Counter(
    "gallery_db_errors_total",
    "Total database session/transaction errors",
    registry=REGISTRY,
)
config_errors_total = Counter(
    "gallery_config_errors_total",
    "Configuration inconsistencies surfaced to callers",
    ["key"],
    registry=REGISTRY,
)

# --- Access ---
album_listings_total = Counter(
    "gallery_album_listings_total",
    "Album listings served, by viewer role",
    ["role"],  # role: anonymous | user | admin
    registry=REGISTRY,
)
photo_searches_total = Counter(
    "gallery_photo_searches_total",
    "Photo searches served, by viewer role",
    ["role"],
    registry=REGISTRY,
)
exceptions_total = Counter(
    "gallery_exceptions_total",
    "Total unhandled exceptions",
    registry=REGISTRY,
)
