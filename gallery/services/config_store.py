"""
Config store backed by the ``configs`` table.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.snapshot import ConfigSnapshot, DEFAULTS
from gallery.models.config_entry import BOOL, ConfigEntry

logger = logging.getLogger("gallery.config")

_BOOL_KEYS = frozenset({
    "single_library",
    "public_photos_hidden",
    "full_photo",
    "downloadable",
    "share_button_visible",
})


class ConfigStore:
    """
    Reads gallery settings. Callers take one snapshot per request and pass
    it down so every rule in that request sees the same values.
    """
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def snapshot(self) -> ConfigSnapshot:
        """Load every setting into an immutable snapshot."""
        result = await self.db.execute(select(ConfigEntry.key, ConfigEntry.value))
        return ConfigSnapshot({key: value for key, value in result.all()})
    
    async def ensure_defaults(self) -> int:
        """
        Insert a row for every documented setting that is not stored yet.
        
        Returns:
            Number of rows inserted
        """
        result = await self.db.execute(select(ConfigEntry.key))
        existing = set(result.scalars().all())
        
        added = 0
        for key, value in DEFAULTS.items():
            if key in existing:
                continue
            self.db.add(ConfigEntry(
                key=key,
                value=value,
                cat="config",
                type_range=BOOL if key in _BOOL_KEYS else None,
                confidentiality=3 if key == "single_library" else 0,
            ))
            added += 1
        
        if added:
            await self.db.flush()
            logger.info("Config defaults inserted", extra={"event": "config", "count": added})
        return added
