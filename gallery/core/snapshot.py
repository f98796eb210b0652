"""
Immutable view of the gallery settings for one computation.
"""
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from gallery.exceptions import ConfigurationError

# Documented defaults for keys that may be absent from the configs table
DEFAULTS: Mapping[str, str] = MappingProxyType({
    "single_library": "0",
    "public_photos_hidden": "1",
    "full_photo": "1",
    "downloadable": "0",
    "share_button_visible": "0",
    "sorting_Photos_col": "taken_at",
    "sorting_Photos_order": "ASC",
    "sorting_Albums_col": "created_at",
    "sorting_Albums_order": "ASC",
})

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigSnapshot(Mapping[str, str]):
    """
    Raw string settings plus typed accessors.
    
    Missing or empty keys resolve to DEFAULTS. A key without a default or a
    boolean that cannot be parsed raises ConfigurationError.
    """
    
    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None):
        self._values = MappingProxyType(
            {k: v for k, v in (values or {}).items() if v is not None}
        )
    
    def __getitem__(self, key: str) -> str:
        return self._values[key]
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._values)
    
    def __len__(self) -> int:
        return len(self._values)
    
    def __repr__(self) -> str:
        return f"ConfigSnapshot({dict(self._values)!r})"
    
    def with_values(self, **overrides: Optional[str]) -> "ConfigSnapshot":
        """Copy with some keys replaced."""
        merged = dict(self._values)
        merged.update(overrides)
        return ConfigSnapshot(merged)
    
    def get_value(self, key: str) -> str:
        raw = self._values.get(key)
        if raw is None or not str(raw).strip():
            if key in DEFAULTS:
                return DEFAULTS[key]
            raise ConfigurationError(key, "setting is missing and has no default")
        return str(raw).strip()
    
    def get_bool(self, key: str) -> bool:
        value = self.get_value(key).lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ConfigurationError(key, f"expected a boolean, got {value!r}")
    
    @property
    def single_library(self) -> bool:
        return self.get_bool("single_library")
    
    @property
    def public_photos_hidden(self) -> bool:
        return self.get_bool("public_photos_hidden")
    
    @property
    def full_photo(self) -> bool:
        return self.get_bool("full_photo")
    
    @property
    def downloadable(self) -> bool:
        return self.get_bool("downloadable")
    
    @property
    def share_button_visible(self) -> bool:
        return self.get_bool("share_button_visible")
