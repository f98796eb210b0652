"""Tests for ConfigSnapshot typed access and defaults."""
import pytest

from gallery.core.snapshot import ConfigSnapshot, DEFAULTS
from gallery.exceptions import ConfigurationError


class TestDefaults:
    
    def test_missing_keys_use_documented_defaults(self):
        config = ConfigSnapshot()
        
        assert config.single_library is False
        assert config.public_photos_hidden is True
        assert config.full_photo is True
        assert config.downloadable is False
        assert config.share_button_visible is False
        assert config.get_value("sorting_Albums_col") == "created_at"
    
    def test_empty_value_uses_default(self):
        config = ConfigSnapshot({"public_photos_hidden": "  "})
        
        assert config.public_photos_hidden is True
    
    def test_none_values_are_dropped(self):
        config = ConfigSnapshot({"single_library": None})
        
        assert "single_library" not in config
        assert config.single_library is False
    
    def test_every_default_is_resolvable(self):
        config = ConfigSnapshot()
        
        for key in DEFAULTS:
            assert config.get_value(key) == DEFAULTS[key]


class TestTypedAccess:
    
    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", "yes", "on", " 1 "])
    def test_truthy(self, raw):
        assert ConfigSnapshot({"single_library": raw}).single_library is True
    
    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_falsy(self, raw):
        assert ConfigSnapshot({"single_library": raw}).single_library is False
    
    def test_unparseable_boolean_raises(self):
        config = ConfigSnapshot({"public_photos_hidden": "maybe"})
        
        with pytest.raises(ConfigurationError) as exc_info:
            config.public_photos_hidden
        
        assert exc_info.value.key == "public_photos_hidden"
    
    def test_unknown_key_without_default_raises(self):
        with pytest.raises(ConfigurationError):
            ConfigSnapshot().get_value("landing_page")
    
    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestImmutability:
    
    def test_item_assignment_fails(self):
        config = ConfigSnapshot({"single_library": "0"})
        
        with pytest.raises(TypeError):
            config["single_library"] = "1"
    
    def test_source_mapping_changes_do_not_leak(self):
        source = {"single_library": "0"}
        config = ConfigSnapshot(source)
        
        source["single_library"] = "1"
        
        assert config.single_library is False
    
    def test_with_values_returns_new_snapshot(self):
        config = ConfigSnapshot({"single_library": "0"})
        
        changed = config.with_values(single_library="1")
        
        assert config.single_library is False
        assert changed.single_library is True
        assert dict(changed) == {"single_library": "1"}
