"""Tests for ViewerContext."""
import pytest

from gallery.core.viewer import ViewerContext, ViewerRole
from gallery.models import User


class TestViewerContext:
    """Construction and capability queries."""
    
    def test_anonymous(self):
        viewer = ViewerContext.anonymous()
        
        assert viewer.role == ViewerRole.ANONYMOUS
        assert viewer.user_id is None
        assert viewer.is_logged_in is False
        assert viewer.is_admin is False
        assert viewer.can_upload is False
    
    def test_user(self):
        viewer = ViewerContext.user(7, can_upload=True, display_name="Gus")
        
        assert viewer.is_logged_in is True
        assert viewer.is_admin is False
        assert viewer.user_id == 7
        assert viewer.can_upload is True
    
    def test_admin_can_always_upload(self):
        viewer = ViewerContext.admin(1)
        
        assert viewer.is_admin is True
        assert viewer.is_logged_in is True
        assert viewer.can_upload is True
    
    def test_is_immutable(self):
        viewer = ViewerContext.user(7)
        
        with pytest.raises(AttributeError):
            viewer.user_id = 8
    
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"role": ViewerRole.ANONYMOUS, "user_id": 3},
            {"role": ViewerRole.ANONYMOUS, "can_upload": True},
            {"role": ViewerRole.USER},
            {"role": ViewerRole.ADMIN},
        ],
    )
    def test_rejects_inconsistent_identity(self, kwargs):
        with pytest.raises(ValueError):
            ViewerContext(**kwargs)


class TestFromUser:
    """Mapping a loaded account to a viewer."""
    
    def test_none_is_anonymous(self):
        assert ViewerContext.from_user(None) == ViewerContext.anonymous()
    
    def test_inactive_user_is_anonymous(self):
        user = User(id=4, username="gone", is_active=False, is_admin=True)
        
        assert ViewerContext.from_user(user).is_logged_in is False
    
    def test_uploader(self):
        user = User(id=4, username="uploader", display_name="Uma", is_active=True, may_upload=True)
        
        viewer = ViewerContext.from_user(user)
        
        assert viewer == ViewerContext.user(4, can_upload=True, display_name="Uma")
    
    def test_display_name_falls_back_to_username(self):
        user = User(id=5, username="plain", is_active=True, may_upload=False)
        
        viewer = ViewerContext.from_user(user)
        
        assert viewer.display_name == "plain"
        assert viewer.can_upload is False
    
    def test_admin(self):
        user = User(id=1, username="root", is_active=True, is_admin=True)
        
        viewer = ViewerContext.from_user(user)
        
        assert viewer.is_admin is True
        assert viewer.user_id == 1
