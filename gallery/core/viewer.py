"""
Identity of the requesting viewer.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ViewerRole(str, Enum):
    """Who is asking."""
    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class ViewerContext:
    """
    Immutable per request. ``user_id`` is set exactly when the viewer is
    logged in (user or admin).
    """
    
    role: ViewerRole
    user_id: Optional[int] = None
    can_upload: bool = False
    display_name: Optional[str] = None
    
    def __post_init__(self):
        if self.role == ViewerRole.ANONYMOUS and self.user_id is not None:
            raise ValueError("anonymous viewer cannot carry a user id")
        if self.role != ViewerRole.ANONYMOUS and self.user_id is None:
            raise ValueError(f"{self.role.value} viewer requires a user id")
        if self.role == ViewerRole.ANONYMOUS and self.can_upload:
            raise ValueError("anonymous viewer cannot upload")
    
    @classmethod
    def anonymous(cls) -> "ViewerContext":
        return cls(role=ViewerRole.ANONYMOUS)
    
    @classmethod
    def user(
        cls,
        user_id: int,
        can_upload: bool = False,
        display_name: Optional[str] = None,
    ) -> "ViewerContext":
        return cls(
            role=ViewerRole.USER,
            user_id=user_id,
            can_upload=can_upload,
            display_name=display_name,
        )
    
    @classmethod
    def admin(cls, user_id: int, display_name: Optional[str] = None) -> "ViewerContext":
        # admins can always upload
        return cls(
            role=ViewerRole.ADMIN,
            user_id=user_id,
            can_upload=True,
            display_name=display_name,
        )
    
    @classmethod
    def from_user(cls, user) -> "ViewerContext":
        """
        Build the context for a loaded account. ``None`` or an inactive
        account is anonymous.
        """
        if user is None or not user.is_active:
            return cls.anonymous()
        if user.is_admin:
            return cls.admin(user.id, display_name=user.name())
        return cls.user(user.id, can_upload=bool(user.may_upload), display_name=user.name())
    
    @property
    def is_admin(self) -> bool:
        return self.role == ViewerRole.ADMIN
    
    @property
    def is_logged_in(self) -> bool:
        return self.role != ViewerRole.ANONYMOUS
