"""
User model for gallery accounts.
"""
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, DateTime, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gallery.database import Base

if TYPE_CHECKING:
    from gallery.models.album import Album


class User(Base):
    """User model for storing account information and capabilities."""
    
    __tablename__ = "users"
    
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(100), unique=True, index=True, nullable=False
    )
    display_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    
    # Capabilities
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    may_upload: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    
    # Relationships
    albums: Mapped[List["Album"]] = relationship(
        "Album", back_populates="owner", cascade="all, delete-orphan"
    )
    
    def name(self) -> str:
        """Name shown to other users."""
        return self.display_name or self.username
    
    def __repr__(self) -> str:
        return f"<User(id={self.id}, is_admin={self.is_admin})>"
