"""
Album models.

Plain albums and tag albums share one table. The ``album_type`` column
discriminates between them and each variant only carries the columns it
needs.
"""
from datetime import datetime
from typing import TYPE_CHECKING, FrozenSet, List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gallery.database import Base

if TYPE_CHECKING:
    from gallery.models.user import User


# Users an album has been explicitly shared with
album_shares = Table(
    "album_shares",
    Base.metadata,
    Column(
        "album_id",
        Integer,
        ForeignKey("albums.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Album(Base):
    """Attributes common to every kind of album."""
    
    __tablename__ = "albums"
    
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    album_type: Mapped[str] = mapped_column(String(20), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    
    # Album information
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    # Access flags. viewable=False means "hidden": reachable by direct link only
    public: Mapped[bool] = mapped_column(Boolean, default=False)
    viewable: Mapped[bool] = mapped_column(Boolean, default=True)
    requires_link: Mapped[bool] = mapped_column(Boolean, default=False)
    password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    nsfw: Mapped[bool] = mapped_column(Boolean, default=False)
    
    # Only honoured while the album is public, see effective_attributes()
    full_photo: Mapped[bool] = mapped_column(Boolean, default=True)
    downloadable: Mapped[bool] = mapped_column(Boolean, default=False)
    share_button_visible: Mapped[bool] = mapped_column(Boolean, default=False)
    
    sorting_col: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    sorting_order: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    
    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
    
    # Relationships
    owner: Mapped["User"] = relationship(
        "User", back_populates="albums", lazy="selectin"
    )
    shared_with: Mapped[List["User"]] = relationship(
        "User", secondary=album_shares, lazy="selectin"
    )
    
    __mapper_args__ = {
        "polymorphic_on": "album_type",
    }
    
    @property
    def has_password(self) -> bool:
        return bool(self.password)
    
    @property
    def is_publicly_viewable(self) -> bool:
        """Public and not hidden. Unset flags count as False."""
        return self.public is True and self.viewable is True
    
    @property
    def shared_with_ids(self) -> FrozenSet[int]:
        return frozenset(user.id for user in self.shared_with)
    
    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, owner_id={self.owner_id})>"


class PlainAlbum(Album):
    """Album holding photos directly; may be nested under another album."""
    
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=True, index=True
    )
    
    __mapper_args__ = {
        "polymorphic_identity": "album",
    }


class TagAlbum(Album):
    """Virtual album listing every photo carrying one of ``show_tags``."""
    
    show_tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    __mapper_args__ = {
        "polymorphic_identity": "tag_album",
    }
