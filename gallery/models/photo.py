"""
Photo model holding the metadata used for visibility checks and search.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer, ForeignKey, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from gallery.database import Base


class Photo(Base):
    """
    Photo model.
    A photo without an album (``album_id`` is NULL) is "unsorted".
    """
    
    __tablename__ = "photos"
    
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    album_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("albums.id", ondelete="SET NULL"), nullable=True, index=True
    )
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    public: Mapped[bool] = mapped_column(Boolean, default=False)
    
    # Searchable metadata
    title: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # comma separated
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    taken_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    
    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
    
    @property
    def is_unsorted(self) -> bool:
        return self.album_id is None
    
    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, album_id={self.album_id})>"
