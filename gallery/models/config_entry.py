"""
Persisted gallery settings.
"""
from typing import Optional

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from gallery.database import Base

BOOL = "0|1"


class ConfigEntry(Base):
    """
    A single named setting. Values are stored as strings and parsed by
    ConfigSnapshot's typed accessors.
    """
    
    __tablename__ = "configs"
    
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    value: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    cat: Mapped[str] = mapped_column(String(50), default="config")
    type_range: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    confidentiality: Mapped[int] = mapped_column(Integer, default=0)
    
    def __repr__(self) -> str:
        return f"<ConfigEntry(key={self.key})>"
