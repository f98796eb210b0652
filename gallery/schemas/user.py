"""
User-related Pydantic schemas.
"""
from datetime import datetime

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Schema for JWT token payload."""
    
    sub: int  # User ID
    exp: datetime
