"""
Request-scoped identity and configuration dependencies.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.database import get_db
from gallery.models.user import User
from gallery.services.config_store import ConfigStore
from gallery.utils.security import decode_access_token

logger = logging.getLogger("gallery.auth")

# Bearer token is optional: no token means anonymous
security = HTTPBearer(auto_error=False)


async def get_viewer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> ViewerContext:
    """
    Dependency resolving the requesting identity.
    
    Args:
        credentials: Bearer token from request header
        db: Database session
        
    Returns:
        ViewerContext; anonymous when the token is missing, invalid or
        refers to an unknown or inactive user
    """
    if not credentials:
        return ViewerContext.anonymous()
    
    token_payload = decode_access_token(credentials.credentials)
    if token_payload is None:
        logger.warning("Auth failed", extra={"event": "auth", "reason": "invalid_or_expired_token"})
        return ViewerContext.anonymous()
    
    result = await db.execute(select(User).where(User.id == token_payload.sub))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning("Auth failed", extra={"event": "auth", "reason": "user_not_found", "user_id": token_payload.sub})
        return ViewerContext.anonymous()
    
    return ViewerContext.from_user(user)


async def get_config_snapshot(
    db: AsyncSession = Depends(get_db),
) -> ConfigSnapshot:
    """Dependency providing one settings snapshot per request."""
    return await ConfigStore(db).snapshot()
