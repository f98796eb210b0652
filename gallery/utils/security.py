"""
JWT helpers. Tokens carry the user id in ``sub``.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from gallery.config import get_settings
from gallery.schemas.user import TokenPayload


def create_access_token(
    user_id: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token.
    
    Login lives outside this service; tokens issued here are only used to
    drive the API in tests and local runs.
    
    Args:
        user_id: User ID to encode in the token
        expires_delta: Optional expiration time delta
        
    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    
    to_encode = {
        "sub": str(user_id),  # JWT subject must be a string
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[TokenPayload]:
    """
    Decode and validate a JWT access token.
    
    Args:
        token: JWT token string
        
    Returns:
        TokenPayload if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        
        user_id = payload.get("sub")
        exp = payload.get("exp")
        
        if user_id is None or exp is None:
            return None
        
        return TokenPayload(
            sub=int(user_id),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
        
    except (JWTError, ValueError):
        return None
