"""
Identity Core - user directory and bearer token verification.
"""

from src.kernel.identity.jwt import (
    JWTManager,
    AccessTokenPayload,
    get_jwt_manager,
    verify_access_token,
)
from src.kernel.identity.user_directory import UserDirectory

__all__ = [
    "JWTManager",
    "AccessTokenPayload",
    "get_jwt_manager",
    "verify_access_token",
    "UserDirectory",
]
