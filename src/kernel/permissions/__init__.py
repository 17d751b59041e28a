"""
Permission Core - special-access grants and visibility resolution.
"""

from src.kernel.permissions.access_grant_store import AccessGrantStore
from src.kernel.permissions.visibility_resolver import VisibilityResolver

__all__ = [
    "AccessGrantStore",
    "VisibilityResolver",
]
