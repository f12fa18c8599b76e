"""
FACEIT utilities package.

Re-exports the client, caches and the service for convenient importing.
"""

# Client
from app.api.faceit_utils.client import FaceitClient

# Caches
from app.api.faceit_utils.cache import TTLCache, cache_key
from app.api.faceit_utils.session_cache import SessionEloCache

# Service
from app.api.faceit_utils.service import FaceitService

__all__ = [
    # Client
    "FaceitClient",
    # Caches
    "TTLCache",
    "cache_key",
    "SessionEloCache",
    # Service
    "FaceitService",
]
