"""Core app configuration, database and security."""

from shop.core.config import get_settings, settings
from shop.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
