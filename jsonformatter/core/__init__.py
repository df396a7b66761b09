"""Core app configuration, database and security helpers."""

from jsonformatter.core.config import Settings, get_settings
from jsonformatter.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
