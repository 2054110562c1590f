"""Core app configuration, database, security and errors."""

from pengaduan.core.config import Settings, get_settings
from pengaduan.core.database import Database, get_db

__all__ = ["Database", "Settings", "get_db", "get_settings"]
