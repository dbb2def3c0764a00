"""
Database module.
"""

from .database import (
    engine,
    async_session_maker,
    get_db,
    create_tables,
    async_database_url
)
from .models import Base, ForecastCache
from .repositories import ForecastCacheRepository

__all__ = [
    # Database
    "engine",
    "async_session_maker",
    "get_db",
    "create_tables",
    "async_database_url",
    # Models
    "Base",
    "ForecastCache",
    # Repositories
    "ForecastCacheRepository",
]
