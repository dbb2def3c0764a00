"""
Repository classes for database operations.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from .models import ForecastCache
from ..core.config import FORECAST_CACHE_TTL_MINUTES


class ForecastCacheRepository:
    """Read-through cache for forecast results."""

    DEFAULT_TTL_MINUTES = FORECAST_CACHE_TTL_MINUTES

    def __init__(self, session: AsyncSession):
        self.session = session

    def _lookup(
        self,
        platform: str,
        league_id: str,
        sport: str,
        week: int,
        rating_mode: str,
        n_trials: int
    ):
        return (
            ForecastCache.platform == platform.lower(),
            ForecastCache.league_id == league_id,
            ForecastCache.sport == sport.lower(),
            ForecastCache.week == week,
            ForecastCache.rating_mode == rating_mode,
            ForecastCache.n_trials == n_trials
        )

    async def get(
        self,
        platform: str,
        league_id: str,
        week: int,
        rating_mode: str,
        n_trials: int,
        sport: str = "football"
    ) -> Optional[dict]:
        """
        Get cached forecast results if not expired.

        Returns:
            Parsed results dict or None if not cached/expired
        """
        result = await self.session.execute(
            select(ForecastCache).where(
                *self._lookup(platform, league_id, sport, week, rating_mode, n_trials)
            )
        )
        cache_entry = result.scalars().first()

        if cache_entry is None:
            return None

        if cache_entry.is_expired:
            await self.session.delete(cache_entry)
            return None

        return json.loads(cache_entry.results_json)

    async def set(
        self,
        platform: str,
        league_id: str,
        week: int,
        rating_mode: str,
        n_trials: int,
        results: dict,
        sport: str = "football",
        ttl_minutes: int = DEFAULT_TTL_MINUTES
    ) -> ForecastCache:
        """
        Cache forecast results, replacing any existing entry.

        Args:
            platform: Platform name
            league_id: League identifier
            week: Week number the forecast was computed for
            rating_mode: Rating mode used
            n_trials: Trial count used
            results: Results to cache
            sport: Sport type
            ttl_minutes: Time-to-live in minutes

        Returns:
            Created cache entry
        """
        await self.session.execute(
            delete(ForecastCache).where(
                *self._lookup(platform, league_id, sport, week, rating_mode, n_trials)
            )
        )

        expires_at = datetime.now(timezone.utc) + timedelta(minutes=ttl_minutes)
        cache_entry = ForecastCache(
            platform=platform.lower(),
            league_id=league_id,
            sport=sport.lower(),
            week=week,
            rating_mode=rating_mode,
            n_trials=n_trials,
            results_json=json.dumps(results),
            expires_at=expires_at
        )
        self.session.add(cache_entry)
        await self.session.flush()
        return cache_entry

    async def invalidate(self, platform: str, league_id: str) -> int:
        """
        Invalidate every cached forecast for a league.

        Returns:
            Number of entries deleted
        """
        result = await self.session.execute(
            delete(ForecastCache).where(
                ForecastCache.platform == platform.lower(),
                ForecastCache.league_id == league_id
            )
        )
        return result.rowcount
