"""
Forecast API routes.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas import (
    ForecastRunRequest,
    ForecastSimulateRequest,
    ForecastResponse,
    MatchupRequest,
    MatchupResponse,
    CacheInvalidateResponse
)
from ...db import get_db, ForecastCacheRepository
from ...platforms import get_adapter, LeagueNotFoundError, LeaguePrivateError, PlatformError
from ...core.sports import Sport
from ...simulator import SeededRandom, build_forecast, clamp_trials, win_probability
from ...core.config import FORECAST_DEFAULT_TRIALS, FORECAST_MAX_TRIALS, FORECAST_MIN_TRIALS


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forecasts", tags=["forecasts"])


def _trials(n_trials: int) -> int:
    return clamp_trials(
        n_trials,
        minimum=FORECAST_MIN_TRIALS,
        maximum=FORECAST_MAX_TRIALS,
        default=FORECAST_DEFAULT_TRIALS
    )


def _mark_user(response: ForecastResponse, owner_id: Optional[str]) -> ForecastResponse:
    for team in response.teams:
        team.is_user = owner_id is not None and team.owner_id == owner_id
    return response


@router.post("/run", response_model=ForecastResponse)
async def run_forecast(
    request: ForecastRunRequest,
    db: AsyncSession = Depends(get_db)
) -> ForecastResponse:
    """
    Forecast playoff odds for a platform league.

    League data is fetched from the platform; results are cached per league,
    week, rating mode and trial count unless a seed is supplied or a future
    season is projected.
    """
    try:
        sport_enum = Sport(request.sport.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid sport: {request.sport}. Supported: football, basketball"
        )

    try:
        adapter = get_adapter(request.platform, sport_enum)
        snapshot = await adapter.fetch_snapshot(request.league_id, request.rating_mode)
    except LeagueNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"League {request.league_id} not found"
        )
    except LeaguePrivateError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This league is private. Only public leagues can be forecast."
        )
    except PlatformError as e:
        logger.warning(f"Platform error for {request.platform} league {request.league_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error communicating with {request.platform}: {str(e)}"
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    n_trials = _trials(request.n_trials)
    projecting = (
        request.forecast_year is not None
        and snapshot.season is not None
        and request.forecast_year > snapshot.season
    )
    use_cache = request.seed is None and not projecting
    cache_repo = ForecastCacheRepository(db)

    if use_cache:
        cached = await cache_repo.get(
            request.platform, request.league_id, snapshot.current_week,
            request.rating_mode.value, n_trials, sport=request.sport
        )
        if cached is not None:
            logger.info(f"Forecast cache hit for {request.platform} league {request.league_id}")
            cached["cached"] = True
            cached["forecast_year"] = request.forecast_year or snapshot.season
            return _mark_user(ForecastResponse(**cached), request.owner_id)

    result = await run_in_threadpool(
        build_forecast,
        snapshot,
        n_trials,
        SeededRandom(request.seed),
        owner_id=request.owner_id,
        forecast_year=request.forecast_year
    )

    response = ForecastResponse(
        **result.to_dict(),
        platform=request.platform,
        league_id=request.league_id,
        generated_at=datetime.now(timezone.utc)
    )

    if use_cache:
        await cache_repo.set(
            request.platform, request.league_id, snapshot.current_week,
            request.rating_mode.value, n_trials,
            results=response.model_dump(mode="json"),
            sport=request.sport
        )
        await db.commit()

    return response


@router.post("/simulate", response_model=ForecastResponse)
async def simulate_forecast(request: ForecastSimulateRequest) -> ForecastResponse:
    """
    Forecast playoff odds from a caller-supplied league snapshot.

    No platform lookups and no caching; the engine runs on the snapshot as given.
    """
    snapshot = request.to_snapshot()
    result = await run_in_threadpool(
        build_forecast,
        snapshot,
        _trials(request.n_trials),
        SeededRandom(request.seed),
        owner_id=request.owner_id,
        forecast_year=request.forecast_year
    )
    return ForecastResponse(**result.to_dict(), generated_at=datetime.now(timezone.utc))


@router.post("/matchup", response_model=MatchupResponse)
async def matchup_probability(request: MatchupRequest) -> MatchupResponse:
    """Single-game win probability for two ratings."""
    p_a = win_probability(request.rating_a, request.rating_b)
    return MatchupResponse(
        rating_a=request.rating_a,
        rating_b=request.rating_b,
        win_probability_a=round(p_a, 4),
        win_probability_b=round(1 - p_a, 4)
    )


@router.delete("/cache/{platform}/{league_id}", response_model=CacheInvalidateResponse)
async def invalidate_forecasts(
    platform: str,
    league_id: str,
    db: AsyncSession = Depends(get_db)
) -> CacheInvalidateResponse:
    """Drop every cached forecast for a league, e.g. after a trade or a stat correction."""
    cache_repo = ForecastCacheRepository(db)
    deleted = await cache_repo.invalidate(platform, league_id)
    await db.commit()
    logger.info(f"Invalidated {deleted} cached forecasts for {platform} league {league_id}")
    return CacheInvalidateResponse(platform=platform.lower(), league_id=league_id, deleted=deleted)
