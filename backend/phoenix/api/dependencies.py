"""
API Dependencies Module

Provides dependency injection for FastAPI routes.
Contains factory functions for creating use case dependencies.
"""

from functools import lru_cache

from fastapi import Depends

from phoenix.config import AppSettings, get_settings
from phoenix.infrastructure.data_sources.api_football import APIFootballConfig, APIFootballSource
from phoenix.infrastructure.cache.cache_service import DailyCache
from phoenix.infrastructure.cache.redis_client import RedisClient
from phoenix.domain.services.prediction_service import PredictionService
from phoenix.domain.services.squad_service import SquadService
from phoenix.domain.services.statistics_service import StatisticsService
from phoenix.application.use_cases.use_cases import GetTeamStatsUseCase, GetTodayPredictionsUseCase


@lru_cache()
def get_api_football() -> APIFootballSource:
    """Get API-Football data source (cached)."""
    settings = get_settings()
    return APIFootballSource(APIFootballConfig(
        api_key=settings.api_football_key,
        base_url=settings.api_football_base_url,
        timeout=settings.api_football_timeout,
        timezone=settings.timezone,
    ))


@lru_cache()
def get_cache_service() -> DailyCache:
    """Get the daily payload cache (one per process)."""
    settings = get_settings()
    redis_client = None
    if settings.redis_host:
        redis_client = RedisClient(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password,
        )
    return DailyCache(ttl_seconds=settings.cache_ttl_seconds, redis_client=redis_client)


@lru_cache()
def get_prediction_service() -> PredictionService:
    """Get prediction service (cached)."""
    return PredictionService()


@lru_cache()
def get_statistics_service() -> StatisticsService:
    """Get statistics service (cached)."""
    return StatisticsService()


@lru_cache()
def get_squad_service() -> SquadService:
    """Get squad service (cached)."""
    return SquadService()


def get_today_use_case(
    settings: AppSettings = Depends(get_settings),
    api_football: APIFootballSource = Depends(get_api_football),
    cache: DailyCache = Depends(get_cache_service),
    prediction_service: PredictionService = Depends(get_prediction_service),
    statistics_service: StatisticsService = Depends(get_statistics_service),
    squad_service: SquadService = Depends(get_squad_service),
) -> GetTodayPredictionsUseCase:
    """Build the /today use case around the shared cache."""
    return GetTodayPredictionsUseCase(
        api_football=api_football,
        cache=cache,
        tz_name=settings.timezone,
        prediction_service=prediction_service,
        statistics_service=statistics_service,
        squad_service=squad_service,
    )


def get_team_stats_use_case(
    api_football: APIFootballSource = Depends(get_api_football),
    statistics_service: StatisticsService = Depends(get_statistics_service),
) -> GetTeamStatsUseCase:
    return GetTeamStatsUseCase(api_football=api_football, statistics_service=statistics_service)
