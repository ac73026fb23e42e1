"""
Application Use Cases Module

Use cases represent application-specific business rules and orchestrate
the flow of data between the domain layer and the infrastructure layer.

The daily pipeline runs as explicit stages:
fetch -> group -> enrich -> predict -> cache.
"""

from datetime import datetime
from typing import Any, Optional
import logging
import asyncio

from phoenix.domain.constants import ERROR_BACKEND_FETCH_FAILED, FORM_WINDOW
from phoenix.domain.entities.entities import (
    League,
    LeagueFixtures,
    LeagueGroup,
    MatchRecord,
    TeamSnapshot,
)
from phoenix.domain.services.prediction_service import PredictionService
from phoenix.domain.services.squad_service import SquadService
from phoenix.domain.services.statistics_service import StatisticsService
from phoenix.infrastructure.cache.cache_service import DailyCache
from phoenix.infrastructure.data_sources.api_football import APIFootballSource
from phoenix.application.dtos.dtos import (
    FlatMatchDTO,
    TeamStatsDTO,
    TodayResponseDTO,
)
from phoenix.application.dtos.mappers import map_league, map_result
from phoenix.application.services.placeholder_service import PlaceholderService
from phoenix.utils.time_utils import from_timestamp, get_current_time


logger = logging.getLogger(__name__)


def filter_payload(payload: dict[str, Any], term: Optional[str]) -> dict[str, Any]:
    """
    Keep only matches whose team names or league name contain `term`
    (case-insensitive). Leagues left empty are dropped. The input is not
    modified.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return payload

    leagues = []
    for league in payload.get("leagues", []):
        league_name = (league.get("name") or "").lower()
        matches = [
            m for m in league.get("matches", [])
            if needle in (m.get("homeTeam", {}).get("name") or "").lower()
            or needle in (m.get("awayTeam", {}).get("name") or "").lower()
            or needle in (m.get("leagueName") or league_name).lower()
        ]
        if matches:
            leagues.append({**league, "matches": matches})
    return {**payload, "leagues": leagues}


def flatten_matches(payload: dict[str, Any]) -> list[FlatMatchDTO]:
    """Compact per-match rows from a /today payload."""
    rows = []
    for league in payload.get("leagues", []):
        for match in league.get("matches", []):
            home = match.get("homeTeam", {})
            away = match.get("awayTeam", {})
            rows.append(FlatMatchDTO(
                id=match.get("id", ""),
                league=match.get("leagueName") or league.get("name", ""),
                home_team=home.get("name", ""),
                away_team=away.get("name", ""),
                home_score=home.get("score"),
                away_score=away.get("score"),
                status=match.get("status", "NS"),
            ))
    return rows


class GetTodayPredictionsUseCase:
    """Use case for the day's fixtures with predictions (GET /today)."""

    def __init__(
        self,
        api_football: APIFootballSource,
        cache: DailyCache,
        tz_name: str,
        prediction_service: Optional[PredictionService] = None,
        statistics_service: Optional[StatisticsService] = None,
        squad_service: Optional[SquadService] = None,
        placeholder_service: Optional[PlaceholderService] = None,
    ):
        self.api_football = api_football
        self.cache = cache
        self.tz_name = tz_name
        self.prediction_service = prediction_service or PredictionService()
        self.statistics_service = statistics_service or StatisticsService()
        self.squad_service = squad_service or SquadService()
        self.placeholder_service = placeholder_service or PlaceholderService(self.prediction_service)

    async def execute(self, search: Optional[str] = None, now: Optional[datetime] = None) -> dict[str, Any]:
        """
        Get today's payload, from cache when possible.

        Args:
            search: Optional filter term (team or league name)
            now: Current time override (service timezone)

        Returns:
            JSON-ready payload; never raises for upstream failures
        """
        now = now or get_current_time(self.tz_name)
        date_str = now.strftime("%Y-%m-%d")

        payload = self.cache.get_today(date_str)
        if payload is not None:
            logger.info(f"Serving cached payload for {date_str}")
        elif not self.api_football.is_configured:
            logger.info("No API key configured, serving demo payload")
            payload = self.placeholder_service.build(now, self.tz_name).to_payload()
        else:
            try:
                payload = (await self.build_payload(date_str, now)).to_payload()
                self.cache.set_today(date_str, payload)
            except Exception as e:
                # Any pipeline failure degrades to the placeholder, never an HTTP error
                logger.error(f"Daily aggregation failed for {date_str}: {e}", exc_info=True)
                payload = self.placeholder_service.build(
                    now, self.tz_name, error=ERROR_BACKEND_FETCH_FAILED
                ).to_payload()

        return filter_payload(payload, search)

    async def build_payload(self, date_str: str, now: datetime) -> TodayResponseDTO:
        """Run fetch -> group -> enrich -> predict for one day."""
        fixtures = await self.api_football.get_daily_fixtures(date_str)
        groups = self.statistics_service.group_by_league(fixtures)
        leagues = await self.enrich_groups(groups)

        logger.info(
            f"Built payload for {date_str}: {len(leagues)} leagues, "
            f"{sum(len(l.matches) for l in leagues)} matches"
        )
        return TodayResponseDTO(
            server_date=date_str,
            server_time=now.isoformat(),
            time_zone=self.tz_name,
            leagues=[map_league(l, self.tz_name) for l in leagues],
        )

    async def enrich_groups(self, groups: list[LeagueFixtures]) -> list[LeagueGroup]:
        """
        Enrich and predict every fixture of the day in one pass.

        All fixtures run concurrently; the first failure aborts the day.
        """
        tasks = [
            self.enrich_fixture(fixture, group.league)
            for group in groups
            for fixture in group.fixtures
        ]
        records = iter(await asyncio.gather(*tasks))

        leagues = []
        for group in groups:
            league_group = LeagueGroup(name=group.league.name, country=group.league.country)
            league_group.matches = [next(records) for _ in group.fixtures]
            leagues.append(league_group)
        return leagues

    async def _team_last_fixtures(self, team_id: str) -> list[dict]:
        if not team_id:
            return []
        return await self.api_football.get_team_last_fixtures(team_id, last=FORM_WINDOW)

    async def enrich_fixture(self, fixture: dict, league: League) -> MatchRecord:
        """
        Fetch both teams' last-10, the fixture injuries and the league's top
        scorers concurrently, then build the predicted match record.
        """
        stats = self.statistics_service
        home = stats.fixture_side(fixture, "home")
        away = stats.fixture_side(fixture, "away")
        home_id, away_id = stats.team_id(home), stats.team_id(away)
        fixture_info = fixture.get("fixture") or {}
        fixture_id = str(fixture_info.get("id", ""))

        home_fixtures, away_fixtures, injuries, top_scorers = await asyncio.gather(
            self._team_last_fixtures(home_id),
            self._team_last_fixtures(away_id),
            self.api_football.get_fixture_injuries(fixture_id),
            self.api_football.get_top_scorers(league.id, league.season),
        )

        home_team = TeamSnapshot(
            id=home_id,
            name=stats.team_name(home),
            score=stats.current_score(fixture, "home"),
            last10=stats.map_last_ten(home_fixtures, home_id),
            squad=self.squad_service.build_squad_status(injuries, top_scorers, home_id),
        )
        away_team = TeamSnapshot(
            id=away_id,
            name=stats.team_name(away),
            score=stats.current_score(fixture, "away"),
            last10=stats.map_last_ten(away_fixtures, away_id),
            squad=self.squad_service.build_squad_status(injuries, top_scorers, away_id),
        )
        home_team.form = self.prediction_service.calculate_form(home_team.last10)
        away_team.form = self.prediction_service.calculate_form(away_team.last10)

        return MatchRecord(
            id=fixture_id,
            league_name=league.name,
            country=league.country,
            kickoff=from_timestamp(fixture_info.get("timestamp"), self.tz_name),
            status=(fixture_info.get("status") or {}).get("short") or "NS",
            home_team=home_team,
            away_team=away_team,
            prediction=self.prediction_service.predict(
                home_team.last10, away_team.last10, home_team.squad, away_team.squad,
            ),
        )


class GetTeamStatsUseCase:
    """Use case for a team's last-10 totals (GET /team/{team_id}/stats)."""

    def __init__(
        self,
        api_football: APIFootballSource,
        statistics_service: Optional[StatisticsService] = None,
    ):
        self.api_football = api_football
        self.statistics_service = statistics_service or StatisticsService()

    async def execute(self, team_id: str) -> TeamStatsDTO:
        """
        Raises:
            DataSourceNotConfiguredError: no API key
            UpstreamFetchError: upstream failure
        """
        fixtures = await self.api_football.get_team_last_fixtures(team_id, last=FORM_WINDOW)
        totals = self.statistics_service.calculate_team_totals(fixtures, team_id)
        return TeamStatsDTO(
            team_id=str(team_id),
            total_scored=totals["total_scored"],
            total_conceded=totals["total_conceded"],
            average_scored=round(totals["average_scored"], 2),
            average_conceded=round(totals["average_conceded"], 2),
            last10_games=[map_result(r) for r in totals["results"]],
        )
