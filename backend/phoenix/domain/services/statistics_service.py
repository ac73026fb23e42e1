"""
Statistics Domain Service

Handles mapping of raw upstream fixtures into per-team results,
grouping of a day's fixtures by league and last-10 totals.
"""

import logging
from typing import Any, List, Optional

from phoenix.domain.constants import (
    FORM_WINDOW,
    UNKNOWN_COUNTRY,
    UNKNOWN_LEAGUE,
    UNKNOWN_TEAM,
)
from phoenix.domain.entities.entities import League, LeagueFixtures, MatchResult

logger = logging.getLogger(__name__)


def _as_goals(value: Any) -> int:
    """Upstream goals may be null or malformed; both count as 0."""
    try:
        goals = int(value)
    except (TypeError, ValueError):
        return 0
    return max(goals, 0)


class StatisticsService:
    @staticmethod
    def fixture_side(fixture: dict, side: str) -> dict:
        """Return the `teams.<side>` block of a fixture (empty dict if absent)."""
        return (fixture.get("teams") or {}).get(side) or {}

    @staticmethod
    def team_name(team: dict) -> str:
        return team.get("name") or UNKNOWN_TEAM

    @staticmethod
    def team_id(team: dict) -> str:
        team_id = team.get("id")
        return str(team_id) if team_id is not None else ""

    @staticmethod
    def fixture_timestamp(fixture: dict) -> int:
        try:
            return int((fixture.get("fixture") or {}).get("timestamp") or 0)
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def parse_league(fixture: dict) -> League:
        """Build the League of a raw fixture, defaulting missing fields."""
        league_data = fixture.get("league") or {}
        try:
            season = int(league_data.get("season"))
        except (TypeError, ValueError):
            season = None
        return League(
            id=str(league_data.get("id", "")),
            name=league_data.get("name") or UNKNOWN_LEAGUE,
            country=league_data.get("country") or UNKNOWN_COUNTRY,
            season=season,
        )

    def map_result(self, fixture: dict, team_id: str) -> MatchResult:
        """
        Map one past fixture to a result from `team_id`'s perspective.

        Args:
            fixture: Raw upstream fixture
            team_id: Team whose side is taken as "for"

        Returns:
            MatchResult with missing goals counted as 0
        """
        goals = fixture.get("goals") or {}
        home_goals = _as_goals(goals.get("home"))
        away_goals = _as_goals(goals.get("away"))

        is_home = self.team_id(self.fixture_side(fixture, "home")) == str(team_id)
        if is_home:
            return MatchResult.from_score(home_goals, away_goals)
        return MatchResult.from_score(away_goals, home_goals)

    def map_last_ten(self, fixtures: List[dict], team_id: str) -> List[MatchResult]:
        """
        Build the last-10 sequence for a team, most-recent-first.

        Upstream order is not trusted: fixtures are sorted by kickoff
        timestamp descending. Fewer than ten games are padded with 0-0 draws.
        """
        ordered = sorted(fixtures or [], key=self.fixture_timestamp, reverse=True)
        results = [self.map_result(f, team_id) for f in ordered[:FORM_WINDOW]]
        while len(results) < FORM_WINDOW:
            results.append(MatchResult.neutral())
        return results

    def group_by_league(self, fixtures: List[dict]) -> List[LeagueFixtures]:
        """
        Group a day's raw fixtures by league, keeping first-seen order.
        """
        groups: dict[str, LeagueFixtures] = {}
        for fixture in fixtures or []:
            league = self.parse_league(fixture)
            key = league.id or f"{league.country}|{league.name}"
            if key not in groups:
                groups[key] = LeagueFixtures(league=league)
            groups[key].fixtures.append(fixture)

        logger.debug(f"Grouped {len(fixtures or [])} fixtures into {len(groups)} leagues")
        return list(groups.values())

    def calculate_team_totals(self, fixtures: List[dict], team_id: str) -> dict:
        """
        Totals and per-game averages over a team's last ten real fixtures.

        Unlike the form sequence no padding is applied: averages divide by
        the number of games actually returned (0 when there are none).
        """
        ordered = sorted(fixtures or [], key=self.fixture_timestamp, reverse=True)[:FORM_WINDOW]
        results = [self.map_result(f, team_id) for f in ordered]

        total_scored = sum(r.goals_for for r in results)
        total_conceded = sum(r.goals_against for r in results)
        played = len(results)

        return {
            "results": results,
            "total_scored": total_scored,
            "total_conceded": total_conceded,
            "average_scored": total_scored / played if played else 0.0,
            "average_conceded": total_conceded / played if played else 0.0,
        }

    @staticmethod
    def current_score(fixture: dict, side: str) -> Optional[int]:
        """Live/final goals of today's fixture for one side (None before kickoff)."""
        value = (fixture.get("goals") or {}).get(side)
        if value is None:
            return None
        return _as_goals(value)
