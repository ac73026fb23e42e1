"""
Placeholder Payload Service

Builds the static payload served when no API key is configured (demo mode)
or when the upstream fetch fails (tagged with an error marker). The demo
fixtures are fixed, and their predictions go through the regular
prediction service, so the payload is the same on every call apart from
the server clock fields.
"""

import logging
from datetime import datetime
from typing import Optional

from phoenix.application.dtos.dtos import TodayResponseDTO
from phoenix.application.dtos.mappers import map_league
from phoenix.domain.entities.entities import (
    LeagueGroup,
    MatchRecord,
    MatchResult,
    SquadStatus,
    TeamSnapshot,
)
from phoenix.domain.services.prediction_service import PredictionService

logger = logging.getLogger(__name__)


DEMO_LEAGUE = {"name": "Demo League", "country": "World"}

# (id, home, away, kickoff hour, home last-10, away last-10, home squad, away squad)
# Scores are (goals for, goals against), newest first.
DEMO_FIXTURES = [
    (
        "demo-1", ("demo-h1", "Phoenix FC"), ("demo-a1", "Atlas United"), 18,
        [(2, 0), (3, 1), (1, 1), (2, 1), (0, 0), (2, 2), (1, 0), (3, 0), (1, 2), (2, 1)],
        [(0, 1), (1, 1), (0, 2), (1, 3), (2, 2), (0, 0), (1, 1), (0, 1), (2, 1), (1, 2)],
        SquadStatus(),
        SquadStatus(attackers_missing=1, missing_player_names=("J. Demo",)),
    ),
    (
        "demo-2", ("demo-h2", "Casablanca Stars"), ("demo-a2", "Rabat Rovers"), 20,
        [(1, 1), (0, 1), (2, 2), (1, 0), (1, 1), (0, 0), (2, 1), (1, 1), (0, 2), (1, 0)],
        [(1, 0), (1, 1), (2, 1), (0, 0), (1, 2), (1, 1), (0, 1), (2, 0), (1, 1), (0, 0)],
        SquadStatus(),
        SquadStatus(),
    ),
]


class PlaceholderService:
    """
    Builds demo/fallback payloads for GET /today.
    """

    def __init__(self, prediction_service: Optional[PredictionService] = None):
        self.prediction_service = prediction_service or PredictionService()

    def _team(self, ident: tuple[str, str], scores: list, squad: SquadStatus) -> TeamSnapshot:
        team_id, name = ident
        last10 = [MatchResult.from_score(gf, ga) for gf, ga in scores]
        return TeamSnapshot(
            id=team_id,
            name=name,
            last10=last10,
            squad=squad,
            form=self.prediction_service.calculate_form(last10),
        )

    def build_demo_league(self, now: datetime) -> LeagueGroup:
        """Demo league with fixed fixtures kicking off on `now`'s date."""
        group = LeagueGroup(name=DEMO_LEAGUE["name"], country=DEMO_LEAGUE["country"])
        for match_id, home, away, hour, home_scores, away_scores, home_squad, away_squad in DEMO_FIXTURES:
            home_team = self._team(home, home_scores, home_squad)
            away_team = self._team(away, away_scores, away_squad)
            group.matches.append(MatchRecord(
                id=match_id,
                league_name=group.name,
                country=group.country,
                kickoff=now.replace(hour=hour, minute=0, second=0, microsecond=0),
                status="NS",
                home_team=home_team,
                away_team=away_team,
                prediction=self.prediction_service.predict(
                    home_team.last10, away_team.last10, home_squad, away_squad,
                ),
            ))
        return group

    def build(self, now: datetime, tz_name: str, error: Optional[str] = None) -> TodayResponseDTO:
        """
        Build the placeholder payload.

        Args:
            now: Current time in the service timezone
            tz_name: Service timezone name
            error: Error marker (None in demo mode)
        """
        if error:
            logger.warning(f"Serving placeholder payload ({error})")
        return TodayResponseDTO(
            server_date=now.strftime("%Y-%m-%d"),
            server_time=now.isoformat(),
            time_zone=tz_name,
            leagues=[map_league(self.build_demo_league(now), tz_name)],
            error=error,
        )
