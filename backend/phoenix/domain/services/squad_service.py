"""
Squad Domain Service

Derives a team's SquadStatus from an upstream injury list and the league's
top scorer list. Positions are classified by keyword matching on a
free-text position field.
"""

import logging
from typing import List, Optional

from phoenix.domain.constants import (
    ATTACKER_KEYWORDS,
    DEFENDER_KEYWORDS,
    MAX_MISSING_COUNT,
    MAX_MISSING_NAMES,
    UNKNOWN_PLAYER,
)
from phoenix.domain.entities.entities import SquadStatus

logger = logging.getLogger(__name__)

ATTACKER = "attacker"
DEFENDER = "defender"


class SquadService:
    """
    Domain service summarising player availability.
    """

    @staticmethod
    def classify_position(position: Optional[str]) -> Optional[str]:
        """
        Classify a free-text position.

        Attacker keywords are checked before defender keywords; anything
        else (goalkeepers, midfielders, empty values) is unclassified.
        """
        text = (position or "").lower()
        if not text:
            return None
        if any(keyword in text for keyword in ATTACKER_KEYWORDS):
            return ATTACKER
        if any(keyword in text for keyword in DEFENDER_KEYWORDS):
            return DEFENDER
        return None

    @staticmethod
    def _player(entry: dict) -> dict:
        return entry.get("player") or {}

    @staticmethod
    def _team_id(entry: dict) -> str:
        team_id = (entry.get("team") or {}).get("id")
        return str(team_id) if team_id is not None else ""

    def injuries_for_team(self, injuries: List[dict], team_id: str) -> List[dict]:
        """Filter an injury list down to one team."""
        return [entry for entry in injuries or [] if self._team_id(entry) == str(team_id)]

    def find_top_scorer(self, top_scorers: List[dict], team_id: str) -> Optional[dict]:
        """
        Highest ranked top scorer entry for the team.

        The upstream list is already ordered by goals, so the first entry
        whose statistics belong to the team wins.
        """
        for entry in top_scorers or []:
            for stats in entry.get("statistics") or []:
                stats_team_id = (stats.get("team") or {}).get("id")
                if stats_team_id is not None and str(stats_team_id) == str(team_id):
                    return self._player(entry)
        return None

    @staticmethod
    def _same_player(injured: dict, scorer: dict) -> bool:
        injured_id = injured.get("id")
        scorer_id = scorer.get("id")
        if injured_id is not None and scorer_id is not None:
            return str(injured_id) == str(scorer_id)
        injured_name = (injured.get("name") or "").strip().lower()
        scorer_name = (scorer.get("name") or "").strip().lower()
        return bool(injured_name) and injured_name == scorer_name

    def build_squad_status(
        self,
        injuries: List[dict],
        top_scorers: List[dict],
        team_id: str,
    ) -> SquadStatus:
        """
        Summarise availability for one team.

        Args:
            injuries: Upstream injury list for the fixture (both teams)
            top_scorers: Upstream league top scorer list
            team_id: Team to summarise

        Returns:
            SquadStatus with counts clamped to [0, 3] and up to five names
        """
        team_injuries = self.injuries_for_team(injuries, team_id)

        attackers = 0
        defenders = 0
        names: list[str] = []
        for entry in team_injuries:
            player = self._player(entry)
            category = self.classify_position(player.get("position") or player.get("type"))
            if category == ATTACKER:
                attackers += 1
            elif category == DEFENDER:
                defenders += 1

            name = player.get("name") or UNKNOWN_PLAYER
            if name not in names and len(names) < MAX_MISSING_NAMES:
                names.append(name)

        top_scorer = self.find_top_scorer(top_scorers, team_id)
        top_scorer_missing = bool(top_scorer) and any(
            self._same_player(self._player(entry), top_scorer) for entry in team_injuries
        )

        return SquadStatus(
            attackers_missing=min(attackers, MAX_MISSING_COUNT),
            defenders_missing=min(defenders, MAX_MISSING_COUNT),
            top_scorer_missing=top_scorer_missing,
            missing_player_names=tuple(names),
        )
