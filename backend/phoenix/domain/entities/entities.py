"""
Domain Entities Module

This module contains the core domain entities for the football prediction system.
These entities represent the core business concepts and are independent of any infrastructure.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from enum import Enum

from phoenix.domain.value_objects.value_objects import (
    OutcomeProbabilities,
    SquadAdjustment,
)


class MatchOutcome(Enum):
    """Result of a past fixture from one team's perspective."""
    WIN = "W"
    DRAW = "D"
    LOSS = "L"


class ConfidenceLevel(Enum):
    """Qualitative confidence label, driven by squad data completeness."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class MatchResult:
    """
    One past fixture seen from one team's side.

    Attributes:
        goals_for: Goals scored by the team
        goals_against: Goals conceded by the team
        result: Win, draw or loss
    """
    goals_for: int = 0
    goals_against: int = 0
    result: MatchOutcome = MatchOutcome.DRAW

    def __post_init__(self):
        if self.goals_for < 0 or self.goals_against < 0:
            raise ValueError("Goal counts cannot be negative")

    @classmethod
    def from_score(cls, goals_for: int, goals_against: int) -> "MatchResult":
        """Build a result deriving the outcome from the score."""
        if goals_for > goals_against:
            outcome = MatchOutcome.WIN
        elif goals_for < goals_against:
            outcome = MatchOutcome.LOSS
        else:
            outcome = MatchOutcome.DRAW
        return cls(goals_for=goals_for, goals_against=goals_against, result=outcome)

    @classmethod
    def neutral(cls) -> "MatchResult":
        """Padding entry used when a team has fewer than ten past fixtures."""
        return cls(goals_for=0, goals_against=0, result=MatchOutcome.DRAW)


@dataclass(frozen=True)
class SquadStatus:
    """
    Player availability summary for one team.

    Attributes:
        attackers_missing: Injured/suspended attackers, clamped to [0, 3]
        defenders_missing: Injured/suspended defenders, clamped to [0, 3]
        top_scorer_missing: Whether the team's top league scorer is out
        missing_player_names: Up to five names for display
    """
    attackers_missing: int = 0
    defenders_missing: int = 0
    top_scorer_missing: bool = False
    missing_player_names: tuple[str, ...] = ()

    def __post_init__(self):
        for count in (self.attackers_missing, self.defenders_missing):
            if not 0 <= count <= 3:
                raise ValueError(f"Missing player count must be between 0 and 3, got {count}")
        if len(self.missing_player_names) > 5:
            raise ValueError("At most 5 missing player names are kept")

    @property
    def total_missing(self) -> int:
        """Missing players counted for confidence (top scorer counts once more)."""
        return self.attackers_missing + self.defenders_missing + (1 if self.top_scorer_missing else 0)


@dataclass(frozen=True)
class FormEstimate:
    """Recency-weighted goals scored/conceded per match."""
    expected_scored: float
    expected_conceded: float


@dataclass(frozen=True)
class PredictionResult:
    """
    Prediction for a single fixture.

    Fully determined by both teams' last-10 results and squad status.
    """
    expected_home_goals: float
    expected_away_goals: float
    expected_total_goals: float
    predicted_scoreline: str
    outcome_probabilities: OutcomeProbabilities
    confidence: ConfidenceLevel
    squad_adjustments: SquadAdjustment


@dataclass(frozen=True)
class League:
    """
    Represents a football league or competition.

    Attributes:
        id: Upstream league identifier
        name: Full name of the league (e.g., "Premier League")
        country: Country where the league is played
        season: Season year used for top scorer lookups
    """
    id: str
    name: str
    country: str
    season: Optional[int] = None

    def __post_init__(self):
        if not self.name or not self.country:
            raise ValueError("League name and country are required")


@dataclass
class LeagueFixtures:
    """Raw upstream fixtures grouped under one league (group stage output)."""
    league: League
    fixtures: list[dict] = field(default_factory=list)


@dataclass
class TeamSnapshot:
    """
    A team as presented in one match record (enrich stage output).

    Attributes:
        id: Upstream team identifier
        name: Team name
        score: Current/final goals in today's fixture (None if not started)
        last10: Ten most recent results, most-recent-first
        squad: Availability summary
        form: Weighted form over last10
    """
    id: str
    name: str
    score: Optional[int] = None
    last10: list[MatchResult] = field(default_factory=list)
    squad: SquadStatus = field(default_factory=SquadStatus)
    form: Optional[FormEstimate] = None


@dataclass
class MatchRecord:
    """
    One of today's fixtures with both teams' data and its prediction.

    Lives only for the request that built it and inside the daily cache.
    """
    id: str
    league_name: str
    country: str
    kickoff: datetime
    status: str
    home_team: TeamSnapshot
    away_team: TeamSnapshot
    prediction: Optional[PredictionResult] = None


@dataclass
class LeagueGroup:
    """Matches of one league for the day."""
    name: str
    country: str
    matches: list[MatchRecord] = field(default_factory=list)
