"""
Data Transfer Objects (DTOs) Module

DTOs are used to transfer data between layers and to/from the API.
They use Pydantic for validation and serialization; JSON keys are camelCase.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================================
# Prediction DTOs
# ============================================================

class MatchResultDTO(CamelModel):
    """One past result from a team's perspective."""
    goals_for: int = Field(..., ge=0)
    goals_against: int = Field(..., ge=0)
    result: str


class SquadStatusDTO(CamelModel):
    """Squad availability summary."""
    attackers_missing: int = Field(default=0, ge=0, le=3)
    defenders_missing: int = Field(default=0, ge=0, le=3)
    top_scorer_missing: bool = False
    missing_player_names: list[str] = Field(default_factory=list, max_length=5)


class FormDTO(CamelModel):
    """Recency-weighted form."""
    expected_scored: float
    expected_conceded: float


class OutcomeProbabilitiesDTO(CamelModel):
    """Win/draw/loss split in integer percentages (sums to 100)."""
    home: int = Field(..., ge=0, le=100)
    draw: int = Field(..., ge=0, le=100)
    away: int = Field(..., ge=0, le=100)


class SquadAdjustmentsDTO(CamelModel):
    """Expected goals shift applied for missing players."""
    home_delta: float = Field(..., ge=-0.6, le=0.6)
    away_delta: float = Field(..., ge=-0.6, le=0.6)


class PredictionDTO(CamelModel):
    """Prediction data transfer object."""
    expected_home_goals: float = Field(..., ge=0)
    expected_away_goals: float = Field(..., ge=0)
    expected_total_goals: float = Field(..., ge=0)
    predicted_scoreline: str
    outcome_probabilities: OutcomeProbabilitiesDTO
    confidence: str
    squad_adjustments: SquadAdjustmentsDTO


# ============================================================
# Match DTOs
# ============================================================

class TeamDTO(CamelModel):
    """Team data transfer object."""
    id: str
    name: str
    score: Optional[int] = None
    last10_games: list[MatchResultDTO] = Field(default_factory=list)
    squad: SquadStatusDTO = Field(default_factory=SquadStatusDTO)
    form: Optional[FormDTO] = None


class MatchRecordDTO(CamelModel):
    """Match with both teams' data and prediction."""
    id: str
    league_name: str
    country: str
    kickoff: str
    time: str
    status: str = "NS"
    home_team: TeamDTO
    away_team: TeamDTO
    prediction: Optional[PredictionDTO] = None


class LeagueDTO(CamelModel):
    """League with its matches of the day."""
    name: str
    country: str
    matches: list[MatchRecordDTO] = Field(default_factory=list)


class TodayResponseDTO(CamelModel):
    """Payload of GET /today."""
    server_date: str
    server_time: str
    time_zone: str
    leagues: list[LeagueDTO] = Field(default_factory=list)
    error: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict; `error` is only present when set."""
        return self.model_dump(by_alias=True, mode="json", exclude={"error"} if self.error is None else None)


class FlatMatchDTO(CamelModel):
    """Compact match row of GET /matches/today."""
    id: str
    league: str
    home_team: str
    away_team: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: str


class TeamStatsDTO(CamelModel):
    """Totals over a team's last ten fixtures."""
    team_id: str
    total_scored: int
    total_conceded: int
    average_scored: float
    average_conceded: float
    last10_games: list[MatchResultDTO] = Field(default_factory=list)


# ============================================================
# Service DTOs
# ============================================================

class HealthResponseDTO(CamelModel):
    """Health check response."""
    ok: bool = True
    server_time: str
    tz: str


class ErrorResponseDTO(BaseModel):
    """Error response."""
    error: str
    message: str
    details: Optional[dict] = None


class CacheStatusDTO(BaseModel):
    """Daily cache diagnostics."""
    redis_connected: bool
    keys: list[str]
    ttl_seconds: int
    cache_hits: int
    cache_misses: int
