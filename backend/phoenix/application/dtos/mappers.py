"""
Entity -> DTO mapping helpers.
"""

from phoenix.domain.entities.entities import (
    FormEstimate,
    LeagueGroup,
    MatchRecord,
    MatchResult,
    PredictionResult,
    SquadStatus,
    TeamSnapshot,
)
from phoenix.application.dtos.dtos import (
    FormDTO,
    LeagueDTO,
    MatchRecordDTO,
    MatchResultDTO,
    OutcomeProbabilitiesDTO,
    PredictionDTO,
    SquadAdjustmentsDTO,
    SquadStatusDTO,
    TeamDTO,
)
from phoenix.utils.time_utils import get_timezone


def _round(value: float) -> float:
    return round(value, 2)


def map_result(result: MatchResult) -> MatchResultDTO:
    return MatchResultDTO(
        goals_for=result.goals_for,
        goals_against=result.goals_against,
        result=result.result.value,
    )


def map_squad(squad: SquadStatus) -> SquadStatusDTO:
    return SquadStatusDTO(
        attackers_missing=squad.attackers_missing,
        defenders_missing=squad.defenders_missing,
        top_scorer_missing=squad.top_scorer_missing,
        missing_player_names=list(squad.missing_player_names),
    )


def map_form(form: FormEstimate) -> FormDTO:
    return FormDTO(
        expected_scored=_round(form.expected_scored),
        expected_conceded=_round(form.expected_conceded),
    )


def map_team(team: TeamSnapshot) -> TeamDTO:
    return TeamDTO(
        id=team.id,
        name=team.name,
        score=team.score,
        last10_games=[map_result(r) for r in team.last10],
        squad=map_squad(team.squad),
        form=map_form(team.form) if team.form else None,
    )


def map_prediction(prediction: PredictionResult) -> PredictionDTO:
    """Expected values are rounded to two decimals for display."""
    outcome = prediction.outcome_probabilities
    return PredictionDTO(
        expected_home_goals=_round(prediction.expected_home_goals),
        expected_away_goals=_round(prediction.expected_away_goals),
        expected_total_goals=_round(prediction.expected_total_goals),
        predicted_scoreline=prediction.predicted_scoreline,
        outcome_probabilities=OutcomeProbabilitiesDTO(
            home=outcome.home, draw=outcome.draw, away=outcome.away,
        ),
        confidence=prediction.confidence.value,
        squad_adjustments=SquadAdjustmentsDTO(
            home_delta=_round(prediction.squad_adjustments.home_delta),
            away_delta=_round(prediction.squad_adjustments.away_delta),
        ),
    )


def map_match(match: MatchRecord, tz_name: str) -> MatchRecordDTO:
    """Kickoff is rendered in the service timezone."""
    kickoff = match.kickoff.astimezone(get_timezone(tz_name))
    return MatchRecordDTO(
        id=match.id,
        league_name=match.league_name,
        country=match.country,
        kickoff=kickoff.isoformat(),
        time=kickoff.strftime("%H:%M"),
        status=match.status,
        home_team=map_team(match.home_team),
        away_team=map_team(match.away_team),
        prediction=map_prediction(match.prediction) if match.prediction else None,
    )


def map_league(group: LeagueGroup, tz_name: str) -> LeagueDTO:
    return LeagueDTO(
        name=group.name,
        country=group.country,
        matches=[map_match(m, tz_name) for m in group.matches],
    )
