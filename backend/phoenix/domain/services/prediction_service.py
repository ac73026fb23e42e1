"""
Prediction Service Module

This domain service contains the core prediction logic:
1. Recency-weighted form over each team's last ten results
2. Squad impact adjustment from missing attackers, defenders and top scorers
3. Fixed-table outcome classification from the expected goal differential
4. Display rounding of the expected scoreline
5. Confidence labelling from squad data completeness

This is a pure domain service with no external dependencies.
"""

import math
from typing import Sequence

from phoenix.domain.constants import (
    FORM_WINDOW,
    RECENT_SPLIT,
    RECENT_WEIGHT,
    PRIOR_WEIGHT,
    SQUAD_IMPACT_STEPS,
    TOP_SCORER_PENALTY,
    MAX_SQUAD_ADJUSTMENT,
    SCORELINE_FLOOR,
    SCORELINE_CAP,
    SCORELINE_MAX_GOALS,
    STRONG_EDGE,
    SLIGHT_EDGE,
    OUTCOME_STRONG_HOME,
    OUTCOME_SLIGHT_HOME,
    OUTCOME_BALANCED,
    OUTCOME_SLIGHT_AWAY,
    OUTCOME_STRONG_AWAY,
    LOW_CONFIDENCE_THRESHOLD,
)
from phoenix.domain.entities.entities import (
    ConfidenceLevel,
    FormEstimate,
    MatchResult,
    PredictionResult,
    SquadStatus,
)
from phoenix.domain.value_objects.value_objects import (
    OutcomeProbabilities,
    SquadAdjustment,
)


class PredictionService:
    """
    Domain service for generating match predictions.

    Every step is deterministic: the same last-10 sequences and squad
    summaries always produce the same prediction.
    """

    def __init__(self):
        """Initialize the prediction service."""
        pass

    @staticmethod
    def normalize_results(results: Sequence[MatchResult]) -> list[MatchResult]:
        """
        Truncate or pad a result sequence to exactly ten entries.

        Padding uses neutral 0-0 draws appended after the real results
        (i.e. as the oldest games).
        """
        normalized = list(results)[:FORM_WINDOW]
        while len(normalized) < FORM_WINDOW:
            normalized.append(MatchResult.neutral())
        return normalized

    @staticmethod
    def _average(values: Sequence[float]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    def calculate_form(self, results: Sequence[MatchResult]) -> FormEstimate:
        """
        Calculate the recency-weighted goals scored and conceded per match.

        Args:
            results: Last ten results, newest first

        Returns:
            FormEstimate where the latest five games weigh 60% and the
            five before them 40%.

        Example:
            ten results of 2-0 -> expected_scored 2.0, expected_conceded 0.0
        """
        games = self.normalize_results(results)
        recent, prior = games[:RECENT_SPLIT], games[RECENT_SPLIT:]

        scored = (
            self._average([g.goals_for for g in recent]) * RECENT_WEIGHT
            + self._average([g.goals_for for g in prior]) * PRIOR_WEIGHT
        )
        conceded = (
            self._average([g.goals_against for g in recent]) * RECENT_WEIGHT
            + self._average([g.goals_against for g in prior]) * PRIOR_WEIGHT
        )
        return FormEstimate(expected_scored=scored, expected_conceded=conceded)

    @staticmethod
    def blend_expected_goals(
        home_form: FormEstimate,
        away_form: FormEstimate,
    ) -> tuple[float, float]:
        """
        Combine each side's attack with the opponent's defence.

        Returns:
            (raw_home, raw_away) expected goals before squad adjustments
        """
        raw_home = (home_form.expected_scored + away_form.expected_conceded) / 2
        raw_away = (away_form.expected_scored + home_form.expected_conceded) / 2
        return raw_home, raw_away

    @staticmethod
    def squad_impact(missing: int) -> float:
        """Step table for missing players: 0, 0.15, 0.30, 0.45 (3 or more)."""
        if missing <= 0:
            return SQUAD_IMPACT_STEPS[0]
        return SQUAD_IMPACT_STEPS[min(missing, len(SQUAD_IMPACT_STEPS) - 1)]

    @staticmethod
    def clamp_adjustment(delta: float) -> float:
        return max(-MAX_SQUAD_ADJUSTMENT, min(MAX_SQUAD_ADJUSTMENT, delta))

    def calculate_team_delta(self, own: SquadStatus, opponent: SquadStatus) -> float:
        """
        Net expected goals shift for one team.

        Own missing attackers and a missing top scorer lower the team's
        expectation; missing defenders on the opponent raise it.
        """
        delta = -self.squad_impact(own.attackers_missing)
        delta += self.squad_impact(opponent.defenders_missing)
        if own.top_scorer_missing:
            delta -= TOP_SCORER_PENALTY
        return self.clamp_adjustment(delta)

    def adjust_for_squads(
        self,
        raw_home: float,
        raw_away: float,
        home_squad: SquadStatus,
        away_squad: SquadStatus,
    ) -> tuple[float, float, SquadAdjustment]:
        """
        Apply squad deltas to the raw expectations.

        Returns:
            (adjusted_home, adjusted_away, applied deltas); adjusted values
            never drop below zero.
        """
        home_delta = self.calculate_team_delta(home_squad, away_squad)
        away_delta = self.calculate_team_delta(away_squad, home_squad)

        adjusted_home = max(0.0, raw_home + home_delta)
        adjusted_away = max(0.0, raw_away + away_delta)
        return adjusted_home, adjusted_away, SquadAdjustment(home_delta=home_delta, away_delta=away_delta)

    @staticmethod
    def classify_outcome(goal_difference: float) -> OutcomeProbabilities:
        """
        Pick the fixed win/draw/loss split for an expected goal differential.

        | D range          | home | draw | away |
        | D >= 0.6         | 65   | 25   | 10   |
        | 0.2 <= D < 0.6   | 52   | 30   | 18   |
        | -0.2 < D < 0.2   | 33   | 34   | 33   |
        | -0.6 < D <= -0.2 | 18   | 30   | 52   |
        | D <= -0.6        | 10   | 25   | 65   |
        """
        if goal_difference >= STRONG_EDGE:
            split = OUTCOME_STRONG_HOME
        elif goal_difference >= SLIGHT_EDGE:
            split = OUTCOME_SLIGHT_HOME
        elif goal_difference > -SLIGHT_EDGE:
            split = OUTCOME_BALANCED
        elif goal_difference > -STRONG_EDGE:
            split = OUTCOME_SLIGHT_AWAY
        else:
            split = OUTCOME_STRONG_AWAY
        return OutcomeProbabilities.from_tuple(split)

    @staticmethod
    def round_scoreline_goals(expected: float) -> int:
        """
        Map an expected goals value to the displayed integer.

        Below 0.2 shows 0, 3.8 and above shows 4, everything else rounds
        half up.
        """
        if expected < SCORELINE_FLOOR:
            return 0
        if expected >= SCORELINE_CAP:
            return SCORELINE_MAX_GOALS
        return int(math.floor(expected + 0.5))

    @staticmethod
    def label_confidence(home_squad: SquadStatus, away_squad: SquadStatus) -> ConfidenceLevel:
        """High with no missing players, Medium for 1-2, Low for 3 or more."""
        missing = home_squad.total_missing + away_squad.total_missing
        if missing == 0:
            return ConfidenceLevel.HIGH
        if missing < LOW_CONFIDENCE_THRESHOLD:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def predict(
        self,
        home_results: Sequence[MatchResult],
        away_results: Sequence[MatchResult],
        home_squad: SquadStatus = SquadStatus(),
        away_squad: SquadStatus = SquadStatus(),
    ) -> PredictionResult:
        """
        Generate the prediction for one fixture.

        Args:
            home_results: Home team's last ten results, newest first
            away_results: Away team's last ten results, newest first
            home_squad: Home team availability
            away_squad: Away team availability

        Returns:
            PredictionResult with expected goals, scoreline, outcome split,
            confidence label and the squad deltas that were applied
        """
        home_form = self.calculate_form(home_results)
        away_form = self.calculate_form(away_results)

        raw_home, raw_away = self.blend_expected_goals(home_form, away_form)
        expected_home, expected_away, adjustments = self.adjust_for_squads(
            raw_home, raw_away, home_squad, away_squad
        )

        scoreline = (
            f"{self.round_scoreline_goals(expected_home)} - "
            f"{self.round_scoreline_goals(expected_away)}"
        )

        return PredictionResult(
            expected_home_goals=expected_home,
            expected_away_goals=expected_away,
            expected_total_goals=expected_home + expected_away,
            predicted_scoreline=scoreline,
            outcome_probabilities=self.classify_outcome(expected_home - expected_away),
            confidence=self.label_confidence(home_squad, away_squad),
            squad_adjustments=adjustments,
        )
