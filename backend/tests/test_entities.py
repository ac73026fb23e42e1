"""
Unit Tests for Domain Entities and Value Objects
"""

import pytest

from phoenix.domain.entities.entities import League, MatchOutcome, MatchResult, SquadStatus
from phoenix.domain.value_objects.value_objects import OutcomeProbabilities, SquadAdjustment


class TestMatchResult:
    """Tests for MatchResult entity."""

    @pytest.mark.parametrize("goals_for, goals_against, outcome", [
        (2, 1, MatchOutcome.WIN),
        (1, 1, MatchOutcome.DRAW),
        (0, 3, MatchOutcome.LOSS),
    ])
    def test_from_score(self, goals_for, goals_against, outcome):
        assert MatchResult.from_score(goals_for, goals_against).result == outcome

    def test_negative_goals_rejected(self):
        with pytest.raises(ValueError):
            MatchResult(goals_for=-1, goals_against=0)

    def test_neutral_is_goalless_draw(self):
        assert MatchResult.neutral() == MatchResult(0, 0, MatchOutcome.DRAW)


class TestSquadStatus:
    """Tests for SquadStatus entity."""

    def test_total_missing_counts_top_scorer(self):
        status = SquadStatus(attackers_missing=1, defenders_missing=2, top_scorer_missing=True)
        assert status.total_missing == 4

    def test_counts_bounded(self):
        with pytest.raises(ValueError):
            SquadStatus(attackers_missing=4)

    def test_names_bounded(self):
        with pytest.raises(ValueError):
            SquadStatus(missing_player_names=tuple("abcdef"))


class TestLeague:
    def test_requires_name_and_country(self):
        with pytest.raises(ValueError):
            League(id="1", name="", country="England")


class TestOutcomeProbabilities:
    """Tests for OutcomeProbabilities value object."""

    def test_valid(self):
        probs = OutcomeProbabilities(home=52, draw=30, away=18)
        assert probs.as_tuple() == (52, 30, 18)

    def test_must_sum_to_hundred(self):
        with pytest.raises(ValueError):
            OutcomeProbabilities(home=50, draw=30, away=30)

    def test_range(self):
        with pytest.raises(ValueError):
            OutcomeProbabilities.from_tuple((110, -5, -5))


class TestSquadAdjustment:
    def test_default_is_zero(self):
        assert SquadAdjustment() == SquadAdjustment(home_delta=0.0, away_delta=0.0)

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            SquadAdjustment(home_delta=-0.65)
