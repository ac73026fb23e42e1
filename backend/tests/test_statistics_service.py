"""
Unit Tests for Statistics Service
"""

import pytest

from phoenix.domain.entities.entities import MatchOutcome, MatchResult
from phoenix.domain.services.statistics_service import StatisticsService
from tests.factories import make_fixture, make_history


@pytest.fixture
def service():
    return StatisticsService()


class TestMapResult:
    def test_home_perspective(self, service):
        fixture = make_fixture(1, home=(7, "A"), away=(8, "B"), home_goals=3, away_goals=1)

        result = service.map_result(fixture, "7")

        assert result == MatchResult(goals_for=3, goals_against=1, result=MatchOutcome.WIN)

    def test_away_perspective(self, service):
        fixture = make_fixture(1, home=(7, "A"), away=(8, "B"), home_goals=3, away_goals=1)

        result = service.map_result(fixture, "8")

        assert result.goals_for == 1
        assert result.goals_against == 3
        assert result.result == MatchOutcome.LOSS

    def test_missing_goals_count_as_zero(self, service):
        fixture = make_fixture(1, home=(7, "A"), away=(8, "B"), home_goals=None, away_goals=2)

        result = service.map_result(fixture, 7)

        assert (result.goals_for, result.goals_against) == (0, 2)


class TestLastTen:
    def test_sorted_most_recent_first(self, service):
        old = make_fixture(1, home=(7, "A"), home_goals=0, away_goals=1, timestamp=100)
        new = make_fixture(2, home=(7, "A"), home_goals=4, away_goals=0, timestamp=200)

        results = service.map_last_ten([old, new], "7")

        assert results[0].goals_for == 4
        assert results[1].goals_against == 1

    def test_padded_to_ten_with_draws(self, service):
        results = service.map_last_ten(make_history(7, [(1, 0)] * 3), "7")

        assert len(results) == 10
        assert results[3:] == [MatchResult.neutral()] * 7

    def test_truncated_to_ten(self, service):
        results = service.map_last_ten(make_history(7, [(1, 0)] * 12), "7")

        assert len(results) == 10


class TestGrouping:
    def test_groups_keep_first_seen_order(self, service):
        la_liga = (140, "La Liga", "Spain", 2026)
        premier = (39, "Premier League", "England", 2026)
        fixtures = [
            make_fixture(1, league=la_liga),
            make_fixture(2, league=premier),
            make_fixture(3, league=la_liga),
        ]

        groups = service.group_by_league(fixtures)

        assert [g.league.name for g in groups] == ["La Liga", "Premier League"]
        assert [f["fixture"]["id"] for f in groups[0].fixtures] == [1, 3]

    def test_missing_league_fields_defaulted(self, service):
        fixture = make_fixture(1)
        fixture["league"] = {"id": 5, "season": "n/a"}

        league = service.parse_league(fixture)

        assert league.name == "Unknown league"
        assert league.country == "World"
        assert league.season is None


class TestTeamTotals:
    def test_totals_and_averages(self, service):
        fixtures = make_history(7, [(2, 1), (0, 0), (1, 3)])

        totals = service.calculate_team_totals(fixtures, "7")

        assert totals["total_scored"] == 3
        assert totals["total_conceded"] == 4
        assert totals["average_scored"] == pytest.approx(1.0)
        assert totals["average_conceded"] == pytest.approx(4 / 3)
        assert len(totals["results"]) == 3

    def test_no_games(self, service):
        totals = service.calculate_team_totals([], "7")

        assert totals["average_scored"] == 0.0
        assert totals["results"] == []


class TestCurrentScore:
    def test_not_started(self, service):
        assert service.current_score(make_fixture(1), "home") is None

    def test_in_play(self, service):
        fixture = make_fixture(1, home_goals=2, away_goals=0, status="2H")
        assert service.current_score(fixture, "home") == 2
        assert service.current_score(fixture, "away") == 0


class TestMalformedTimestamps:
    def test_fixture_timestamp_coerced(self, service):
        fixture = make_fixture(1, timestamp="1792339200")
        assert service.fixture_timestamp(fixture) == 1792339200

    def test_garbage_timestamp_is_zero(self, service):
        fixture = make_fixture(1)
        fixture["fixture"]["timestamp"] = {"unexpected": True}
        assert service.fixture_timestamp(fixture) == 0

    def test_last_ten_with_mixed_timestamp_types(self, service):
        old = make_fixture(1, home=(7, "A"), home_goals=0, away_goals=1, timestamp="100")
        new = make_fixture(2, home=(7, "A"), home_goals=4, away_goals=0, timestamp=200)
        broken = make_fixture(3, home=(7, "A"), home_goals=2, away_goals=2, timestamp="n/a")

        results = service.map_last_ten([old, broken, new], "7")

        assert [r.goals_for for r in results[:3]] == [4, 0, 2]
