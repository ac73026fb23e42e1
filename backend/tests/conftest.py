import pytest

from tests.factories import FakeAPIFootball, make_fixture, make_history


@pytest.fixture
def strong_vs_weak_source():
    """One fixture: home team always 2-0, away team always 0-2, nobody missing."""
    return FakeAPIFootball(
        fixtures=[make_fixture(100, home=(1, "Phoenix FC"), away=(2, "Atlas United"))],
        histories={
            "1": make_history(1, [(2, 0)] * 10),
            "2": make_history(2, [(0, 2)] * 10, home=False),
        },
    )
