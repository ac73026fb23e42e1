"""
Domain Value Objects Module

Value objects are immutable objects that are defined by their attributes rather than identity.
They encapsulate validation logic and provide type safety.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OutcomeProbabilities:
    """
    Win/draw/loss split as integer percentages.

    This value object ensures the split always sums to exactly 100.
    """
    home: int
    draw: int
    away: int

    def __post_init__(self):
        for value in (self.home, self.draw, self.away):
            if not 0 <= value <= 100:
                raise ValueError(f"Percentage must be between 0 and 100, got {value}")
        total = self.home + self.draw + self.away
        if total != 100:
            raise ValueError(f"Outcome percentages must sum to 100, got {total}")

    @classmethod
    def from_tuple(cls, split: tuple[int, int, int]) -> "OutcomeProbabilities":
        home, draw, away = split
        return cls(home=home, draw=draw, away=away)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.home, self.draw, self.away)

    def __str__(self) -> str:
        return f"{self.home}% / {self.draw}% / {self.away}%"


@dataclass(frozen=True)
class SquadAdjustment:
    """
    Expected goals shift applied to each side because of missing players.

    Each delta lies in [-0.6, 0.6].
    """
    home_delta: float = 0.0
    away_delta: float = 0.0

    def __post_init__(self):
        for delta in (self.home_delta, self.away_delta):
            if not -0.6 <= delta <= 0.6:
                raise ValueError(f"Squad adjustment must be between -0.6 and 0.6, got {delta}")
