"""
Domain Constants

This module contains constant definitions valid across the domain layer:
form weights, squad impact steps, the outcome probability table and the
keyword lists used to classify injured players.
"""

# Number of past fixtures evaluated per team
FORM_WINDOW = 10
RECENT_SPLIT = 5

# Weighted form: recent half dominates, prior half keeps a baseline
RECENT_WEIGHT = 0.6
PRIOR_WEIGHT = 0.4

# Missing players (0, 1, 2, 3+) -> expected goals shift
SQUAD_IMPACT_STEPS = (0.0, 0.15, 0.30, 0.45)
TOP_SCORER_PENALTY = 0.2
MAX_SQUAD_ADJUSTMENT = 0.6
MAX_MISSING_COUNT = 3
MAX_MISSING_NAMES = 5

# Scoreline display smoothing
SCORELINE_FLOOR = 0.2
SCORELINE_CAP = 3.8
SCORELINE_MAX_GOALS = 4

# Goal differential thresholds and (home, draw, away) percentages
STRONG_EDGE = 0.6
SLIGHT_EDGE = 0.2
OUTCOME_STRONG_HOME = (65, 25, 10)
OUTCOME_SLIGHT_HOME = (52, 30, 18)
OUTCOME_BALANCED = (33, 34, 33)
OUTCOME_SLIGHT_AWAY = (18, 30, 52)
OUTCOME_STRONG_AWAY = (10, 25, 65)

# Confidence labels by total missing players
CONFIDENCE_HIGH = "High"
CONFIDENCE_MEDIUM = "Medium"
CONFIDENCE_LOW = "Low"
LOW_CONFIDENCE_THRESHOLD = 3

# Free-text position keywords (lowercase substring match)
ATTACKER_KEYWORDS = ("attack", "forward", "striker", "winger")
DEFENDER_KEYWORDS = ("defen", "back")

UNKNOWN_TEAM = "Unknown team"
UNKNOWN_PLAYER = "Unknown player"
UNKNOWN_LEAGUE = "Unknown league"
UNKNOWN_COUNTRY = "World"

ERROR_BACKEND_FETCH_FAILED = "backend_fetch_failed"
