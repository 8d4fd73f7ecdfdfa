"""
FieldDay Tournament Engine

Draw, scheduling, scoring rules, standings and propagation logic.
This module performs no database access.
"""

from engine.errors import (
    FieldDayError,
    InvalidInputError,
    InvalidResultError,
    IllegalStateError,
    NotFoundError,
)
from engine.group_draw import assign_groups
from engine.tournament_bracket import ScheduledMatch, generate_schedule
from engine.rules import ResultValidator, SportRules, ScoringKind, get_rules
from engine.standings import (
    StandingRow,
    SeasonStanding,
    ScorerRow,
    compute_standings,
    group_standings,
    compute_season_leaderboard,
    compute_top_scorers,
)
from engine.progression import advance_status, project_status, resolve_knockout_slots

__all__ = [
    "FieldDayError",
    "InvalidInputError",
    "InvalidResultError",
    "IllegalStateError",
    "NotFoundError",
    "assign_groups",
    "ScheduledMatch",
    "generate_schedule",
    "ResultValidator",
    "SportRules",
    "ScoringKind",
    "get_rules",
    "StandingRow",
    "SeasonStanding",
    "ScorerRow",
    "compute_standings",
    "group_standings",
    "compute_season_leaderboard",
    "compute_top_scorers",
    "advance_status",
    "project_status",
    "resolve_knockout_slots",
]
