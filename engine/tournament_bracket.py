"""
Tournament Bracket Generator

Builds the full match schedule of a field-day tournament:
Group Stage (round-robin in two groups of three) -> Semi-finals ->
Third place -> Final

All matches share one venue, so every match gets its own time slot.
Knockout matches are created with placeholder slots that are resolved as
results come in (see engine.progression).
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from itertools import combinations
from typing import Optional, Sequence

from config import DRAW_SETTINGS, SCHEDULE_SETTINGS, ScheduleSettings
from engine.errors import InvalidInputError
from models.match import MatchStage
from models.slots import (
    CompetitorSlot,
    GroupPlaceSlot,
    MatchOutcomeSlot,
    Outcome,
    Slot,
)
from models.tournament import Group

logger = logging.getLogger(__name__)

# Knockout match ids
SEMI_FINAL_1 = "sf1"
SEMI_FINAL_2 = "sf2"
THIRD_PLACE = "3rd"
FINAL = "final"


@dataclass
class ScheduledMatch:
    """A generated fixture, ready to be persisted."""
    match_id: str
    tournament_id: str
    stage: MatchStage
    round: int
    team_a: Slot
    team_b: Slot
    start_time: datetime
    group_id: Optional[str] = None
    location: Optional[str] = None


def slot_length(settings: ScheduleSettings = SCHEDULE_SETTINGS) -> timedelta:
    """Time from one match start to the next on the shared timeline."""
    return timedelta(
        minutes=settings.match_duration_minutes + settings.break_duration_minutes
    )


def _validate_groups(groups: Sequence[Group]) -> None:
    expected_groups = len(DRAW_SETTINGS.groups)
    if len(groups) != expected_groups:
        raise InvalidInputError(f"Expected {expected_groups} groups, got {len(groups)}")

    seen: set[str] = set()
    for group in groups:
        if len(group.competitors) != DRAW_SETTINGS.group_size:
            raise InvalidInputError(
                f"Group {group.id} must have {DRAW_SETTINGS.group_size} competitors, "
                f"got {len(group.competitors)}"
            )
        if seen & set(group.competitors) or len(set(group.competitors)) != len(group.competitors):
            raise InvalidInputError("A competitor cannot appear twice in the draw")
        seen.update(group.competitors)


def _round_robin_pairs(group: Group) -> list[tuple[str, str]]:
    """All unordered pairs of a group, in member order."""
    return list(combinations(group.competitors, 2))


def _interleave(
    first: list[tuple[str, str]],
    second: list[tuple[str, str]]
) -> list[tuple[int, tuple[str, str]]]:
    """
    Alternate one pairing from each group until both are exhausted.

    Returns (group_index, pair) tuples. Leftovers of the longer list follow
    consecutively.
    """
    ordered: list[tuple[int, tuple[str, str]]] = []
    for i in range(max(len(first), len(second))):
        if i < len(first):
            ordered.append((0, first[i]))
        if i < len(second):
            ordered.append((1, second[i]))
    return ordered


def generate_group_matches(
    tournament_id: str,
    groups: Sequence[Group],
    start_at: datetime,
    settings: ScheduleSettings = SCHEDULE_SETTINGS
) -> list[ScheduledMatch]:
    """
    Generate the round-robin group stage, alternating between groups.

    Args:
        tournament_id: Owning tournament
        groups: The two drawn groups, group A first
        start_at: Start of the first match
        settings: Slot lengths and venue

    Returns:
        Six matches "g1".."g6", one slot apart
    """
    _validate_groups(groups)

    step = slot_length(settings)
    pairs = _interleave(_round_robin_pairs(groups[0]), _round_robin_pairs(groups[1]))

    matches = []
    current_time = start_at
    for index, (group_index, (team_a, team_b)) in enumerate(pairs, start=1):
        matches.append(ScheduledMatch(
            match_id=f"g{index}",
            tournament_id=tournament_id,
            stage=MatchStage.GROUP,
            round=index,
            team_a=CompetitorSlot(team_a),
            team_b=CompetitorSlot(team_b),
            start_time=current_time,
            group_id=groups[group_index].id,
            location=settings.default_location,
        ))
        current_time = current_time + step

    return matches


def generate_knockout_matches(
    tournament_id: str,
    groups: Sequence[Group],
    start_at: datetime,
    last_group_start: datetime,
    settings: ScheduleSettings = SCHEDULE_SETTINGS
) -> list[ScheduledMatch]:
    """
    Generate semi-finals, third place match and final with placeholder slots.

    Cross-group semi-finals: A1 vs B2 and B1 vs A2. The first knockout match
    starts one break after the last group slot ends, never before start_at.
    """
    group_a, group_b = groups[0].id, groups[1].id
    step = slot_length(settings)
    brk = timedelta(minutes=settings.break_duration_minutes)

    first_start = max(start_at, last_group_start + step + brk)

    template = [
        (SEMI_FINAL_1, MatchStage.SEMI_FINAL, 1,
         GroupPlaceSlot(group_a, 1), GroupPlaceSlot(group_b, 2)),
        (SEMI_FINAL_2, MatchStage.SEMI_FINAL, 1,
         GroupPlaceSlot(group_b, 1), GroupPlaceSlot(group_a, 2)),
        (THIRD_PLACE, MatchStage.THIRD_PLACE, 2,
         MatchOutcomeSlot(SEMI_FINAL_1, Outcome.LOSER),
         MatchOutcomeSlot(SEMI_FINAL_2, Outcome.LOSER)),
        (FINAL, MatchStage.FINAL, 2,
         MatchOutcomeSlot(SEMI_FINAL_1, Outcome.WINNER),
         MatchOutcomeSlot(SEMI_FINAL_2, Outcome.WINNER)),
    ]

    return [
        ScheduledMatch(
            match_id=match_id,
            tournament_id=tournament_id,
            stage=stage,
            round=round_number,
            team_a=slot_a,
            team_b=slot_b,
            start_time=first_start + step * i,
            location=settings.default_location,
        )
        for i, (match_id, stage, round_number, slot_a, slot_b) in enumerate(template)
    ]


def generate_schedule(
    tournament_id: str,
    groups: Sequence[Group],
    start_at: datetime,
    settings: ScheduleSettings = SCHEDULE_SETTINGS
) -> list[ScheduledMatch]:
    """
    Generate the complete ordered schedule: six group matches, then the
    four knockout matches.

    Raises:
        InvalidInputError: Not exactly two groups of three distinct competitors
    """
    group_matches = generate_group_matches(tournament_id, groups, start_at, settings)
    knockout_matches = generate_knockout_matches(
        tournament_id,
        groups,
        start_at,
        group_matches[-1].start_time,
        settings,
    )

    schedule = group_matches + knockout_matches
    logger.debug(
        "Generated %d matches for tournament %s: %s -> %s",
        len(schedule), tournament_id,
        schedule[0].start_time, schedule[-1].start_time,
    )
    return schedule
