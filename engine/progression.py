"""
Tournament Progression

Pure re-evaluation of tournament state after a result is written:

    group matches -> group standings -> semi-final slots
    semi-final results -> third place / final slots

and the lifecycle status projected from the match set. Everything here is a
function of the current matches, so running it twice gives the same answer.
"""

import logging
from typing import Optional, Sequence

from engine.standings import group_standings, match_loser, match_winner
from models.match import Match, MatchStage, MatchStatus
from models.slots import (
    CompetitorSlot,
    GroupPlaceSlot,
    MatchOutcomeSlot,
    Outcome,
    Slot,
)
from models.tournament import Group, TournamentStatus

logger = logging.getLogger(__name__)

STARTED_STATUSES = (MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED)


def group_stage_complete(matches: Sequence[Match]) -> bool:
    """True when there are group matches and every one of them is completed."""
    group_matches = [m for m in matches if m.stage == MatchStage.GROUP]
    return bool(group_matches) and all(m.is_complete for m in group_matches)


def project_status(matches: Sequence[Match]) -> TournamentStatus:
    """
    The status the match set implies on its own.

    - any match started          -> group_stage
    - every group match complete -> knockout_stage
    - every match complete       -> completed
    """
    status = TournamentStatus.UPCOMING

    if any(m.status in STARTED_STATUSES for m in matches):
        status = TournamentStatus.GROUP_STAGE

    if group_stage_complete(matches):
        status = TournamentStatus.KNOCKOUT_STAGE

    if matches and all(m.is_complete for m in matches):
        status = TournamentStatus.COMPLETED

    return status


def advance_status(current: TournamentStatus, matches: Sequence[Match]) -> TournamentStatus:
    """Projected status, never lower than ``current``."""
    projected = project_status(matches)
    if projected.order > current.order:
        return projected
    return current


def resolve_slot(
    source: Slot,
    matches: Sequence[Match],
    groups: Sequence[Group]
) -> Slot:
    """
    Resolve a generated slot as far as the current results allow.

    Returns a CompetitorSlot once the dependency is decided, otherwise the
    placeholder itself.
    """
    if isinstance(source, CompetitorSlot):
        return source

    if isinstance(source, GroupPlaceSlot):
        if not group_stage_complete(matches):
            return source
        group = next((g for g in groups if g.id == source.group_id), None)
        if group is None:
            return source
        table = group_standings(matches, group)
        if source.rank > len(table):
            return source
        return CompetitorSlot(table[source.rank - 1].competitor_id)

    if isinstance(source, MatchOutcomeSlot):
        dependency = next((m for m in matches if m.id == source.match_id), None)
        if dependency is None:
            return source
        if source.outcome == Outcome.WINNER:
            competitor: Optional[str] = match_winner(dependency)
        else:
            competitor = match_loser(dependency)
        return CompetitorSlot(competitor) if competitor else source

    raise TypeError(f"Not a slot: {source!r}")


def resolve_knockout_slots(
    matches: Sequence[Match],
    groups: Sequence[Group]
) -> dict[str, tuple[Slot, Slot]]:
    """
    Work out the slot changes the current results justify.

    Only scheduled knockout matches are considered; once a match is under
    way its participants are fixed.

    Returns:
        {match_id: (team_a, team_b)} for every match whose slots change
    """
    changes: dict[str, tuple[Slot, Slot]] = {}
    for match in matches:
        if match.stage == MatchStage.GROUP or match.status != MatchStatus.SCHEDULED:
            continue

        team_a = resolve_slot(match.source_a, matches, groups)
        team_b = resolve_slot(match.source_b, matches, groups)
        if (team_a, team_b) != (match.team_a, match.team_b):
            changes[match.id] = (team_a, team_b)

    if changes:
        logger.debug("Slot changes: %s", {
            match_id: (a.label, b.label) for match_id, (a, b) in changes.items()
        })
    return changes
