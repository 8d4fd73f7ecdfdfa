"""
Standings Calculator

Derives group tables, the season leaderboard and the top-scorer list from
completed matches. Nothing here is persisted; tables are recomputed on demand.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from config import SCORING_SETTINGS, ScoringSettings
from models.match import MatchStage, MatchStatus
from models.result import MatchResult
from models.tournament import Group, TournamentStatus


class MatchLike(Protocol):
    """What the calculator reads from a match (ORM row or response model)."""
    id: str
    stage: MatchStage
    group_id: Optional[str]
    status: MatchStatus

    @property
    def team_a_id(self) -> Optional[str]: ...

    @property
    def team_b_id(self) -> Optional[str]: ...

    @property
    def result(self) -> Optional[MatchResult]: ...


@dataclass
class StandingRow:
    """A competitor's line in a group or tournament table."""
    competitor_id: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    scored_for: int = 0
    scored_against: int = 0
    points: int = 0

    @property
    def score_difference(self) -> int:
        return self.scored_for - self.scored_against


@dataclass
class SeasonStanding:
    """A competitor's line in the season-long leaderboard."""
    competitor_id: str
    points: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    gold: int = 0     # First place finishes
    silver: int = 0   # Second place finishes
    bronze: int = 0   # Third place finishes
    fourth: int = 0


@dataclass
class ScorerRow:
    actor: str
    goals: int = 0


def _is_counted(match: MatchLike) -> bool:
    return (
        match.status == MatchStatus.COMPLETED
        and match.result is not None
        and match.team_a_id is not None
        and match.team_b_id is not None
    )


def compute_standings(
    matches: Iterable[MatchLike],
    competitors: Optional[Sequence[str]] = None,
    scoring: ScoringSettings = SCORING_SETTINGS
) -> list[StandingRow]:
    """
    Build a ranked table from completed matches.

    Ranking: points, then score difference, then scored-for, all
    descending. Remaining ties keep input order: ``competitors`` first, then
    competitors in order of first appearance.

    Args:
        matches: Matches of one group or one tournament; others are ignored
            unless completed with both participants known
        competitors: Rows to seed the table with, even if they have not played
        scoring: Points per win/draw/loss
    """
    rows: dict[str, StandingRow] = {}
    for competitor in competitors or []:
        rows.setdefault(competitor, StandingRow(competitor_id=competitor))

    for match in matches:
        if not _is_counted(match):
            continue

        result = match.result
        row_a = rows.setdefault(match.team_a_id, StandingRow(competitor_id=match.team_a_id))
        row_b = rows.setdefault(match.team_b_id, StandingRow(competitor_id=match.team_b_id))

        for row, scored, conceded in (
            (row_a, result.team_a_score, result.team_b_score),
            (row_b, result.team_b_score, result.team_a_score),
        ):
            row.played += 1
            row.scored_for += scored
            row.scored_against += conceded

            if result.winner is None:
                row.drawn += 1
                row.points += scoring.draw_points
            elif result.winner == row.competitor_id:
                row.won += 1
                row.points += scoring.win_points
            else:
                row.lost += 1
                row.points += scoring.loss_points

    # sorted() is stable, reverse=True included
    return sorted(
        rows.values(),
        key=lambda r: (r.points, r.score_difference, r.scored_for),
        reverse=True
    )


def group_standings(
    matches: Iterable[MatchLike],
    group: Group,
    scoring: ScoringSettings = SCORING_SETTINGS
) -> list[StandingRow]:
    """Ranked table of one group, seeded with all of its members."""
    group_matches = [
        m for m in matches
        if m.stage == MatchStage.GROUP and m.group_id == group.id
    ]
    return compute_standings(group_matches, group.competitors, scoring)


def match_winner(match: MatchLike) -> Optional[str]:
    """Winner of a completed match, None if not completed or drawn."""
    if not _is_counted(match):
        return None
    return match.result.winner


def match_loser(match: MatchLike) -> Optional[str]:
    """Loser of a completed match, None if not completed or drawn."""
    winner = match_winner(match)
    if winner is None:
        return None
    return match.team_b_id if winner == match.team_a_id else match.team_a_id


def tournament_placements(matches: Iterable[MatchLike]) -> list[Optional[str]]:
    """
    Final placings [1st, 2nd, 3rd, 4th] from the final and third place match.

    Places whose deciding match is not completed are None.
    """
    matches = list(matches)
    final = next((m for m in matches if m.stage == MatchStage.FINAL), None)
    third = next((m for m in matches if m.stage == MatchStage.THIRD_PLACE), None)

    placements: list[Optional[str]] = [None, None, None, None]
    if final is not None:
        placements[0] = match_winner(final)
        placements[1] = match_loser(final)
    if third is not None:
        placements[2] = match_winner(third)
        placements[3] = match_loser(third)
    return placements


class TournamentLike(Protocol):
    status: TournamentStatus
    matches: Sequence[MatchLike]


def compute_season_leaderboard(
    tournaments: Iterable[TournamentLike],
    competitors: Optional[Sequence[str]] = None,
    scoring: ScoringSettings = SCORING_SETTINGS
) -> list[SeasonStanding]:
    """
    Rank competitors across all completed tournaments.

    Placement points (7/4/2/1 by default) are summed per competitor. Ties
    are broken by gold, then silver, then bronze medals; anything still
    tied keeps ``competitors`` order, then order of first appearance.
    """
    rows: dict[str, SeasonStanding] = {}
    for competitor in competitors or []:
        rows.setdefault(competitor, SeasonStanding(competitor_id=competitor))

    medal_fields = ("gold", "silver", "bronze", "fourth")

    for tournament in tournaments:
        if tournament.status != TournamentStatus.COMPLETED:
            continue

        placements = tournament_placements(tournament.matches)
        for place, competitor in enumerate(placements):
            if competitor is None:
                continue
            row = rows.setdefault(competitor, SeasonStanding(competitor_id=competitor))
            if place < len(scoring.placement_points):
                row.points += scoring.placement_points[place]
            setattr(row, medal_fields[place], getattr(row, medal_fields[place]) + 1)

        for match in tournament.matches:
            if not _is_counted(match):
                continue
            row_a = rows.setdefault(match.team_a_id, SeasonStanding(competitor_id=match.team_a_id))
            row_b = rows.setdefault(match.team_b_id, SeasonStanding(competitor_id=match.team_b_id))
            winner = match.result.winner
            if winner is None:
                row_a.draws += 1
                row_b.draws += 1
            elif winner == match.team_a_id:
                row_a.wins += 1
                row_b.losses += 1
            else:
                row_b.wins += 1
                row_a.losses += 1

    return sorted(
        rows.values(),
        key=lambda r: (r.points, r.gold, r.silver, r.bronze),
        reverse=True
    )


def compute_top_scorers(matches: Iterable[MatchLike]) -> list[ScorerRow]:
    """
    Goals per actor over the given matches, own goals excluded.

    Live (in-progress) matches count too, so the list follows the scoreboard.
    """
    rows: dict[str, ScorerRow] = {}
    for match in matches:
        result = match.result
        if result is None or match.status == MatchStatus.CANCELLED:
            continue
        for event in result.scorers:
            if event.own_goal:
                continue
            rows.setdefault(event.actor, ScorerRow(actor=event.actor)).goals += 1

    return sorted(rows.values(), key=lambda r: r.goals, reverse=True)
