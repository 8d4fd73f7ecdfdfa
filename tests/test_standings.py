"""
Tests for the Standings Calculator

Tests group tables, tie-breaking, the season leaderboard and top scorers.
"""

from datetime import datetime
from types import SimpleNamespace

from engine.standings import (
    compute_season_leaderboard,
    compute_standings,
    compute_top_scorers,
    group_standings,
    tournament_placements,
)
from models.match import Match, MatchStage, MatchStatus
from models.result import MatchResult, ScoringEvent, Side
from models.slots import CompetitorSlot
from models.tournament import Group, TournamentStatus


def make_match(
    match_id, team_a, team_b, score_a=None, score_b=None,
    stage=MatchStage.GROUP, group_id="group-a", status=MatchStatus.COMPLETED,
    scorers=None,
):
    """Transient match; the winner follows the score."""
    match = Match(
        tournament_id="t1",
        id=match_id,
        stage=stage,
        group_id=group_id if stage == MatchStage.GROUP else None,
        round=1,
        status=status,
        start_time=datetime(2026, 5, 14, 9, 0),
    )
    match.team_a = match.source_a = CompetitorSlot(team_a)
    match.team_b = match.source_b = CompetitorSlot(team_b)
    if score_a is not None:
        winner = None
        if score_a > score_b:
            winner = team_a
        elif score_b > score_a:
            winner = team_b
        match.result = MatchResult(
            team_a_score=score_a, team_b_score=score_b,
            winner=winner, scorers=scorers or [],
        )
    return match


class TestComputeStandings:
    """Tests for group tables."""

    def test_worked_example(self):
        """X beats Y 2-0, Y draws Z 1-1, Z beats X 3-1."""
        matches = [
            make_match("g1", "X", "Y", 2, 0),
            make_match("g2", "Y", "Z", 1, 1),
            make_match("g3", "Z", "X", 3, 1),
        ]

        table = compute_standings(matches, ["X", "Y", "Z"])

        assert [r.competitor_id for r in table] == ["Z", "X", "Y"]
        assert [r.points for r in table] == [4, 3, 1]

        z, x, y = table
        assert (z.won, z.drawn, z.lost) == (1, 1, 0)
        assert (z.scored_for, z.scored_against, z.score_difference) == (4, 2, 2)
        assert (x.scored_for, x.scored_against) == (3, 3)
        assert (y.played, y.drawn, y.lost) == (2, 1, 1)

    def test_points_sum_over_completed_matches(self):
        """Win gives 3 and draw gives 1+1, so the table sums to 3*wins + 2*draws."""
        matches = [
            make_match("g1", "X", "Y", 2, 0),
            make_match("g2", "Y", "Z", 1, 1),
            make_match("g3", "Z", "X", 3, 1),
        ]

        assert sum(r.points for r in compute_standings(matches)) == 3 * 2 + 2 * 1

    def test_cycle_broken_by_score_difference(self):
        """A>B 2-1, B>C 3-0, C>A 1-0: all on 3 points, B has the best difference."""
        matches = [
            make_match("g1", "A", "B", 2, 1),
            make_match("g2", "B", "C", 3, 0),
            make_match("g3", "C", "A", 1, 0),
        ]

        table = compute_standings(matches, ["A", "B", "C"])

        assert [r.points for r in table] == [3, 3, 3]
        assert [r.competitor_id for r in table] == ["B", "A", "C"]
        assert [r.score_difference for r in table] == [2, 0, -2]

    def test_scored_for_breaks_equal_difference(self):
        """A>B 3-2, B>C 1-0, C>A 2-1: differences all 0, A scored most."""
        matches = [
            make_match("g1", "A", "B", 3, 2),
            make_match("g2", "B", "C", 1, 0),
            make_match("g3", "C", "A", 2, 1),
        ]

        table = compute_standings(matches, ["C", "B", "A"])

        assert [r.competitor_id for r in table] == ["A", "B", "C"]

    def test_complete_tie_keeps_input_order(self):
        """A>B 1-0, B>C 1-0, C>A 1-0: identical rows stay in input order."""
        matches = [
            make_match("g1", "A", "B", 1, 0),
            make_match("g2", "B", "C", 1, 0),
            make_match("g3", "C", "A", 1, 0),
        ]

        table = compute_standings(matches, ["A", "B", "C"])

        assert [r.competitor_id for r in table] == ["A", "B", "C"]

    def test_unfinished_matches_are_ignored(self):
        matches = [
            make_match("g1", "X", "Y", 2, 0),
            make_match("g2", "Y", "Z", 1, 0, status=MatchStatus.IN_PROGRESS),
            make_match("g3", "Z", "X"),
        ]
        matches[2].status = MatchStatus.SCHEDULED

        table = compute_standings(matches, ["X", "Y", "Z"])

        assert [(r.competitor_id, r.played) for r in table] == [("X", 1), ("Z", 0), ("Y", 1)]

    def test_group_standings_only_reads_its_group(self):
        matches = [
            make_match("g1", "X", "Y", 2, 0, group_id="group-a"),
            make_match("g2", "P", "Q", 5, 0, group_id="group-b"),
        ]
        group = Group("group-a", "Group A", ["X", "Y", "Z"])

        table = group_standings(matches, group)

        assert [r.competitor_id for r in table] == ["X", "Z", "Y"]


def finished_tournament(first, second, third, fourth, status=TournamentStatus.COMPLETED):
    """A tournament whose final and third place match are played."""
    matches = [
        make_match("final", first, second, 2, 1, stage=MatchStage.FINAL),
        make_match("3rd", third, fourth, 1, 0, stage=MatchStage.THIRD_PLACE),
    ]
    return SimpleNamespace(status=status, matches=matches)


class TestSeasonLeaderboard:
    """Tests for the season-long leaderboard."""

    def test_placement_points(self):
        tournaments = [finished_tournament("A", "B", "C", "D")]

        board = compute_season_leaderboard(tournaments, ["A", "B", "C", "D", "E", "F"])

        assert [(r.competitor_id, r.points) for r in board] == [
            ("A", 7), ("B", 4), ("C", 2), ("D", 1), ("E", 0), ("F", 0),
        ]
        assert board[0].gold == 1
        assert board[1].silver == 1
        assert board[2].bronze == 1
        assert board[3].fourth == 1

    def test_unfinished_tournaments_are_skipped(self):
        tournaments = [
            finished_tournament("A", "B", "C", "D"),
            finished_tournament("D", "C", "B", "A", status=TournamentStatus.KNOCKOUT_STAGE),
        ]

        board = compute_season_leaderboard(tournaments)

        assert board[0].competitor_id == "A"
        assert board[0].points == 7

    def test_gold_breaks_equal_points(self):
        """A: gold + fourth = 8, B: silver twice = 8; A ranks first on gold."""
        tournaments = [
            finished_tournament("C", "B", "E", "A"),
            finished_tournament("A", "B", "C", "D"),
        ]

        board = compute_season_leaderboard(tournaments, ["B", "A"])

        assert board[0].competitor_id == "C"
        assert [(r.competitor_id, r.points) for r in board[1:3]] == [("A", 8), ("B", 8)]

    def test_match_record_is_tallied(self):
        board = compute_season_leaderboard([finished_tournament("A", "B", "C", "D")])
        rows = {r.competitor_id: r for r in board}

        assert (rows["A"].wins, rows["A"].losses) == (1, 0)
        assert (rows["D"].wins, rows["D"].losses) == (0, 1)

    def test_placements(self):
        tournament = finished_tournament("A", "B", "C", "D")

        assert tournament_placements(tournament.matches) == ["A", "B", "C", "D"]


class TestTopScorers:
    """Tests for the top-scorer list."""

    def test_own_goals_are_not_credited(self):
        scorers = [
            ScoringEvent(actor="Cohen", side=Side.TEAM_A),
            ScoringEvent(actor="Levi", side=Side.TEAM_B),
            ScoringEvent(actor="Cohen", side=Side.TEAM_A),
            ScoringEvent(actor="Mizrahi", side=Side.TEAM_B, own_goal=True),
        ]
        matches = [make_match("g1", "X", "Y", 3, 1, scorers=scorers)]

        rows = compute_top_scorers(matches)

        assert [(r.actor, r.goals) for r in rows] == [("Cohen", 2), ("Levi", 1)]

    def test_own_goal_is_credited_to_the_other_side(self):
        event = ScoringEvent(actor="Mizrahi", side=Side.TEAM_B, own_goal=True)

        assert event.credited_side == Side.TEAM_A
