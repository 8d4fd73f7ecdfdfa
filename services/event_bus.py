"""
Event Bus - Central signal hub for inter-module communication.

Services emit here after a mutation has been committed; displays (scoreboards,
bracket views, leaderboards) connect here instead of polling the database.
"""

from PySide6.QtCore import QObject, Signal


class EventBus(QObject):
    """
    Central signal hub for FieldDay.

    The EventBus acts as a mediator between the services and their listeners:
    - TournamentService emits tournament, match and bracket changes
    - RosterService emits roster and running-time changes
    - Displays listen and refresh

    Usage:
        # In TournamentService
        self.event_bus.match_updated.emit(match_response)

        # In a scoreboard
        self.event_bus.match_updated.connect(self._on_match_updated)
    """

    # ============ Tournament Lifecycle ============
    tournament_created = Signal(str)            # tournament_id
    tournament_deleted = Signal(str)            # tournament_id
    tournament_status_changed = Signal(str, str)  # tournament_id, new status value

    # ============ Draw & Schedule ============
    groups_drawn = Signal(str, dict)            # tournament_id, {group_id: [competitor_id, ...]}
    schedule_generated = Signal(str, int)       # tournament_id, match count

    # ============ Match Events ============
    match_updated = Signal(object)              # MatchResponse
    slots_resolved = Signal(str, dict)          # tournament_id, {match_id: (team_a label, team_b label)}

    # ============ Roster Events ============
    player_added = Signal(object)               # PlayerResponse
    player_removed = Signal(int)                # player_id
    running_time_recorded = Signal(str, int, float)  # tournament_id, player_id, seconds

    # ============ System Events ============
    system_message = Signal(str, str)   # (level, message) - e.g., ("warning", "Delete of player 7 rejected: ...")

    def __init__(self):
        super().__init__()

    def emit_match(self, match) -> None:
        """Convenience method to emit a match update."""
        self.match_updated.emit(match)

    def emit_slots(self, tournament_id: str, changes: dict) -> None:
        """Convenience method to emit resolved slots as display labels."""
        self.slots_resolved.emit(tournament_id, {
            match_id: (team_a.label, team_b.label)
            for match_id, (team_a, team_b) in changes.items()
        })

    def emit_message(self, level: str, message: str) -> None:
        """Emit a system message (info, warning, error)."""
        self.system_message.emit(level, message)
