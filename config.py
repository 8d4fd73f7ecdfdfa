"""
FieldDay Configuration

Centralized settings, paths, and constants for the tournament core.
"""

import logging
import os
from pathlib import Path
from dataclasses import dataclass
import appdirs


# Application info
APP_NAME = "FieldDay"
APP_AUTHOR = "FieldDay"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Paths:
    """Application paths."""
    # Data directory (stores database)
    data_dir: Path = Path(appdirs.user_data_dir(APP_NAME, APP_AUTHOR))

    # Config directory (stores user preferences)
    config_dir: Path = Path(appdirs.user_config_dir(APP_NAME, APP_AUTHOR))

    # Log directory
    log_dir: Path = Path(appdirs.user_log_dir(APP_NAME, APP_AUTHOR))

    @property
    def database(self) -> Path:
        return self.data_dir / "fieldday.db"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "fieldday.log"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for dir_path in [self.data_dir, self.config_dir, self.log_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class ScheduleSettings:
    """Single-venue timeline settings."""
    # Length of one match slot in minutes
    match_duration_minutes: int = 20

    # Gap between consecutive matches in minutes
    break_duration_minutes: int = 5

    # Venue name stamped on generated matches
    default_location: str = "Main Field"


@dataclass(frozen=True)
class ScoringSettings:
    """Points awarded in group tables and the season leaderboard."""
    win_points: int = 3
    draw_points: int = 1
    loss_points: int = 0

    # Season points for 1st, 2nd, 3rd, 4th place in a completed tournament
    placement_points: tuple[int, ...] = (7, 4, 2, 1)


@dataclass(frozen=True)
class DrawSettings:
    """Group draw settings."""
    competitors_per_tournament: int = 6
    group_size: int = 3

    # (group_id, display name) in draw order
    groups: tuple[tuple[str, str], ...] = (
        ("group-a", "Group A"),
        ("group-b", "Group B"),
    )


@dataclass(frozen=True)
class LoggingSettings:
    """Logging settings."""
    level: int = logging.INFO
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# Singleton instances
PATHS = Paths()
SCHEDULE_SETTINGS = ScheduleSettings()
SCORING_SETTINGS = ScoringSettings()
DRAW_SETTINGS = DrawSettings()
LOGGING_SETTINGS = LoggingSettings()

# Database URL (environment override for deployments and tests)
DATABASE_URL = os.environ.get("FIELDDAY_DATABASE_URL", f"sqlite:///{PATHS.database}")


def init_logging(log_to_file: bool = True) -> None:
    """Configure root logging for the application."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_to_file:
        handlers.append(logging.FileHandler(PATHS.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=LOGGING_SETTINGS.level,
        format=LOGGING_SETTINGS.format,
        handlers=handlers,
    )


def init_config() -> None:
    """Initialize configuration, create required directories and set up logging."""
    PATHS.ensure_directories()
    init_logging()
