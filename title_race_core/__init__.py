from .schedule import (
    FASTEST_LAP_BONUS,
    SHORT_POINTS,
    STANDARD_POINTS,
    Event,
    SeasonSchedule,
    points_for,
)
from .standings import Standings, compute_standings, required_margin, standings_payload
from .season import (
    CommandOutcome,
    Season,
    ValidationError,
    apply_command,
    default_season,
    default_state,
    set_bonus,
    toggle_position,
    validate_command,
)
from .types import CommandPayload, StandingsPayload, StandingsState
from .validation import EventConfig, InputSanitizer, SeasonConfig, ValidatedCmd

__all__ = [
    "FASTEST_LAP_BONUS",
    "SHORT_POINTS",
    "STANDARD_POINTS",
    "Event",
    "SeasonSchedule",
    "points_for",
    "Standings",
    "compute_standings",
    "required_margin",
    "standings_payload",
    "CommandOutcome",
    "Season",
    "ValidationError",
    "apply_command",
    "default_season",
    "default_state",
    "set_bonus",
    "toggle_position",
    "validate_command",
    "CommandPayload",
    "StandingsPayload",
    "StandingsState",
    "EventConfig",
    "InputSanitizer",
    "SeasonConfig",
    "ValidatedCmd",
]
