"""Season input layer (pure, no UI/persistence).

Owns the mutable record of entered results and turns presentation events into
state changes. Every accepted or rejected command is followed by a full
standings recompute.

Architecture:
- State is a plain dict: positions, fastestLaps, version
- Commands are plain dicts with a 'type' field (TOGGLE_POSITION, SET_FASTEST_LAP, RESET_RESULTS)
- apply_command() takes (season, state, cmd) and returns CommandOutcome with updated state
- Mutations are performed on a deepcopy to preserve functional purity

Rules:
- TOGGLE_POSITION: selecting the recorded position clears it, any other overwrites it
- SET_FASTEST_LAP: unconditional overwrite of the flag
- Locked events (seed data) reject both; the command becomes a no-op
- version: monotonic counter bumped on each accepted change; older versions are stale
"""
from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .schedule import Event, SeasonSchedule
from .standings import Standings, compute_standings
from .types import CommandPayload, StandingsState
from .validation import InputSanitizer, SeasonConfig, ValidatedCmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Season:
    """Static configuration for one title run-in."""

    schedule: SeasonSchedule
    starting_points: Dict[str, int]
    seed_positions: Dict[str, Dict[str, int]] = field(default_factory=dict)
    seed_fastest_laps: Dict[str, Dict[str, bool]] = field(default_factory=dict)

    @property
    def competitors(self) -> tuple[str, ...]:
        return tuple(self.starting_points.keys())

    @classmethod
    def from_config(cls, data: Mapping[str, Any] | SeasonConfig) -> "Season":
        config = data if isinstance(data, SeasonConfig) else SeasonConfig.model_validate(data)
        schedule = SeasonSchedule(
            Event(name=item.name, short=item.short, locked=item.locked)
            for item in config.events
        )
        return cls(
            schedule=schedule,
            starting_points=dict(config.startingPoints),
            seed_positions={k: dict(v) for k, v in config.seedPositions.items()},
            seed_fastest_laps={k: dict(v) for k, v in config.seedFastestLaps.items()},
        )

    def standings(self, state: Mapping[str, Any]) -> Standings:
        return compute_standings(
            self.starting_points,
            state.get("positions"),
            state.get("fastestLaps"),
            self.schedule,
        )


@dataclass
class CommandOutcome:
    """Result of applying a toggle command."""

    state: Dict[str, Any]
    cmd_payload: Dict[str, Any]
    standings: Standings
    snapshot_required: bool
    error: ValidationError | None = None


@dataclass
class ValidationError:
    """Represents a rejected command (pure core, not an exception)."""

    kind: str
    message: str | None = None


DEFAULT_SEASON_CONFIG: Dict[str, Any] = {
    "startingPoints": {"Max Verstappen": 362, "Lando Norris": 315},
    "events": [
        {"name": "Brazil Sprint", "short": True, "locked": True},
        {"name": "Brazil"},
        {"name": "Las Vegas"},
        {"name": "Qatar Sprint", "short": True},
        {"name": "Qatar"},
        {"name": "Abu Dhabi"},
    ],
    "seedPositions": {
        "Max Verstappen": {"Brazil Sprint": 4},
        "Lando Norris": {"Brazil Sprint": 1},
    },
}


def default_season() -> Season:
    """The 2024 drivers' title run-in from the Brazil Sprint onwards."""
    return Season.from_config(DEFAULT_SEASON_CONFIG)


def default_state(season: Season) -> StandingsState:
    """Fresh state holding only the seed results.

    Returns:
        Dict with keys:
        - positions: competitor -> event -> rank (every competitor present, maybe empty)
        - fastestLaps: competitor -> event -> bool
        - version: 0
    """
    return {
        "positions": {
            name: dict(season.seed_positions.get(name, {})) for name in season.competitors
        },
        "fastestLaps": {
            name: dict(season.seed_fastest_laps.get(name, {})) for name in season.competitors
        },
        "version": 0,
    }


def toggle_position(
    positions: Mapping[str, Mapping[str, int]], competitor: str, event: str, position: int
) -> Dict[str, Dict[str, int]]:
    """Pure toggle: same position clears the entry, a different one overwrites it."""
    updated = {name: dict(per_event) for name, per_event in positions.items()}
    per_event = updated.setdefault(competitor, {})
    if per_event.get(event) == position:
        del per_event[event]
    else:
        per_event[event] = position
    return updated


def set_bonus(
    flags: Mapping[str, Mapping[str, bool]], competitor: str, event: str, checked: bool
) -> Dict[str, Dict[str, bool]]:
    updated = {name: dict(per_event) for name, per_event in flags.items()}
    updated.setdefault(competitor, {})[event] = bool(checked)
    return updated


def _as_validated(cmd: CommandPayload | Mapping[str, Any] | ValidatedCmd) -> ValidatedCmd:
    if isinstance(cmd, ValidatedCmd):
        return cmd
    return InputSanitizer.validate_and_sanitize_cmd(dict(cmd))


def validate_command(
    season: Season,
    cmd: CommandPayload | Mapping[str, Any] | ValidatedCmd,
    state: Mapping[str, Any] | None = None,
) -> ValidationError | None:
    """Check a command against the season before it touches state.

    Returns ValidationError if rejected, otherwise None.

    Validation rules:
        1. version older than state version -> stale_version
        2. competitor not configured -> unknown_competitor
        3. event not in schedule -> unknown_event
        4. event flagged locked -> locked_event
        5. position beyond the event's selectable range -> position_out_of_range

    Raises:
        ValueError: if the command itself is malformed
    """
    validated = _as_validated(cmd)

    if state is not None and validated.version is not None:
        if validated.version < state.get("version", 0):
            return ValidationError(kind="stale_version")

    if validated.type == "RESET_RESULTS":
        return None

    if validated.competitor not in season.competitors:
        return ValidationError(
            kind="unknown_competitor", message=f"unknown competitor: {validated.competitor}"
        )

    event = season.schedule.get(validated.event)
    if event is None:
        return ValidationError(kind="unknown_event", message=f"unknown event: {validated.event}")

    if event.locked:
        return ValidationError(kind="locked_event", message=f"{event.name} results are fixed")

    if validated.type == "TOGGLE_POSITION" and validated.position > event.max_selectable_position:
        return ValidationError(
            kind="position_out_of_range",
            message=f"{event.name} accepts positions 1-{event.max_selectable_position}",
        )

    return None


def _apply_transition(
    season: Season, state: Dict[str, Any], cmd: ValidatedCmd
) -> tuple[Dict[str, Any], Dict[str, Any]]:
    # Work on a copy to keep transitions pure and deterministic for the same input.
    new_state: Dict[str, Any] = deepcopy(state)
    new_state.setdefault("positions", {})
    new_state.setdefault("fastestLaps", {})
    payload = cmd.model_dump(exclude_none=True)

    if cmd.type == "TOGGLE_POSITION":
        new_state["positions"] = toggle_position(
            new_state["positions"], cmd.competitor, cmd.event, cmd.position
        )
        payload["recorded"] = new_state["positions"].get(cmd.competitor, {}).get(cmd.event)

    elif cmd.type == "SET_FASTEST_LAP":
        new_state["fastestLaps"] = set_bonus(
            new_state["fastestLaps"], cmd.competitor, cmd.event, cmd.checked
        )

    elif cmd.type == "RESET_RESULTS":
        fresh = default_state(season)
        new_state["positions"] = fresh["positions"]
        new_state["fastestLaps"] = fresh["fastestLaps"]

    new_state["version"] = new_state.get("version", 0) + 1
    payload["version"] = new_state["version"]
    return new_state, payload


def apply_command(
    season: Season, state: Dict[str, Any], cmd: CommandPayload | Mapping[str, Any] | ValidatedCmd
) -> CommandOutcome:
    """Apply a toggle command and recompute standings.

    Args:
        season: Static season configuration
        state: Current state dict (will be mutated for in-place callers)
        cmd: Command dict with 'type' field and command-specific params

    Returns:
        CommandOutcome with updated state, command payload, standings and error (if rejected)

    Raises:
        ValueError: if the command is malformed (unknown type, missing fields)
    """
    validated = _as_validated(cmd)
    error = validate_command(season, validated, state)

    if error is not None:
        logger.warning(f"Rejected {validated.type}: {error.kind} ({error.message or '-'})")
        snapshot = deepcopy(state)
        return CommandOutcome(
            state=snapshot,
            cmd_payload=validated.model_dump(exclude_none=True),
            standings=season.standings(snapshot),
            snapshot_required=False,
            error=error,
        )

    new_state, payload = _apply_transition(season, state, validated)

    # Mirror into the caller's dict for in-place callers.
    state.clear()
    state.update(new_state)

    return CommandOutcome(
        state=new_state,
        cmd_payload=payload,
        standings=season.standings(new_state),
        snapshot_required=True,
    )
