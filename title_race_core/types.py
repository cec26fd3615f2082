"""Type definitions for season state, commands and display payloads."""
from __future__ import annotations

from typing import Dict, Optional, TypedDict


class StandingsState(TypedDict, total=False):
    """
    TypedDict representing the entered results for one season.

    The surrounding input layer owns this dict; the engine only reads it.
    """
    # Recorded finishing positions: competitor -> event -> 1-based rank
    positions: Dict[str, Dict[str, int]]
    # Fastest-lap flags: competitor -> event -> checked
    fastestLaps: Dict[str, Dict[str, bool]]
    # Monotonic counter bumped on every accepted change
    version: int


class CommandPayload(TypedDict, total=False):
    """
    TypedDict for command payloads sent to apply_command().

    Fields vary by command type.
    """
    # Common
    type: str
    version: Optional[int]

    # TOGGLE_POSITION / SET_FASTEST_LAP
    competitor: Optional[str]
    event: Optional[str]

    # TOGGLE_POSITION
    position: Optional[int]

    # SET_FASTEST_LAP
    checked: Optional[bool]


class ChampionBanner(TypedDict):
    title: str
    description: str


class StandingsPayload(TypedDict):
    """Display-ready snapshot of a Standings value."""
    points: Dict[str, int]
    remaining: int
    leader: Optional[str]
    champion: Optional[str]
    eventsLeft: Dict[str, int]
    requiredMargin: Dict[str, Optional[int]]
    banner: Optional[ChampionBanner]

