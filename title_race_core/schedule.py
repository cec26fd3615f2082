"""Season schedule catalog (static data, no state).

Events are kept in season order. Each one is either a standard race or a
short (sprint) race, and the format decides which points table applies:
- standard: positions 1-10 score, +1 fastest-lap bonus for a top-10 finisher
- short: positions 1-8 score, no bonus

Lock flags are exposed here but not enforced; the input layer rejects writes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence


STANDARD_POINTS: tuple[int, ...] = (25, 18, 15, 12, 10, 8, 6, 4, 2, 1)
SHORT_POINTS: tuple[int, ...] = (8, 7, 6, 5, 4, 3, 2, 1)
FASTEST_LAP_BONUS = 1


@dataclass(frozen=True)
class Event:
    name: str
    short: bool = False
    locked: bool = False

    @property
    def points_table(self) -> tuple[int, ...]:
        return SHORT_POINTS if self.short else STANDARD_POINTS

    @property
    def max_selectable_position(self) -> int:
        return len(self.points_table)

    @property
    def max_points(self) -> int:
        # Ceiling for the contestable pool: winner's points plus the bonus slot.
        if self.short:
            return SHORT_POINTS[0]
        return STANDARD_POINTS[0] + FASTEST_LAP_BONUS


def points_for(event: Event, rank: int) -> int:
    """Base points for a 1-based rank; 0 outside the table."""
    table = event.points_table
    if rank < 1 or rank > len(table):
        return 0
    return table[rank - 1]


def bonus_for(event: Event, rank: int, flagged: bool) -> int:
    if event.short or not flagged:
        return 0
    if rank < 1 or rank > len(STANDARD_POINTS):
        return 0
    return FASTEST_LAP_BONUS


class SeasonSchedule:
    """Ordered, immutable list of events with lookup by name."""

    def __init__(self, events: Iterable[Event]):
        ordered = tuple(events)
        by_name: dict[str, Event] = {}
        for event in ordered:
            if event.name in by_name:
                raise ValueError(f"duplicate event name: {event.name}")
            by_name[event.name] = event
        self._events = ordered
        self._by_name = by_name

    def events(self) -> tuple[Event, ...]:
        return self._events

    def get(self, name: str) -> Event | None:
        return self._by_name.get(name)

    def locked_events(self) -> tuple[Event, ...]:
        return tuple(event for event in self._events if event.locked)

    def total_points(self) -> int:
        return sum(event.max_points for event in self._events)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        names = ", ".join(event.name for event in self._events)
        return f"SeasonSchedule([{names}])"


def as_event_sequence(events: SeasonSchedule | Sequence[Event]) -> tuple[Event, ...]:
    if isinstance(events, SeasonSchedule):
        return events.events()
    return tuple(events)
