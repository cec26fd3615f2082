"""Standings engine for a two-competitor title race.

Single recompute operation, derived from scratch on every call:
- Totals: starting points + table points + fastest-lap bonus (standard, top 10 only).
- Remaining pool: sum of per-event ceilings (26 standard / 8 short) minus
  everything already awarded to either competitor, clamped at 0.
- Clinch: leader strictly ahead of follower + remaining pool.
- Required margin: ceil((other - own + remaining) / own unrecorded events), floored at 0.

The engine never raises on result or flag input; malformed entries contribute nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from .schedule import Event, SeasonSchedule, as_event_sequence, bonus_for, points_for
from .types import ChampionBanner, StandingsPayload

logger = logging.getLogger(__name__)

CHAMPION_TITLE = "We have a champion!"


@dataclass(frozen=True)
class Standings:
    points: dict[str, int]
    remaining: int
    leader: str | None
    champion: str | None
    events_left: dict[str, int]
    required_margin: dict[str, int | None]

    @property
    def is_clinched(self) -> bool:
        return self.champion is not None


def _coerce_position(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        return int(value) if value >= 1 else None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            parsed = int(stripped, 10)
        except ValueError:
            return None
        return parsed if parsed >= 1 else None
    return None


def _flatten(records: Mapping[Any, Any] | None) -> dict[tuple[str, str], Any]:
    """Normalize {(competitor, event): v} or {competitor: {event: v}} to the flat form."""
    flat: dict[tuple[str, str], Any] = {}
    if not records:
        return flat
    for key, value in records.items():
        if isinstance(key, tuple) and len(key) == 2:
            flat[(str(key[0]), str(key[1]))] = value
        elif isinstance(value, Mapping):
            for event_name, inner in value.items():
                flat[(str(key), str(event_name))] = inner
        else:
            logger.debug(f"Ignoring unkeyed result entry: {key!r}")
    return flat


def required_margin(own: int, other: int, remaining: int, events_left: int) -> int | None:
    """Average per-event advantage needed to reach parity; None with no events left."""
    if events_left <= 0:
        return None
    deficit = other - own + remaining
    # Integer ceiling division, exact for negative numerators too.
    margin = -(-deficit // events_left)
    return max(0, margin)


def compute_standings(
    starting_points: Mapping[str, int],
    results: Mapping[Any, Any] | None,
    bonus_flags: Mapping[Any, Any] | None,
    events: SeasonSchedule | Sequence[Event],
) -> Standings:
    """
    Recompute the full standings from the current inputs.

    Args:
      starting_points: competitor -> points before the first catalog event (exactly two).
      results: recorded positions keyed by (competitor, event) or nested by competitor.
      bonus_flags: fastest-lap flags, same shapes as results.
      events: the season schedule in order.
    """
    competitors = list(starting_points.keys())
    if len(competitors) != 2:
        raise ValueError(f"exactly two competitors required, got {len(competitors)}")

    ordered_events = as_event_sequence(events)
    by_name = {event.name: event for event in ordered_events}
    positions = _flatten(results)
    flags = _flatten(bonus_flags)

    totals = {name: int(starting_points[name]) for name in competitors}
    pool = sum(event.max_points for event in ordered_events)
    awarded = 0
    recorded: dict[str, set[str]] = {name: set() for name in competitors}

    for (competitor, event_name), raw_position in positions.items():
        if competitor not in totals:
            logger.debug(f"Ignoring result for unknown competitor {competitor!r}")
            continue
        event = by_name.get(event_name)
        if event is None:
            logger.debug(f"Ignoring result for unknown event {event_name!r}")
            continue
        rank = _coerce_position(raw_position)
        if rank is None:
            logger.debug(
                f"Ignoring non-scoring position {raw_position!r} for {competitor} at {event_name}"
            )
            continue
        recorded[competitor].add(event_name)
        earned = points_for(event, rank)
        earned += bonus_for(event, rank, flags.get((competitor, event_name)) is True)
        totals[competitor] += earned
        awarded += earned

    # Two scorers at one event can consume more than its ceiling.
    remaining = max(0, pool - awarded)

    first, second = competitors
    if totals[first] > totals[second]:
        leader, follower = first, second
    elif totals[second] > totals[first]:
        leader, follower = second, first
    else:
        leader = follower = None

    champion = None
    if leader is not None and totals[leader] > totals[follower] + remaining:
        champion = leader
        logger.info(f"{leader} clinched: {totals[leader]} vs {totals[follower]} + {remaining}")

    events_left = {
        name: sum(1 for event in ordered_events if event.name not in recorded[name])
        for name in competitors
    }
    margins = {
        first: required_margin(totals[first], totals[second], remaining, events_left[first]),
        second: required_margin(totals[second], totals[first], remaining, events_left[second]),
    }

    logger.debug(f"Standings recomputed: totals={totals} remaining={remaining}")
    return Standings(
        points=totals,
        remaining=remaining,
        leader=leader,
        champion=champion,
        events_left=events_left,
        required_margin=margins,
    )


def champion_banner(standings: Standings) -> ChampionBanner | None:
    if standings.champion is None:
        return None
    return {
        "title": CHAMPION_TITLE,
        "description": f"{standings.champion} has secured the World Drivers' Championship!",
    }


def standings_payload(standings: Standings) -> StandingsPayload:
    """JSON-ready snapshot for the presentation layer."""
    return {
        "points": dict(standings.points),
        "remaining": standings.remaining,
        "leader": standings.leader,
        "champion": standings.champion,
        "eventsLeft": dict(standings.events_left),
        "requiredMargin": dict(standings.required_margin),
        "banner": champion_banner(standings),
    }
