"""
Input validation schemas using Pydantic v2
Validates toggle commands and static season configuration
"""

import logging
import re
from typing import Dict, List, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .schedule import SHORT_POINTS, STANDARD_POINTS

logger = logging.getLogger(__name__)

COMMAND_TYPES = {
    "TOGGLE_POSITION",
    "SET_FASTEST_LAP",
    "RESET_RESULTS",
}

# ==================== COMMANDS ====================


class ValidatedCmd(BaseModel):
    """Toggle command coming from the presentation layer"""

    type: str = Field(..., min_length=1, max_length=50, description="Command type")

    competitor: Optional[str] = Field(
        None, min_length=1, max_length=255, description="Competitor name"
    )
    event: Optional[str] = Field(
        None, min_length=1, max_length=255, description="Event name"
    )
    # Selectable range is format specific; the widest table is checked in season.py
    position: Optional[int] = Field(
        None, ge=1, le=99, description="Finishing position (1-based)"
    )
    checked: Optional[bool] = None

    version: Optional[int] = Field(
        None, ge=0, description="State version the command was built against"
    )

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate command type is one of allowed types"""
        v = v.strip().upper()
        if v not in COMMAND_TYPES:
            raise ValueError(f"type must be one of {sorted(COMMAND_TYPES)}, got {v}")
        return v

    @field_validator("competitor", "event")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = InputSanitizer.sanitize_name(v)
        if len(v) == 0:
            raise ValueError("name cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_command_fields(self) -> Self:
        """Validate required fields based on command type"""
        cmd_type = self.type

        if cmd_type in {"TOGGLE_POSITION", "SET_FASTEST_LAP"}:
            if self.competitor is None:
                raise ValueError(f"{cmd_type} requires competitor")
            if self.event is None:
                raise ValueError(f"{cmd_type} requires event")

        if cmd_type == "TOGGLE_POSITION" and self.position is None:
            raise ValueError("TOGGLE_POSITION requires position")

        elif cmd_type == "SET_FASTEST_LAP" and self.checked is None:
            raise ValueError("SET_FASTEST_LAP requires checked")

        return self

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ==================== CONFIGURATION ====================


class EventConfig(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    short: bool = Field(False, alias="isSprint")
    locked: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = InputSanitizer.sanitize_name(v)
        if len(v) == 0:
            raise ValueError("event name cannot be empty")
        return v

    model_config = ConfigDict(populate_by_name=True)


class SeasonConfig(BaseModel):
    """Static season configuration supplied at process start"""

    startingPoints: Dict[str, int] = Field(..., description="Competitor -> starting points")
    events: List[EventConfig] = Field(..., min_length=1)
    seedPositions: Dict[str, Dict[str, int]] = Field(default_factory=dict)
    seedFastestLaps: Dict[str, Dict[str, bool]] = Field(default_factory=dict)

    @field_validator("startingPoints")
    @classmethod
    def validate_starting_points(cls, v: Dict[str, int]) -> Dict[str, int]:
        cleaned: Dict[str, int] = {}
        for name, points in v.items():
            key = InputSanitizer.sanitize_name(name)
            if not key:
                raise ValueError("competitor name cannot be empty")
            if key in cleaned:
                raise ValueError(f"duplicate competitor: {key}")
            if points < 0:
                raise ValueError(f"starting points for {key} cannot be negative")
            cleaned[key] = points
        if len(cleaned) != 2:
            raise ValueError(f"exactly two competitors required, got {len(cleaned)}")
        return cleaned

    @model_validator(mode="after")
    def validate_references(self) -> Self:
        names = [event.name for event in self.events]
        if len(set(names)) != len(names):
            raise ValueError("event names must be unique")

        by_name = {event.name: event for event in self.events}
        for label, seed in (("seedPositions", self.seedPositions), ("seedFastestLaps", self.seedFastestLaps)):
            for competitor, per_event in seed.items():
                if competitor not in self.startingPoints:
                    raise ValueError(f"{label} names unknown competitor: {competitor}")
                for event_name in per_event:
                    if event_name not in by_name:
                        raise ValueError(f"{label} names unknown event: {event_name}")

        for competitor, per_event in self.seedPositions.items():
            for event_name, position in per_event.items():
                limit = len(SHORT_POINTS if by_name[event_name].short else STANDARD_POINTS)
                if position < 1 or position > limit:
                    raise ValueError(
                        f"seed position {position} for {competitor} at {event_name} must be 1-{limit}"
                    )

        return self

    model_config = ConfigDict(populate_by_name=True)


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int = 255) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            return str(value)[:max_length]

        value = value.strip()
        value = value[:max_length]
        value = value.replace("\0", "")

        return value

    @staticmethod
    def sanitize_name(name: str) -> str:
        """Sanitize competitor/event name - keeps letters with diacritics, digits, spaces"""
        name = InputSanitizer.sanitize_string(name, 255)

        # Drop control characters and markup/shell specials only
        dangerous_chars = r'[<>{}[\]\\|;&$`"\*\x00-\x1f\x7f]'
        name = re.sub(dangerous_chars, "", name)

        return name.strip()

    @staticmethod
    def validate_and_sanitize_cmd(cmd_dict: dict) -> ValidatedCmd:
        """
        Validate and sanitize command dictionary

        Returns:
            ValidatedCmd: Validated command object

        Raises:
            ValueError: If validation fails
        """
        try:
            return ValidatedCmd(**cmd_dict)
        except Exception as e:
            logger.warning(f"Command validation failed: {e}")
            raise ValueError(f"Invalid command: {str(e)}")


# ==================== EXPORT ====================

__all__ = [
    "COMMAND_TYPES",
    "EventConfig",
    "InputSanitizer",
    "SeasonConfig",
    "ValidatedCmd",
]
