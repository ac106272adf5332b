from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from golf_rivals import settings
from golf_rivals.errors import ConfigurationError


class Scoring(str, Enum):
    BYTES = "bytes"
    CHARS = "chars"

    @classmethod
    def parse(cls, value) -> "Scoring":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown scoring metric {value!r} (expected one of: {', '.join(s.value for s in cls)})"
            ) from None


class Role(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    REFERENCE = "reference"

    @classmethod
    def for_position(cls, index: int) -> "Role":
        roles = list(cls)
        if not 0 <= index < len(roles):
            raise ConfigurationError(f"At most {len(roles)} golfers can be compared")
        return roles[index]


# ----------------------------- API RECORDS ----------------------------

class Hole(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    category: str = ""


class Submission(BaseModel):
    """One row of a hole's solutions log, as the API returns it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    hole: str
    golfer: str
    language: str = Field(alias="lang")
    scoring: str  # metric the solution was submitted under
    bytes: int
    chars: int
    submitted: datetime

    @field_validator("submitted")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class SolutionLog:
    hole: str
    submissions: Tuple[Submission, ...] = ()
    name: str = ""


# ----------------------------- RUN CONFIG -----------------------------

def _default_palette() -> Dict[Role, str]:
    return {Role(k): v for k, v in settings.PALETTE.items()}


class ReportConfig(BaseModel):
    """Everything one comparison run depends on."""

    model_config = ConfigDict(frozen=True)

    participants: Tuple[str, ...]
    cutoff: datetime
    cutoff_label: str = settings.DEFAULT_CUTOFF
    scoring: Scoring = Scoring.BYTES
    language: str = settings.DEFAULT_LANGUAGE
    name_width: int = Field(default=settings.NAME_WIDTH, ge=1)
    bar_width: int = Field(default=settings.BAR_WIDTH, ge=1)
    reverse: bool = False
    show_lengths: bool = False
    palette: Dict[Role, str] = Field(default_factory=_default_palette)

    @field_validator("scoring", mode="before")
    @classmethod
    def _known_metric(cls, value) -> Scoring:
        return Scoring.parse(value)

    @field_validator("participants")
    @classmethod
    def _two_or_three(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(value) < 2:
            raise ValueError("two golfers are required")
        if len(value) > len(Role):
            raise ValueError(f"at most {len(Role)} golfers can be compared")
        if len(set(value)) != len(value):
            raise ValueError("golfers must be distinct")
        return value

    @property
    def me(self) -> str:
        return self.participants[0]

    @property
    def them(self) -> str:
        return self.participants[1]

    @property
    def reference(self) -> Optional[str]:
        return self.participants[2] if len(self.participants) > 2 else None

    def roles(self) -> Dict[str, Role]:
        return {golfer: Role.for_position(i) for i, golfer in enumerate(self.participants)}

    def color_for(self, golfer: str) -> str:
        return self.palette.get(self.roles().get(golfer), "white")

