"""Lunar phase value types: the raw query, the computed phase, and the grid config."""

import datetime
from dataclasses import dataclass
from enum import Enum


class InvalidRenderArgument(ValueError):
    """Renderer precondition violated (size, phase range, cell characters)."""


class Hemisphere(str, Enum):
    """Observer orientation. North shows the waxing limb on the right."""

    NORTH = "north"
    SOUTH = "south"


@dataclass(frozen=True)
class MoonQuery:
    """What to render, as given on the command line. Checked by compute.run."""

    date: str | None = None  # "YYYY-MM-DD"; None means today (UTC)
    phase: float | None = None  # Explicit phase, overrides date


@dataclass(frozen=True)
class MoonPhase:
    """Computed lunar phase. The sole astronomical input to renderers."""

    phase: float  # 0.0=new, 0.5=full
    date: datetime.date | None = None  # None when the phase was given directly
    julian_day: float | None = None  # Noon UTC Julian Day of `date`

    @property
    def label(self) -> str:
        if abs(self.phase - 0.5) < 1e-12:
            return "full"
        return "waxing" if self.phase < 0.5 else "waning"


@dataclass(frozen=True)
class RenderConfig:
    """Grid geometry and cell characters for the disc renderer."""

    size: int = 24  # Rows; width is always 2 * size
    hemisphere: Hemisphere = Hemisphere.NORTH
    light_char: str = "@"
    dark_char: str = "."
    empty_char: str = " "

    def __post_init__(self) -> None:
        if not isinstance(self.size, int) or isinstance(self.size, bool):
            raise InvalidRenderArgument(f"size must be an integer, got {self.size!r}")
        if self.size < 2:
            raise InvalidRenderArgument(f"size must be at least 2, got {self.size}")
        for name in ("light_char", "dark_char", "empty_char"):
            value = getattr(self, name)
            if len(value) != 1:
                raise InvalidRenderArgument(
                    f"{name} must be a single character, got {value!r}"
                )

    @property
    def width(self) -> int:
        return 2 * self.size
