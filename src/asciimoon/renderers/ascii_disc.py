"""Character-grid lunar disc renderer.

Samples the visible hemisphere of a unit sphere at cell centres on a
``size`` x ``2 * size`` grid (cells are roughly twice as tall as wide) and
shades each cell from a light direction derived from the phase angle.

Coordinate system:
  x ∈ [-1, 1]  (left → right)
  y ∈ [-1, 1]  (top → bottom)
  z ≥ 0        (towards the viewer; orthographic, no perspective)
"""

import datetime
import logging
import math
from collections.abc import Callable

import numpy as np

from asciimoon.compute import compute_phase, utc_today
from asciimoon.models import Hemisphere, InvalidRenderArgument, MoonPhase, RenderConfig

logger = logging.getLogger(__name__)


def _light_vector(phase: float, hemisphere: Hemisphere) -> tuple[float, float]:
    """(sx, sz) of the light direction. 0=new, pi=full."""
    theta = 2.0 * math.pi * phase
    sx = math.sin(theta)
    if hemisphere == Hemisphere.NORTH:
        sx = -sx
    return sx, math.cos(theta)


def render_disc(phase: float, config: RenderConfig) -> str:
    """Render a phase fraction as a character grid.

    A cell is lit when ``sx * x + sz * z < 0``. That sign convention puts the
    waxing limb on the right for the northern hemisphere.

    Args:
        phase: Phase fraction in [0.0, 1.0]. Both ends are new moon.
        config: Grid size, orientation and cell characters.

    Returns:
        ``config.size`` rows of ``config.width`` characters joined by newlines,
        without a trailing newline.

    Raises:
        InvalidRenderArgument: phase outside [0.0, 1.0].
    """
    if not 0.0 <= phase <= 1.0:
        raise InvalidRenderArgument(f"phase must be in [0.0, 1.0], got {phase}")

    height, width = config.size, config.width
    sx, sz = _light_vector(phase, config.hemisphere)

    x = 2.0 * ((np.arange(width) + 0.5) / width) - 1.0
    y = 2.0 * ((np.arange(height) + 0.5) / height) - 1.0
    xx, yy = np.meshgrid(x, y)

    r2 = xx * xx + yy * yy
    on_disc = r2 <= 1.0
    z = np.sqrt(np.maximum(0.0, 1.0 - r2))
    lit = (sx * xx + sz * z) < 0.0

    cells = np.where(
        on_disc,
        np.where(lit, config.light_char, config.dark_char),
        config.empty_char,
    )
    logger.debug(
        "rendered %dx%d grid, %d of %d disc cells lit",
        height,
        width,
        int(np.count_nonzero(lit & on_disc)),
        int(np.count_nonzero(on_disc)),
    )
    return "\n".join("".join(row) for row in cells.tolist())


def render_moon(moon: MoonPhase, config: RenderConfig) -> str:
    """Render a computed MoonPhase with the given config."""
    return render_disc(moon.phase, config)


def render_by_phase(
    size: int,
    hemisphere: Hemisphere,
    phase: float,
    light_char: str = "@",
    dark_char: str = ".",
    empty_char: str = " ",
) -> str:
    """Render an explicit phase in [0.0, 1.0]. 0.0=new, 0.5=full, 1.0=new."""
    config = RenderConfig(
        size=size,
        hemisphere=hemisphere,
        light_char=light_char,
        dark_char=dark_char,
        empty_char=empty_char,
    )
    return render_disc(phase, config)


def render_by_date(
    size: int,
    hemisphere: Hemisphere,
    date: datetime.date | None = None,
    light_char: str = "@",
    dark_char: str = ".",
    empty_char: str = " ",
    today: Callable[[], datetime.date] = utc_today,
) -> str:
    """Render the phase of a date. None means today (UTC)."""
    return render_by_phase(
        size,
        hemisphere,
        compute_phase(date, today),
        light_char,
        dark_char,
        empty_char,
    )
