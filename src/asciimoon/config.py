"""Environment-driven defaults for the command line."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from asciimoon.models import Hemisphere


class ConfigError(ValueError):
    """An ASCIIMOON_* environment variable holds an unusable value."""


@dataclass(frozen=True)
class CliDefaults:
    size: int = 24
    hemisphere: Hemisphere = Hemisphere.NORTH
    log_level: int = logging.WARNING


def load_defaults(environ: Mapping[str, str] | None = None) -> CliDefaults:
    """Read ASCIIMOON_SIZE, ASCIIMOON_HEMISPHERE and ASCIIMOON_LOG_LEVEL.

    Unset or empty variables keep the built-in default.

    Raises:
        ConfigError: A variable is set to a value that cannot be used.
    """
    if environ is None:
        environ = os.environ
    defaults = CliDefaults()

    size = defaults.size
    raw = environ.get("ASCIIMOON_SIZE")
    if raw:
        try:
            size = int(raw)
        except ValueError as e:
            raise ConfigError(f"ASCIIMOON_SIZE must be an integer, got {raw!r}") from e

    hemisphere = defaults.hemisphere
    raw = environ.get("ASCIIMOON_HEMISPHERE")
    if raw:
        try:
            hemisphere = Hemisphere(raw.strip().lower())
        except ValueError as e:
            raise ConfigError(
                f"ASCIIMOON_HEMISPHERE must be 'north' or 'south', got {raw!r}"
            ) from e

    log_level = defaults.log_level
    raw = environ.get("ASCIIMOON_LOG_LEVEL")
    if raw:
        level = logging.getLevelName(raw.strip().upper())
        if not isinstance(level, int):
            raise ConfigError(f"ASCIIMOON_LOG_LEVEL is not a log level: {raw!r}")
        log_level = level

    return CliDefaults(size=size, hemisphere=hemisphere, log_level=log_level)
