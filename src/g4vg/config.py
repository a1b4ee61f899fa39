"""Environment-driven settings for the converter.

``G4VG_LOG``
    When non-empty, structured error messages include the failure location.
    If the value names a logging level (``debug``, ``info``, ...) that level is
    applied to the ``g4vg`` logger when the package is imported.
``G4VG_MC_SAMPLES``
    Number of sample points used for Monte Carlo capacity estimates of boolean
    solids. A malformed value raises a runtime error when an estimate is first
    needed, not on import.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

ENV_LOG = "G4VG_LOG"
ENV_MC_SAMPLES = "G4VG_MC_SAMPLES"

DEFAULT_MC_SAMPLES = 200_000

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass(frozen=True, slots=True)
class Settings:
    verbose_errors: bool = False
    log_level: Optional[int] = None
    raw_mc_samples: str = ""

    @property
    def mc_samples(self) -> int:
        """Sample count for Monte Carlo estimates, checked when first needed."""
        return _parse_samples(self.raw_mc_samples)


def _parse_samples(raw: str) -> int:
    # Imported here because errors reads its verbosity from this module
    from .errors import validate

    raw = raw.strip()
    if not raw:
        return DEFAULT_MC_SAMPLES
    try:
        value = int(raw)
    except ValueError:
        value = 0
    validate(
        value > 0,
        f"{ENV_MC_SAMPLES} must be a positive integer, got {raw!r}",
        condition=f"{ENV_MC_SAMPLES} > 0",
    )
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment (cached; see ``reload_settings``)."""
    raw_log = os.environ.get(ENV_LOG, "").strip()
    return Settings(
        verbose_errors=bool(raw_log),
        log_level=_LEVELS.get(raw_log.lower()),
        raw_mc_samples=os.environ.get(ENV_MC_SAMPLES, ""),
    )


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()
