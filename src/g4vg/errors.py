"""Structured runtime errors raised during geometry conversion.

Every failure in this package is a :class:`G4VGError` carrying a
:class:`RuntimeErrorDetails` record: the error kind, a message, the text of the
condition that failed, and where it failed.  Errors raised by the geometry model
layers use their own kinds (``"Geant4"``, ``"VecGeom"``) and are passed through
unchanged by the converter.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import NoReturn

from .config import get_settings

RUNTIME = "runtime"
CONFIGURATION = "configuration"
IMPLEMENTATION = "implementation"
GEANT4 = "Geant4"
VECGEOM = "VecGeom"

_KIND_PREFIXES = {
    CONFIGURATION: "required dependency is disabled in this build: ",
    IMPLEMENTATION: "feature is not yet implemented: ",
}


@dataclass(frozen=True, slots=True)
class RuntimeErrorDetails:
    """Detailed properties of a runtime error."""

    which: str = ""  # error kind (runtime, configuration, Geant4, ...)
    what: str = ""  # descriptive message
    condition: str = ""  # code/test that failed
    file: str = ""
    line: int = 0


def build_runtime_error_msg(details: RuntimeErrorDetails, *, verbose: bool | None = None) -> str:
    """Render an error for humans; location is shown only when informative."""
    if verbose is None:
        verbose = get_settings().verbose_errors

    msg = [f"g4vg: {details.which or 'unknown'} error: "]
    msg.append(_KIND_PREFIXES.get(details.which, ""))
    msg.append(details.what)

    if verbose or not details.what or details.which != RUNTIME:
        location = details.file or "unknown source"
        if details.line and details.file:
            location = f"{location}:{details.line}"
        msg.append(f"\n{location}:")
        if details.condition:
            msg.append(f" '{details.condition}' failed")
        else:
            msg.append(" failure")
    return "".join(msg)


class G4VGError(RuntimeError):
    """Error raised by working code from unexpected runtime conditions."""

    def __init__(self, details: RuntimeErrorDetails):
        super().__init__(build_runtime_error_msg(details))
        self._details = details

    @property
    def details(self) -> RuntimeErrorDetails:
        return self._details

    @property
    def which(self) -> str:
        return self._details.which


def _caller_location(stacklevel: int) -> tuple[str, int]:
    frame = inspect.currentframe()
    try:
        # Skip this helper plus the requested number of raising frames
        for _ in range(stacklevel + 1):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return "", 0
        return frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


def runtime_throw(which: str, what: str, condition: str = "", *, stacklevel: int = 1) -> NoReturn:
    """Raise a :class:`G4VGError` located at the caller ``stacklevel`` frames up."""
    file, line = _caller_location(stacklevel)
    raise G4VGError(
        RuntimeErrorDetails(which=which, what=what, condition=condition, file=file, line=line)
    )


def validate(cond: bool, what: str, *, condition: str = "") -> None:
    """Raise a runtime error unless ``cond`` holds."""
    if not cond:
        runtime_throw(RUNTIME, what, condition, stacklevel=2)


def not_implemented(what: str) -> NoReturn:
    runtime_throw(IMPLEMENTATION, what, stacklevel=2)


def not_configured(what: str) -> NoReturn:
    runtime_throw(CONFIGURATION, what, stacklevel=2)
