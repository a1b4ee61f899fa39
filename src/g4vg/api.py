from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Optional

from .converter import Converter, ConverterOptions
from .errors import G4VGError, RuntimeErrorDetails, validate
from .geant4.reflection import ReflectionFactory
from .geant4.volumes import LogicalVolume, PhysicalVolume
from .vecgeom.manager import GeoManager
from .vecgeom.volumes import PlacedVolume

LOG = logging.getLogger(__name__)

__all__ = [
    "ConversionOptions",
    "ConversionOutcome",
    "ConversionResult",
    "DEFAULT_OPTIONS",
    "convert",
    "try_convert",
]


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Options controlling a conversion via :func:`convert`."""

    verbose: bool = False
    compare_volumes: bool = False

    # Source length unit to destination length unit (mm to mm)
    scale: ClassVar[float] = 1.0


DEFAULT_OPTIONS = ConversionOptions()


@dataclass(slots=True)
class ConversionResult:
    world: Optional[PlacedVolume]
    volumes: dict[LogicalVolume, int]


@dataclass(frozen=True, slots=True)
class ConversionOutcome:
    """Either a result or the details of the structured error that stopped it."""

    result: Optional[ConversionResult] = None
    error: Optional[RuntimeErrorDetails] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ConversionResult:
        if self.error is not None:
            raise G4VGError(self.error)
        return self.result


def convert(
    world: PhysicalVolume,
    options: Optional[ConversionOptions] = None,
    *,
    manager: Optional[GeoManager] = None,
    factory: Optional[ReflectionFactory] = None,
) -> ConversionResult:
    """Convert the geometry placed under ``world``.

    Returns the destination world and a map from every distinct logical volume
    reachable from ``world`` to its destination volume id.  Errors raised while
    converting propagate unchanged.  Reflected volumes are named after the
    constituents known to ``factory`` (the global reflection factory by default).
    """
    if options is None:
        options = DEFAULT_OPTIONS
    validate(world is not None, "cannot convert a null world volume", condition="world")

    converter = Converter(
        ConverterOptions(
            verbose=options.verbose,
            compare_volumes=options.compare_volumes,
            scale=options.scale,
        ),
        manager=manager,
        factory=factory,
    )
    result = converter(world)

    volumes = {lv: vid.unchecked_get() for lv, vid in result.volumes.items()}
    LOG.debug("Converted world '%s' into %d volumes", world.name, len(volumes))
    return ConversionResult(world=result.world, volumes=volumes)


def try_convert(
    world: PhysicalVolume,
    options: Optional[ConversionOptions] = None,
    *,
    manager: Optional[GeoManager] = None,
    factory: Optional[ReflectionFactory] = None,
) -> ConversionOutcome:
    """Like :func:`convert` but return structured errors instead of raising them."""
    try:
        return ConversionOutcome(result=convert(world, options, manager=manager, factory=factory))
    except G4VGError as exc:
        LOG.debug("Conversion failed: %s", exc)
        return ConversionOutcome(error=exc.details)
