"""Walk a Geant4-style volume tree and build the equivalent VecGeom-style tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import RUNTIME, runtime_throw, validate
from .geant4.reflection import ReflectionFactory
from .geant4.volumes import LogicalVolume, PhysicalVolume
from .naming import describe_lv, make_gdml_name
from .opaque_id import VolumeId
from .solid_converter import SolidConverter
from .vecgeom import volumes as vg
from .vecgeom.manager import GeoManager
from .vecgeom.transformation import Transformation3D

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConverterOptions:
    verbose: bool = False
    compare_volumes: bool = False
    scale: float = 1.0

    def __post_init__(self):
        validate(self.scale > 0, f"length scale must be positive (got {self.scale})", condition="scale > 0")


@dataclass(slots=True)
class ConverterResult:
    world: vg.PlacedVolume
    volumes: dict[LogicalVolume, VolumeId]


class Converter:
    """Convert a source geometry into volumes registered with ``manager``.

    Each distinct logical volume is converted once no matter how many times it
    is placed.  Daughters are converted before their mother, so volume ids are
    assigned children first and the world volume receives the last id.
    """

    def __init__(
        self,
        options: Optional[ConverterOptions] = None,
        *,
        manager: Optional[GeoManager] = None,
        factory: Optional[ReflectionFactory] = None,
    ):
        self.options = options if options is not None else ConverterOptions()
        self.manager = manager if manager is not None else GeoManager.instance()
        self.factory = factory
        self._convert_solid = SolidConverter(self.options.scale, self.options.compare_volumes)
        self._converted: dict[LogicalVolume, vg.LogicalVolume] = {}
        self._volume_ids: dict[LogicalVolume, VolumeId] = {}

    def __call__(self, world: PhysicalVolume) -> ConverterResult:
        validate(world is not None, "cannot convert a null world volume", condition="world")
        # Results cover only the volumes reachable from this world
        self._converted = {}
        self._volume_ids = {}
        world_lv = self._convert_tree(world.logical_volume)
        placed = world_lv.place(world.name, self._make_transformation(world))
        LOG.log(
            self._level,
            "Converted %d logical volumes (%d distinct solids) under world '%s'",
            len(self._volume_ids),
            len(self._convert_solid),
            world.name,
        )
        return ConverterResult(placed, dict(self._volume_ids))

    @property
    def _level(self) -> int:
        return logging.INFO if self.options.verbose else logging.DEBUG

    # ---------------- Tree walk ----------------

    def _convert_tree(self, root: LogicalVolume) -> vg.LogicalVolume:
        # Post-order walk with an explicit stack; entries are (volume, expanded)
        stack: list[tuple[LogicalVolume, bool]] = [(root, False)]
        in_progress: set[LogicalVolume] = set()
        while stack:
            lv, expanded = stack.pop()
            if lv in self._converted:
                continue
            if expanded:
                self._build_volume(lv)
                in_progress.discard(lv)
                continue
            if lv in in_progress:
                runtime_throw(
                    RUNTIME,
                    f"logical volume {describe_lv(lv)} contains itself",
                    "volume hierarchy is acyclic",
                )
            in_progress.add(lv)
            stack.append((lv, True))
            for pv in reversed(lv.daughters):
                stack.append((pv.logical_volume, False))
        return self._converted[root]

    def _build_volume(self, lv: LogicalVolume) -> None:
        unplaced = self._convert_solid(lv.solid)
        name = make_gdml_name(lv, factory=self.factory)
        dest = self.manager.make_logical_volume(name, unplaced)
        for pv in lv.daughters:
            dest.place_daughter(pv.name, self._converted[pv.logical_volume], self._make_transformation(pv), pv.copy_no)
        self._converted[lv] = dest
        self._volume_ids[lv] = VolumeId(dest.id)
        LOG.log(
            self._level,
            "Converted %s to '%s' (id %d, %d daughters)",
            describe_lv(lv),
            name,
            dest.id,
            dest.num_daughters,
        )

    def _make_transformation(self, pv: PhysicalVolume) -> Transformation3D:
        if pv.transform.is_reflection:
            runtime_throw(
                RUNTIME,
                f"placement '{pv.name}' of {describe_lv(pv.logical_volume)} has a reflecting transform; "
                "reflected placements must be created through the reflection factory",
                "!transform.is_reflection",
            )
        return self._convert_solid.transformation(pv.transform)
