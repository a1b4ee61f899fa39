from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..errors import GEANT4, runtime_throw
from .solids import Solid
from .transform import Transform3D

LOG = logging.getLogger(__name__)

_INSTANCE_IDS = itertools.count()


@dataclass(eq=False)
class LogicalVolume:
    """Named solid plus the placements of its daughters.

    Logical volumes hash and compare by identity: two volumes with the same name
    and solid are still distinct, and one volume placed many times is shared.
    """

    name: str
    solid: Solid
    material: Optional[str] = None
    daughters: list["PhysicalVolume"] = field(default_factory=list, repr=False)
    instance_id: int = field(default_factory=lambda: next(_INSTANCE_IDS), init=False)

    @property
    def num_daughters(self) -> int:
        return len(self.daughters)


@dataclass(eq=False)
class PhysicalVolume:
    name: str
    logical_volume: LogicalVolume
    transform: Transform3D = field(default_factory=Transform3D.identity)
    mother: Optional[LogicalVolume] = None
    copy_no: int = 0


def place(
    lv: LogicalVolume,
    mother: Optional[LogicalVolume] = None,
    transform: Optional[Transform3D] = None,
    name: Optional[str] = None,
    copy_no: int = 0,
) -> PhysicalVolume:
    """Place ``lv`` inside ``mother`` (or as a world when ``mother`` is None)."""
    if transform is None:
        transform = Transform3D.identity()
    if transform.is_reflection:
        runtime_throw(
            GEANT4,
            f"placement of '{lv.name}' contains a reflection: place it through the reflection factory",
            "!transform.is_reflection",
        )
    pv = PhysicalVolume(name or lv.name, lv, transform, mother, copy_no)
    if mother is not None:
        mother.daughters.append(pv)
        LOG.debug("Placed %s in %s (copy %d)", pv.name, mother.name, copy_no)
    return pv
