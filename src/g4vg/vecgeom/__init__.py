"""In-memory VecGeom-style geometry model produced by the conversion."""

from .manager import GeoManager
from .transformation import Transformation3D
from .unplaced import (
    BooleanComponent,
    UnplacedBooleanVolume,
    UnplacedBox,
    UnplacedCone,
    UnplacedEllipsoid,
    UnplacedEllipticalCone,
    UnplacedEllipticalTube,
    UnplacedExtruded,
    UnplacedGenericPolycone,
    UnplacedGenTrap,
    UnplacedHype,
    UnplacedOrb,
    UnplacedParaboloid,
    UnplacedParallelepiped,
    UnplacedPolycone,
    UnplacedPolyhedron,
    UnplacedScaledShape,
    UnplacedSphere,
    UnplacedTet,
    UnplacedTrapezoid,
    UnplacedTrd,
    UnplacedTube,
    UnplacedVolume,
    XtruSection,
)
from .volumes import LogicalVolume, PlacedVolume

__all__ = [
    "BooleanComponent",
    "GeoManager",
    "LogicalVolume",
    "PlacedVolume",
    "Transformation3D",
    "UnplacedBooleanVolume",
    "UnplacedBox",
    "UnplacedCone",
    "UnplacedEllipsoid",
    "UnplacedEllipticalCone",
    "UnplacedEllipticalTube",
    "UnplacedExtruded",
    "UnplacedGenericPolycone",
    "UnplacedGenTrap",
    "UnplacedHype",
    "UnplacedOrb",
    "UnplacedParaboloid",
    "UnplacedParallelepiped",
    "UnplacedPolycone",
    "UnplacedPolyhedron",
    "UnplacedScaledShape",
    "UnplacedSphere",
    "UnplacedTet",
    "UnplacedTrapezoid",
    "UnplacedTrd",
    "UnplacedTube",
    "UnplacedVolume",
    "XtruSection",
]
