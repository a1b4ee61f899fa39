"""In-memory Geant4-style geometry model used as conversion input."""

from .reflection import ReflectionFactory
from .solids import (
    BooleanSolid,
    Box,
    Cons,
    Ellipsoid,
    EllipticalCone,
    EllipticalTube,
    ExtrudedSolid,
    GenericPolycone,
    GenericTrap,
    Hype,
    IntersectionSolid,
    Orb,
    Para,
    Paraboloid,
    Polycone,
    Polyhedra,
    ReflectedSolid,
    Solid,
    Sphere,
    SubtractionSolid,
    Tet,
    Trap,
    Trd,
    Tubs,
    UnionSolid,
    ZSection,
)
from .transform import Transform3D
from .volumes import LogicalVolume, PhysicalVolume, place

__all__ = [
    "BooleanSolid",
    "Box",
    "Cons",
    "Ellipsoid",
    "EllipticalCone",
    "EllipticalTube",
    "ExtrudedSolid",
    "GenericPolycone",
    "GenericTrap",
    "Hype",
    "IntersectionSolid",
    "LogicalVolume",
    "Orb",
    "Para",
    "Paraboloid",
    "PhysicalVolume",
    "Polycone",
    "Polyhedra",
    "ReflectedSolid",
    "ReflectionFactory",
    "Solid",
    "Sphere",
    "SubtractionSolid",
    "Tet",
    "Transform3D",
    "Trap",
    "Trd",
    "Tubs",
    "UnionSolid",
    "ZSection",
    "place",
]
