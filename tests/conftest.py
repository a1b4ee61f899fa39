"""Shared fixtures: a reference geometry exercising every supported solid."""

import math
from dataclasses import dataclass, field

import pytest

from g4vg.geant4 import (
    Box,
    Cons,
    Ellipsoid,
    EllipticalCone,
    EllipticalTube,
    ExtrudedSolid,
    GenericPolycone,
    GenericTrap,
    Hype,
    LogicalVolume,
    Orb,
    Para,
    Paraboloid,
    PhysicalVolume,
    Polycone,
    Polyhedra,
    ReflectionFactory,
    Solid,
    Sphere,
    SubtractionSolid,
    Tet,
    Transform3D,
    Trap,
    Trd,
    Tubs,
    ZSection,
    place,
)
from g4vg.vecgeom import GeoManager

# Destination volume names in id order after converting the reference world
REFERENCE_NAMES = [
    "box500",
    "cone1",
    "para1",
    "sphere1",
    "parabol1",
    "trap1",
    "trd1",
    "trd2",
    "trd3",
    "trd3_refl",
    "tube100",
    "boolean1",
    "polycone1",
    "genPocone1",
    "ellipsoid1",
    "tetrah1",
    "orb1",
    "polyhedr1",
    "hype1",
    "elltube1",
    "ellcone1",
    "arb8b",
    "arb8a",
    "xtru1",
    "World",
]


@dataclass
class ReferenceGeometry:
    world: PhysicalVolume
    solids: list[Solid]
    volumes: dict[str, LogicalVolume] = field(default_factory=dict)


@pytest.fixture(autouse=True)
def reset_singletons():
    GeoManager.instance().clear()
    ReflectionFactory.instance().clear()
    yield
    GeoManager.instance().clear()
    ReflectionFactory.instance().clear()


def build_reference_geometry() -> ReferenceGeometry:
    factory = ReflectionFactory.instance()

    b1box = Box("b1box", 100.0, 100.0, 100.0)
    b1orb = Orb("b1orb", 60.0)
    shapes = [
        Box("box500", 250.0, 250.0, 250.0),
        Cons("cone1", 20.0, 50.0, 30.0, 60.0, 100.0),
        Para("para1", 30.0, 40.0, 60.0, 0.2, 0.3, 0.1),
        Sphere("sphere1", 20.0, 100.0, 0.0, 2 * math.pi, 0.0, math.pi / 2),
        Paraboloid("parabol1", 50.0, 20.0, 40.0),
        Trap("trap1", 60.0, 0.1, 0.2, 40.0, 30.0, 40.0, 0.1, 16.0, 10.0, 14.0, 0.1),
        Trd("trd1", 30.0, 10.0, 40.0, 15.0, 60.0),
        Trd("trd2", 20.0, 30.0, 25.0, 15.0, 50.0),
        Trd("trd3", 10.0, 20.0, 30.0, 40.0, 50.0),
        Tubs("tube100", 50.0, 100.0, 200.0, 0.0, 1.5 * math.pi),
        SubtractionSolid("boolean1", b1box, b1orb, Transform3D.translation_of(20.0, 0.0, 0.0)),
        Polycone("polycone1", 0.0, 2 * math.pi, [-50.0, 0.0, 50.0], [0.0, 10.0, 0.0], [30.0, 40.0, 30.0]),
        GenericPolycone("genPocone1", 0.0, math.pi, [10.0, 40.0, 40.0, 10.0], [-30.0, -30.0, 30.0, 30.0]),
        Ellipsoid("ellipsoid1", 40.0, 60.0, 80.0, -50.0, 70.0),
        Tet("tetrah1", (0.0, 0.0, 0.0), (100.0, 0.0, 0.0), (0.0, 100.0, 0.0), (0.0, 0.0, 100.0)),
        Orb("orb1", 75.0),
        Polyhedra("polyhedr1", 0.0, 2 * math.pi, 6, [-50.0, 50.0], [10.0, 10.0], [40.0, 40.0]),
        Hype("hype1", 20.0, 40.0, 0.3, 0.5, 80.0),
        EllipticalTube("elltube1", 30.0, 50.0, 70.0),
        EllipticalCone("ellcone1", 0.5, 0.8, 60.0, 40.0),
        GenericTrap(
            "arb8b",
            50.0,
            [(-30, -30), (-30, 30), (30, 30), (30, -30), (-20, -35), (-35, 20), (20, 35), (35, -20)],
        ),
        GenericTrap(
            "arb8a",
            50.0,
            [(-30, -30), (-30, 30), (30, 30), (30, -30), (-20, -20), (-20, 20), (20, 20), (20, -20)],
        ),
        ExtrudedSolid(
            "xtru1",
            [(-30, -30), (-30, 30), (0, 45), (30, 30), (30, -30)],
            [ZSection(-40.0), ZSection(40.0, (5.0, 5.0), 0.6)],
        ),
    ]
    world_solid = Box("World", 3000.0, 3000.0, 1500.0)
    unused_solid = Box("unused", 10.0, 10.0, 10.0)
    orphan_solid = Orb("orphan", 5.0)

    world_lv = LogicalVolume("World", world_solid, "G4_Galactic")
    volumes = {"World": world_lv}
    for index, solid in enumerate(shapes):
        lv = LogicalVolume(solid.name, solid, "G4_Fe")
        volumes[solid.name] = lv
        x = -2500.0 + 200.0 * index
        if solid.name == "trd3":
            place(lv, world_lv, Transform3D.translation_of(x, 0.0, 0.0), "trd3_pv")
            # Mirror image of trd3 next to the original
            refl_pv = factory.place(Transform3D.reflection_z((x, 500.0, 0.0)), "trd3_refl_pv", lv, world_lv)
            volumes["trd3_refl"] = refl_pv.logical_volume
            continue
        place(lv, world_lv, Transform3D.translation_of(x, 0.0, 0.0), f"{solid.name}_pv")
        if solid.name == "trd2":
            place(lv, world_lv, Transform3D.rotation_of("z", math.pi / 4, (x, -500.0, 0.0)), "trd2_pv", copy_no=1)

    volumes["unused"] = LogicalVolume("unused", unused_solid)
    world = place(world_lv, None, None, "World_pv")

    solids = [*shapes, b1box, b1orb, world_solid, unused_solid, orphan_solid]
    return ReferenceGeometry(world=world, solids=solids, volumes=volumes)


@pytest.fixture
def reference_geometry() -> ReferenceGeometry:
    return build_reference_geometry()


@pytest.fixture
def manager() -> GeoManager:
    return GeoManager()


@pytest.fixture
def reference_names() -> list[str]:
    return list(REFERENCE_NAMES)
