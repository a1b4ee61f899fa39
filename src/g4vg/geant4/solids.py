"""Geant4-style constructive solids.

Each solid keeps the constructor parameters of its Geant4 counterpart (lengths
in mm, angles in rad) and can report its cubic volume.  Primitives that are
commonly used as boolean operands also implement point containment and
bounding limits so that boolean capacities can be sampled.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Sequence

import numpy as np

from ..config import get_settings
from ..errors import GEANT4, not_implemented, runtime_throw
from ..utils import mensuration as mens
from ..utils.matrix import transformed_bounds
from .transform import Transform3D

TWO_PI = mens.TWO_PI


def _require(cond: bool, name: str, what: str, condition: str) -> None:
    if not cond:
        runtime_throw(GEANT4, f"invalid parameters for solid '{name}': {what}", condition, stacklevel=2)


def _clamp_dphi(dphi: float) -> float:
    return TWO_PI if dphi >= TWO_PI else dphi


@dataclass(eq=False)
class Solid:
    name: str

    def cubic_volume(self) -> float:
        not_implemented(f"cubic volume of {type(self).__name__}")

    def inside(self, points: np.ndarray) -> np.ndarray:
        not_implemented(f"point containment for {type(self).__name__} '{self.name}'")

    def bounding_limits(self) -> tuple[np.ndarray, np.ndarray]:
        not_implemented(f"bounding limits for {type(self).__name__} '{self.name}'")

    @property
    def entity_type(self) -> str:
        return f"G4{type(self).__name__}"


# ---------------- CSG primitives ----------------

@dataclass(eq=False)
class Box(Solid):
    dx: float
    dy: float
    dz: float

    def __post_init__(self):
        _require(min(self.dx, self.dy, self.dz) > 0, self.name, "half-lengths must be positive", "dx, dy, dz > 0")

    def cubic_volume(self) -> float:
        return mens.box_volume(self.dx, self.dy, self.dz)

    def inside(self, points):
        return mens.inside_box(points, self.dx, self.dy, self.dz)

    def bounding_limits(self):
        half = np.array([self.dx, self.dy, self.dz])
        return -half, half


@dataclass(eq=False)
class Tubs(Solid):
    rmin: float
    rmax: float
    dz: float
    sphi: float = 0.0
    dphi: float = TWO_PI

    def __post_init__(self):
        _require(self.dz > 0, self.name, "negative Z half-length", "dz > 0")
        _require(0 <= self.rmin < self.rmax, self.name, "invalid radii", "0 <= rmin < rmax")
        _require(self.dphi > 0, self.name, "invalid phi segment", "dphi > 0")
        self.dphi = _clamp_dphi(self.dphi)

    def cubic_volume(self) -> float:
        return mens.tube_volume(self.rmin, self.rmax, self.dz, self.dphi)

    def inside(self, points):
        return mens.inside_tube(points, self.rmin, self.rmax, self.dz, self.sphi, self.dphi)

    def bounding_limits(self):
        half = np.array([self.rmax, self.rmax, self.dz])
        return -half, half


@dataclass(eq=False)
class Cons(Solid):
    rmin1: float
    rmax1: float
    rmin2: float
    rmax2: float
    dz: float
    sphi: float = 0.0
    dphi: float = TWO_PI

    def __post_init__(self):
        _require(self.dz > 0, self.name, "negative Z half-length", "dz > 0")
        _require(
            0 <= self.rmin1 <= self.rmax1 and 0 <= self.rmin2 <= self.rmax2 and max(self.rmax1, self.rmax2) > 0,
            self.name,
            "invalid radii",
            "0 <= rmin <= rmax",
        )
        _require(self.dphi > 0, self.name, "invalid phi segment", "dphi > 0")
        self.dphi = _clamp_dphi(self.dphi)

    def cubic_volume(self) -> float:
        return mens.cone_volume(self.rmin1, self.rmax1, self.rmin2, self.rmax2, self.dz, self.dphi)

    def inside(self, points):
        return mens.inside_cone(
            points, self.rmin1, self.rmax1, self.rmin2, self.rmax2, self.dz, self.sphi, self.dphi
        )

    def bounding_limits(self):
        rmax = max(self.rmax1, self.rmax2)
        half = np.array([rmax, rmax, self.dz])
        return -half, half


@dataclass(eq=False)
class Para(Solid):
    dx: float
    dy: float
    dz: float
    alpha: float = 0.0
    theta: float = 0.0
    phi: float = 0.0

    def __post_init__(self):
        _require(min(self.dx, self.dy, self.dz) > 0, self.name, "half-lengths must be positive", "dx, dy, dz > 0")

    def cubic_volume(self) -> float:
        return mens.box_volume(self.dx, self.dy, self.dz)


@dataclass(eq=False)
class Sphere(Solid):
    rmin: float
    rmax: float
    sphi: float = 0.0
    dphi: float = TWO_PI
    stheta: float = 0.0
    dtheta: float = math.pi

    def __post_init__(self):
        _require(0 <= self.rmin < self.rmax, self.name, "invalid radii", "0 <= rmin < rmax")
        _require(self.dphi > 0, self.name, "invalid phi segment", "dphi > 0")
        _require(
            0 <= self.stheta < math.pi and self.dtheta > 0, self.name, "invalid theta segment", "0 <= stheta < pi"
        )
        self.dphi = _clamp_dphi(self.dphi)
        self.dtheta = min(self.dtheta, math.pi - self.stheta)

    def cubic_volume(self) -> float:
        return mens.sphere_volume(self.rmin, self.rmax, self.dphi, self.stheta, self.dtheta)

    def inside(self, points):
        return mens.inside_sphere(points, self.rmin, self.rmax, self.sphi, self.dphi, self.stheta, self.dtheta)

    def bounding_limits(self):
        half = np.full(3, self.rmax)
        return -half, half


@dataclass(eq=False)
class Orb(Solid):
    r: float

    def __post_init__(self):
        _require(self.r > 0, self.name, "radius must be positive", "r > 0")

    def cubic_volume(self) -> float:
        return mens.orb_volume(self.r)

    def inside(self, points):
        return mens.inside_sphere(points, 0.0, self.r, 0.0, TWO_PI, 0.0, math.pi)

    def bounding_limits(self):
        half = np.full(3, self.r)
        return -half, half


@dataclass(eq=False)
class Ellipsoid(Solid):
    """Ellipsoid with optional Z cuts; a cut of zero means no cut."""

    a: float
    b: float
    c: float
    zbottom: float = 0.0
    ztop: float = 0.0

    def __post_init__(self):
        _require(min(self.a, self.b, self.c) > 0, self.name, "semi-axes must be positive", "a, b, c > 0")
        _require(self.z_limits[0] < self.z_limits[1], self.name, "invalid Z cuts", "zbottom < ztop")

    @property
    def z_limits(self) -> tuple[float, float]:
        zlo = -self.c if self.zbottom == 0 else max(self.zbottom, -self.c)
        zhi = self.c if self.ztop == 0 else min(self.ztop, self.c)
        return zlo, zhi

    def cubic_volume(self) -> float:
        return mens.ellipsoid_volume(self.a, self.b, self.c, *self.z_limits)

    def inside(self, points):
        return mens.inside_ellipsoid(points, self.a, self.b, self.c, *self.z_limits)

    def bounding_limits(self):
        zlo, zhi = self.z_limits
        return np.array([-self.a, -self.b, zlo]), np.array([self.a, self.b, zhi])


@dataclass(eq=False)
class Paraboloid(Solid):
    dz: float
    rlo: float
    rhi: float

    def __post_init__(self):
        _require(self.dz > 0 and 0 <= self.rlo < self.rhi, self.name, "invalid dimensions", "0 <= rlo < rhi")

    def cubic_volume(self) -> float:
        return mens.paraboloid_volume(self.rlo, self.rhi, self.dz)


@dataclass(eq=False)
class Trd(Solid):
    dx1: float
    dx2: float
    dy1: float
    dy2: float
    dz: float

    def __post_init__(self):
        _require(
            self.dz > 0 and min(self.dx1, self.dx2, self.dy1, self.dy2) >= 0 and max(self.dx1, self.dx2) > 0
            and max(self.dy1, self.dy2) > 0,
            self.name,
            "invalid dimensions",
            "dx, dy >= 0 and dz > 0",
        )

    def cubic_volume(self) -> float:
        return mens.trd_volume(self.dx1, self.dx2, self.dy1, self.dy2, self.dz)

    def inside(self, points):
        return mens.inside_trd(points, self.dx1, self.dx2, self.dy1, self.dy2, self.dz)

    def bounding_limits(self):
        half = np.array([max(self.dx1, self.dx2), max(self.dy1, self.dy2), self.dz])
        return -half, half


@dataclass(eq=False)
class Trap(Solid):
    dz: float
    theta: float
    phi: float
    dy1: float
    dx1: float
    dx2: float
    alpha1: float
    dy2: float
    dx3: float
    dx4: float
    alpha2: float

    def __post_init__(self):
        _require(
            self.dz > 0 and min(self.dy1, self.dx1, self.dx2, self.dy2, self.dx3, self.dx4) > 0,
            self.name,
            "invalid dimensions",
            "all half-lengths > 0",
        )

    def cubic_volume(self) -> float:
        return mens.trap_volume(self.dz, self.dy1, self.dx1, self.dx2, self.dy2, self.dx3, self.dx4)


# ---------------- Specific solids ----------------

@dataclass(eq=False)
class Tet(Solid):
    anchor: Sequence[float]
    p2: Sequence[float]
    p3: Sequence[float]
    p4: Sequence[float]

    def __post_init__(self):
        self.anchor, self.p2, self.p3, self.p4 = (tuple(map(float, p)) for p in (self.anchor, self.p2, self.p3, self.p4))
        _require(self.cubic_volume() > 0, self.name, "degenerate tetrahedron", "volume > 0")

    @property
    def vertices(self) -> tuple[tuple[float, ...], ...]:
        return (self.anchor, self.p2, self.p3, self.p4)

    def cubic_volume(self) -> float:
        return mens.tet_volume(*self.vertices)


@dataclass(eq=False)
class Polycone(Solid):
    sphi: float
    dphi: float
    z: Sequence[float]
    rmin: Sequence[float]
    rmax: Sequence[float]

    def __post_init__(self):
        self.z, self.rmin, self.rmax = tuple(self.z), tuple(self.rmin), tuple(self.rmax)
        _require(
            len(self.z) >= 2 and len(self.z) == len(self.rmin) == len(self.rmax),
            self.name,
            "z planes and radii must have matching lengths",
            "len(z) == len(rmin) == len(rmax) >= 2",
        )
        _require(self.dphi > 0, self.name, "invalid phi segment", "dphi > 0")
        self.dphi = _clamp_dphi(self.dphi)

    def cubic_volume(self) -> float:
        return mens.polycone_volume(self.z, self.rmin, self.rmax, self.dphi)


@dataclass(eq=False)
class GenericPolycone(Solid):
    sphi: float
    dphi: float
    r: Sequence[float]
    z: Sequence[float]

    def __post_init__(self):
        self.r, self.z = tuple(self.r), tuple(self.z)
        _require(
            len(self.r) >= 3 and len(self.r) == len(self.z),
            self.name,
            "contour needs at least three (r, z) corners",
            "len(r) == len(z) >= 3",
        )
        _require(min(self.r) >= 0, self.name, "negative radius in contour", "r >= 0")
        self.dphi = _clamp_dphi(self.dphi)

    def cubic_volume(self) -> float:
        return mens.revolved_contour_volume(self.r, self.z, self.dphi)


@dataclass(eq=False)
class Polyhedra(Solid):
    """Polyhedra; radii are distances from the axis to the side planes."""

    sphi: float
    dphi: float
    num_side: int
    z: Sequence[float]
    rmin: Sequence[float]
    rmax: Sequence[float]

    def __post_init__(self):
        self.z, self.rmin, self.rmax = tuple(self.z), tuple(self.rmin), tuple(self.rmax)
        _require(self.num_side > 0, self.name, "number of sides must be positive", "num_side > 0")
        _require(
            len(self.z) >= 2 and len(self.z) == len(self.rmin) == len(self.rmax),
            self.name,
            "z planes and radii must have matching lengths",
            "len(z) == len(rmin) == len(rmax) >= 2",
        )
        self.dphi = _clamp_dphi(self.dphi)

    def cubic_volume(self) -> float:
        return mens.polyhedra_volume(self.z, self.rmin, self.rmax, self.num_side, self.dphi)


@dataclass(eq=False)
class Hype(Solid):
    rmin: float
    rmax: float
    inner_stereo: float
    outer_stereo: float
    dz: float

    def __post_init__(self):
        _require(self.dz > 0 and 0 <= self.rmin < self.rmax, self.name, "invalid dimensions", "0 <= rmin < rmax")

    def cubic_volume(self) -> float:
        return mens.hype_volume(
            self.rmin, self.rmax, math.tan(self.inner_stereo) ** 2, math.tan(self.outer_stereo) ** 2, self.dz
        )


@dataclass(eq=False)
class EllipticalTube(Solid):
    dx: float
    dy: float
    dz: float

    def __post_init__(self):
        _require(min(self.dx, self.dy, self.dz) > 0, self.name, "half-lengths must be positive", "dx, dy, dz > 0")

    def cubic_volume(self) -> float:
        return mens.elliptical_tube_volume(self.dx, self.dy, self.dz)

    def inside(self, points):
        return mens.inside_elliptical_tube(points, self.dx, self.dy, self.dz)

    def bounding_limits(self):
        half = np.array([self.dx, self.dy, self.dz])
        return -half, half


@dataclass(eq=False)
class EllipticalCone(Solid):
    """Cone ``(x/xs)^2 + (y/ys)^2 = (height - z)^2`` cut at ``|z| <= z_top_cut``."""

    x_semi_axis: float
    y_semi_axis: float
    z_height: float
    z_top_cut: float

    def __post_init__(self):
        _require(
            min(self.x_semi_axis, self.y_semi_axis, self.z_height, self.z_top_cut) > 0,
            self.name,
            "invalid dimensions",
            "all parameters > 0",
        )
        self.z_top_cut = min(self.z_top_cut, self.z_height)

    def cubic_volume(self) -> float:
        return mens.elliptical_cone_volume(self.x_semi_axis, self.y_semi_axis, self.z_height, self.z_top_cut)


@dataclass(eq=False)
class GenericTrap(Solid):
    """Eight (x, y) vertices: four at ``-dz`` then four at ``+dz``."""

    dz: float
    vertices: Sequence[Sequence[float]]

    def __post_init__(self):
        self.vertices = tuple(tuple(map(float, v)) for v in self.vertices)
        _require(
            self.dz > 0 and len(self.vertices) == 8 and all(len(v) == 2 for v in self.vertices),
            self.name,
            "expected eight (x, y) vertices",
            "len(vertices) == 8",
        )

    def cubic_volume(self) -> float:
        return mens.gentrap_volume(self.vertices, self.dz)


@dataclass(frozen=True)
class ZSection:
    z: float
    offset: tuple[float, float] = (0.0, 0.0)
    scale: float = 1.0


@dataclass(eq=False)
class ExtrudedSolid(Solid):
    polygon: Sequence[Sequence[float]]
    sections: Sequence[ZSection]

    def __post_init__(self):
        self.polygon = tuple(tuple(map(float, v)) for v in self.polygon)
        self.sections = tuple(self.sections)
        _require(len(self.polygon) >= 3, self.name, "polygon needs at least three vertices", "len(polygon) >= 3")
        _require(len(self.sections) >= 2, self.name, "at least two z sections required", "len(sections) >= 2")
        _require(
            all(a.z < b.z for a, b in zip(self.sections, self.sections[1:])),
            self.name,
            "z sections must be increasing",
            "z[i] < z[i+1]",
        )

    def cubic_volume(self) -> float:
        return mens.extruded_volume(
            self.polygon, [s.z for s in self.sections], [s.scale for s in self.sections]
        )


# ---------------- Boolean and reflected solids ----------------

@dataclass(eq=False)
class BooleanSolid(Solid):
    """Combination of two solids; ``transform`` places ``second`` in the frame of ``first``."""

    operation: ClassVar[str] = ""

    first: Solid
    second: Solid
    transform: Optional[Transform3D] = None
    _cubic_volume: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.transform is None:
            self.transform = Transform3D.identity()
        _require(
            not self.transform.is_reflection,
            self.name,
            "boolean component transform contains a reflection",
            "!transform.is_reflection",
        )

    def _second_inside(self, points: np.ndarray) -> np.ndarray:
        return self.second.inside(self.transform.apply_inverse(points))

    def _second_bounds(self) -> tuple[np.ndarray, np.ndarray]:
        lo, hi = self.second.bounding_limits()
        return transformed_bounds(lo, hi, self.transform.rotation, self.transform.translation)

    def cubic_volume(self) -> float:
        # Estimated once by sampling, as the real toolkit does
        if self._cubic_volume is None:
            lo, hi = self.bounding_limits()
            self._cubic_volume = mens.estimate_capacity(self.inside, lo, hi, get_settings().mc_samples)
        return self._cubic_volume


@dataclass(eq=False)
class UnionSolid(BooleanSolid):
    operation: ClassVar[str] = "union"

    def inside(self, points):
        return self.first.inside(points) | self._second_inside(points)

    def bounding_limits(self):
        lo1, hi1 = self.first.bounding_limits()
        lo2, hi2 = self._second_bounds()
        return np.minimum(lo1, lo2), np.maximum(hi1, hi2)


@dataclass(eq=False)
class SubtractionSolid(BooleanSolid):
    operation: ClassVar[str] = "subtraction"

    def inside(self, points):
        return self.first.inside(points) & ~self._second_inside(points)

    def bounding_limits(self):
        return self.first.bounding_limits()


@dataclass(eq=False)
class IntersectionSolid(BooleanSolid):
    operation: ClassVar[str] = "intersection"

    def inside(self, points):
        return self.first.inside(points) & self._second_inside(points)

    def bounding_limits(self):
        lo1, hi1 = self.first.bounding_limits()
        lo2, hi2 = self._second_bounds()
        return np.maximum(lo1, lo2), np.minimum(hi1, hi2)


@dataclass(eq=False)
class ReflectedSolid(Solid):
    """Constituent solid seen through a reflecting transform."""

    constituent: Solid
    transform: Transform3D

    def __post_init__(self):
        _require(
            self.transform.is_reflection, self.name, "transform is not a reflection", "transform.is_reflection"
        )

    def cubic_volume(self) -> float:
        return self.constituent.cubic_volume()

    def inside(self, points):
        return self.constituent.inside(self.transform.apply_inverse(points))

    def bounding_limits(self):
        lo, hi = self.constituent.bounding_limits()
        return transformed_bounds(lo, hi, self.transform.rotation, self.transform.translation)
