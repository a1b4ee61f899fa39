"""VecGeom-style unplaced solids.

Unplaced solids carry shape parameters only; names live on logical volumes.
Every solid reports its ``capacity()``.  Solids usable as boolean components
also provide ``inside(points)`` and ``extent()``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence

import numpy as np

from ..config import get_settings
from ..errors import not_implemented
from ..utils import mensuration as mens
from ..utils.matrix import transformed_bounds
from .transformation import Transformation3D


@dataclass(eq=False)
class UnplacedVolume:
    def capacity(self) -> float:
        not_implemented(f"capacity of {type(self).__name__}")

    def inside(self, points: np.ndarray) -> np.ndarray:
        not_implemented(f"point containment for {type(self).__name__}")

    def extent(self) -> tuple[np.ndarray, np.ndarray]:
        not_implemented(f"extent of {type(self).__name__}")


def _symmetric(hx: float, hy: float, hz: float) -> tuple[np.ndarray, np.ndarray]:
    half = np.array([hx, hy, hz], dtype=float)
    return -half, half


@dataclass(eq=False)
class UnplacedBox(UnplacedVolume):
    dx: float
    dy: float
    dz: float

    def capacity(self) -> float:
        return mens.box_volume(self.dx, self.dy, self.dz)

    def inside(self, points):
        return mens.inside_box(points, self.dx, self.dy, self.dz)

    def extent(self):
        return _symmetric(self.dx, self.dy, self.dz)


@dataclass(eq=False)
class UnplacedTube(UnplacedVolume):
    rmin: float
    rmax: float
    dz: float
    sphi: float
    dphi: float

    def capacity(self) -> float:
        return mens.tube_volume(self.rmin, self.rmax, self.dz, self.dphi)

    def inside(self, points):
        return mens.inside_tube(points, self.rmin, self.rmax, self.dz, self.sphi, self.dphi)

    def extent(self):
        return _symmetric(self.rmax, self.rmax, self.dz)


@dataclass(eq=False)
class UnplacedCone(UnplacedVolume):
    rmin1: float
    rmax1: float
    rmin2: float
    rmax2: float
    dz: float
    sphi: float
    dphi: float

    def capacity(self) -> float:
        return mens.cone_volume(self.rmin1, self.rmax1, self.rmin2, self.rmax2, self.dz, self.dphi)

    def inside(self, points):
        return mens.inside_cone(
            points, self.rmin1, self.rmax1, self.rmin2, self.rmax2, self.dz, self.sphi, self.dphi
        )

    def extent(self):
        rmax = max(self.rmax1, self.rmax2)
        return _symmetric(rmax, rmax, self.dz)


@dataclass(eq=False)
class UnplacedParallelepiped(UnplacedVolume):
    x: float
    y: float
    z: float
    alpha: float
    theta: float
    phi: float

    def capacity(self) -> float:
        return mens.box_volume(self.x, self.y, self.z)


@dataclass(eq=False)
class UnplacedSphere(UnplacedVolume):
    rmin: float
    rmax: float
    sphi: float
    dphi: float
    stheta: float
    dtheta: float

    def capacity(self) -> float:
        return mens.sphere_volume(self.rmin, self.rmax, self.dphi, self.stheta, self.dtheta)

    def inside(self, points):
        return mens.inside_sphere(points, self.rmin, self.rmax, self.sphi, self.dphi, self.stheta, self.dtheta)

    def extent(self):
        return _symmetric(self.rmax, self.rmax, self.rmax)


@dataclass(eq=False)
class UnplacedOrb(UnplacedVolume):
    r: float

    def capacity(self) -> float:
        return mens.orb_volume(self.r)

    def inside(self, points):
        return mens.inside_sphere(points, 0.0, self.r, 0.0, mens.TWO_PI, 0.0, math.pi)

    def extent(self):
        return _symmetric(self.r, self.r, self.r)


@dataclass(eq=False)
class UnplacedEllipsoid(UnplacedVolume):
    dx: float
    dy: float
    dz: float
    zbottom: float
    ztop: float

    def capacity(self) -> float:
        return mens.ellipsoid_volume(self.dx, self.dy, self.dz, self.zbottom, self.ztop)

    def inside(self, points):
        return mens.inside_ellipsoid(points, self.dx, self.dy, self.dz, self.zbottom, self.ztop)

    def extent(self):
        return np.array([-self.dx, -self.dy, self.zbottom]), np.array([self.dx, self.dy, self.ztop])


@dataclass(eq=False)
class UnplacedParaboloid(UnplacedVolume):
    rlo: float
    rhi: float
    dz: float

    def capacity(self) -> float:
        return mens.paraboloid_volume(self.rlo, self.rhi, self.dz)


@dataclass(eq=False)
class UnplacedTrd(UnplacedVolume):
    x1: float
    x2: float
    y1: float
    y2: float
    z: float

    def capacity(self) -> float:
        return mens.trd_volume(self.x1, self.x2, self.y1, self.y2, self.z)

    def inside(self, points):
        return mens.inside_trd(points, self.x1, self.x2, self.y1, self.y2, self.z)

    def extent(self):
        return _symmetric(max(self.x1, self.x2), max(self.y1, self.y2), self.z)


@dataclass(eq=False)
class UnplacedTrapezoid(UnplacedVolume):
    """Trapezoid whose shear angles are stored as tangents."""

    dz: float
    theta: float
    phi: float
    dy1: float
    dx1: float
    dx2: float
    tan_alpha1: float
    dy2: float
    dx3: float
    dx4: float
    tan_alpha2: float

    def capacity(self) -> float:
        return mens.trap_volume(self.dz, self.dy1, self.dx1, self.dx2, self.dy2, self.dx3, self.dx4)


@dataclass(eq=False)
class UnplacedTet(UnplacedVolume):
    p0: tuple[float, float, float]
    p1: tuple[float, float, float]
    p2: tuple[float, float, float]
    p3: tuple[float, float, float]

    def capacity(self) -> float:
        return mens.tet_volume(self.p0, self.p1, self.p2, self.p3)


@dataclass(eq=False)
class UnplacedPolycone(UnplacedVolume):
    sphi: float
    dphi: float
    z: Sequence[float]
    rmin: Sequence[float]
    rmax: Sequence[float]

    def capacity(self) -> float:
        return mens.polycone_volume(self.z, self.rmin, self.rmax, self.dphi)


@dataclass(eq=False)
class UnplacedGenericPolycone(UnplacedVolume):
    sphi: float
    dphi: float
    r: Sequence[float]
    z: Sequence[float]

    def capacity(self) -> float:
        return mens.revolved_contour_volume(self.r, self.z, self.dphi)


@dataclass(eq=False)
class UnplacedPolyhedron(UnplacedVolume):
    sphi: float
    dphi: float
    sides: int
    z: Sequence[float]
    rmin: Sequence[float]
    rmax: Sequence[float]

    def capacity(self) -> float:
        return mens.polyhedra_volume(self.z, self.rmin, self.rmax, self.sides, self.dphi)


@dataclass(eq=False)
class UnplacedHype(UnplacedVolume):
    rmin: float
    stereo_in: float
    rmax: float
    stereo_out: float
    dz: float

    def capacity(self) -> float:
        return mens.hype_volume(
            self.rmin, self.rmax, math.tan(self.stereo_in) ** 2, math.tan(self.stereo_out) ** 2, self.dz
        )


@dataclass(eq=False)
class UnplacedEllipticalTube(UnplacedVolume):
    dx: float
    dy: float
    dz: float

    def capacity(self) -> float:
        return mens.elliptical_tube_volume(self.dx, self.dy, self.dz)

    def inside(self, points):
        return mens.inside_elliptical_tube(points, self.dx, self.dy, self.dz)

    def extent(self):
        return _symmetric(self.dx, self.dy, self.dz)


@dataclass(eq=False)
class UnplacedEllipticalCone(UnplacedVolume):
    a: float
    b: float
    h: float
    zcut: float

    def capacity(self) -> float:
        return mens.elliptical_cone_volume(self.a, self.b, self.h, self.zcut)


@dataclass(eq=False)
class UnplacedGenTrap(UnplacedVolume):
    vertices: Sequence[tuple[float, float]]
    dz: float

    def capacity(self) -> float:
        return mens.gentrap_volume(self.vertices, self.dz)


class XtruSection(NamedTuple):
    z: float
    offset: tuple[float, float]
    scale: float


@dataclass(eq=False)
class UnplacedExtruded(UnplacedVolume):
    polygon: Sequence[tuple[float, float]]
    sections: Sequence[XtruSection]

    def capacity(self) -> float:
        return mens.extruded_volume(self.polygon, [s.z for s in self.sections], [s.scale for s in self.sections])


# ---------------- Composite shapes ----------------

class BooleanComponent(NamedTuple):
    unplaced: UnplacedVolume
    transformation: Transformation3D

    def inside(self, points: np.ndarray) -> np.ndarray:
        return self.unplaced.inside(self.transformation.apply_inverse(points))

    def extent(self) -> tuple[np.ndarray, np.ndarray]:
        lo, hi = self.unplaced.extent()
        return transformed_bounds(lo, hi, self.transformation.rotation, self.transformation.translation)


BOOLEAN_OPERATIONS = ("union", "subtraction", "intersection")


@dataclass(eq=False)
class UnplacedBooleanVolume(UnplacedVolume):
    operation: str
    left: BooleanComponent
    right: BooleanComponent
    _capacity: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.operation not in BOOLEAN_OPERATIONS:
            raise ValueError(f"Unknown boolean operation '{self.operation}'")

    def inside(self, points):
        left = self.left.inside(points)
        if self.operation == "union":
            return left | self.right.inside(points)
        if self.operation == "subtraction":
            return left & ~self.right.inside(points)
        return left & self.right.inside(points)

    def extent(self):
        lo1, hi1 = self.left.extent()
        if self.operation == "subtraction":
            return lo1, hi1
        lo2, hi2 = self.right.extent()
        if self.operation == "union":
            return np.minimum(lo1, lo2), np.maximum(hi1, hi2)
        return np.maximum(lo1, lo2), np.minimum(hi1, hi2)

    def capacity(self) -> float:
        if self._capacity is None:
            lo, hi = self.extent()
            self._capacity = mens.estimate_capacity(self.inside, lo, hi, get_settings().mc_samples)
        return self._capacity


@dataclass(eq=False)
class UnplacedScaledShape(UnplacedVolume):
    """Shape stretched by per-axis factors; negative factors mirror it."""

    unplaced: UnplacedVolume
    scale: tuple[float, float, float]

    def __post_init__(self):
        self.scale = tuple(float(s) for s in self.scale)
        if len(self.scale) != 3 or any(s == 0.0 for s in self.scale):
            raise ValueError(f"Invalid scale factors: {self.scale}")

    def capacity(self) -> float:
        sx, sy, sz = self.scale
        return abs(sx * sy * sz) * self.unplaced.capacity()

    def inside(self, points):
        return self.unplaced.inside(points / np.asarray(self.scale))

    def extent(self):
        lo, hi = self.unplaced.extent()
        return transformed_bounds(lo, hi, np.diag(self.scale), np.zeros(3))
