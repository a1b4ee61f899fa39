"""Translate Geant4-style solids into VecGeom-style unplaced solids."""

from __future__ import annotations

import logging
import math
from functools import singledispatchmethod

import numpy as np

from .errors import RUNTIME, not_implemented, runtime_throw
from .geant4 import solids as g4
from .geant4.transform import Transform3D
from .soft_equal import SoftEqual
from .vecgeom import unplaced as vg
from .vecgeom.transformation import Transformation3D

LOG = logging.getLogger(__name__)

# Relative tolerance for source/destination capacity comparison
CAPACITY_TOLERANCE = 0.01


def _is_boolean(solid: g4.Solid) -> bool:
    while isinstance(solid, g4.ReflectedSolid):
        solid = solid.constituent
    return isinstance(solid, g4.BooleanSolid)


class SolidConverter:
    """Convert solids one at a time, reusing the result for shared solids.

    Lengths are multiplied by ``scale``.  With ``compare_volumes`` the capacity
    of every converted solid is checked against the source cubic volume;
    booleans are skipped because their source volume is a sampled estimate.
    """

    def __init__(self, scale: float = 1.0, compare_volumes: bool = False):
        self.scale = scale
        self.compare_volumes = compare_volumes
        self._cache: dict[g4.Solid, vg.UnplacedVolume] = {}
        self._compare = SoftEqual(CAPACITY_TOLERANCE)

    def __call__(self, solid: g4.Solid) -> vg.UnplacedVolume:
        cached = self._cache.get(solid)
        if cached is not None:
            return cached
        result = self._convert(solid)
        if self.compare_volumes:
            self.compare_capacity(solid, result)
        self._cache[solid] = result
        return result

    def __len__(self) -> int:
        return len(self._cache)

    def compare_capacity(self, solid: g4.Solid, result: vg.UnplacedVolume) -> None:
        if _is_boolean(solid):
            LOG.warning("Skipping capacity comparison for boolean solid '%s'", solid.name)
            return
        expected = solid.cubic_volume() * self.scale**3
        actual = result.capacity()
        if not self._compare(actual, expected):
            runtime_throw(
                RUNTIME,
                f"Volume mismatch for converted solid '{solid.name}' ({solid.entity_type}): "
                f"expected {expected:g}, converted capacity is {actual:g}",
                "soft_equal(converted.capacity(), solid.cubic_volume())",
            )

    def transformation(self, transform: Transform3D) -> Transformation3D:
        return Transformation3D(transform.translation * self.scale, transform.rotation)

    # ---------------- Dispatch ----------------

    @singledispatchmethod
    def _convert(self, solid):
        not_implemented(f"conversion of solid type {type(solid).__name__} ('{solid.name}')")

    @_convert.register(g4.Box)
    def _(self, solid: g4.Box):
        s = self.scale
        return vg.UnplacedBox(solid.dx * s, solid.dy * s, solid.dz * s)

    @_convert.register(g4.Tubs)
    def _(self, solid: g4.Tubs):
        s = self.scale
        return vg.UnplacedTube(solid.rmin * s, solid.rmax * s, solid.dz * s, solid.sphi, solid.dphi)

    @_convert.register(g4.Cons)
    def _(self, solid: g4.Cons):
        s = self.scale
        return vg.UnplacedCone(
            solid.rmin1 * s,
            solid.rmax1 * s,
            solid.rmin2 * s,
            solid.rmax2 * s,
            solid.dz * s,
            solid.sphi,
            solid.dphi,
        )

    @_convert.register(g4.Para)
    def _(self, solid: g4.Para):
        s = self.scale
        return vg.UnplacedParallelepiped(
            solid.dx * s, solid.dy * s, solid.dz * s, solid.alpha, solid.theta, solid.phi
        )

    @_convert.register(g4.Sphere)
    def _(self, solid: g4.Sphere):
        s = self.scale
        return vg.UnplacedSphere(
            solid.rmin * s, solid.rmax * s, solid.sphi, solid.dphi, solid.stheta, solid.dtheta
        )

    @_convert.register(g4.Orb)
    def _(self, solid: g4.Orb):
        return vg.UnplacedOrb(solid.r * self.scale)

    @_convert.register(g4.Ellipsoid)
    def _(self, solid: g4.Ellipsoid):
        s = self.scale
        zlo, zhi = solid.z_limits
        return vg.UnplacedEllipsoid(solid.a * s, solid.b * s, solid.c * s, zlo * s, zhi * s)

    @_convert.register(g4.Paraboloid)
    def _(self, solid: g4.Paraboloid):
        s = self.scale
        return vg.UnplacedParaboloid(solid.rlo * s, solid.rhi * s, solid.dz * s)

    @_convert.register(g4.Trd)
    def _(self, solid: g4.Trd):
        s = self.scale
        return vg.UnplacedTrd(solid.dx1 * s, solid.dx2 * s, solid.dy1 * s, solid.dy2 * s, solid.dz * s)

    @_convert.register(g4.Trap)
    def _(self, solid: g4.Trap):
        s = self.scale
        return vg.UnplacedTrapezoid(
            solid.dz * s,
            solid.theta,
            solid.phi,
            solid.dy1 * s,
            solid.dx1 * s,
            solid.dx2 * s,
            math.tan(solid.alpha1),
            solid.dy2 * s,
            solid.dx3 * s,
            solid.dx4 * s,
            math.tan(solid.alpha2),
        )

    @_convert.register(g4.Tet)
    def _(self, solid: g4.Tet):
        p0, p1, p2, p3 = (tuple(c * self.scale for c in p) for p in solid.vertices)
        return vg.UnplacedTet(p0, p1, p2, p3)

    @_convert.register(g4.Polycone)
    def _(self, solid: g4.Polycone):
        s = self.scale
        return vg.UnplacedPolycone(
            solid.sphi,
            solid.dphi,
            tuple(z * s for z in solid.z),
            tuple(r * s for r in solid.rmin),
            tuple(r * s for r in solid.rmax),
        )

    @_convert.register(g4.GenericPolycone)
    def _(self, solid: g4.GenericPolycone):
        s = self.scale
        return vg.UnplacedGenericPolycone(
            solid.sphi, solid.dphi, tuple(r * s for r in solid.r), tuple(z * s for z in solid.z)
        )

    @_convert.register(g4.Polyhedra)
    def _(self, solid: g4.Polyhedra):
        s = self.scale
        return vg.UnplacedPolyhedron(
            solid.sphi,
            solid.dphi,
            solid.num_side,
            tuple(z * s for z in solid.z),
            tuple(r * s for r in solid.rmin),
            tuple(r * s for r in solid.rmax),
        )

    @_convert.register(g4.Hype)
    def _(self, solid: g4.Hype):
        s = self.scale
        return vg.UnplacedHype(solid.rmin * s, solid.inner_stereo, solid.rmax * s, solid.outer_stereo, solid.dz * s)

    @_convert.register(g4.EllipticalTube)
    def _(self, solid: g4.EllipticalTube):
        s = self.scale
        return vg.UnplacedEllipticalTube(solid.dx * s, solid.dy * s, solid.dz * s)

    @_convert.register(g4.EllipticalCone)
    def _(self, solid: g4.EllipticalCone):
        # Semi-axes are slopes and do not scale
        s = self.scale
        return vg.UnplacedEllipticalCone(solid.x_semi_axis, solid.y_semi_axis, solid.z_height * s, solid.z_top_cut * s)

    @_convert.register(g4.GenericTrap)
    def _(self, solid: g4.GenericTrap):
        s = self.scale
        return vg.UnplacedGenTrap(tuple((x * s, y * s) for x, y in solid.vertices), solid.dz * s)

    @_convert.register(g4.ExtrudedSolid)
    def _(self, solid: g4.ExtrudedSolid):
        s = self.scale
        sections = tuple(
            vg.XtruSection(sec.z * s, (sec.offset[0] * s, sec.offset[1] * s), sec.scale) for sec in solid.sections
        )
        return vg.UnplacedExtruded(tuple((x * s, y * s) for x, y in solid.polygon), sections)

    @_convert.register(g4.BooleanSolid)
    def _(self, solid: g4.BooleanSolid):
        left = vg.BooleanComponent(self(solid.first), Transformation3D.identity())
        right = vg.BooleanComponent(self(solid.second), self.transformation(solid.transform))
        return vg.UnplacedBooleanVolume(solid.operation, left, right)

    @_convert.register(g4.ReflectedSolid)
    def _(self, solid: g4.ReflectedSolid):
        rotation = solid.transform.rotation
        if not np.allclose(rotation, np.diag(np.diag(rotation))) or np.any(solid.transform.translation != 0.0):
            not_implemented(f"reflected solid '{solid.name}' with a rotated or displaced reflection")
        return vg.UnplacedScaledShape(self(solid.constituent), tuple(np.diag(rotation)))
