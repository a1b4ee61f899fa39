"""Capacity formulas and point-containment kernels shared by both geometry models.

Lengths are in whatever unit the caller uses; angles are in radians.  The
containment kernels take an ``(N, 3)`` array of local points and return an
``(N,)`` boolean array (surface points count as inside).
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

import numpy as np

TWO_PI = 2.0 * math.pi
DEFAULT_SEED = 20240117


# ---------------- capacities ----------------

def box_volume(dx: float, dy: float, dz: float) -> float:
    return 8.0 * dx * dy * dz


def tube_volume(rmin: float, rmax: float, dz: float, dphi: float) -> float:
    return dphi * dz * (rmax * rmax - rmin * rmin)


def cone_volume(rmin1: float, rmax1: float, rmin2: float, rmax2: float, dz: float, dphi: float) -> float:
    outer = rmax1 * rmax1 + rmax1 * rmax2 + rmax2 * rmax2
    inner = rmin1 * rmin1 + rmin1 * rmin2 + rmin2 * rmin2
    return dphi * dz * (outer - inner) / 3.0


def sphere_volume(rmin: float, rmax: float, dphi: float, stheta: float, dtheta: float) -> float:
    cos_band = math.cos(stheta) - math.cos(stheta + dtheta)
    return dphi * cos_band * (rmax**3 - rmin**3) / 3.0


def orb_volume(r: float) -> float:
    return 4.0 * math.pi * r**3 / 3.0


def ellipsoid_volume(a: float, b: float, c: float, zlo: float, zhi: float) -> float:
    """Ellipsoid with semi-axes a, b, c cut to ``zlo <= z <= zhi``."""
    return math.pi * a * b * ((zhi - zlo) - (zhi**3 - zlo**3) / (3.0 * c * c))


def paraboloid_volume(rlo: float, rhi: float, dz: float) -> float:
    return math.pi * dz * (rlo * rlo + rhi * rhi)


def trd_volume(dx1: float, dx2: float, dy1: float, dy2: float, dz: float) -> float:
    return 2.0 * dz * ((dx1 + dx2) * (dy1 + dy2) + (dx2 - dx1) * (dy2 - dy1) / 3.0)


def trap_volume(dz: float, dy1: float, dx1: float, dx2: float, dy2: float, dx3: float, dx4: float) -> float:
    """Volume of a general trapezoid; shear angles do not change it."""
    a, b = dy1, dy2 - dy1
    c, d = dx1 + dx2, (dx3 + dx4) - (dx1 + dx2)
    return 4.0 * dz * (a * c + (a * d + b * c) / 2.0 + b * d / 3.0)


def tet_volume(p0, p1, p2, p3) -> float:
    p0 = np.asarray(p0, dtype=float)
    edges = np.array([np.asarray(p, dtype=float) - p0 for p in (p1, p2, p3)])
    return abs(float(np.linalg.det(edges))) / 6.0


def polycone_volume(z: Sequence[float], rmin: Sequence[float], rmax: Sequence[float], dphi: float) -> float:
    """Stack of conical shells between successive z planes."""
    total = 0.0
    for i in range(len(z) - 1):
        h = z[i + 1] - z[i]
        outer = rmax[i] ** 2 + rmax[i] * rmax[i + 1] + rmax[i + 1] ** 2
        inner = rmin[i] ** 2 + rmin[i] * rmin[i + 1] + rmin[i + 1] ** 2
        total += dphi * h * (outer - inner) / 6.0
    return abs(total)


def revolved_contour_volume(r: Sequence[float], z: Sequence[float], dphi: float) -> float:
    """Volume swept by a closed (r, z) contour rotated by ``dphi`` (Pappus)."""
    r_arr = np.asarray(r, dtype=float)
    z_arr = np.asarray(z, dtype=float)
    r_next = np.roll(r_arr, -1)
    z_next = np.roll(z_arr, -1)
    moment = np.sum((r_arr + r_next) * (r_arr * z_next - r_next * z_arr)) / 6.0
    return dphi * abs(float(moment))


def polyhedra_volume(
    z: Sequence[float], rmin: Sequence[float], rmax: Sequence[float], sides: int, dphi: float
) -> float:
    """Polyhedra whose radii are distances from the axis to the side planes."""
    k = sides * math.tan(dphi / (2.0 * sides))
    total = 0.0
    for i in range(len(z) - 1):
        h = z[i + 1] - z[i]
        outer = rmax[i] ** 2 + rmax[i] * rmax[i + 1] + rmax[i + 1] ** 2
        inner = rmin[i] ** 2 + rmin[i] * rmin[i + 1] + rmin[i + 1] ** 2
        total += k * h * (outer - inner) / 3.0
    return abs(total)


def hype_volume(rmin: float, rmax: float, tan2_in: float, tan2_out: float, dz: float) -> float:
    return 2.0 * math.pi * dz * (rmax * rmax - rmin * rmin) + 2.0 * math.pi * dz**3 * (tan2_out - tan2_in) / 3.0


def elliptical_tube_volume(dx: float, dy: float, dz: float) -> float:
    return TWO_PI * dx * dy * dz


def elliptical_cone_volume(x_semi: float, y_semi: float, height: float, zcut: float) -> float:
    """Cone ``(x/xs)^2 + (y/ys)^2 = (h - z)^2`` between ``-zcut`` and ``zcut``."""
    return math.pi * x_semi * y_semi * (2.0 * height * height * zcut + 2.0 * zcut**3 / 3.0)


def polygon_area(xy) -> float:
    pts = np.asarray(xy, dtype=float)
    x, y = pts[:, 0], pts[:, 1]
    return abs(float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))) / 2.0


def gentrap_volume(vertices, dz: float) -> float:
    """Twisted trapezoid: 4 vertices at -dz then 4 at +dz (Simpson is exact)."""
    verts = np.asarray(vertices, dtype=float).reshape(8, 2)
    lower, upper = verts[:4], verts[4:]
    middle = 0.5 * (lower + upper)
    return 2.0 * dz * (polygon_area(lower) + 4.0 * polygon_area(middle) + polygon_area(upper)) / 6.0


def extruded_volume(polygon, z: Sequence[float], scale: Sequence[float]) -> float:
    """Polygon swept through z sections with linearly varying scale."""
    area = polygon_area(polygon)
    total = 0.0
    for i in range(len(z) - 1):
        s1, s2 = scale[i], scale[i + 1]
        total += area * (z[i + 1] - z[i]) * (s1 * s1 + s1 * s2 + s2 * s2) / 3.0
    return abs(total)


# ---------------- containment ----------------

def phi_mask(x: np.ndarray, y: np.ndarray, sphi: float, dphi: float) -> np.ndarray:
    if dphi >= TWO_PI:
        return np.ones(x.shape, dtype=bool)
    phi = np.mod(np.arctan2(y, x) - sphi, TWO_PI)
    return phi <= dphi


def inside_box(points: np.ndarray, dx: float, dy: float, dz: float) -> np.ndarray:
    return (np.abs(points[:, 0]) <= dx) & (np.abs(points[:, 1]) <= dy) & (np.abs(points[:, 2]) <= dz)


def inside_tube(points: np.ndarray, rmin: float, rmax: float, dz: float, sphi: float, dphi: float) -> np.ndarray:
    x, y, z = points[:, 0], points[:, 1], points[:, 2]
    rho2 = x * x + y * y
    mask = (np.abs(z) <= dz) & (rho2 <= rmax * rmax) & (rho2 >= rmin * rmin)
    return mask & phi_mask(x, y, sphi, dphi)


def inside_cone(
    points: np.ndarray, rmin1: float, rmax1: float, rmin2: float, rmax2: float, dz: float, sphi: float, dphi: float
) -> np.ndarray:
    x, y, z = points[:, 0], points[:, 1], points[:, 2]
    t = (z + dz) / (2.0 * dz)
    inner = rmin1 + (rmin2 - rmin1) * t
    outer = rmax1 + (rmax2 - rmax1) * t
    rho = np.hypot(x, y)
    mask = (np.abs(z) <= dz) & (rho <= outer) & (rho >= inner)
    return mask & phi_mask(x, y, sphi, dphi)


def inside_sphere(
    points: np.ndarray, rmin: float, rmax: float, sphi: float, dphi: float, stheta: float, dtheta: float
) -> np.ndarray:
    x, y, z = points[:, 0], points[:, 1], points[:, 2]
    r = np.sqrt(x * x + y * y + z * z)
    mask = (r <= rmax) & (r >= rmin)
    if stheta > 0.0 or stheta + dtheta < math.pi:
        with np.errstate(invalid="ignore", divide="ignore"):
            theta = np.where(r > 0.0, np.arccos(np.clip(z / np.where(r > 0.0, r, 1.0), -1.0, 1.0)), 0.0)
        mask &= (theta >= stheta) & (theta <= stheta + dtheta)
    return mask & phi_mask(x, y, sphi, dphi)


def inside_ellipsoid(points: np.ndarray, a: float, b: float, c: float, zlo: float, zhi: float) -> np.ndarray:
    x, y, z = points[:, 0], points[:, 1], points[:, 2]
    mask = (x / a) ** 2 + (y / b) ** 2 + (z / c) ** 2 <= 1.0
    return mask & (z >= zlo) & (z <= zhi)


def inside_elliptical_tube(points: np.ndarray, dx: float, dy: float, dz: float) -> np.ndarray:
    x, y, z = points[:, 0], points[:, 1], points[:, 2]
    return ((x / dx) ** 2 + (y / dy) ** 2 <= 1.0) & (np.abs(z) <= dz)


def inside_trd(points: np.ndarray, dx1: float, dx2: float, dy1: float, dy2: float, dz: float) -> np.ndarray:
    x, y, z = points[:, 0], points[:, 1], points[:, 2]
    t = (z + dz) / (2.0 * dz)
    half_x = dx1 + (dx2 - dx1) * t
    half_y = dy1 + (dy2 - dy1) * t
    return (np.abs(z) <= dz) & (np.abs(x) <= half_x) & (np.abs(y) <= half_y)


# ---------------- sampling ----------------

def estimate_capacity(
    inside: Callable[[np.ndarray], np.ndarray],
    lo: np.ndarray,
    hi: np.ndarray,
    samples: int,
    *,
    seed: int = DEFAULT_SEED,
) -> float:
    """Monte Carlo capacity inside the axis-aligned box ``[lo, hi]``."""
    lo = np.asarray(lo, dtype=float)
    extent = np.asarray(hi, dtype=float) - lo
    box = float(np.prod(extent))
    if box <= 0.0 or samples <= 0:
        return 0.0
    rng = np.random.default_rng(seed)
    points = lo + rng.random((samples, 3)) * extent
    return box * float(np.count_nonzero(inside(points))) / samples
