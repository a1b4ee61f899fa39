from __future__ import annotations

import math
from typing import Sequence

import numpy as np

# Mirror through the XY plane: the reflection split off placement transforms
REFLECT_Z = np.diag([1.0, 1.0, -1.0])

_AXES = {"x": 0, "y": 1, "z": 2}


# ---------------- Matrix helpers ----------------

def as_rotation(values) -> np.ndarray:
    """Return a 3x3 float rotation matrix from a nested sequence or array."""
    arr = np.array(values, dtype=float)
    if arr.shape == (9,):
        arr = arr.reshape(3, 3)
    if arr.shape != (3, 3):
        raise ValueError(f"Invalid rotation matrix: {values}")
    return arr


def as_vector(values: Sequence[float] | np.ndarray | None) -> np.ndarray:
    """Return a 3-vector (zero if ``values`` is None)."""
    if values is None:
        return np.zeros(3)
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Invalid 3-vector: {values}")
    return arr


def axis_rotation(axis: str, angle: float) -> np.ndarray:
    """Active rotation by ``angle`` radians about a principal axis."""
    try:
        index = _AXES[axis.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown rotation axis '{axis}'") from exc
    c, s = math.cos(angle), math.sin(angle)
    i, j = (index + 1) % 3, (index + 2) % 3
    rot = np.eye(3)
    rot[i, i] = c
    rot[j, j] = c
    rot[i, j] = -s
    rot[j, i] = s
    return rot


def is_reflection(rotation: np.ndarray) -> bool:
    return bool(np.linalg.det(rotation) < 0)


def is_identity(rotation: np.ndarray, translation: np.ndarray | None = None, atol: float = 1e-10) -> bool:
    if not np.allclose(rotation, np.eye(3), atol=atol):
        return False
    return translation is None or bool(np.allclose(translation, 0.0, atol=atol))


def is_orthonormal(rotation: np.ndarray, atol: float = 1e-9) -> bool:
    return bool(np.allclose(rotation @ rotation.T, np.eye(3), atol=atol))


def transform_points(points: np.ndarray, rotation: np.ndarray, translation: np.ndarray) -> np.ndarray:
    """Map ``(N, 3)`` daughter-frame points into the mother frame."""
    return points @ rotation.T + translation


def inverse_transform_points(points: np.ndarray, rotation: np.ndarray, translation: np.ndarray) -> np.ndarray:
    """Map ``(N, 3)`` mother-frame points into the daughter frame."""
    return (points - translation) @ np.linalg.inv(rotation).T


def transformed_bounds(lo: np.ndarray, hi: np.ndarray, rotation: np.ndarray, translation: np.ndarray):
    """Axis-aligned bounds of a transformed box."""
    corners = np.array(
        [[x, y, z] for x in (lo[0], hi[0]) for y in (lo[1], hi[1]) for z in (lo[2], hi[2])]
    )
    moved = transform_points(corners, rotation, translation)
    return moved.min(axis=0), moved.max(axis=0)
