from __future__ import annotations

import numpy as np

from ..errors import GEANT4, runtime_throw
from ..utils.matrix import (
    REFLECT_Z,
    as_rotation,
    as_vector,
    axis_rotation,
    inverse_transform_points,
    is_identity,
    is_orthonormal,
    is_reflection,
    transform_points,
)


class Transform3D:
    """Placement transform: ``x_mother = rotation @ x_daughter + translation``.

    Unlike the destination transform this may include a reflection.
    """

    __slots__ = ("rotation", "translation")

    def __init__(self, rotation=None, translation=None):
        self.rotation = np.eye(3) if rotation is None else as_rotation(rotation)
        self.translation = as_vector(translation)
        if not is_orthonormal(self.rotation):
            runtime_throw(GEANT4, "placement rotation is not orthonormal", "R @ R.T == I")

    @classmethod
    def identity(cls) -> "Transform3D":
        return cls()

    @classmethod
    def translation_of(cls, x: float, y: float, z: float) -> "Transform3D":
        return cls(translation=(x, y, z))

    @classmethod
    def rotation_of(cls, axis: str, angle: float, translation=None) -> "Transform3D":
        return cls(axis_rotation(axis, angle), translation)

    @classmethod
    def reflection_z(cls, translation=None) -> "Transform3D":
        return cls(REFLECT_Z, translation)

    def __matmul__(self, other: "Transform3D") -> "Transform3D":
        if not isinstance(other, Transform3D):
            return NotImplemented
        return Transform3D(self.rotation @ other.rotation, self.rotation @ other.translation + self.translation)

    def inverse(self) -> "Transform3D":
        inv = np.linalg.inv(self.rotation)
        return Transform3D(inv, -(inv @ self.translation))

    def apply(self, points: np.ndarray) -> np.ndarray:
        return transform_points(points, self.rotation, self.translation)

    def apply_inverse(self, points: np.ndarray) -> np.ndarray:
        return inverse_transform_points(points, self.rotation, self.translation)

    @property
    def is_reflection(self) -> bool:
        return is_reflection(self.rotation)

    @property
    def is_identity(self) -> bool:
        return is_identity(self.rotation, self.translation)

    def split_reflection(self) -> tuple["Transform3D", bool]:
        """Split into a proper transform applied after a local Z reflection."""
        if not self.is_reflection:
            return self, False
        return Transform3D(self.rotation @ REFLECT_Z, self.translation), True

    def reflected(self) -> "Transform3D":
        """The same placement seen inside a Z-mirrored mother."""
        return Transform3D(REFLECT_Z @ self.rotation @ REFLECT_Z, REFLECT_Z @ self.translation)

    def __repr__(self) -> str:
        return f"Transform3D(rotation={self.rotation.tolist()}, translation={self.translation.tolist()})"
