from __future__ import annotations

import numpy as np

from ..errors import VECGEOM, runtime_throw
from ..utils.matrix import as_rotation, as_vector, inverse_transform_points, is_identity, transform_points


class Transformation3D:
    """Rigid placement transform; reflections cannot be represented."""

    __slots__ = ("translation", "rotation")

    def __init__(self, translation=None, rotation=None):
        self.translation = as_vector(translation)
        self.rotation = np.eye(3) if rotation is None else as_rotation(rotation)
        if not np.linalg.det(self.rotation) > 0:
            runtime_throw(VECGEOM, "transformation rotation must be proper (det > 0)", "det(rotation) > 0")

    @classmethod
    def identity(cls) -> "Transformation3D":
        return cls()

    @property
    def has_rotation(self) -> bool:
        return not is_identity(self.rotation)

    @property
    def has_translation(self) -> bool:
        return bool(np.any(self.translation != 0.0))

    def is_identity(self) -> bool:
        return is_identity(self.rotation, self.translation)

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Map local points into the mother frame."""
        return transform_points(points, self.rotation, self.translation)

    def apply_inverse(self, points: np.ndarray) -> np.ndarray:
        return inverse_transform_points(points, self.rotation, self.translation)

    def __repr__(self) -> str:
        return f"Transformation3D(translation={self.translation.tolist()}, rotation={self.rotation.tolist()})"
