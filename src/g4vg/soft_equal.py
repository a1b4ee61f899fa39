from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .errors import validate


@dataclass(frozen=True, slots=True)
class _SoftEqualTraits:
    rel_prec: float
    abs_thresh: float


_TRAITS = {
    np.dtype(np.float64): _SoftEqualTraits(rel_prec=1.0e-12, abs_thresh=1.0e-14),
    np.dtype(np.float32): _SoftEqualTraits(rel_prec=1.0e-6, abs_thresh=1.0e-6),
}


def _traits(dtype) -> _SoftEqualTraits:
    key = np.dtype(dtype)
    validate(key in _TRAITS, f"invalid type for soft equality: {key}", condition="dtype in (float64, float32)")
    return _TRAITS[key]


class SoftEqual:
    """Functor for noninfinite floating point equality.

    Uses an absolute tolerance for values near zero and a relative tolerance for
    values far from zero::

        |a - b| < max(rel * max(|a|, |b|), abs)

    The comparison is commutative and returns ``False`` if either value is NaN.
    Two infinities of the same sign also compare unequal because relative error
    is meaningless for them; test ``a == b or eq(a, b)`` to allow that case.
    """

    __slots__ = ("_rel", "_abs")

    def __init__(self, rel: float | None = None, abs: float | None = None, *, dtype=float):
        traits = _traits(dtype)
        if rel is None:
            rel = traits.rel_prec
            if abs is None:
                abs = traits.abs_thresh
        elif abs is None:
            # Scale the absolute threshold with the requested relative error
            abs = rel * (traits.abs_thresh / traits.rel_prec)
        validate(rel > 0, f"relative tolerance must be positive (got {rel})", condition="rel > 0")
        validate(abs > 0, f"absolute threshold must be positive (got {abs})", condition="abs > 0")
        self._rel = float(rel)
        self._abs = float(abs)

    def __call__(self, a: float, b: float) -> bool:
        rel = self._rel * max(math.fabs(a), math.fabs(b))
        return math.fabs(a - b) < max(self._abs, rel)

    @property
    def rel(self) -> float:
        """Relative allowable error."""
        return self._rel

    @property
    def abs(self) -> float:
        """Absolute tolerance."""
        return self._abs

    def __repr__(self) -> str:
        return f"SoftEqual(rel={self._rel!r}, abs={self._abs!r})"


def soft_equal(a: float, b: float) -> bool:
    """Compare with the default double-precision tolerances."""
    return _DEFAULT(a, b)


_DEFAULT = SoftEqual()
