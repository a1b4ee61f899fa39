"""Type-safe integer handles.

An :class:`OpaqueId` wraps an unsigned index into one particular index space.
Each space is its own subclass, so ids from different spaces never compare
equal, and no id can be used directly as a list index or compared with a raw
integer.  ``unchecked_get`` is the one place where the raw value escapes.
"""

from __future__ import annotations

from functools import total_ordering

from .errors import validate

SIZE_BITS = 64


@total_ordering
class OpaqueId:
    """Strongly typed index with an explicit "unassigned" state."""

    __slots__ = ("_value",)

    #: Value indicating the ID is not assigned (all bits set)
    INVALID_VALUE = (1 << SIZE_BITS) - 1

    def __init__(self, index: int | None = None):
        if index is None:
            index = self.INVALID_VALUE
        validate(
            isinstance(index, int) and not isinstance(index, bool),
            f"{type(self).__name__} index must be an integer, got {index!r}",
            condition="isinstance(index, int)",
        )
        validate(
            0 <= index <= self.INVALID_VALUE,
            f"{type(self).__name__} index {index} is outside the unsigned range",
            condition="0 <= index <= INVALID_VALUE",
        )
        self._value = index

    def __bool__(self) -> bool:
        return self._value != self.INVALID_VALUE

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash((type(self), self._value))

    def __add__(self, offset: int) -> "OpaqueId":
        if isinstance(offset, OpaqueId) or not isinstance(offset, int):
            return NotImplemented
        validate(offset >= 0, f"{type(self).__name__} cannot be decremented", condition="offset >= 0")
        validate(
            self._value + offset < self.INVALID_VALUE,
            f"{type(self).__name__} {self._value} + {offset} overflows the id range",
            condition="value + offset < INVALID_VALUE",
        )
        return type(self)(self._value + offset)

    def next(self) -> "OpaqueId":
        """Return the following ID (the value is never decremented or reused)."""
        return self + 1

    def get(self) -> int:
        """Get the ID's value; the ID must be valid."""
        validate(bool(self), f"cannot access the value of an unassigned {type(self).__name__}", condition="id")
        return self._value

    def unchecked_get(self) -> int:
        """Get the value without checking for validity (atypical)."""
        return self._value

    def __repr__(self) -> str:
        if not self:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self._value})"


class VolumeId(OpaqueId):
    """Index of a logical volume in the destination geometry."""

    __slots__ = ()
