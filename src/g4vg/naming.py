"""Unique, traceable names for converted logical volumes."""

from __future__ import annotations

from typing import Optional

from .geant4.reflection import ReflectionFactory
from .geant4.volumes import LogicalVolume

_INVALID_CHARS = str.maketrans({c: "_" for c in " /:#+"})


class GDMLNameGenerator:
    """Name canonicalization used when exporting geometry to GDML.

    ``generate_name`` appends the object's address to the name so that
    distinct objects sharing a human-readable name stay distinguishable, then
    replaces characters that are invalid in GDML identifiers.
    """

    def __init__(self, add_pointer_to_name: bool = True):
        self.add_pointer_to_name = add_pointer_to_name
        self.names_generated = 0

    def generate_name(self, name: str, obj: object) -> str:
        self.names_generated += 1
        if self.add_pointer_to_name:
            name = f"{name}{hex(id(obj))}"
        return name.translate(_INVALID_CHARS)


# Shared by all calls; the counter never affects generated names
_GENERATOR = GDMLNameGenerator()


def make_gdml_name(lv: LogicalVolume, *, factory: Optional[ReflectionFactory] = None) -> str:
    """Return the destination name for ``lv``.

    A reflected copy is named after its constituent volume plus the reflection
    extension, so the two stay recognizably related but never collide.
    """
    if factory is None:
        factory = ReflectionFactory.instance()
    constituent = factory.get_constituent_lv(lv)
    if constituent is not None:
        return _GENERATOR.generate_name(constituent.name, constituent) + factory.volumes_name_extension
    return _GENERATOR.generate_name(lv.name, lv)


def describe_lv(lv: Optional[LogicalVolume]) -> str:
    """Name, address and instance id of ``lv`` for log and error messages."""
    if lv is None:
        return "{null logical volume}"
    return f'"{lv.name}"@{hex(id(lv))} (ID={lv.instance_id})'
