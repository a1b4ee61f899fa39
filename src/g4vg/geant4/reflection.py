from __future__ import annotations

import logging
from typing import ClassVar, Optional

from .solids import ReflectedSolid
from .transform import Transform3D
from .volumes import LogicalVolume, PhysicalVolume, place

LOG = logging.getLogger(__name__)

DEFAULT_NAME_EXTENSION = "_refl"


class ReflectionFactory:
    """Creates and tracks Z-reflected copies of logical volumes.

    A placement whose transform contains a reflection is decomposed into a
    proper placement of a reflected copy of the volume.  The copy owns a
    :class:`ReflectedSolid`, carries the name extension, and has its whole
    daughter subtree reflected as well.  Copies are cached, so placing the
    same volume with a reflection twice reuses one reflected volume.
    """

    _instance: ClassVar[Optional["ReflectionFactory"]] = None

    def __init__(self, name_extension: str = DEFAULT_NAME_EXTENSION):
        self._name_extension = name_extension
        self._reflected: dict[LogicalVolume, LogicalVolume] = {}
        self._constituents: dict[LogicalVolume, LogicalVolume] = {}

    @classmethod
    def instance(cls) -> "ReflectionFactory":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def volumes_name_extension(self) -> str:
        return self._name_extension

    def place(
        self,
        transform: Transform3D,
        name: str,
        lv: LogicalVolume,
        mother: Optional[LogicalVolume] = None,
        copy_no: int = 0,
    ) -> PhysicalVolume:
        proper, reflected = transform.split_reflection()
        if not reflected:
            return place(lv, mother, transform, name, copy_no)
        LOG.debug("Reflecting %s for placement %s", lv.name, name)
        return place(self.reflect_lv(lv), mother, proper, name, copy_no)

    def reflect_lv(self, lv: LogicalVolume) -> LogicalVolume:
        """Return the reflected copy of ``lv``, creating it on first use."""
        existing = self._reflected.get(lv)
        if existing is not None:
            return existing
        constituent = self._constituents.get(lv)
        if constituent is not None:
            # Reflecting a reflected volume gives back the original
            return constituent

        solid = ReflectedSolid(
            lv.solid.name + self._name_extension, lv.solid, Transform3D.reflection_z()
        )
        refl = LogicalVolume(lv.name + self._name_extension, solid, lv.material)
        self._reflected[lv] = refl
        self._constituents[refl] = lv
        for pv in lv.daughters:
            place(self.reflect_lv(pv.logical_volume), refl, pv.transform.reflected(), pv.name, pv.copy_no)
        return refl

    def get_constituent_lv(self, lv: LogicalVolume) -> Optional[LogicalVolume]:
        return self._constituents.get(lv)

    def get_reflected_lv(self, lv: LogicalVolume) -> Optional[LogicalVolume]:
        return self._reflected.get(lv)

    def is_reflected(self, lv: LogicalVolume) -> bool:
        return lv in self._constituents

    def clear(self) -> None:
        self._reflected.clear()
        self._constituents.clear()
