from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .transformation import Transformation3D
from .unplaced import UnplacedVolume

if TYPE_CHECKING:
    from .manager import GeoManager

__all__ = ["LogicalVolume", "PlacedVolume", "Transformation3D"]


@dataclass(eq=False)
class LogicalVolume:
    """Destination volume; ``id`` is assigned by the owning :class:`GeoManager`."""

    name: str
    unplaced: UnplacedVolume
    id: int
    daughters: list["PlacedVolume"] = field(default_factory=list, repr=False)
    manager: Optional["GeoManager"] = field(default=None, repr=False)

    def place(self, name: Optional[str] = None, transformation: Optional[Transformation3D] = None) -> "PlacedVolume":
        """Create an unattached placement (used for the world volume)."""
        pv = PlacedVolume(name or self.name, self, transformation or Transformation3D.identity())
        if self.manager is not None:
            self.manager.register_placed_volume(pv)
        return pv

    def place_daughter(
        self,
        name: str,
        lv: "LogicalVolume",
        transformation: Optional[Transformation3D] = None,
        copy_no: int = 0,
    ) -> "PlacedVolume":
        pv = lv.place(name, transformation)
        pv.copy_no = copy_no
        self.daughters.append(pv)
        return pv

    @property
    def num_daughters(self) -> int:
        return len(self.daughters)


@dataclass(eq=False)
class PlacedVolume:
    name: str
    logical_volume: LogicalVolume
    transformation: Transformation3D
    copy_no: int = 0
    id: int = -1

    @property
    def unplaced(self) -> UnplacedVolume:
        return self.logical_volume.unplaced
