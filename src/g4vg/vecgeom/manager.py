from __future__ import annotations

import logging
from typing import ClassVar, Optional

from ..errors import VECGEOM, runtime_throw
from .unplaced import UnplacedVolume
from .volumes import LogicalVolume, PlacedVolume

LOG = logging.getLogger(__name__)


class GeoManager:
    """Registry of destination volumes.

    Logical volume ids come from a counter that only increments until
    :meth:`clear` is called, so volumes created by one conversion into a fresh
    manager are numbered densely from zero.
    """

    _instance: ClassVar[Optional["GeoManager"]] = None

    def __init__(self):
        self._logical: dict[int, LogicalVolume] = {}
        self._placed: list[PlacedVolume] = []
        self._next_id = 0
        self._world: Optional[PlacedVolume] = None
        self._closed = False

    @classmethod
    def instance(cls) -> "GeoManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # ---------------- Registration ----------------

    def make_logical_volume(self, name: str, unplaced: UnplacedVolume) -> LogicalVolume:
        lv = LogicalVolume(name, unplaced, self._next_id, manager=self)
        self._logical[lv.id] = lv
        self._next_id += 1
        return lv

    def register_placed_volume(self, pv: PlacedVolume) -> int:
        pv.id = len(self._placed)
        self._placed.append(pv)
        return pv.id

    def find_logical_volume(self, volume_id: int) -> Optional[LogicalVolume]:
        return self._logical.get(volume_id)

    @property
    def num_logical_volumes(self) -> int:
        return len(self._logical)

    @property
    def num_placed_volumes(self) -> int:
        return len(self._placed)

    # ---------------- World ----------------

    def set_world_and_close(self, world: PlacedVolume) -> None:
        if self._logical.get(world.logical_volume.id) is not world.logical_volume:
            runtime_throw(
                VECGEOM,
                f"world volume '{world.name}' was not created by this geometry manager",
                "manager owns world logical volume",
            )
        self._world = world
        self._closed = True
        LOG.debug(
            "Closed geometry with %d logical and %d placed volumes",
            len(self._logical),
            len(self._placed),
        )

    @property
    def world(self) -> Optional[PlacedVolume]:
        return self._world

    @property
    def is_closed(self) -> bool:
        return self._closed

    def clear(self) -> None:
        self._logical.clear()
        self._placed.clear()
        self._next_id = 0
        self._world = None
        self._closed = False
