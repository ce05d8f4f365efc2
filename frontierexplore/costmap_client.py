"""Occupancy-grid costmap and a client that keeps it in sync with map messages."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

FREE_SPACE = 0
INSCRIBED_INFLATED_OBSTACLE = 253
LETHAL_OBSTACLE = 254
NO_INFORMATION = 255


@dataclass
class Point:
    """A point in world coordinates."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Pose:
    """A position together with an orientation quaternion (x, y, z, w)."""

    position: Point = field(default_factory=Point)
    orientation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)


@dataclass
class OccupancyGrid:
    """A full occupancy grid: occupancy values in [0, 100] or -1 for unknown."""

    frame_id: str
    width: int
    height: int
    resolution: float
    origin_x: float = 0.0
    origin_y: float = 0.0
    data: Sequence[int] = ()


@dataclass
class OccupancyGridUpdate:
    """A rectangular patch of occupancy values to overwrite in an existing grid."""

    frame_id: str
    x: int
    y: int
    width: int
    height: int
    data: Sequence[int] = ()


class TransformError(Exception):
    """Raised when the robot pose cannot be transformed into the global frame."""


class Costmap2D:
    """A row-major grid of one-byte costs anchored at a world origin."""

    def __init__(
        self,
        size_x: int = 0,
        size_y: int = 0,
        resolution: float = 0.0,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> None:
        self.lock = threading.RLock()
        self.resize_map(size_x, size_y, resolution, origin_x, origin_y)

    def resize_map(
        self,
        size_x: int,
        size_y: int,
        resolution: float,
        origin_x: float,
        origin_y: float,
    ) -> None:
        """Reallocate the grid, clearing every cell to free space."""
        with self.lock:
            self.size_x = int(size_x)
            self.size_y = int(size_y)
            self.resolution = float(resolution)
            self.origin_x = float(origin_x)
            self.origin_y = float(origin_y)
            self.charmap = bytearray(self.size_x * self.size_y)

    def world_to_map(self, wx: float, wy: float) -> tuple[int, int] | None:
        """Return the cell holding a world point, or None if it lies outside."""
        if wx < self.origin_x or wy < self.origin_y or self.resolution <= 0:
            return None
        mx = int((wx - self.origin_x) / self.resolution)
        my = int((wy - self.origin_y) / self.resolution)
        if mx < self.size_x and my < self.size_y:
            return mx, my
        return None

    def map_to_world(self, mx: int, my: int) -> tuple[float, float]:
        """Return the world coordinates of a cell's centre."""
        return (
            self.origin_x + (mx + 0.5) * self.resolution,
            self.origin_y + (my + 0.5) * self.resolution,
        )

    def get_index(self, mx: int, my: int) -> int:
        """Return the linear index of a cell."""
        return my * self.size_x + mx

    def index_to_cells(self, index: int) -> tuple[int, int]:
        """Return the (x, y) cell of a linear index."""
        my, mx = divmod(index, self.size_x)
        return mx, my


def build_translation_table() -> bytes:
    """Map occupancy values (as unsigned bytes) to costmap costs."""
    table = bytearray((1 + (251 * (i - 1)) // 97) & 0xFF for i in range(256))
    table[0] = FREE_SPACE
    table[99] = INSCRIBED_INFLATED_OBSTACLE
    table[100] = LETHAL_OBSTACLE
    table[0xFF] = NO_INFORMATION
    return bytes(table)


_COST_TRANSLATION = build_translation_table()


def _translate(value: int) -> int:
    return _COST_TRANSLATION[value & 0xFF]


PoseLookup = Callable[[str, str, float], Pose]


class Costmap2DClient:
    """Keeps a costmap updated from grid messages and locates the robot on it.

    ``pose_lookup(robot_base_frame, global_frame, tolerance)`` must return the
    robot pose in the global frame or raise :class:`TransformError`.
    """

    def __init__(
        self,
        pose_lookup: PoseLookup,
        robot_base_frame: str = "base_link",
        transform_tolerance: float = 0.3,
    ) -> None:
        self._pose_lookup = pose_lookup
        self.costmap = Costmap2D()
        self.costmap_received = False
        self.global_frame = ""
        self.robot_base_frame = robot_base_frame
        self.transform_tolerance = transform_tolerance

    def update_full_map(self, msg: OccupancyGrid) -> None:
        """Replace the whole costmap with the contents of a grid message."""
        self.costmap_received = True
        self.global_frame = msg.frame_id
        logger.debug(
            "received full new map, resizing to: %d, %d", msg.width, msg.height
        )
        costmap = self.costmap
        costmap.resize_map(
            msg.width, msg.height, msg.resolution, msg.origin_x, msg.origin_y
        )
        with costmap.lock:
            size = costmap.size_x * costmap.size_y
            values = msg.data[:size]
            costmap.charmap[: len(values)] = bytes(_translate(v) for v in values)
        logger.debug("map updated, written %d values", size)

    def update_partial_map(self, msg: OccupancyGridUpdate) -> None:
        """Overwrite a rectangle of the costmap; parts outside the map are dropped."""
        logger.debug("received partial map update")
        self.global_frame = msg.frame_id
        if msg.x < 0 or msg.y < 0:
            logger.debug(
                "negative coordinates, invalid update. x: %d, y: %d", msg.x, msg.y
            )
            return

        x0, y0 = msg.x, msg.y
        xn, yn = msg.width + x0, msg.height + y0
        costmap = self.costmap
        with costmap.lock:
            map_xn, map_yn = costmap.size_x, costmap.size_y
            if xn > map_xn or x0 > map_xn or yn > map_yn or y0 > map_yn:
                logger.warning(
                    "received update doesn't fully fit into existing map, "
                    "only part will be copied. received: [%d, %d], [%d, %d] "
                    "map is: [0, %d], [0, %d]",
                    x0, xn, y0, yn, map_xn, map_yn,
                )
            cells = (
                costmap.get_index(x, y)
                for y in range(y0, min(yn, map_yn))
                for x in range(x0, min(xn, map_xn))
            )
            for idx, value in zip(cells, msg.data):
                costmap.charmap[idx] = _translate(value)

    def get_robot_pose(self) -> Pose:
        """Return the robot pose in the global frame, or an empty pose on failure."""
        try:
            return self._pose_lookup(
                self.robot_base_frame, self.global_frame, self.transform_tolerance
            )
        except TransformError as ex:
            logger.error("Error looking up robot pose: %s", ex)
            return Pose()