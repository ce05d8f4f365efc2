"""Breadth-first detection of frontiers between known free space and unknown space."""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field

from frontierexplore.costmap_client import (
    FREE_SPACE,
    NO_INFORMATION,
    Costmap2D,
    Point,
)
from frontierexplore.costmap_tools import nearest_cell, nhood4, nhood8

logger = logging.getLogger(__name__)


@dataclass
class Frontier:
    """A connected group of unknown cells bordering free space."""

    size: int = 1
    min_distance: float = math.inf
    cost: float = 0.0
    initial: Point = field(default_factory=Point)
    centroid: Point = field(default_factory=Point)
    middle: Point = field(default_factory=Point)
    points: list[Point] = field(default_factory=list)


class FrontierSearch:
    """Finds and ranks frontiers on a costmap, searching outward from a position."""

    def __init__(
        self,
        costmap: Costmap2D,
        potential_scale: float,
        gain_scale: float,
        min_frontier_size: float,
    ) -> None:
        self.costmap = costmap
        self.potential_scale = potential_scale
        self.gain_scale = gain_scale
        self.min_frontier_size = min_frontier_size

    def search_from(self, position: Point) -> list[Frontier]:
        """Return the frontiers reachable from ``position``, cheapest first."""
        costmap = self.costmap
        cell = costmap.world_to_map(position.x, position.y)
        if cell is None:
            logger.error("Robot out of costmap bounds, cannot search for frontiers")
            return []

        frontiers: list[Frontier] = []
        with costmap.lock:
            charmap = costmap.charmap
            total = costmap.size_x * costmap.size_y
            frontier_flag = [False] * total
            visited = [False] * total

            pos = costmap.get_index(*cell)
            clear = nearest_cell(pos, FREE_SPACE, costmap)
            if clear is None:
                logger.warning("Could not find nearby clear cell to start search")
                start = pos
            else:
                start = clear
            queue = deque([start])
            visited[start] = True

            while queue:
                idx = queue.popleft()
                for nbr in nhood4(idx, costmap):
                    # descending search in case we started on a non-free cell
                    if charmap[nbr] <= charmap[idx] and not visited[nbr]:
                        visited[nbr] = True
                        queue.append(nbr)
                    elif self._is_new_frontier_cell(nbr, frontier_flag):
                        frontier_flag[nbr] = True
                        frontier = self._build_new_frontier(nbr, pos, frontier_flag)
                        if frontier.size * costmap.resolution >= self.min_frontier_size:
                            frontiers.append(frontier)

        for frontier in frontiers:
            frontier.cost = self.frontier_cost(frontier)
        frontiers.sort(key=lambda f: f.cost)
        return frontiers

    def _build_new_frontier(
        self, initial_cell: int, reference: int, frontier_flag: list[bool]
    ) -> Frontier:
        costmap = self.costmap
        output = Frontier()
        ix, iy = costmap.index_to_cells(initial_cell)
        output.initial = Point(*costmap.map_to_world(ix, iy))

        ref_x, ref_y = costmap.map_to_world(*costmap.index_to_cells(reference))
        sum_x = sum_y = 0.0

        queue = deque([initial_cell])
        while queue:
            idx = queue.popleft()
            for nbr in nhood8(idx, costmap):
                if not self._is_new_frontier_cell(nbr, frontier_flag):
                    continue
                frontier_flag[nbr] = True
                wx, wy = costmap.map_to_world(*costmap.index_to_cells(nbr))
                output.points.append(Point(wx, wy))
                output.size += 1
                sum_x += wx
                sum_y += wy
                distance = math.hypot(ref_x - wx, ref_y - wy)
                if distance < output.min_distance:
                    output.min_distance = distance
                    output.middle = Point(wx, wy)
                queue.append(nbr)

        output.centroid = Point(sum_x / output.size, sum_y / output.size)
        return output

    def _is_new_frontier_cell(self, idx: int, frontier_flag: list[bool]) -> bool:
        charmap = self.costmap.charmap
        if charmap[idx] != NO_INFORMATION or frontier_flag[idx]:
            return False
        return any(charmap[nbr] == FREE_SPACE for nbr in nhood4(idx, self.costmap))

    def frontier_cost(self, frontier: Frontier) -> float:
        """Weigh distance against size: closer and larger frontiers cost less."""
        resolution = self.costmap.resolution
        return (
            self.potential_scale * frontier.min_distance * resolution
            - self.gain_scale * frontier.size * resolution
        )