"""Neighbourhood and nearest-cell helpers for costmap grids."""

from __future__ import annotations

import logging
from collections import deque

from frontierexplore.costmap_client import Costmap2D

logger = logging.getLogger(__name__)


def nhood4(idx: int, costmap: Costmap2D) -> list[int]:
    """Return the 4-connected neighbours of a cell, respecting map edges."""
    size_x, size_y = costmap.size_x, costmap.size_y
    if idx > size_x * size_y - 1:
        logger.warning("Evaluating nhood for offmap point")
        return []

    out = []
    col = idx % size_x
    if col > 0:
        out.append(idx - 1)
    if col < size_x - 1:
        out.append(idx + 1)
    if idx >= size_x:
        out.append(idx - size_x)
    if idx < size_x * (size_y - 1):
        out.append(idx + size_x)
    return out


def nhood8(idx: int, costmap: Costmap2D) -> list[int]:
    """Return the 8-connected neighbours of a cell, respecting map edges."""
    out = nhood4(idx, costmap)
    size_x, size_y = costmap.size_x, costmap.size_y
    if idx > size_x * size_y - 1:
        return out

    col = idx % size_x
    has_left = col > 0
    has_right = col < size_x - 1
    has_up = idx >= size_x
    has_down = idx < size_x * (size_y - 1)
    if has_left and has_up:
        out.append(idx - 1 - size_x)
    if has_left and has_down:
        out.append(idx - 1 + size_x)
    if has_right and has_up:
        out.append(idx + 1 - size_x)
    if has_right and has_down:
        out.append(idx + 1 + size_x)
    return out


def nearest_cell(start: int, val: int, costmap: Costmap2D) -> int | None:
    """Breadth-first search for the closest cell holding ``val``; None if absent."""
    charmap = costmap.charmap
    if start >= costmap.size_x * costmap.size_y:
        return None

    queue = deque([start])
    visited = {start}
    while queue:
        idx = queue.popleft()
        if charmap[idx] == val:
            return idx
        for nbr in nhood8(idx, costmap):
            if nbr not in visited:
                visited.add(nbr)
                queue.append(nbr)
    return None