# frontierexplore

Frontier detection for mobile robots working on a 2-D occupancy-grid costmap.
The package keeps a costmap current from full and partial map messages, finds
the boundaries between known free space and unknown space ("frontiers"), and
ranks them by cost so that the closest, largest ones come first.

It has no runtime dependencies. Map messages and robot poses come from you:
you feed `OccupancyGrid` and `OccupancyGridUpdate` objects in and supply a
callable that looks up the robot pose.

## Installation

```
pip install .
```

## Costmaps (`frontierexplore.costmap_client`)

- `Point` and `Pose` – a world point, and a position with an orientation
  quaternion `(x, y, z, w)`.
- `Costmap2D` – a row-major grid of cost bytes (`charmap`) with a resolution,
  a world origin and a re-entrant `lock`. `resize_map` reallocates the grid and
  clears every cell to free space; `world_to_map` returns the `(mx, my)` cell
  holding a world point, or `None` outside the map; `map_to_world` returns the
  centre of a cell; `get_index` and `index_to_cells` convert between cells and
  flat indices.
- `build_translation_table()` – the 256-entry table mapping occupancy values
  (read as unsigned bytes, so -1 is 255) onto costs: 0 is free (0), 99 is
  inscribed (253), 100 is lethal (254), -1 is unknown (255), and other values
  are scaled linearly.
- `OccupancyGrid` – a full map: frame, width, height, resolution, origin and
  occupancy data.
- `OccupancyGridUpdate` – a rectangular patch at `(x, y)` with its own width,
  height and data.
- `Costmap2DClient(pose_lookup, robot_base_frame="base_link",
  transform_tolerance=0.3)` keeps a `Costmap2D` (its `costmap` attribute)
  current:
  - `update_full_map(msg)` resizes the costmap to the message and fills it,
    sets `costmap_received` and records `global_frame`;
  - `update_partial_map(msg)` writes the patch, ignoring updates with negative
    coordinates and dropping any part that falls outside the map;
  - `get_robot_pose()` calls `pose_lookup(robot_base_frame, global_frame,
    transform_tolerance)` and returns an empty `Pose` if it raises
    `TransformError`.

## Grid helpers (`frontierexplore.costmap_tools`)

- `nhood4(idx, costmap)` / `nhood8(idx, costmap)` – the 4- and 8-connected
  neighbours of a cell, clipped at the map edges; an index off the map gives
  an empty list.
- `nearest_cell(start, val, costmap)` – breadth-first search for the closest
  cell holding the cost `val`; returns its index or `None`.

## Frontier search (`frontierexplore.frontier_search`)

`FrontierSearch(costmap, potential_scale, gain_scale, min_frontier_size)`
searches outward from a `Point` with `search_from(position)`. It returns an
empty list when the position is off the map, and otherwise a list of
`Frontier` objects sorted by ascending cost. Frontiers whose size in cells
times the resolution is below `min_frontier_size` are left out.

Each `Frontier` carries `size` (cells), `min_distance` to the robot, `cost`,
`initial` (first cell found), `centroid`, `middle` (the cell closest to the
robot) and `points`. `frontier_cost(frontier)` is
`potential_scale * min_distance * resolution - gain_scale * size * resolution`.

```python
from frontierexplore.costmap_client import (
    Costmap2DClient, OccupancyGrid, Point, Pose,
)
from frontierexplore.frontier_search import FrontierSearch


def lookup(base_frame, global_frame, tolerance):
    return Pose(Point(0.25, 0.25))


client = Costmap2DClient(lookup)
row = [0] * 5 + [-1] * 5          # left half free, right half unknown
client.update_full_map(OccupancyGrid("map", 10, 10, 0.1, data=row * 10))

search = FrontierSearch(client.costmap, 1e-3, 1.0, 0.5)
for frontier in search.search_from(client.get_robot_pose().position):
    print(frontier.centroid, frontier.size, frontier.cost)
```

## What the package does not do

It finds and ranks frontiers; it does not drive a robot. There is no
exploration loop that picks a goal, sends it to a navigation backend,
blacklists goals that stop making progress or returns the robot to its start,
no marker output for visualisation, and no command-line program. Subscribing
to map topics and looking up transforms are likewise up to the caller.

## Tests

```
pip install ".[test]"
pytest
```