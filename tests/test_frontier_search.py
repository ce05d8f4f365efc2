import math

import pytest

from frontierexplore.costmap_client import (
    FREE_SPACE,
    LETHAL_OBSTACLE,
    NO_INFORMATION,
    Costmap2D,
    Point,
)
from frontierexplore.frontier_search import Frontier, FrontierSearch


def make_map(rows, resolution=1.0):
    """Build a costmap from rows of cost values; rows[0] is y == 0."""
    size_y = len(rows)
    size_x = len(rows[0])
    costmap = Costmap2D(size_x, size_y, resolution, 0.0, 0.0)
    for y, row in enumerate(rows):
        for x, value in enumerate(row):
            costmap.charmap[costmap.get_index(x, y)] = value
    return costmap


F = FREE_SPACE
U = NO_INFORMATION
L = LETHAL_OBSTACLE


@pytest.fixture
def right_unknown_map():
    return make_map([[F, F, F, U, U] for _ in range(5)])


@pytest.fixture
def two_sided_map():
    return make_map([[U] + [F] * 7 + [U] for _ in range(3)])


def test_single_frontier_cells(right_unknown_map):
    search = FrontierSearch(right_unknown_map, 1e-3, 1.0, 0.5)
    frontiers = search.search_from(Point(0.5, 0.5))
    assert len(frontiers) == 1
    frontier = frontiers[0]
    assert frontier.size == 5
    assert len(frontier.points) == 4
    cells = {(p.x, p.y) for p in frontier.points} | {
        (frontier.initial.x, frontier.initial.y)
    }
    assert cells == {(3.5, y + 0.5) for y in range(5)}


def test_frontier_centroid_and_middle(right_unknown_map):
    search = FrontierSearch(right_unknown_map, 1e-3, 1.0, 0.5)
    frontier = search.search_from(Point(0.5, 0.5))[0]
    assert frontier.centroid.x == pytest.approx(
        sum(p.x for p in frontier.points) / frontier.size
    )
    assert frontier.centroid.y == pytest.approx(
        sum(p.y for p in frontier.points) / frontier.size
    )
    distances = [math.hypot(p.x - 0.5, p.y - 0.5) for p in frontier.points]
    assert frontier.min_distance == pytest.approx(min(distances))
    assert math.hypot(frontier.middle.x - 0.5, frontier.middle.y - 0.5) == (
        pytest.approx(frontier.min_distance)
    )


def test_cost_is_assigned(right_unknown_map):
    search = FrontierSearch(right_unknown_map, 1e-3, 1.0, 0.5)
    frontier = search.search_from(Point(0.5, 0.5))[0]
    assert frontier.cost == pytest.approx(search.frontier_cost(frontier))


def test_frontier_cost_formula():
    costmap = Costmap2D(4, 4, 0.5, 0.0, 0.0)
    search = FrontierSearch(costmap, 2.0, 3.0, 0.0)
    frontier = Frontier(size=2, min_distance=4.0)
    assert search.frontier_cost(frontier) == pytest.approx(1.0)


def test_frontiers_sorted_by_cost(two_sided_map):
    search = FrontierSearch(two_sided_map, 10.0, 0.0, 0.5)
    frontiers = search.search_from(Point(2.5, 1.5))
    assert len(frontiers) == 2
    costs = [f.cost for f in frontiers]
    assert costs == sorted(costs)
    assert frontiers[0].initial.x == 0.5
    assert frontiers[1].initial.x == 8.5


def test_robot_out_of_bounds(right_unknown_map):
    search = FrontierSearch(right_unknown_map, 1e-3, 1.0, 0.5)
    assert search.search_from(Point(-1.0, 0.5)) == []
    assert search.search_from(Point(10.0, 0.5)) == []


def test_min_frontier_size_filters(right_unknown_map):
    search = FrontierSearch(right_unknown_map, 1e-3, 1.0, 10.0)
    assert search.search_from(Point(0.5, 0.5)) == []


def test_fully_known_map_has_no_frontiers():
    costmap = make_map([[F] * 4 for _ in range(4)])
    search = FrontierSearch(costmap, 1e-3, 1.0, 0.0)
    assert search.search_from(Point(1.5, 1.5)) == []


def test_fully_unknown_map_has_no_frontiers():
    costmap = make_map([[U] * 4 for _ in range(4)])
    search = FrontierSearch(costmap, 1e-3, 1.0, 0.0)
    assert search.search_from(Point(1.5, 1.5)) == []


def test_start_on_obstacle_uses_nearest_free_cell():
    costmap = make_map([[L, F, F, U] for _ in range(3)])
    search = FrontierSearch(costmap, 1e-3, 1.0, 0.5)
    frontiers = search.search_from(Point(0.5, 1.5))
    assert len(frontiers) == 1
    assert frontiers[0].size == 3


def test_walled_off_unknown_is_not_reached():
    costmap = make_map([[F, F, L, F, U] for _ in range(3)])
    search = FrontierSearch(costmap, 1e-3, 1.0, 0.0)
    assert search.search_from(Point(0.5, 0.5)) == []


def test_search_does_not_modify_map(right_unknown_map):
    before = bytes(right_unknown_map.charmap)
    FrontierSearch(right_unknown_map, 1e-3, 1.0, 0.5).search_from(Point(0.5, 0.5))
    assert bytes(right_unknown_map.charmap) == before