"""Costmaps, grid helpers and frontier search for occupancy-grid exploration."""

__version__ = "0.1.0"
__all__ = ["costmap_client", "costmap_tools", "frontier_search"]