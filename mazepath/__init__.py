"""
Maze pathfinding on weighted grids.

Dijkstra, A* and a genetic/memetic search engine over 4-connected grids
whose cells carry non-negative entry costs.
"""

__version__ = "1.0.0"
