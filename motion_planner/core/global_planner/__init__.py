"""
Global Planner 全局規劃器模組
"""

from .graph import Graph

from .astar import (
    AStarPlanner,
    HeuristicType,
    SearchNode
)

from .visibility_graph import (
    VisibilityGraphPlanner,
    is_visible
)

from .voronoi import (
    VoronoiPlanner,
    border_samples,
    filter_edges,
    voronoi_cell_polygons
)

from .ray_growth import (
    Ray,
    RayGrowthPlanner,
    outward_normal
)

from .planning import (
    compute_path,
    compute_trace
)

__all__ = [
    'Graph',

    # A*
    'AStarPlanner',
    'HeuristicType',
    'SearchNode',

    # Visibility graph
    'VisibilityGraphPlanner',
    'is_visible',

    # Voronoi
    'VoronoiPlanner',
    'border_samples',
    'filter_edges',
    'voronoi_cell_polygons',

    # Ray growth
    'Ray',
    'RayGrowthPlanner',
    'outward_normal',

    # Planning call
    'compute_path',
    'compute_trace'
]
