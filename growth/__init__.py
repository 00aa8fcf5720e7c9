"""
Space colonization growth engine for 2D root/vein-like branching structures.

Based on: "Modeling Trees with a Space Colonization Algorithm"
by Runions, Lane, and Prusinkiewicz (2007).
"""

from .vector import Vec2, Bounds, Polygon
from .rng import create_seeded_rng, create_seed, SeededRng
from .geometry import is_point_in_polygon, segment_intersects_polygon
from .obstacles import generate_polygons, gutter_obstacles
from .state import Node, SimulationState, SimulationSnapshot, create_simulation_state
from .stepper import step_simulation
from .orchestrator import (
    GrowthBatch,
    advance,
    tick_instances,
    build_region_state,
    randomize_seeds,
    export_frame_budget,
    run_export
)

__all__ = [
    'Vec2',
    'Bounds',
    'Polygon',
    'create_seeded_rng',
    'create_seed',
    'SeededRng',
    'is_point_in_polygon',
    'segment_intersects_polygon',
    'generate_polygons',
    'gutter_obstacles',
    'Node',
    'SimulationState',
    'SimulationSnapshot',
    'create_simulation_state',
    'step_simulation',
    'GrowthBatch',
    'advance',
    'tick_instances',
    'build_region_state',
    'randomize_seeds',
    'export_frame_budget',
    'run_export'
]
