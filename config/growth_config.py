"""
Parameter sets for the growth simulation, obstacles and export loop.

The engine assumes already-validated input, so every dataclass here checks
its values in __post_init__ and raises ValueError early.
"""

from dataclasses import dataclass, asdict
from typing import Literal

SeedPlacement = Literal['edge', 'scatter']
SeedEdge = Literal['top', 'bottom', 'left', 'right']
DurationMode = Literal['fixed', 'auto']

SEED_PLACEMENTS = ('edge', 'scatter')
SEED_EDGES = ('top', 'right', 'bottom', 'left')
DURATION_MODES = ('fixed', 'auto')


@dataclass
class SimulationParams:
    influence_radius: float = 80.0   # Max distance at which an attractor pulls a node
    kill_radius: float = 16.0        # Attractors closer than this to any node are consumed
    step_size: float = 6.0
    max_nodes: int = 4000

    seed_count: int = 3
    seed_spread: float = 30.0        # Percent of the edge (or region) the seeds span
    seed_placement: SeedPlacement = 'edge'
    seed_edge: SeedEdge = 'top'
    seed_angle_deg: float = 0.0

    attractor_count: int = 900
    steps_per_frame: int = 3
    avoid_obstacles: bool = True

    # Reject candidates closer than this fraction of step_size to an existing node.
    # 0 disables the check.
    min_node_spacing: float = 0.0

    def __post_init__(self):
        if self.influence_radius < 0 or self.kill_radius < 0:
            raise ValueError("influence_radius and kill_radius must be non-negative")
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.max_nodes < 1:
            raise ValueError(f"max_nodes must be at least 1, got {self.max_nodes}")
        if self.seed_count < 1:
            raise ValueError(f"seed_count must be at least 1, got {self.seed_count}")
        if self.seed_count > self.max_nodes:
            raise ValueError("seed_count cannot exceed max_nodes")
        if not 0 <= self.seed_spread <= 100:
            raise ValueError(f"seed_spread is a percentage, got {self.seed_spread}")
        if self.seed_placement not in SEED_PLACEMENTS:
            raise ValueError(f"Unknown seed_placement: {self.seed_placement!r}")
        if self.seed_edge not in SEED_EDGES:
            raise ValueError(f"Unknown seed_edge: {self.seed_edge!r}")
        if self.attractor_count < 0:
            raise ValueError("attractor_count must be non-negative")
        if self.steps_per_frame < 1:
            raise ValueError("steps_per_frame must be at least 1")
        if self.min_node_spacing < 0:
            raise ValueError("min_node_spacing must be non-negative")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ObstacleConfig:
    count: int = 4
    min_vertices: int = 4
    max_vertices: int = 7
    min_radius: float = 30.0
    max_radius: float = 90.0
    margin: float = 20.0             # Polygons must stay this far inside the region

    def __post_init__(self):
        if self.count < 0:
            raise ValueError("count must be non-negative")
        if self.min_vertices < 3:
            raise ValueError(f"A polygon needs at least 3 vertices, got {self.min_vertices}")
        if self.max_vertices < self.min_vertices:
            raise ValueError("max_vertices must be >= min_vertices")
        if self.min_radius < 0 or self.max_radius < self.min_radius:
            raise ValueError("Radii must satisfy 0 <= min_radius <= max_radius")
        if self.margin < 0:
            raise ValueError("margin must be non-negative")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExportSettings:
    fps: int = 30
    duration_seconds: float = 6.0
    steps_per_frame: int = 3
    duration_mode: DurationMode = 'fixed'   # 'auto' stops once every region completes

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.duration_seconds <= 0:
            raise ValueError("duration_seconds must be positive")
        if self.steps_per_frame < 1:
            raise ValueError("steps_per_frame must be at least 1")
        if self.duration_mode not in DURATION_MODES:
            raise ValueError(f"Unknown duration_mode: {self.duration_mode!r}")

    def to_dict(self) -> dict:
        return asdict(self)
