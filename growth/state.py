"""
Simulation state and its initialization.

Nodes live in a single append-only list and refer to their parent by index.
A parent index is always smaller than the child's own index, so the
structure is an acyclic forest by construction.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from config.growth_config import SimulationParams

from .vector import Vec2, Bounds, Polygon
from .geometry import is_point_in_polygon
from .rng import Rng, default_rng

ATTEMPTS_PER_ATTRACTOR = 20
MIN_SEED_MARGIN = 6.0


class Node:
    __slots__ = ('x', 'y', 'parent')

    def __init__(self, x: float, y: float, parent: Optional[int] = None):
        self.x = float(x)
        self.y = float(y)
        self.parent = parent

    @property
    def position(self) -> Vec2:
        return Vec2(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float, Optional[int]]:
        return (self.x, self.y, self.parent)

    def __repr__(self) -> str:
        return f"Node({self.x:.2f}, {self.y:.2f}, parent={self.parent})"


NodeView = Tuple[float, float, Optional[int]]
PointView = Tuple[float, float]


@dataclass(frozen=True)
class SimulationSnapshot:
    """Read-only copy of a state handed to renderers and exporters."""
    bounds: Bounds
    nodes: Tuple[NodeView, ...]
    attractors: Tuple[PointView, ...]
    obstacles: Tuple[Tuple[PointView, ...], ...]
    iterations: int
    completed: bool

    def segments(self) -> List[Tuple[PointView, PointView]]:
        """Parent -> child segments in node order."""
        return [
            ((self.nodes[parent][0], self.nodes[parent][1]), (x, y))
            for x, y, parent in self.nodes
            if parent is not None
        ]

    def depths(self) -> List[int]:
        depths: List[int] = []
        for _, _, parent in self.nodes:
            depths.append(0 if parent is None else depths[parent] + 1)
        return depths

    def tip_flags(self) -> List[bool]:
        has_child = [False] * len(self.nodes)
        for _, _, parent in self.nodes:
            if parent is not None:
                has_child[parent] = True
        return [not flag for flag in has_child]


@dataclass
class SimulationState:
    bounds: Bounds
    nodes: List[Node] = field(default_factory=list)
    attractors: List[Vec2] = field(default_factory=list)
    obstacles: List[Polygon] = field(default_factory=list)
    iterations: int = 0
    completed: bool = False

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            bounds=self.bounds,
            nodes=tuple(node.to_tuple() for node in self.nodes),
            attractors=tuple(a.to_tuple() for a in self.attractors),
            obstacles=tuple(tuple(p.to_tuple() for p in polygon) for polygon in self.obstacles),
            iterations=self.iterations,
            completed=self.completed,
        )

    def clone(self) -> 'SimulationState':
        return SimulationState(
            bounds=self.bounds,
            nodes=[Node(n.x, n.y, n.parent) for n in self.nodes],
            attractors=[a.copy() for a in self.attractors],
            obstacles=[[p.copy() for p in polygon] for polygon in self.obstacles],
            iterations=self.iterations,
            completed=self.completed,
        )


def create_simulation_state(
    bounds: Bounds,
    params: SimulationParams,
    obstacles: Sequence[Polygon],
    rng: Optional[Rng] = None
) -> SimulationState:
    """
    Build a fresh state: seed nodes first, then attractors, from the same rng.

    Without an rng the placement is non-deterministic; pass a seeded one
    whenever the run has to be reproducible.
    """
    rng = rng or default_rng()
    nodes = create_seed_nodes(bounds, params, rng)
    attractors = create_attractors(bounds, params, obstacles, rng)
    return SimulationState(
        bounds=bounds,
        nodes=nodes,
        attractors=attractors,
        obstacles=list(obstacles),
    )


def create_seed_nodes(bounds: Bounds, params: SimulationParams, rng: Rng) -> List[Node]:
    margin = max(MIN_SEED_MARGIN, params.step_size)
    count = max(1, int(math.floor(params.seed_count)))
    spread_percent = _clamp(params.seed_spread / 100, 0.0, 1.0)

    if params.seed_placement == 'scatter':
        spread_x = bounds.width * spread_percent
        spread_y = bounds.height * spread_percent
        center = bounds.center
        nodes = []
        for _ in range(count):
            x = _clamp(center.x + (rng() - 0.5) * spread_x, margin, bounds.width - margin)
            y = _clamp(center.y + (rng() - 0.5) * spread_y, margin, bounds.height - margin)
            nodes.append(Node(x, y))
        return nodes

    center = _edge_center(bounds, margin, params.seed_edge)
    direction = _edge_direction(params.seed_edge).rotate(params.seed_angle_deg * math.pi / 180)
    edge_length = bounds.width if _is_horizontal_edge(params.seed_edge) else bounds.height
    spread = edge_length * spread_percent
    start_offset = -spread * 0.5
    step = 0.0 if count == 1 else spread / (count - 1)

    nodes = []
    for index in range(count):
        offset = start_offset + step * index
        x = _clamp(center.x + direction.x * offset, margin, bounds.width - margin)
        y = _clamp(center.y + direction.y * offset, margin, bounds.height - margin)
        nodes.append(Node(x, y))
    return nodes


def create_attractors(
    bounds: Bounds,
    params: SimulationParams,
    obstacles: Sequence[Polygon],
    rng: Rng
) -> List[Vec2]:
    """Uniform rejection sampling outside obstacles, capped at attractor_count * 20 attempts."""
    attractors: List[Vec2] = []
    max_attempts = params.attractor_count * ATTEMPTS_PER_ATTRACTOR
    attempts = 0

    while len(attractors) < params.attractor_count and attempts < max_attempts:
        attempts += 1
        point = Vec2(rng() * bounds.width, rng() * bounds.height)
        if not is_inside_any_obstacle(point, obstacles):
            attractors.append(point)

    return attractors


def is_inside_any_obstacle(point: Vec2, obstacles: Sequence[Polygon]) -> bool:
    return any(is_point_in_polygon(point, polygon) for polygon in obstacles)


def _edge_center(bounds: Bounds, margin: float, edge: str) -> Vec2:
    if edge == 'left':
        return Vec2(margin, bounds.height * 0.5)
    if edge == 'right':
        return Vec2(bounds.width - margin, bounds.height * 0.5)
    if edge == 'bottom':
        return Vec2(bounds.width * 0.5, bounds.height - margin)
    return Vec2(bounds.width * 0.5, margin)


def _edge_direction(edge: str) -> Vec2:
    return Vec2(1, 0) if _is_horizontal_edge(edge) else Vec2(0, 1)


def _is_horizontal_edge(edge: str) -> bool:
    return edge in ('top', 'bottom')


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))
