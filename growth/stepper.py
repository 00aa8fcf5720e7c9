"""
One growth iteration of the space colonization algorithm.

Each attractor is consumed if any node lies inside the kill radius;
otherwise it pulls the single nearest node strictly inside the influence
radius. Every pulled node grows one step toward the average of its
attractor directions.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from config.growth_config import SimulationParams

from .vector import Vec2, Bounds, Polygon
from .geometry import is_point_in_polygon, segment_intersects_polygon
from .state import Node, SimulationState
from .profiling import profile

# Upper bound on attractor x node distances held in memory at once
SCAN_CHUNK_ELEMENTS = 1 << 20


@dataclass
class Influence:
    """Running sum of unit vectors pulling one node during a single step."""
    sum_x: float = 0.0
    sum_y: float = 0.0
    count: int = 0


@profile
def scan_attractors(
    attractors: Sequence[Vec2],
    nodes: Sequence[Node],
    influence_radius: float,
    kill_radius: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorized attractor-to-node scan.

    Returns (killed, nearest): killed[i] is True when any node lies strictly
    inside kill_radius of attractor i; nearest[i] is the index of the closest
    node strictly inside influence_radius, or -1 when there is none or the
    attractor was killed. Equal distances resolve to the lowest node index.
    """
    n_attractors = len(attractors)
    killed = np.zeros(n_attractors, dtype=bool)
    nearest = np.full(n_attractors, -1, dtype=np.int64)
    if n_attractors == 0 or not nodes:
        return killed, nearest

    ax = np.fromiter((a.x for a in attractors), dtype=np.float64, count=n_attractors)
    ay = np.fromiter((a.y for a in attractors), dtype=np.float64, count=n_attractors)
    nx = np.fromiter((n.x for n in nodes), dtype=np.float64, count=len(nodes))
    ny = np.fromiter((n.y for n in nodes), dtype=np.float64, count=len(nodes))

    influence_sq = influence_radius * influence_radius
    kill_sq = kill_radius * kill_radius
    chunk = max(1, SCAN_CHUNK_ELEMENTS // len(nodes))

    for start in range(0, n_attractors, chunk):
        stop = min(start + chunk, n_attractors)
        dx = ax[start:stop, None] - nx[None, :]
        dy = ay[start:stop, None] - ny[None, :]
        dist_sq = dx * dx + dy * dy

        chunk_killed = (dist_sq < kill_sq).any(axis=1)
        in_range = np.where(dist_sq < influence_sq, dist_sq, np.inf)
        # argmin returns the first minimum, which keeps the lowest node index on ties
        closest = in_range.argmin(axis=1)
        has_closest = np.isfinite(in_range[np.arange(stop - start), closest])

        killed[start:stop] = chunk_killed
        nearest[start:stop] = np.where(has_closest & ~chunk_killed, closest, -1)

    return killed, nearest


def accumulate_influences(
    attractors: Sequence[Vec2],
    nodes: Sequence[Node],
    nearest: np.ndarray
) -> Tuple[Dict[int, Influence], List[int]]:
    """
    Sum unit vectors per pulled node, walking attractors in list order.

    The returned order lists each influenced node index once, in the order
    it first received an influence. Growth follows this order.
    """
    influences: Dict[int, Influence] = {}
    order: List[int] = []
    for attractor, node_index in zip(attractors, nearest.tolist()):
        if node_index < 0:
            continue
        node = nodes[node_index]
        dx = attractor.x - node.x
        dy = attractor.y - node.y
        inv_len = 1.0 / (math.sqrt(dx * dx + dy * dy) or 1.0)

        influence = influences.get(node_index)
        if influence is None:
            influence = influences[node_index] = Influence()
            order.append(node_index)
        influence.sum_x += dx * inv_len
        influence.sum_y += dy * inv_len
        influence.count += 1
    return influences, order


def intersects_obstacles(a: Vec2, b: Vec2, obstacles: Sequence[Polygon]) -> bool:
    """True if b lands inside an obstacle or a->b crosses one."""
    for polygon in obstacles:
        if is_point_in_polygon(b, polygon) or segment_intersects_polygon(a, b, polygon):
            return True
    return False


def _too_close(candidate: Vec2, nodes: Sequence[Node], min_distance_sq: float) -> bool:
    xs = np.fromiter((n.x for n in nodes), dtype=np.float64, count=len(nodes))
    ys = np.fromiter((n.y for n in nodes), dtype=np.float64, count=len(nodes))
    dx = candidate.x - xs
    dy = candidate.y - ys
    return bool(np.any(dx * dx + dy * dy < min_distance_sq))


def _grow_candidate(node: Node, influence: Influence, step_size: float) -> Vec2:
    direction = (Vec2(influence.sum_x, influence.sum_y) / max(1, influence.count)).normalize()
    return node.position + direction * step_size


def _candidate_allowed(
    node: Node,
    candidate: Vec2,
    bounds: Bounds,
    obstacles: Sequence[Polygon],
    params: SimulationParams
) -> bool:
    if not bounds.contains(candidate):
        return False
    if params.avoid_obstacles and intersects_obstacles(node.position, candidate, obstacles):
        return False
    return True


@profile
def step_simulation(state: SimulationState, params: SimulationParams) -> int:
    """
    Advance the state by one iteration in place.

    Returns the number of nodes added. A completed state is left untouched
    and the call returns 0. Completion is set when no attractors remain,
    nothing grew, or the node count reached params.max_nodes.
    """
    if state.completed:
        return 0

    killed, nearest = scan_attractors(
        state.attractors, state.nodes, params.influence_radius, params.kill_radius
    )
    influences, order = accumulate_influences(state.attractors, state.nodes, nearest)

    if killed.any():
        state.attractors = [a for a, dead in zip(state.attractors, killed.tolist()) if not dead]

    spacing = params.min_node_spacing * params.step_size
    spacing_sq = spacing * spacing

    # New nodes are appended after the scan, so influenced indices stay valid
    added = 0
    for node_index in order:
        if len(state.nodes) >= params.max_nodes:
            break

        node = state.nodes[node_index]
        candidate = _grow_candidate(node, influences[node_index], params.step_size)
        if not _candidate_allowed(node, candidate, state.bounds, state.obstacles, params):
            continue
        if spacing_sq > 0 and _too_close(candidate, state.nodes, spacing_sq):
            continue

        state.nodes.append(Node(candidate.x, candidate.y, parent=node_index))
        added += 1

    state.iterations += 1
    if not state.attractors or added == 0 or len(state.nodes) >= params.max_nodes:
        state.completed = True

    return added
