"""
Obstacle polygon generation.

Polygons are rejection sampled: a candidate is kept only if all its vertices
stay inside the margin-inset region. After count * 20 attempts the sampler
gives up and returns whatever it produced, so callers must expect fewer
polygons than requested.
"""

import math
from typing import Iterable, List, Optional

from config.growth_config import ObstacleConfig

from .vector import Vec2, Bounds, Polygon
from .rng import Rng, default_rng

ATTEMPTS_PER_POLYGON = 20
JITTER_RANGE = (0.65, 1.0)


def _random_in_range(rng: Rng, low: float, high: float) -> float:
    return low + rng() * (high - low)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _within_margin(point: Vec2, bounds: Bounds, margin: float) -> bool:
    return (
        margin <= point.x <= bounds.width - margin
        and margin <= point.y <= bounds.height - margin
    )


def generate_polygons(bounds: Bounds, config: ObstacleConfig, rng: Optional[Rng] = None) -> List[Polygon]:
    """
    Generate up to config.count organic-looking polygons inside bounds.

    Args:
        bounds: Region the polygons must fit in
        config: Vertex count / radius ranges and the margin to keep from the border
        rng: Float source in [0, 1). Pass a seeded one for reproducible obstacles.
    """
    rng = rng or default_rng()
    polygons: List[Polygon] = []
    max_attempts = config.count * ATTEMPTS_PER_POLYGON
    attempts = 0

    while len(polygons) < config.count and attempts < max_attempts:
        attempts += 1
        vertex_count = _round_half_up(_random_in_range(rng, config.min_vertices, config.max_vertices))
        radius = _random_in_range(rng, config.min_radius, config.max_radius)
        cx = _random_in_range(rng, config.margin + radius, bounds.width - config.margin - radius)
        cy = _random_in_range(rng, config.margin + radius, bounds.height - config.margin - radius)

        angles = sorted(rng() * math.pi * 2 for _ in range(vertex_count))
        points = []
        for angle in angles:
            r = radius * _random_in_range(rng, *JITTER_RANGE)
            points.append(Vec2(cx + math.cos(angle) * r, cy + math.sin(angle) * r))

        if all(_within_margin(point, bounds, config.margin) for point in points):
            polygons.append(points)

    return polygons


def gutter_obstacles(bounds: Bounds, padding: float, edges: Iterable[str]) -> List[Polygon]:
    """
    Rectangular strips along the requested region edges.

    Top and bottom strips span the full width; left and right strips fill
    the space between them.
    """
    inset = min(max(0.0, padding), bounds.width / 2, bounds.height / 2)
    if inset <= 0:
        return []

    w, h = bounds.width, bounds.height
    edges = set(edges)
    polygons: List[Polygon] = []
    if 'top' in edges:
        polygons.append([Vec2(0, 0), Vec2(w, 0), Vec2(w, inset), Vec2(0, inset)])
    if 'bottom' in edges:
        polygons.append([Vec2(0, h - inset), Vec2(w, h - inset), Vec2(w, h), Vec2(0, h)])
    if 'left' in edges:
        polygons.append([Vec2(0, inset), Vec2(inset, inset), Vec2(inset, h - inset), Vec2(0, h - inset)])
    if 'right' in edges:
        polygons.append([Vec2(w - inset, inset), Vec2(w, inset), Vec2(w, h - inset), Vec2(w - inset, h - inset)])
    return polygons
