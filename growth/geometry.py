"""
Polygon containment and segment intersection tests used for obstacle avoidance.
"""

import sys
from typing import Sequence, Tuple

from .vector import Vec2

# Added to each edge's y-span so horizontal edges never divide by zero
EPSILON = sys.float_info.epsilon


def is_point_in_polygon(point: Vec2, polygon: Sequence[Vec2]) -> bool:
    """Even-odd ray casting with a horizontal ray through point.y."""
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            crossing_x = (xj - xi) * (point.y - yi) / (yj - yi + EPSILON) + xi
            if point.x < crossing_x:
                inside = not inside
        j = i
    return inside


def segment_intersects_polygon(a: Vec2, b: Vec2, polygon: Sequence[Vec2]) -> bool:
    """True if segment a->b touches or crosses any edge of the closed polygon."""
    count = len(polygon)
    for i in range(count):
        if segments_intersect(a, b, polygon[i], polygon[(i + 1) % count]):
            return True
    return False


def segments_intersect(p1: Vec2, p2: Vec2, p3: Vec2, p4: Vec2) -> bool:
    """
    Orientation test for segments p1-p2 and p3-p4.

    Shared endpoints and overlapping colinear segments count as intersecting.
    """
    d1 = _orientation(p3, p4, p1)
    d2 = _orientation(p3, p4, p2)
    d3 = _orientation(p1, p2, p3)
    d4 = _orientation(p1, p2, p4)

    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True

    if d1 == 0 and _on_segment(p3, p4, p1):
        return True
    if d2 == 0 and _on_segment(p3, p4, p2):
        return True
    if d3 == 0 and _on_segment(p1, p2, p3):
        return True
    if d4 == 0 and _on_segment(p1, p2, p4):
        return True
    return False


def _orientation(a: Vec2, b: Vec2, c: Vec2) -> float:
    return (c.x - a.x) * (b.y - a.y) - (c.y - a.y) * (b.x - a.x)


def _on_segment(a: Vec2, b: Vec2, c: Vec2) -> bool:
    """c is assumed colinear with a-b; checks it lies within their box."""
    return (
        min(a.x, b.x) <= c.x <= max(a.x, b.x)
        and min(a.y, b.y) <= c.y <= max(a.y, b.y)
    )


def polygon_bounding_box(polygon: Sequence[Vec2]) -> Tuple[float, float, float, float]:
    """
    Return (min_x, min_y, max_x, max_y).

    Public helper for hosts laying out or culling obstacles; the stepper
    itself does not need it.
    """
    xs = [p.x for p in polygon]
    ys = [p.y for p in polygon]
    return min(xs), min(ys), max(xs), max(ys)
