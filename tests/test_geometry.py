from __future__ import annotations

from growth import Vec2, is_point_in_polygon, segment_intersects_polygon
from growth.geometry import segments_intersect, polygon_bounding_box


def test_point_in_square(square):
    assert is_point_in_polygon(Vec2(5, 5), square)
    assert not is_point_in_polygon(Vec2(15, 5), square)
    assert not is_point_in_polygon(Vec2(-1, 5), square)
    assert not is_point_in_polygon(Vec2(5, 11), square)


def test_point_in_concave_polygon():
    # U shape opening upward; the notch is outside
    u_shape = [
        Vec2(0, 0), Vec2(3, 0), Vec2(3, 10), Vec2(7, 10),
        Vec2(7, 0), Vec2(10, 0), Vec2(10, 12), Vec2(0, 12),
    ]
    assert is_point_in_polygon(Vec2(1.5, 5), u_shape)
    assert is_point_in_polygon(Vec2(8.5, 5), u_shape)
    assert not is_point_in_polygon(Vec2(5, 5), u_shape)
    assert is_point_in_polygon(Vec2(5, 11), u_shape)


def test_point_in_polygon_rotation_invariant(triangle):
    probes = [Vec2(200, 170), Vec2(200, 229), Vec2(151, 151), Vec2(100, 100),
              Vec2(260, 160), Vec2(200, 150.5), Vec2(230, 200)]
    expected = [is_point_in_polygon(p, triangle) for p in probes]
    for shift in range(1, len(triangle)):
        rotated = triangle[shift:] + triangle[:shift]
        assert [is_point_in_polygon(p, rotated) for p in probes] == expected


def test_point_outside_bounding_box_is_outside(triangle):
    min_x, min_y, max_x, max_y = polygon_bounding_box(triangle)
    for probe in [Vec2(min_x - 1, 190), Vec2(max_x + 1, 190),
                  Vec2(200, min_y - 1), Vec2(200, max_y + 1),
                  Vec2(max_x + 50, max_y + 50)]:
        assert not is_point_in_polygon(probe, triangle)


def test_horizontal_edges_do_not_divide_by_zero(square):
    # The ray runs exactly along the bottom edge
    assert not is_point_in_polygon(Vec2(25, 0), square)
    assert is_point_in_polygon(Vec2(5, 0), square)

    flat = [Vec2(0, 3), Vec2(5, 3), Vec2(10, 3)]
    assert not is_point_in_polygon(Vec2(2, 3), flat)


def test_segment_crossing_polygon(square):
    assert segment_intersects_polygon(Vec2(-5, 5), Vec2(5, 5), square)
    assert segment_intersects_polygon(Vec2(-5, 5), Vec2(15, 5), square)
    assert not segment_intersects_polygon(Vec2(-5, -5), Vec2(-5, 15), square)


def test_segment_fully_inside_polygon_does_not_cross_edges(square):
    assert not segment_intersects_polygon(Vec2(2, 2), Vec2(8, 8), square)


def test_segment_touching_vertex_counts(square):
    assert segment_intersects_polygon(Vec2(-5, -5), Vec2(0, 0), square)


def test_colinear_overlap_counts():
    assert segments_intersect(Vec2(0, 0), Vec2(5, 0), Vec2(3, 0), Vec2(10, 0))
    assert not segments_intersect(Vec2(0, 0), Vec2(2, 0), Vec2(3, 0), Vec2(10, 0))


def test_shared_endpoint_counts():
    assert segments_intersect(Vec2(0, 0), Vec2(5, 5), Vec2(5, 5), Vec2(10, 0))


def test_parallel_segments_do_not_intersect():
    assert not segments_intersect(Vec2(0, 0), Vec2(10, 0), Vec2(0, 1), Vec2(10, 1))
