from __future__ import annotations

import dataclasses

import pytest
from pytest import approx

from config import SimulationParams
from growth import Bounds, Vec2, create_seeded_rng, create_simulation_state, is_point_in_polygon
from growth.state import Node


class CountingRng:
    def __init__(self, seed: int):
        self._rng = create_seeded_rng(seed)
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self._rng()


def _params(**overrides):
    base = dict(step_size=6, seed_count=1, seed_spread=0, seed_placement='edge',
                seed_edge='bottom', attractor_count=10)
    base.update(overrides)
    return SimulationParams(**base)


def test_single_edge_seed_sits_at_edge_center():
    state = create_simulation_state(Bounds(400, 400), _params(), [], create_seeded_rng(1))
    assert len(state.nodes) == 1
    seed = state.nodes[0]
    assert (seed.x, seed.y, seed.parent) == (200, 394, None)
    assert state.iterations == 0
    assert not state.completed


def test_edge_seeds_evenly_spread_along_edge():
    params = _params(seed_count=3, seed_spread=50, seed_edge='top')
    state = create_simulation_state(Bounds(400, 400), params, [], create_seeded_rng(1))
    assert [(n.x, n.y) for n in state.nodes] == [(100, 6), (200, 6), (300, 6)]


def test_seed_angle_rotates_the_seed_line():
    params = _params(seed_count=3, seed_spread=50, seed_edge='top', seed_angle_deg=90)
    state = create_simulation_state(Bounds(400, 400), params, [], create_seeded_rng(1))
    xs = [n.x for n in state.nodes]
    ys = [n.y for n in state.nodes]
    assert xs == approx([200, 200, 200])
    # The first seed would land above the region and is clamped to the margin
    assert ys == approx([6, 6, 106])


def test_edge_seeds_are_clamped_to_margin():
    params = _params(step_size=10, seed_count=2, seed_spread=100, seed_edge='left')
    state = create_simulation_state(Bounds(300, 400), params, [], create_seeded_rng(1))
    assert [(n.x, n.y) for n in state.nodes] == [(10, 10), (10, 390)]


def test_scatter_seeds_stay_within_spread_box():
    params = _params(seed_count=25, seed_spread=20, seed_placement='scatter')
    state = create_simulation_state(Bounds(400, 400), params, [], create_seeded_rng(99))
    assert len(state.nodes) == 25
    for node in state.nodes:
        assert 160 <= node.x <= 240
        assert 160 <= node.y <= 240
        assert node.parent is None


def test_attractors_avoid_obstacles(triangle):
    params = _params(attractor_count=300)
    state = create_simulation_state(Bounds(400, 400), params, [triangle], create_seeded_rng(5))
    assert len(state.attractors) == 300
    for attractor in state.attractors:
        assert 0 <= attractor.x <= 400 and 0 <= attractor.y <= 400
        assert not is_point_in_polygon(attractor, triangle)


def test_attractor_sampling_gives_up_after_attempt_cap():
    cover = [Vec2(-1, -1), Vec2(401, -1), Vec2(401, 401), Vec2(-1, 401)]
    rng = CountingRng(8)
    state = create_simulation_state(Bounds(400, 400), _params(attractor_count=10), [cover], rng)
    assert state.attractors == []
    # Edge seeding draws nothing; each attempt draws x and y
    assert rng.calls == 10 * 20 * 2


def test_initialization_is_reproducible(triangle):
    params = _params(seed_count=4, seed_spread=70, seed_placement='scatter', attractor_count=200)
    first = create_simulation_state(Bounds(400, 400), params, [triangle], create_seeded_rng(77))
    second = create_simulation_state(Bounds(400, 400), params, [triangle], create_seeded_rng(77))
    assert first.snapshot() == second.snapshot()


def test_initialization_without_rng_still_builds_state():
    state = create_simulation_state(Bounds(200, 200), _params(attractor_count=50), [])
    assert len(state.nodes) == 1
    assert len(state.attractors) == 50


def test_clone_is_independent():
    state = create_simulation_state(Bounds(400, 400), _params(), [], create_seeded_rng(1))
    clone = state.clone()
    clone.nodes.append(Node(1, 1, parent=0))
    clone.attractors.pop()
    clone.completed = True

    assert len(state.nodes) == 1
    assert len(state.attractors) == 10
    assert not state.completed


def test_snapshot_is_read_only(triangle):
    state = create_simulation_state(Bounds(400, 400), _params(), [triangle], create_seeded_rng(1))
    snapshot = state.snapshot()

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.completed = True
    assert isinstance(snapshot.nodes, tuple)
    assert snapshot.nodes[0] == (200, 394, None)
    assert len(snapshot.obstacles) == 1 and len(snapshot.obstacles[0]) == 3

    state.nodes.append(Node(200, 388, parent=0))
    assert len(snapshot.nodes) == 1


def test_snapshot_tree_helpers():
    state = create_simulation_state(Bounds(100, 100), _params(attractor_count=0), [], create_seeded_rng(1))
    state.nodes.extend([Node(50, 88, 0), Node(50, 82, 1), Node(55, 85, 1)])
    snapshot = state.snapshot()

    assert snapshot.depths() == [0, 1, 2, 2]
    assert snapshot.tip_flags() == [False, False, True, True]
    assert snapshot.segments()[0] == ((50, 94), (50, 88))
