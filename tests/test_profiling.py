from __future__ import annotations

import pytest

from config import ExportSettings, RegionConfig, SimulationParams
from growth import Bounds, create_seeded_rng, create_simulation_state, run_export, step_simulation
from growth.profiling import Profiler, profile_block, profiler


@pytest.fixture
def enabled_profiler():
    profiler.reset()
    profiler.enable(report_at_exit=False)
    yield profiler
    profiler.disable()
    profiler.reset()


def test_profiler_is_a_singleton():
    assert Profiler() is profiler


def test_disabled_profiler_records_nothing():
    profiler.reset()
    params = SimulationParams(attractor_count=20)
    state = create_simulation_state(Bounds(200, 200), params, [], create_seeded_rng(1))
    step_simulation(state, params)
    assert profiler.summary() == []


def test_decorated_calls_are_counted(enabled_profiler):
    params = SimulationParams(attractor_count=50)
    state = create_simulation_state(Bounds(200, 200), params, [], create_seeded_rng(1))
    for _ in range(3):
        step_simulation(state, params)

    rows = {name: calls for name, calls, _, _ in enabled_profiler.summary()}
    assert rows['step_simulation'] == 3
    assert rows['scan_attractors'] == state.iterations


def test_profile_block_and_frame_callback(enabled_profiler):
    with profile_block('manual'):
        pass

    region = RegionConfig(width=200, height=200, params=SimulationParams(attractor_count=30))
    run_export([region], ExportSettings(fps=2, duration_seconds=1), on_frame=lambda i, s: None,
               progress=False)

    rows = {name: calls for name, calls, _, _ in enabled_profiler.summary()}
    assert rows['manual'] == 1
    assert rows['run_export.on_frame'] == 2
    assert rows['tick_instances'] == 2
