import sys
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import SimulationParams  # noqa: E402
from growth import Vec2  # noqa: E402


@pytest.fixture
def triangle():
    return [Vec2(150, 150), Vec2(250, 150), Vec2(200, 230)]


@pytest.fixture
def square():
    return [Vec2(0, 0), Vec2(10, 0), Vec2(10, 10), Vec2(0, 10)]


@pytest.fixture
def small_params():
    return SimulationParams(
        influence_radius=80,
        kill_radius=16,
        step_size=6,
        max_nodes=50,
        seed_count=1,
        seed_spread=0,
        seed_placement='edge',
        seed_edge='bottom',
        attractor_count=40,
        steps_per_frame=3,
        avoid_obstacles=True,
    )
