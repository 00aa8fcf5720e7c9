from __future__ import annotations

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

from growth import Bounds, Vec2
from growth.state import Node, SimulationState
from growth.visualization import plot_growth_statistics, plot_snapshot, plot_snapshots


def _snapshot(completed=False):
    state = SimulationState(
        bounds=Bounds(100, 100),
        nodes=[Node(50, 94, None), Node(50, 88, 0), Node(45, 84, 1)],
        attractors=[Vec2(20, 20), Vec2(70, 30)],
        obstacles=[[Vec2(10, 10), Vec2(30, 10), Vec2(20, 30)]],
        completed=completed,
    )
    return state.snapshot()


def test_plot_snapshot_draws_every_segment():
    ax = plot_snapshot(_snapshot(), show_attractors=True, title='demo')

    collections = [c for c in ax.collections if isinstance(c, LineCollection)]
    assert len(collections) == 1
    assert len(collections[0].get_segments()) == 2
    assert len(ax.patches) == 1
    assert ax.get_title() == 'demo'
    plt.close('all')


def test_plot_snapshot_hides_obstacles():
    ax = plot_snapshot(_snapshot(), show_obstacles=False)
    assert len(ax.patches) == 0
    plt.close('all')


def test_plot_snapshots_saves_figure(tmp_path):
    path = tmp_path / 'preview' / 'growth.png'
    fig, axes = plot_snapshots([_snapshot(), _snapshot(completed=True), _snapshot()],
                               names=['a', 'b', 'c'], save_path=str(path))

    assert path.exists()
    assert axes.shape == (2, 2)
    assert axes[0, 1].get_title().startswith('b: 3 nodes')
    plt.close(fig)


def test_plot_growth_statistics(tmp_path):
    path = tmp_path / 'stats.png'
    plot_growth_statistics(_snapshot(), save_path=str(path))
    assert path.exists()
    plt.close('all')
