"""
Preview plots of simulation snapshots.
"""

import math
from typing import Optional, Sequence, Tuple
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Polygon as PolygonPatch

from .state import SimulationSnapshot


def plot_snapshot(
    snapshot: SimulationSnapshot,
    ax=None,
    show_attractors: bool = False,
    show_obstacles: bool = True,
    show_nodes: bool = False,
    branch_color: str = '#6ea95a',
    branch_width: float = 1.4,
    attractor_color: str = '#5c84f4',
    obstacle_color: str = '#756c64',
    title: Optional[str] = None
):
    """Draw one snapshot onto ax (a new figure is created when ax is None)."""
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    if show_obstacles:
        for polygon in snapshot.obstacles:
            ax.add_patch(PolygonPatch(polygon, closed=True, facecolor=obstacle_color,
                                      edgecolor='none', alpha=0.8))

    segments = snapshot.segments()
    if segments:
        ax.add_collection(LineCollection(segments, colors=branch_color, linewidths=branch_width))

    if show_nodes and snapshot.nodes:
        positions = np.array([(x, y) for x, y, _ in snapshot.nodes])
        ax.scatter(positions[:, 0], positions[:, 1], c=branch_color, s=2)

    if show_attractors and snapshot.attractors:
        positions = np.array(snapshot.attractors)
        ax.scatter(positions[:, 0], positions[:, 1], c=attractor_color, s=1, alpha=0.5)

    ax.set_xlim(0, snapshot.bounds.width)
    ax.set_ylim(snapshot.bounds.height, 0)
    ax.set_aspect('equal')
    ax.axis('off')
    if title:
        ax.set_title(title)
    return ax


def plot_snapshots(
    snapshots: Sequence[SimulationSnapshot],
    names: Optional[Sequence[str]] = None,
    cols: int = 2,
    figsize_per_region: Tuple[float, float] = (6, 6),
    save_path: Optional[str] = None,
    show: bool = False,
    **kwargs
):
    """Draw every region side by side, one axis per instance."""
    cols = max(1, min(cols, len(snapshots)))
    rows = max(1, math.ceil(len(snapshots) / cols))
    fig, axes = plt.subplots(
        rows, cols,
        figsize=(figsize_per_region[0] * cols, figsize_per_region[1] * rows),
        squeeze=False
    )

    for index, ax in enumerate(axes.flat):
        if index >= len(snapshots):
            ax.axis('off')
            continue
        snapshot = snapshots[index]
        name = names[index] if names else f"Region {index + 1}"
        status = "done" if snapshot.completed else "growing"
        plot_snapshot(snapshot, ax=ax,
                      title=f"{name}: {len(snapshot.nodes)} nodes, "
                            f"iter {snapshot.iterations} ({status})",
                      **kwargs)

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        print(f"Saved visualization to {save_path}")

    if show:
        plt.show()
    return fig, axes


def plot_growth_statistics(snapshot: SimulationSnapshot, save_path: Optional[str] = None, show: bool = False):
    """Plot segment length and depth distributions of a grown structure."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    lengths = [math.hypot(x2 - x1, y2 - y1) for (x1, y1), (x2, y2) in snapshot.segments()]
    axes[0].hist(lengths, bins=30, color='saddlebrown', edgecolor='black')
    axes[0].set_xlabel('Segment Length')
    axes[0].set_ylabel('Count')
    axes[0].set_title('Segment Length Distribution')

    depths = snapshot.depths()
    max_depth = max(depths) if depths else 0
    depth_counts = np.bincount(depths, minlength=max_depth + 1) if depths else np.zeros(1, dtype=int)
    axes[1].bar(range(max_depth + 1), depth_counts, color='forestgreen', edgecolor='black')
    axes[1].set_xlabel('Depth')
    axes[1].set_ylabel('Node Count')
    axes[1].set_title('Nodes per Depth Level')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    return fig, axes
