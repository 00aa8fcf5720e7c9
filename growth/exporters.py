"""
Data exporters to convert simulation snapshots into renderer-friendly format.
Keeps external renderers decoupled from simulation code.
"""

import json
from pathlib import Path
from typing import Any, Dict

from .state import SimulationSnapshot


def snapshot_to_render_data(snapshot: SimulationSnapshot) -> Dict[str, Any]:
    """
    Format:
    {
        "source_width": float,
        "source_height": float,
        "iterations": int,
        "completed": bool,
        "nodes": [[x, y, parent | null], ...],
        "branches": [
            {
                "start": [x, y],
                "end": [x, y],
                "depth": int,  # distance from the seed node
                "is_tip": bool
            }
        ],
        "attractors": [[x, y], ...],
        "obstacles": [[[x, y], ...], ...]
    }
    """
    depths = snapshot.depths()
    tips = snapshot.tip_flags()

    branches = []
    for index, (x, y, parent) in enumerate(snapshot.nodes):
        if parent is None:
            continue
        px, py, _ = snapshot.nodes[parent]
        branches.append({
            "start": [px, py],
            "end": [x, y],
            "depth": depths[index],
            "is_tip": tips[index]
        })

    return {
        "source_width": snapshot.bounds.width,
        "source_height": snapshot.bounds.height,
        "iterations": snapshot.iterations,
        "completed": snapshot.completed,
        "nodes": [list(node) for node in snapshot.nodes],
        "branches": branches,
        "attractors": [list(a) for a in snapshot.attractors],
        "obstacles": [[list(p) for p in polygon] for polygon in snapshot.obstacles]
    }


def export_growth_data(snapshot: SimulationSnapshot, output_path: str) -> Dict[str, Any]:
    data = snapshot_to_render_data(snapshot)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(data, f, indent=2)

    return data


def load_growth_data(path: str) -> Dict[str, Any]:
    with open(path, 'r') as f:
        return json.load(f)
