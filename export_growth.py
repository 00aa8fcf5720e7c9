"""
Offline export run.

Re-derives every region from its seed and config (never from a live
preview), advances them one tick per output frame and records per-frame
growth. The final snapshot of each region is written as render data for an
external renderer/encoder, along with a metadata file.

Modes:
    fixed - run exactly fps * duration_seconds frames
    auto  - stop once every region has completed
"""

import argparse
import json

from config import load_config
from growth import run_export, export_frame_budget, randomize_seeds
from growth.exporters import export_growth_data
from growth.profiling import profiler


def main():
    parser = argparse.ArgumentParser(description="Export growth frames for all configured regions")
    parser.add_argument('--config', default='config/pipeline.json', help="Pipeline config path")
    parser.add_argument('--randomize-seeds', action='store_true',
                        help="Give every region a fresh random seed")
    parser.add_argument('--mode', choices=['fixed', 'auto'], default=None,
                        help="Override the configured duration mode")
    args = parser.parse_args()

    pipeline = load_config(args.config)
    pipeline.create_output_dirs()
    if args.mode is not None:
        pipeline.export.duration_mode = args.mode
    if pipeline.profile:
        profiler.enable()
    if args.randomize_seeds:
        pipeline.regions = randomize_seeds(pipeline.regions)

    settings = pipeline.export
    budget = export_frame_budget(settings, pipeline.regions)
    print(f"Exporting {len(pipeline.regions)} region(s) in {settings.duration_mode} mode")
    print(f"  Frame budget: {budget} at {settings.fps} fps, {settings.steps_per_frame} steps per frame")
    print()

    node_counts = []

    def on_frame(frame_index, snapshots):
        node_counts.append([len(s.nodes) for s in snapshots])

    batch = run_export(pipeline.regions, settings, on_frame=on_frame)

    print(f"Exported {len(node_counts)} frames")
    for index, (region, snapshot) in enumerate(zip(batch.regions, batch.snapshots())):
        if index in batch.errors:
            print(f"  Warning: {region.name} failed: {batch.errors[index]}")
        path = pipeline.render_data_path(index)
        export_growth_data(snapshot, str(path))
        print(f"  {region.name}: {len(snapshot.nodes)} nodes, {snapshot.iterations} iterations -> {path}")

    metadata = {
        'name': pipeline.name,
        'fps': settings.fps,
        'duration_mode': settings.duration_mode,
        'steps_per_frame': settings.steps_per_frame,
        'frame_budget': budget,
        'frames': len(node_counts),
        'regions': [region.to_dict() for region in batch.regions],
        'node_counts_per_frame': node_counts,
        'render_data_paths': [str(pipeline.render_data_path(i)) for i in range(len(batch))],
    }
    with open(pipeline.export_metadata_path, 'w') as f:
        json.dump(metadata, f, indent=2)
    print(f"Saved metadata to {pipeline.export_metadata_path}")


if __name__ == '__main__':
    main()
