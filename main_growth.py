"""
Preview run for the growth simulation.

Builds one live instance per configured region, ticks them in lockstep the
way an interactive display loop would, then saves a preview plot and the
render data of every region.

Configuration is loaded from config/pipeline.json.
"""

import argparse

from config import load_config
from growth import GrowthBatch, randomize_seeds
from growth.exporters import export_growth_data
from growth.profiling import profiler
from growth.visualization import plot_snapshots, plot_growth_statistics


def main():
    parser = argparse.ArgumentParser(description="Grow all configured regions and save a preview")
    parser.add_argument('--config', default='config/pipeline.json', help="Pipeline config path")
    parser.add_argument('--randomize-seeds', action='store_true',
                        help="Give every region a fresh random seed")
    args = parser.parse_args()

    pipeline = load_config(args.config)
    pipeline.create_output_dirs()
    if pipeline.profile:
        profiler.enable()
    if args.randomize_seeds:
        pipeline.regions = randomize_seeds(pipeline.regions)

    batch = GrowthBatch(pipeline.regions)
    print(f"Growing {len(batch)} region(s) for up to {pipeline.max_preview_ticks} ticks")
    for region, state in zip(batch.regions, batch.states):
        print(f"  {region.name}: {region.width:g}x{region.height:g}, seed {region.seed}, "
              f"{len(state.attractors)} attractors, {len(state.obstacles)} obstacles")
    print()

    def report(batch: GrowthBatch, tick: int):
        if tick % pipeline.log_interval == 0:
            nodes = sum(len(s.nodes) for s in batch.states)
            attractors = sum(len(s.attractors) for s in batch.states)
            print(f"  Tick {tick}: {nodes} nodes, {attractors} attractors remaining")

    ticks = batch.run(pipeline.max_preview_ticks, callback=report)

    print(f"Preview stopped after {ticks} ticks")
    for index, (region, state) in enumerate(zip(batch.regions, batch.states)):
        if index in batch.errors:
            print(f"  Warning: {region.name} failed: {batch.errors[index]}")
            continue
        status = "completed" if state.completed else "still growing"
        print(f"  {region.name}: {len(state.nodes)} nodes after {state.iterations} iterations ({status})")

    snapshots = batch.snapshots()
    plot_snapshots(
        snapshots,
        names=[region.name for region in batch.regions],
        show_attractors=pipeline.show_attractors,
        save_path=str(pipeline.preview_plot_path)
    )
    plot_growth_statistics(snapshots[0], save_path=str(pipeline.preview_stats_path))

    for index, snapshot in enumerate(snapshots):
        path = pipeline.render_data_path(index)
        export_growth_data(snapshot, str(path))
        print(f"Exported render data to: {path}")


if __name__ == '__main__':
    main()
