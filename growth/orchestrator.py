"""
Lockstep advancement of many independent simulation instances.

The same tick drives the live preview (once per display refresh) and the
offline export loop (once per output frame). Instances never share state:
one instance completing early, or failing, leaves the others untouched.
"""

import math
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence

from tqdm import tqdm

from config.growth_config import SimulationParams, ExportSettings
from config.pipeline import RegionConfig

from .vector import Bounds
from .rng import create_seeded_rng, create_seed
from .obstacles import generate_polygons, gutter_obstacles
from .state import SimulationState, SimulationSnapshot, create_simulation_state
from .stepper import step_simulation
from .profiling import profile, profile_block

AUTO_MIN_FRAMES = 120
AUTO_FRAME_FACTOR = 4

FrameCallback = Callable[[int, List[SimulationSnapshot]], None]


def advance(state: SimulationState, params: SimulationParams, steps: int) -> int:
    """Step up to `steps` times, stopping as soon as the state completes."""
    added = 0
    for _ in range(steps):
        if state.completed:
            break
        added += step_simulation(state, params)
    return added


@profile
def tick_instances(
    states: Sequence[SimulationState],
    params: Sequence[SimulationParams],
    steps_per_frame: Optional[int] = None,
    errors: Optional[Dict[int, Exception]] = None
) -> List[int]:
    """
    Advance every unfinished instance by one burst.

    Each instance uses its own params.steps_per_frame unless steps_per_frame
    overrides it. An exception raised while stepping an instance is stored
    in errors under its index; that instance is skipped from then on and the
    remaining instances still step.
    """
    if len(states) != len(params):
        raise ValueError(f"Got {len(states)} states but {len(params)} parameter sets")
    if errors is None:
        errors = {}
    added = []
    for index, (state, instance_params) in enumerate(zip(states, params)):
        if index in errors or state.completed:
            added.append(0)
            continue
        steps = steps_per_frame if steps_per_frame is not None else instance_params.steps_per_frame
        try:
            added.append(advance(state, instance_params, steps))
        except Exception as e:
            errors[index] = e
            added.append(0)
    return added


def build_region_obstacles(region: RegionConfig):
    bounds = Bounds(region.width, region.height)
    polygons = generate_polygons(bounds, region.obstacles, create_seeded_rng(region.seed))
    return polygons + gutter_obstacles(bounds, region.gutter_padding, region.gutter_edges)


def randomize_seeds(regions: Sequence[RegionConfig]) -> List[RegionConfig]:
    """Copies of the regions with fresh seeds; the originals are left as they are."""
    return [replace(region, seed=create_seed()) for region in regions]


def build_region_state(region: RegionConfig) -> SimulationState:
    """
    Derive a region's instance entirely from its config.

    Obstacles draw from seed, placement from seed + 1, so rebuilding a
    region always reproduces the same starting state.
    """
    bounds = Bounds(region.width, region.height)
    obstacles = build_region_obstacles(region)
    return create_simulation_state(bounds, region.params, obstacles, create_seeded_rng(region.seed + 1))


class GrowthBatch:
    """Live instances for a list of regions, one instance per region."""

    def __init__(self, regions: Sequence[RegionConfig]):
        self.regions: List[RegionConfig] = list(regions)
        self.states: List[SimulationState] = [build_region_state(r) for r in self.regions]
        self.errors: Dict[int, Exception] = {}
        self.ticks = 0

    def __len__(self) -> int:
        return len(self.states)

    @property
    def params(self) -> List[SimulationParams]:
        return [region.params for region in self.regions]

    @property
    def all_completed(self) -> bool:
        """True once every instance has completed or faulted."""
        return all(
            state.completed or index in self.errors
            for index, state in enumerate(self.states)
        )

    def tick(self, steps_per_frame: Optional[int] = None) -> List[int]:
        added = tick_instances(self.states, self.params, steps_per_frame, self.errors)
        self.ticks += 1
        return added

    def run(
        self,
        max_ticks: int,
        callback: Optional[Callable[['GrowthBatch', int], None]] = None
    ) -> int:
        """
        Tick until every instance is done or max_ticks is reached.
        Optional callback is called after each tick with (batch, tick).
        Returns the number of ticks performed.
        """
        performed = 0
        while performed < max_ticks and not self.all_completed:
            self.tick()
            performed += 1
            if callback:
                callback(self, self.ticks)
        return performed

    def rebuild(self, index: int, region: Optional[RegionConfig] = None):
        """Discard an instance and derive a fresh one, optionally with a new config."""
        if region is not None:
            self.regions[index] = region
        self.states[index] = build_region_state(self.regions[index])
        self.errors.pop(index, None)

    def fresh(self) -> 'GrowthBatch':
        """New batch re-derived from the same region configs."""
        return GrowthBatch(self.regions)

    def snapshots(self) -> List[SimulationSnapshot]:
        return [state.snapshot() for state in self.states]


def export_frame_budget(settings: ExportSettings, regions: Sequence[RegionConfig]) -> int:
    """Frame cap: the fixed duration, or a safety limit in auto mode."""
    if settings.duration_mode == 'auto':
        max_nodes = max((region.params.max_nodes for region in regions), default=1)
        per_frame = max(1, settings.steps_per_frame)
        return max(AUTO_MIN_FRAMES, math.ceil(max_nodes / per_frame) * AUTO_FRAME_FACTOR)
    return max(1, int(math.floor(settings.duration_seconds * settings.fps)))


def run_export(
    regions: Sequence[RegionConfig],
    settings: ExportSettings,
    on_frame: Optional[FrameCallback] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    progress: bool = True
) -> GrowthBatch:
    """
    Offline export loop over freshly built instances.

    Live preview state is never reused, so an export only depends on the
    region configs. Each frame ticks every instance with the export
    steps_per_frame and hands the snapshots to on_frame. Fixed mode runs the
    whole frame budget; auto mode ends once every instance is done.
    should_stop is polled between frames to abort early.
    """
    batch = GrowthBatch(regions)
    max_frames = export_frame_budget(settings, regions)

    frames = tqdm(range(max_frames), desc="Exporting frames", disable=not progress)
    for frame_index in frames:
        if settings.duration_mode == 'auto' and batch.all_completed:
            break
        if should_stop is not None and should_stop():
            break
        batch.tick(settings.steps_per_frame)
        if on_frame:
            with profile_block("run_export.on_frame"):
                on_frame(frame_index, batch.snapshots())

    frames.close()
    return batch
