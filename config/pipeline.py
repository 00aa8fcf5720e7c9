"""
Unified configuration for a growth run.

A pipeline is a list of independent regions, each owning one simulation
instance, plus the export settings shared by the offline export loop.
All output paths are derived from the pipeline name.
"""

from dataclasses import dataclass, field
from typing import Dict, List
from pathlib import Path
import json

from .growth_config import SimulationParams, ObstacleConfig, ExportSettings

GUTTER_EDGES = ('top', 'bottom', 'left', 'right')


@dataclass
class RegionConfig:
    """One bounded region: its size, seed and parameter sets."""
    name: str = 'Region 1'
    width: float = 600.0
    height: float = 600.0
    seed: int = 12345

    params: SimulationParams = field(default_factory=SimulationParams)
    obstacles: ObstacleConfig = field(default_factory=ObstacleConfig)

    # Region borders listed here become obstacle strips of this width
    gutter_padding: float = 0.0
    gutter_edges: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Region size must be non-negative, got {self.width}x{self.height}")
        unknown = [edge for edge in self.gutter_edges if edge not in GUTTER_EDGES]
        if unknown:
            raise ValueError(f"Unknown gutter edges: {unknown}")

    @classmethod
    def from_dict(cls, data: Dict) -> 'RegionConfig':
        data = dict(data)
        if 'params' in data:
            data['params'] = SimulationParams(**data['params'])
        if 'obstacles' in data:
            data['obstacles'] = ObstacleConfig(**data['obstacles'])
        return cls(**data)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'width': self.width,
            'height': self.height,
            'seed': self.seed,
            'params': self.params.to_dict(),
            'obstacles': self.obstacles.to_dict(),
            'gutter_padding': self.gutter_padding,
            'gutter_edges': list(self.gutter_edges),
        }


@dataclass
class PipelineConfig:
    """
    Configuration for preview and export runs.
    All output paths are derived from name.
    """

    # ==================== MAIN SETTING ====================
    name: str = 'root_growth'
    regions: List[RegionConfig] = field(default_factory=lambda: [RegionConfig()])

    # ==================== OUTPUT SETTINGS ====================
    output_base: str = 'outputs'

    # ==================== PREVIEW SETTINGS ====================
    max_preview_ticks: int = 2000
    log_interval: int = 50
    show_attractors: bool = False

    # ==================== EXPORT SETTINGS ====================
    export: ExportSettings = field(default_factory=ExportSettings)

    # ==================== MISC ====================
    profile: bool = False

    def __post_init__(self):
        if not self.regions:
            raise ValueError("A pipeline needs at least one region")

    # ==================== DERIVED PATHS ====================
    @property
    def preview_output_dir(self) -> Path:
        return Path(self.output_base) / 'preview'

    @property
    def export_output_dir(self) -> Path:
        return Path(self.output_base) / 'export'

    @property
    def preview_plot_path(self) -> Path:
        return self.preview_output_dir / f'{self.name}_preview.png'

    @property
    def preview_stats_path(self) -> Path:
        return self.preview_output_dir / f'{self.name}_stats.png'

    def render_data_path(self, region_index: int) -> Path:
        return self.export_output_dir / f'{self.name}_region{region_index}_render_data.json'

    @property
    def export_metadata_path(self) -> Path:
        return self.export_output_dir / f'{self.name}_metadata.json'

    # ==================== DIRECTORY CREATION ====================
    def create_output_dirs(self):
        """Create all output directories."""
        self.preview_output_dir.mkdir(parents=True, exist_ok=True)
        self.export_output_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_dict(cls, data: Dict) -> 'PipelineConfig':
        data = dict(data)
        if 'regions' in data:
            data['regions'] = [RegionConfig.from_dict(region) for region in data['regions']]
        if 'export' in data:
            data['export'] = ExportSettings(**data['export'])
        return cls(**data)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'regions': [region.to_dict() for region in self.regions],
            'output_base': self.output_base,
            'max_preview_ticks': self.max_preview_ticks,
            'log_interval': self.log_interval,
            'show_attractors': self.show_attractors,
            'export': self.export.to_dict(),
            'profile': self.profile,
        }


def load_config(path: str = 'config/pipeline.json') -> PipelineConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return PipelineConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    return PipelineConfig.from_dict(data)


def save_config(config: PipelineConfig, path: str = 'config/pipeline.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    print(f"Saved config to {config_path}")
