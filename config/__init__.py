"""
Configuration module.
"""

from .growth_config import SimulationParams, ObstacleConfig, ExportSettings
from .pipeline import PipelineConfig, RegionConfig, load_config, save_config

__all__ = [
    'SimulationParams',
    'ObstacleConfig',
    'ExportSettings',
    'PipelineConfig',
    'RegionConfig',
    'load_config',
    'save_config'
]
