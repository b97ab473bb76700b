"""
Configuration File Support for CLOPE

Allows project-specific configuration via clope.yaml.
"""

from pathlib import Path
from typing import Optional
from dataclasses import dataclass
import logging

import yaml

from config.settings import (
    CONFIG_FILE_NAMES,
    DEFAULT_REPULSION,
    CLOPE_MAX_PASSES,
    DEFAULT_PROBE,
    ANALYSIS_TOP_ITEMS,
)

logger = logging.getLogger(__name__)


@dataclass
class ProjectConfig:
    """Project-specific configuration."""

    # Clustering
    repulsion: float = DEFAULT_REPULSION
    max_passes: Optional[int] = CLOPE_MAX_PASSES  # None = until converged
    probe: str = DEFAULT_PROBE

    # Analysis
    n_top_items: int = ANALYSIS_TOP_ITEMS
    compute_silhouette: bool = True
    print_report: bool = True


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search start_dir and its parents for a project config file."""
    current_dir = Path(start_dir) if start_dir else Path.cwd()
    search_dirs = [current_dir] + list(current_dir.parents)

    for directory in search_dirs:
        for name in CONFIG_FILE_NAMES:
            path = directory / name
            if path.exists():
                return path
    return None


def load_config(config_path: Optional[Path] = None) -> ProjectConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, searches for clope.yaml
                    in current directory and parent directories.

    Returns:
        ProjectConfig with loaded or default values
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not Path(config_path).exists():
        logger.debug("No config file found, using defaults")
        return ProjectConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loaded config from {config_path}")

        clustering = data.get('clustering') or {}
        analysis = data.get('analysis') or {}

        return ProjectConfig(
            repulsion=float(clustering.get('repulsion', DEFAULT_REPULSION)),
            max_passes=clustering.get('max_passes', CLOPE_MAX_PASSES),
            probe=clustering.get('probe', DEFAULT_PROBE),
            n_top_items=int(analysis.get('n_top_items', ANALYSIS_TOP_ITEMS)),
            compute_silhouette=bool(analysis.get('silhouette', True)),
            print_report=bool(analysis.get('report', True)),
        )

    except (OSError, TypeError, ValueError, AttributeError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config: {e}, using defaults")
        return ProjectConfig()


def save_default_config(output_path: Path) -> Path:
    """
    Save a default configuration file as a template.

    Args:
        output_path: Where to save the config

    Returns:
        Path to saved config file
    """
    default_config = f"""# CLOPE Configuration
# Copy to your project root as clope.yaml

# Clustering settings
clustering:
  repulsion: {DEFAULT_REPULSION}        # r >= 0, higher = more and purer clusters
  max_passes: null      # null = iterate until a pass moves nothing
  probe: {DEFAULT_PROBE}       # analytic or copy

# Analysis settings
analysis:
  n_top_items: {ANALYSIS_TOP_ITEMS}
  silhouette: true      # Jaccard silhouette of the final partition
  report: true
"""

    output_path = Path(output_path)
    output_path.write_text(default_config)
    return output_path


# Preset configurations
PRESETS = {
    'coarse': ProjectConfig(repulsion=1.5),
    'balanced': ProjectConfig(repulsion=DEFAULT_REPULSION),
    'fine': ProjectConfig(repulsion=3.0),
}


def get_preset(name: str) -> ProjectConfig:
    """Get a preset configuration by name."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset: {name}. Available: {list(PRESETS.keys())}")
    return PRESETS[name]
