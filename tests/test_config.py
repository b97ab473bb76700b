"""
Tests for project configuration system.
"""

import pytest
from pathlib import Path
import tempfile

from config.project_config import (
    ProjectConfig,
    load_config,
    save_default_config,
    find_config_file,
    get_preset,
    PRESETS,
)
from config.settings import DEFAULT_REPULSION


class TestProjectConfig:
    """Test the ProjectConfig dataclass."""

    def test_default_config_values(self):
        """Test default configuration values."""
        config = ProjectConfig()

        assert config.repulsion == DEFAULT_REPULSION == 2.0
        assert config.max_passes is None
        assert config.probe == 'analytic'
        assert config.n_top_items == 5
        assert config.compute_silhouette is True

    def test_config_custom_values(self):
        """Test configuration with custom values."""
        config = ProjectConfig(repulsion=2.6, max_passes=10, probe='copy')

        assert config.repulsion == 2.6
        assert config.max_passes == 10
        assert config.probe == 'copy'


class TestLoadConfig:
    """Test configuration loading."""

    def test_load_config_no_file(self):
        """Test loading config when no file exists returns defaults."""
        config = load_config(Path('/nonexistent/path/clope.yaml'))

        assert isinstance(config, ProjectConfig)
        assert config.repulsion == DEFAULT_REPULSION

    def test_load_config_from_yaml(self):
        """Test loading config from YAML file."""
        yaml_content = """
clustering:
  repulsion: 3.2
  max_passes: 25
  probe: copy

analysis:
  n_top_items: 3
  silhouette: false
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(yaml_content)
            config_path = Path(f.name)

        try:
            config = load_config(config_path)

            assert config.repulsion == 3.2
            assert config.max_passes == 25
            assert config.probe == 'copy'
            assert config.n_top_items == 3
            assert config.compute_silhouette is False
        finally:
            config_path.unlink()

    def test_load_config_partial_yaml(self):
        """Test loading config with only some values specified."""
        yaml_content = """
clustering:
  repulsion: 1.5
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(yaml_content)
            config_path = Path(f.name)

        try:
            config = load_config(config_path)

            assert config.repulsion == 1.5
            assert config.max_passes is None
            assert config.n_top_items == 5
        finally:
            config_path.unlink()

    def test_load_config_malformed_yaml(self):
        """Test that unparsable YAML falls back to defaults."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("clustering: [unclosed\n")
            config_path = Path(f.name)

        try:
            config = load_config(config_path)
            assert config == ProjectConfig()
        finally:
            config_path.unlink()

    def test_find_config_file_in_parent(self):
        """Test that config lookup walks up the directory tree."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / 'clope.yaml').write_text("clustering:\n  repulsion: 2.2\n")
            nested = root / 'a' / 'b'
            nested.mkdir(parents=True)

            assert find_config_file(nested) == root / 'clope.yaml'


class TestSaveDefaultConfig:
    """Test saving default configuration."""

    def test_saved_config_has_all_sections(self):
        """Test that saved config has all required sections."""
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / 'clope.yaml'
            result_path = save_default_config(output_path)

            content = result_path.read_text()
            assert 'clustering:' in content
            assert 'analysis:' in content

    def test_saved_config_is_loadable(self):
        """Test that saved config can be loaded back."""
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / 'clope.yaml'
            save_default_config(output_path)

            config = load_config(output_path)

            assert config == ProjectConfig()


class TestPresets:
    """Test configuration presets."""

    def test_presets_exist(self):
        """Test that expected presets exist."""
        assert set(PRESETS) == {'coarse', 'balanced', 'fine'}

    def test_presets_order_by_repulsion(self):
        """Finer presets use a higher repulsion."""
        assert get_preset('coarse').repulsion < get_preset('balanced').repulsion < get_preset('fine').repulsion

    def test_get_preset_unknown_raises(self):
        """Test that unknown preset raises ValueError."""
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset('unknown_preset')
