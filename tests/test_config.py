"""
Tests for configuration loading and saving.
"""

import pytest
import yaml
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import ArquivoConfig, DEFAULT_APPEND_LINES, DEFAULT_SEQUENTIAL_LINES
from core.results import ErrorPolicy


class TestArquivoConfig:
    """Test ArquivoConfig."""

    @pytest.fixture
    def temp_config(self, tmp_path):
        """Create a partial config file."""
        path = tmp_path / "arquivo.yaml"
        path.write_text("""arquivo:
  paths:
    local_file: outro.txt
  content:
    append_lines:
      - um
      - dois
  errors:
    write: fatal
unrelated:
  keep: true
""", encoding="utf-8")
        return path

    def test_defaults(self):
        """Test the built-in defaults."""
        config = ArquivoConfig()

        assert config.local_file == "arquivo2.txt"
        assert config.home_file == "arquivo.txt"
        assert config.append_lines == DEFAULT_APPEND_LINES
        assert config.sequential_lines == DEFAULT_SEQUENTIAL_LINES
        assert config.read_policy is ErrorPolicy.FATAL
        assert config.write_policy is ErrorPolicy.LOG

    def test_default_lists_are_copies(self):
        config = ArquivoConfig()
        config.append_lines.append("extra")

        assert ArquivoConfig().append_lines == DEFAULT_APPEND_LINES

    def test_missing_file_gives_defaults(self, tmp_path):
        config = ArquivoConfig.load(str(tmp_path / "absent.yaml"))

        assert config.local_file == "arquivo2.txt"

    def test_invalid_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("arquivo: [unclosed", encoding="utf-8")

        assert ArquivoConfig.load(str(path)).local_file == "arquivo2.txt"

    def test_partial_file_merges_defaults(self, temp_config):
        """Keys in the file override, the rest keep defaults."""
        config = ArquivoConfig.load(str(temp_config))

        assert config.local_file == "outro.txt"
        assert config.home_file == "arquivo.txt"
        assert config.append_lines == ["um", "dois"]
        assert config.sequential_lines == DEFAULT_SEQUENTIAL_LINES
        assert config.write_policy is ErrorPolicy.FATAL
        assert config.read_policy is ErrorPolicy.FATAL

    def test_bare_mapping_accepted(self, tmp_path):
        path = tmp_path / "bare.yaml"
        path.write_text("paths:\n  home_file: casa.txt\n", encoding="utf-8")

        assert ArquivoConfig.load(str(path)).home_file == "casa.txt"

    def test_unknown_policy_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("arquivo:\n  errors:\n    read: retry\n", encoding="utf-8")

        with pytest.raises(ValueError):
            ArquivoConfig.load(str(path))

    def test_save_config_keeps_other_keys(self, temp_config):
        config = ArquivoConfig.load(str(temp_config))
        config.home_file = "novo.txt"

        config.save_config()

        with open(temp_config, "r", encoding="utf-8") as f:
            saved = yaml.safe_load(f)
        assert saved["unrelated"] == {"keep": True}
        assert saved["arquivo"]["paths"]["home_file"] == "novo.txt"
        assert saved["arquivo"]["errors"]["write"] == "fatal"

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "sub" / "arquivo.yaml"
        config = ArquivoConfig(local_file="x.txt", read_policy=ErrorPolicy.LOG)

        config.save_config(str(path))
        loaded = ArquivoConfig.load(str(path))

        assert loaded.local_file == "x.txt"
        assert loaded.read_policy is ErrorPolicy.LOG
        assert loaded.append_lines == DEFAULT_APPEND_LINES


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
