"""Tests for configuration loader."""

import pytest

from buildcfg.config.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from buildcfg.config.loader import ConfigLoader
from buildcfg.plugins.builtin.define_env import DefineEnvPlugin
from buildcfg.plugins.builtin.input_glob import InputGlobPlugin
from buildcfg.plugins.exceptions import PluginNotFoundError


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load_base_config(self, tmp_path):
        """Should load build.yaml as-is when nothing else applies."""
        # Arrange
        (tmp_path / "build.yaml").write_text(
            """
compilation:
  input:
    index: ./index.html
  output:
    path: ./build
server:
  hmr: true
"""
        )
        loader = ConfigLoader(config_dir=tmp_path)

        # Act
        config = loader.load()

        # Assert
        assert config["compilation"]["input"]["index"] == "./index.html"
        assert config["server"]["hmr"] is True

    def test_mode_overrides_base(self, tmp_path):
        """Mode config should override base values and keep the rest."""
        # Arrange
        (tmp_path / "modes").mkdir()
        (tmp_path / "build.yaml").write_text(
            """
compilation:
  sourcemap: true
  output:
    path: ./build
"""
        )
        (tmp_path / "modes" / "production.yaml").write_text(
            """
compilation:
  sourcemap: false
"""
        )
        loader = ConfigLoader(config_dir=tmp_path)

        # Act
        config = loader.load(mode="production")

        # Assert
        assert config["compilation"]["sourcemap"] is False  # overridden
        assert config["compilation"]["output"]["path"] == "./build"  # preserved

    def test_mode_replaces_lists(self, tmp_path):
        """Lists in the mode file should replace base lists."""
        # Arrange
        (tmp_path / "modes").mkdir()
        (tmp_path / "build.yaml").write_text("external: [react, react-dom]")
        (tmp_path / "modes" / "production.yaml").write_text("external: [vue]")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act
        config = loader.load(mode="production")

        # Assert
        assert config["external"] == ["vue"]

    def test_missing_mode_is_ok(self, tmp_path):
        """Should continue if mode file doesn't exist."""
        # Arrange
        (tmp_path / "build.yaml").write_text("server: {}")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act - no modes folder, no error
        config = loader.load(mode="production")

        # Assert
        assert config == {"server": {}}

    def test_empty_file_is_empty_config(self, tmp_path):
        """An empty build.yaml should load as an empty config."""
        # Arrange
        (tmp_path / "build.yaml").write_text("")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act & Assert
        assert loader.load() == {}

    def test_missing_base_raises_error(self, tmp_path):
        """Should raise error if build.yaml missing."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)

        # Act & Assert
        with pytest.raises(ConfigNotFoundError) as exc_info:
            loader.load()

        assert "build.yaml" in str(exc_info.value)

    def test_invalid_yaml_raises_error(self, tmp_path):
        """Should raise error on invalid YAML."""
        # Arrange
        (tmp_path / "build.yaml").write_text("invalid: yaml: content: {{")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act & Assert
        with pytest.raises(ConfigParseError):
            loader.load()

    def test_non_mapping_root_raises_error(self, tmp_path):
        """A YAML list at the top level is not a config."""
        # Arrange
        (tmp_path / "build.yaml").write_text("- a\n- b\n")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act & Assert
        with pytest.raises(ConfigValidationError):
            loader.load()

    def test_resolves_env_references(self, tmp_path, monkeypatch):
        """Should resolve ${env:NAME} patterns."""
        # Arrange
        (tmp_path / "build.yaml").write_text(
            """
compilation:
  output:
    path: ${env:OUT_DIR}/dist
"""
        )
        monkeypatch.setenv("OUT_DIR", "/tmp/app")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act
        config = loader.load()

        # Assert
        assert config["compilation"]["output"]["path"] == "/tmp/app/dist"

    def test_plugin_config_merged_last(self, tmp_path, monkeypatch):
        """Plugin fragments should be merged on top of file config."""
        # Arrange
        (tmp_path / "build.yaml").write_text(
            """
compilation:
  define:
    BTN: Click me
plugins:
  - name: define-env
    options:
      prefix: LOADER_TEST_
"""
        )
        monkeypatch.setenv("LOADER_TEST_API_URL", "https://api.example.com")
        loader = ConfigLoader(config_dir=tmp_path)

        # Act
        config = loader.load()

        # Assert
        assert config["compilation"]["define"] == {
            "BTN": "Click me",
            "process.env.LOADER_TEST_API_URL": "https://api.example.com",
        }

    def test_health_check(self, tmp_path):
        """Health check should verify config dir exists."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)

        # Assert
        assert loader.health_check() is True

    def test_health_check_fails_for_missing_dir(self, tmp_path):
        """Health check should fail if config dir missing."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path / "nonexistent")

        # Assert
        assert loader.health_check() is False


class TestLoadPlugins:
    """Tests for plugin instantiation from config."""

    def test_names_and_mappings(self, tmp_path):
        """Should accept plain names and name/options mappings."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)
        config = {
            "plugins": [
                "define-env",
                {"name": "input-glob", "options": {"patterns": ["*.html"]}},
            ]
        }

        # Act
        plugins = loader.load_plugins(config)

        # Assert
        assert isinstance(plugins[0], DefineEnvPlugin)
        assert isinstance(plugins[1], InputGlobPlugin)
        assert plugins[1].options == {"patterns": ["*.html"]}

    def test_single_plugin_not_in_list(self, tmp_path):
        """A single name instead of a list should still work."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)

        # Act
        plugins = loader.load_plugins({"plugins": "define-env"})

        # Assert
        assert [p.name for p in plugins] == ["define-env"]

    def test_no_plugins(self, tmp_path):
        """Missing or null plugins should give an empty list."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)

        # Assert
        assert loader.load_plugins({}) == []
        assert loader.load_plugins({"plugins": None}) == []

    def test_unknown_plugin_raises_error(self, tmp_path):
        """Should raise error for unknown plugin names."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)

        # Act & Assert
        with pytest.raises(PluginNotFoundError) as exc_info:
            loader.load_plugins({"plugins": ["does-not-exist"]})

        assert "define-env" in str(exc_info.value)

    @pytest.mark.parametrize(
        "entry",
        [42, {"options": {}}, {"name": "input-glob", "options": ["x"]}],
    )
    def test_malformed_entry_raises_error(self, tmp_path, entry):
        """Should reject entries that are not a name or name/options mapping."""
        # Arrange
        loader = ConfigLoader(config_dir=tmp_path)

        # Act & Assert
        with pytest.raises(ConfigValidationError):
            loader.load_plugins({"plugins": [entry]})
