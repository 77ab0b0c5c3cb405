"""Unit tests for tree_mapper.config_loader module."""

import pytest
import yaml

from pagetree.tree_mapper.config_loader import ConfigLoader
from pagetree.tree_mapper.errors import ConfigError, FilesystemError
from pagetree.tree_mapper.models import TreeConfig


class TestConfigLoaderLoad:
    """Test cases for ConfigLoader.load() method."""

    def test_load_valid_config_with_all_fields(self, tmp_path):
        """Load valid configuration with all fields specified."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "root_path: ./site/content\n"
            "content_extension: .markdown\n"
            "metadata_format: yaml\n"
            "atomic_writes: true\n"
        )

        result = ConfigLoader.load(str(config_file))

        assert isinstance(result, TreeConfig)
        assert result.root_path == "./site/content"
        assert result.content_extension == ".markdown"
        assert result.metadata_format == "yaml"
        assert result.atomic_writes is True

    def test_load_partial_config_uses_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("root_path: handbook\n")

        result = ConfigLoader.load(str(config_file))

        assert result.root_path == "handbook"
        assert result.content_extension == ".md"
        assert result.metadata_format == "json"
        assert result.atomic_writes is False

    def test_load_empty_file_returns_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert ConfigLoader.load(str(config_file)) == TreeConfig()

    def test_metadata_format_is_case_insensitive(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("metadata_format: YAML\n")

        assert ConfigLoader.load(str(config_file)).metadata_format == "yaml"

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FilesystemError) as exc_info:
            ConfigLoader.load(str(tmp_path / "missing.yaml"))
        assert exc_info.value.reason == "Configuration file not found"

    def test_load_invalid_yaml_raises(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("root_path: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(str(config_file))
        assert "Invalid YAML syntax" in str(exc_info.value)

    def test_load_non_dict_raises(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- docs\n- site\n")

        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(str(config_file))
        assert "must be a YAML dictionary, got list" in str(exc_info.value)


class TestConfigLoaderValidation:
    """Test cases for field validation."""

    def _load(self, tmp_path, text):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(text)
        return ConfigLoader.load(str(config_file))

    def test_unknown_fields_raise(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            self._load(tmp_path, "root_path: docs\nspaces: []\nzeta: 1\n")
        assert "Unknown fields: spaces, zeta" in str(exc_info.value)

    def test_non_bool_atomic_writes_raises(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            self._load(tmp_path, "atomic_writes: 'yes please'\n")
        assert exc_info.value.config_field == "atomic_writes"

    @pytest.mark.parametrize("value", ["''", "'   '", "null"])
    def test_empty_root_path_raises(self, tmp_path, value):
        with pytest.raises(ConfigError) as exc_info:
            self._load(tmp_path, f"root_path: {value}\n")
        assert exc_info.value.config_field == "root_path"

    @pytest.mark.parametrize("value", ["md", "'.'"])
    def test_bad_content_extension_raises(self, tmp_path, value):
        with pytest.raises(ConfigError) as exc_info:
            self._load(tmp_path, f"content_extension: {value}\n")
        assert exc_info.value.config_field == "content_extension"

    def test_unsupported_metadata_format_raises(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            self._load(tmp_path, "metadata_format: toml\n")
        assert exc_info.value.config_field == "metadata_format"

    def test_extension_colliding_with_metadata_raises(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            self._load(tmp_path, "content_extension: .meta.json\n")
        assert "collides" in str(exc_info.value)

    def test_extension_matching_other_format_is_allowed(self, tmp_path):
        result = self._load(tmp_path, "content_extension: .meta.yaml\n")
        assert result.content_extension == ".meta.yaml"


class TestConfigLoaderSave:
    """Test cases for ConfigLoader.save() method."""

    def test_save_creates_parent_directory(self, tmp_path):
        config_path = tmp_path / ".pagetree" / "config.yaml"

        ConfigLoader.save(str(config_path), TreeConfig(root_path="handbook"))

        data = yaml.safe_load(config_path.read_text())
        assert list(data) == ["root_path", "content_extension", "metadata_format", "atomic_writes"]
        assert data["root_path"] == "handbook"

    def test_save_then_load_returns_equal_config(self, tmp_path):
        config_path = str(tmp_path / "config.yaml")
        config = TreeConfig(
            root_path="site", content_extension=".rst",
            metadata_format="yaml", atomic_writes=True,
        )

        ConfigLoader.save(config_path, config)

        assert ConfigLoader.load(config_path) == config

    def test_save_over_directory_raises(self, tmp_path):
        target = tmp_path / "config.yaml"
        target.mkdir()

        with pytest.raises(FilesystemError) as exc_info:
            ConfigLoader.save(str(target), TreeConfig())
        assert exc_info.value.operation == "write"


class TestConfigLoaderValidate:
    """Test cases for ConfigLoader.validate() on configs built in code."""

    def test_default_config_is_valid(self):
        ConfigLoader.validate(TreeConfig())

    def test_colliding_extension_raises(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.validate(TreeConfig(content_extension=".meta.json"))
        assert exc_info.value.config_field == "content_extension"
        assert "collides" in str(exc_info.value)

    def test_uppercase_format_is_not_normalized(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.validate(TreeConfig(metadata_format="JSON"))
        assert exc_info.value.config_field == "metadata_format"
