"""
Tests for configuration loading and resolution
"""

import pytest

from pkgman_to_bundle.core.config import ConfigManager, ConversionConfig, environment_defaults
from pkgman_to_bundle.core.exceptions import ConfigurationError

ENV_VARS = [
    "PKGMAN_TO_BUNDLE_OUTPUT_DIR",
    "PKGMAN_TO_BUNDLE_BASE_IMAGE",
    "PKGMAN_TO_BUNDLE_BUILD_CMD",
    "PKGMAN_TO_BUNDLE_DEBUG",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    def _write(content):
        path = tmp_path / "config.yaml"
        path.write_text(content)
        return path
    return _write


class TestConfigManager:
    """Test configuration file loading and validation"""

    def test_load_valid_config(self, config_file):
        """A well-formed file is loaded"""
        path = config_file("output:\n  dir: out\nimage:\n  base: quay.io/example/op\n")
        manager = ConfigManager()

        data = manager.load_config(str(path))

        assert data["output"]["dir"] == "out"
        assert manager.get_value("image.base") == "quay.io/example/op"
        assert manager.config_file_path == str(path)

    def test_missing_file(self, tmp_path):
        """A missing file is a configuration error"""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(str(tmp_path / "missing.yaml"))

        assert "not found" in str(exc_info.value)

    def test_directory_is_not_a_file(self, tmp_path):
        """A directory cannot be a configuration file"""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(str(tmp_path))

        assert "not a file" in str(exc_info.value)

    def test_invalid_yaml(self, config_file):
        """Unparseable YAML is reported"""
        path = config_file("output: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(str(path))

        assert "Invalid YAML" in str(exc_info.value)

    @pytest.mark.parametrize("content,message", [
        ("- a\n- b\n", "must be a dictionary"),
        ("output: out\n", "config.output must be a dict"),
        ("image:\n  build_cmd: 3\n", "config.image.build_cmd must be a str"),
        ("global:\n  debug: 'yes'\n", "config.global.debug must be a bool"),
    ])
    def test_schema_violations(self, config_file, content, message):
        """Values of the wrong type are rejected with their path"""
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(str(config_file(content)))

        assert message in str(exc_info.value)

    def test_empty_file_is_empty_config(self, config_file):
        """An empty file loads as no settings"""
        assert ConfigManager().load_config(str(config_file(""))) == {}

    def test_get_value_default(self):
        """Unknown and null keys return the default"""
        manager = ConfigManager()
        manager.config_data = {"output": {"dir": None}}

        assert manager.get_value("output.dir", "bundle") == "bundle"
        assert manager.get_value("image.base", "") == ""


class TestBuildConfig:
    """Test configuration precedence"""

    def test_defaults(self):
        """Without any source the built-in defaults apply"""
        config = ConfigManager().build_config("packagemanifests")

        assert config == ConversionConfig(
            pkgmanifest_dir="packagemanifests",
            output_dir="bundle",
            base_image="",
            build_cmd="docker build -t",
            debug=False,
        )

    def test_environment(self, monkeypatch):
        """Environment variables override built-in defaults"""
        monkeypatch.setenv("PKGMAN_TO_BUNDLE_OUTPUT_DIR", "env-out")
        monkeypatch.setenv("PKGMAN_TO_BUNDLE_BUILD_CMD", "podman build -t")
        monkeypatch.setenv("PKGMAN_TO_BUNDLE_DEBUG", "true")

        env = environment_defaults()

        assert env["output_dir"] == "env-out"
        assert env["build_cmd"] == "podman build -t"
        assert env["debug"] is True

    def test_file_overrides_environment(self, monkeypatch, config_file):
        """Configuration file values win over the environment"""
        monkeypatch.setenv("PKGMAN_TO_BUNDLE_OUTPUT_DIR", "env-out")
        manager = ConfigManager()
        manager.load_config(str(config_file("output:\n  dir: file-out\nglobal:\n  debug: true\n")))

        config = manager.build_config("packagemanifests")

        assert config.output_dir == "file-out"
        assert config.debug is True

    def test_command_line_overrides_file(self, config_file):
        """Command-line values win over the configuration file"""
        manager = ConfigManager()
        manager.load_config(str(config_file("output:\n  dir: file-out\nimage:\n  base: file-image\n")))

        config = manager.build_config("packagemanifests", output_dir="cli-out", base_image="cli-image")

        assert config.output_dir == "cli-out"
        assert config.base_image == "cli-image"

    def test_empty_build_command_falls_back(self, monkeypatch):
        """An empty build command resolves to the default one"""
        monkeypatch.setenv("PKGMAN_TO_BUNDLE_BUILD_CMD", "")

        config = ConfigManager().build_config("packagemanifests", build_cmd="")

        assert config.build_cmd == "docker build -t"
