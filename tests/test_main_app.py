"""
Tests for the command-line entry point
"""

import logging

import pytest

from pkgman_to_bundle.core.exceptions import ValidationError
from pkgman_to_bundle.main_app import build_config, create_argument_parser, main, validate_args


@pytest.fixture(autouse=True)
def isolated_run(monkeypatch):
    """Clear environment overrides; restore the root logger handlers main() replaces"""
    for name in ["PKGMAN_TO_BUNDLE_OUTPUT_DIR", "PKGMAN_TO_BUNDLE_BASE_IMAGE",
                 "PKGMAN_TO_BUNDLE_BUILD_CMD", "PKGMAN_TO_BUNDLE_DEBUG"]:
        monkeypatch.delenv(name, raising=False)
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestArguments:
    """Test argument parsing and validation"""

    def test_defaults(self):
        """Optional flags default to unset"""
        args = create_argument_parser().parse_args(["packagemanifests"])

        assert args.pkgmanifest_dir == ["packagemanifests"]
        assert args.output_dir is None
        assert args.base_image is None
        assert args.build_cmd is None
        assert args.debug is False

    @pytest.mark.parametrize("argv", [[], ["a", "b"]])
    def test_exactly_one_directory_required(self, argv):
        """Zero or several positional arguments are rejected"""
        args = create_argument_parser().parse_args(argv)

        with pytest.raises(ValidationError) as exc_info:
            validate_args(args)

        assert "argument is required" in str(exc_info.value)

    def test_build_config_from_flags(self):
        """Flags are carried into the run configuration"""
        args = create_argument_parser().parse_args(
            ["packagemanifests", "--output-dir", "out", "--base-image", "quay.io/example/op",
             "--build-cmd", "podman build -t"]
        )

        config = build_config(args)

        assert config.pkgmanifest_dir == "packagemanifests"
        assert config.output_dir == "out"
        assert config.base_image == "quay.io/example/op"
        assert config.build_cmd == "podman build -t"


class TestMain:
    """Test the exit codes and output of main()"""

    @pytest.mark.parametrize("argv", [[], ["a", "b"]])
    def test_wrong_argument_count(self, argv, capsys):
        """A missing or extra directory argument exits with 1"""
        assert main(argv) == 1

        assert "argument is required" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path, capsys):
        """A directory that does not exist exits with 1"""
        assert main([str(tmp_path / "missing"), "--output-dir", str(tmp_path / "out")]) == 1

        assert "is not a directory" in capsys.readouterr().err

    def test_missing_config_file(self, pkgmanifest_dir, tmp_path, capsys):
        """An unreadable configuration file exits with 1"""
        assert main([str(pkgmanifest_dir), "--config", str(tmp_path / "missing.yaml")]) == 1

        assert "Configuration file not found" in capsys.readouterr().err

    def test_undecodable_manifest(self, pkgmanifest_dir, tmp_path, capsys):
        """A manifest that is not valid UTF-8 exits with 1 and names the file"""
        (pkgmanifest_dir / "0.0.2" / "bad.yaml").write_bytes(b"kind: \xff\xfe\n")

        assert main([str(pkgmanifest_dir), "--output-dir", str(tmp_path / "out")]) == 1

        assert "bad.yaml" in capsys.readouterr().err

    def test_successful_conversion(self, pkgmanifest_dir, tmp_path, capsys):
        """A valid directory is converted and every bundle is reported"""
        output_dir = tmp_path / "out"

        assert main([str(pkgmanifest_dir), "--output-dir", str(output_dir)]) == 0

        out = capsys.readouterr().out
        assert f"Generated bundle for version 0.0.1: {output_dir / 'bundle-0.0.1'}" in out
        assert f"Generated bundle for version 0.0.2: {output_dir / 'bundle-0.0.2'}" in out
        assert (output_dir / "bundle-0.0.2" / "bundle.Dockerfile").is_file()

    def test_output_dir_from_config_file(self, pkgmanifest_dir, tmp_path):
        """The output directory can come from the configuration file"""
        output_dir = tmp_path / "from-config"
        config_path = tmp_path / "config.yaml"
        config_path.write_text(f"output:\n  dir: {output_dir}\n")

        assert main([str(pkgmanifest_dir), "--config", str(config_path)]) == 0

        assert (output_dir / "bundle-0.0.1").is_dir()
