"""
Configuration Management

Builds the run configuration from command-line values, an optional YAML
configuration file and environment defaults.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

import decouple
import yaml

from .exceptions import ConfigurationError
from .constants import ErrorMessages, FileConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionConfig:
    """Settings for one conversion run, created once and passed to every stage"""
    pkgmanifest_dir: str
    output_dir: str = FileConstants.DEFAULT_OUTPUT_DIR
    base_image: str = ""
    build_cmd: str = FileConstants.DEFAULT_BUILD_CMD
    debug: bool = False


def environment_defaults() -> Dict[str, Any]:
    """
    Read configuration defaults from the environment (or a .env file).

    Returns:
        Dict with output_dir, base_image, build_cmd and debug
    """
    return {
        'output_dir': decouple.config('PKGMAN_TO_BUNDLE_OUTPUT_DIR', default=FileConstants.DEFAULT_OUTPUT_DIR),
        'base_image': decouple.config('PKGMAN_TO_BUNDLE_BASE_IMAGE', default=""),
        'build_cmd': decouple.config('PKGMAN_TO_BUNDLE_BUILD_CMD', default=FileConstants.DEFAULT_BUILD_CMD),
        'debug': decouple.config('PKGMAN_TO_BUNDLE_DEBUG', default=False, cast=bool),
    }


class ConfigManager:
    """Manages configuration loading and validation"""

    # Configuration schema - defines expected structure and types
    CONFIG_SCHEMA = {
        'output': {
            'type': dict,
            'required': False,
            'fields': {
                'dir': {'type': str, 'required': False},
            }
        },
        'image': {
            'type': dict,
            'required': False,
            'fields': {
                'base': {'type': str, 'required': False},
                'build_cmd': {'type': str, 'required': False},
            }
        },
        'global': {
            'type': dict,
            'required': False,
            'fields': {
                'debug': {'type': bool, 'required': False},
            }
        },
    }

    def __init__(self):
        """Initialize configuration manager"""
        self.config_data = {}
        self.config_file_path = None

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file

        Args:
            config_path: Path to configuration file

        Returns:
            Dict containing configuration data

        Raises:
            ConfigurationError: If configuration file cannot be loaded or is invalid
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ConfigurationError(ErrorMessages.ConfigError.CONFIG_FILE_NOT_FOUND.format(config_path=config_path))

        if not config_file.is_file():
            raise ConfigurationError(ErrorMessages.ConfigError.CONFIG_NOT_A_FILE.format(config_path=config_path))

        try:
            with open(config_file, 'r') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                ErrorMessages.ConfigError.INVALID_YAML.format(config_path=config_path, error=e)
            ) from e

        self.config_file_path = config_path
        logger.info(f"Successfully loaded configuration from {config_path}")

        self._validate_config()
        return self.config_data

    def _validate_config(self) -> None:
        """
        Validate configuration structure and values

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(self.config_data, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        self._validate_against_schema(self.config_data, self.CONFIG_SCHEMA, "config")

    def _validate_against_schema(self, data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> None:
        """
        Validate data against schema definition

        Args:
            data: Data to validate
            schema: Schema definition
            path: Current path for error reporting

        Raises:
            ConfigurationError: If data doesn't match schema
        """
        for key, field_schema in schema.items():
            current_path = f"{path}.{key}" if path else key

            if key in data:
                value = data[key]

                # Skip None values for optional fields
                if value is None and not field_schema.get('required', False):
                    continue

                expected_type = field_schema['type']
                if not isinstance(value, expected_type):
                    raise ConfigurationError(f"{current_path} must be a {expected_type.__name__}")

                if expected_type == dict and 'fields' in field_schema:
                    self._validate_against_schema(value, field_schema['fields'], current_path)

            elif field_schema.get('required', False):
                raise ConfigurationError(f"Required field {current_path} is missing")

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key

        Args:
            key: Configuration key (supports dot notation like 'output.dir')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config_data

        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default
        return default if value is None else value

    def build_config(self, pkgmanifest_dir: str, output_dir: Optional[str] = None,
                     base_image: Optional[str] = None, build_cmd: Optional[str] = None,
                     debug: bool = False) -> ConversionConfig:
        """
        Resolve the run configuration.

        Command-line values win over the loaded configuration file, which wins
        over environment defaults. An empty build command falls back to the
        default one.

        Args:
            pkgmanifest_dir: Package manifest root directory
            output_dir: Output directory from the command line (optional)
            base_image: Base image from the command line (optional)
            build_cmd: Build command from the command line (optional)
            debug: Debug flag from the command line

        Returns:
            ConversionConfig for the run
        """
        env = environment_defaults()

        resolved_build_cmd = build_cmd or self.get_value('image.build_cmd', env['build_cmd'])
        return ConversionConfig(
            pkgmanifest_dir=pkgmanifest_dir,
            output_dir=output_dir or self.get_value('output.dir', env['output_dir']),
            base_image=base_image or self.get_value('image.base', env['base_image']),
            build_cmd=resolved_build_cmd or FileConstants.DEFAULT_BUILD_CMD,
            debug=debug or self.get_value('global.debug', env['debug']),
        )
