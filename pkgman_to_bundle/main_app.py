"""
Main Application

Command-line entry point for migrating package manifests to bundles.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .converter import BundleConverter
from .core import ConfigManager, ConversionConfig, setup_logging
from .core.constants import ErrorMessages, FileConstants
from .core.exceptions import PkgmanToBundleError, ValidationError

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the pkgman-to-bundle command"""
    parser = argparse.ArgumentParser(
        prog="pkgman-to-bundle",
        description="Migrates package manifests to bundles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  pkgman-to-bundle packagemanifests/\n"
            "  pkgman-to-bundle packagemanifests/ --output-dir out/bundles --debug\n"
        ),
    )
    parser.add_argument('pkgmanifest_dir', nargs='*', metavar='PKGMANIFEST_DIR',
                        help='package manifest directory to convert')
    parser.add_argument('--output-dir', default=None,
                        help=f'directory to write bundles to (default: {FileConstants.DEFAULT_OUTPUT_DIR})')
    parser.add_argument('--base-image', default=None,
                        help='base container name for bundles')
    parser.add_argument('--build-cmd', default=None,
                        help=f'fully qualified build command (default: "{FileConstants.DEFAULT_BUILD_CMD}")')
    parser.add_argument('--config', default=None,
                        help='YAML configuration file')
    parser.add_argument('--debug', action='store_true',
                        help='enable debug logging')
    return parser


def validate_args(args: argparse.Namespace) -> str:
    """
    Check that exactly one package manifest directory was given.

    Returns:
        str: The package manifest directory

    Raises:
        ValidationError: On zero or several positional arguments
    """
    if len(args.pkgmanifest_dir) != 1:
        raise ValidationError(ErrorMessages.ValidationError.ARGUMENT_REQUIRED)
    return args.pkgmanifest_dir[0]


def build_config(args: argparse.Namespace, config_manager: Optional[ConfigManager] = None) -> ConversionConfig:
    """
    Resolve the run configuration from parsed arguments.

    Args:
        args: Parsed command-line arguments
        config_manager: Configuration manager (defaults to a new ConfigManager)

    Returns:
        ConversionConfig
    """
    pkgmanifest_dir = validate_args(args)
    config_manager = config_manager or ConfigManager()
    if args.config:
        config_manager.load_config(args.config)

    return config_manager.build_config(
        pkgmanifest_dir,
        output_dir=args.output_dir,
        base_image=args.base_image,
        build_cmd=args.build_cmd,
        debug=args.debug,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    try:
        config = build_config(args)
        if config.debug and not args.debug:
            setup_logging(True)

        results = BundleConverter(config).run()

    except PkgmanToBundleError as e:
        logger.error(f"Conversion failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 1

    for result in results:
        print(f"Generated bundle for version {result.version}: {result.bundle_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
