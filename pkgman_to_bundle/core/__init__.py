"""
Core Libraries

Shared functionality and utilities for the converter.
"""

from .config import ConfigManager, ConversionConfig
from .exceptions import (
    PkgmanToBundleError,
    ValidationError,
    NoCSVFoundError,
    MultipleCSVError,
    ManifestParseError,
    SerializationError,
    ConfigurationError,
)
from .utils import setup_logging, atomic_write_text, remove_tree

__all__ = [
    'ConfigManager',
    'ConversionConfig',
    'PkgmanToBundleError',
    'ValidationError',
    'NoCSVFoundError',
    'MultipleCSVError',
    'ManifestParseError',
    'SerializationError',
    'ConfigurationError',
    'setup_logging',
    'atomic_write_text',
    'remove_tree'
]
