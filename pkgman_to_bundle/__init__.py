"""
pkgman-to-bundle

Migrates Operator Lifecycle Manager package manifests (one directory per
version) to the bundle format (manifests/, metadata/ and bundle.Dockerfile
per version).
"""

__version__ = "1.0.0"

from .converter import BundleConverter, ConversionResult
from .core import ConfigManager, ConversionConfig
from .main_app import main

__all__ = [
    'BundleConverter',
    'ConversionResult',
    'ConfigManager',
    'ConversionConfig',
    'main'
]
