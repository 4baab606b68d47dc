"""
Manifest Libraries

Scanning, collection, classification and writing of package manifest objects.
"""

from .models import BundleObject, BundleFileEntry, ObjectVariant, VersionedManifestSet
from .scanner import SemanticVersion, VersionDirectory, find_version_directories, parse_version
from .collector import collect_manifests
from .classifier import assign_file_names, get_manifest_objects
from .writer import prepare_output_dir, write_objects_to_files

__all__ = [
    'BundleObject',
    'BundleFileEntry',
    'ObjectVariant',
    'VersionedManifestSet',
    'SemanticVersion',
    'VersionDirectory',
    'find_version_directories',
    'parse_version',
    'collect_manifests',
    'assign_file_names',
    'get_manifest_objects',
    'prepare_output_dir',
    'write_objects_to_files'
]
