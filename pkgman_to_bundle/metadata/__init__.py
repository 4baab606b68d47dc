"""
Metadata Libraries

Package manifest loading and bundle metadata rendering.
"""

from .package import PackageManifest, load_package_manifest
from .synthesizer import (
    AnnotationValues,
    BundleMetadata,
    build_annotation_values,
    build_bundle_metadata,
    carried_labels,
    channels_label,
    generate_metadata,
    parse_annotations,
    parse_dockerfile_labels,
    render_annotations,
    render_dockerfile,
)

__all__ = [
    'PackageManifest',
    'load_package_manifest',
    'AnnotationValues',
    'BundleMetadata',
    'build_annotation_values',
    'build_bundle_metadata',
    'carried_labels',
    'channels_label',
    'generate_metadata',
    'parse_annotations',
    'parse_dockerfile_labels',
    'render_annotations',
    'render_dockerfile'
]
