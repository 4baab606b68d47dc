"""
Package Manifest to Bundle Converter

Runs the conversion pipeline: one version directory is collected, classified
and written before the next one starts.
"""

import logging
from pathlib import Path
from typing import List, NamedTuple

from .core.config import ConversionConfig
from .core.constants import BundleConstants, ErrorMessages
from .core.exceptions import ValidationError
from .manifests.classifier import assign_file_names, get_manifest_objects
from .manifests.collector import collect_manifests
from .manifests.scanner import VersionDirectory, find_version_directories
from .manifests.writer import prepare_output_dir, write_objects_to_files
from .metadata.package import PackageManifest, load_package_manifest
from .metadata.synthesizer import build_bundle_metadata, generate_metadata

logger = logging.getLogger(__name__)


class ConversionResult(NamedTuple):
    """Outcome of converting one version directory"""
    version: str
    bundle_dir: Path
    manifest_files: List[str]


class BundleConverter:
    """Converts a package manifest directory into one bundle per version"""

    def __init__(self, config: ConversionConfig):
        """
        Initialize the converter

        Args:
            config: Run configuration
        """
        self.config = config
        self.pkgmanifest_dir = Path(config.pkgmanifest_dir)
        self.output_dir = Path(config.output_dir)

    def bundle_dir_for(self, version: str) -> Path:
        """Output directory of the bundle for a version"""
        return self.output_dir / f"{BundleConstants.BUNDLE_DIR_PREFIX}{version}"

    def validate(self) -> None:
        """
        Check the input directory and the output location before anything is deleted

        Raises:
            ValidationError: If the input is not a directory or would be removed with the output
        """
        if not self.pkgmanifest_dir.is_dir():
            raise ValidationError(
                ErrorMessages.ValidationError.NOT_A_DIRECTORY.format(directory=self.pkgmanifest_dir)
            )

        source = self.pkgmanifest_dir.resolve()
        output = self.output_dir.resolve()
        if output == source or output in source.parents:
            raise ValidationError(ErrorMessages.ValidationError.OUTPUT_CONTAINS_INPUT.format(
                output_dir=self.output_dir, directory=self.pkgmanifest_dir))

    def run(self) -> List[ConversionResult]:
        """
        Convert every version directory.

        Returns:
            List of ConversionResult in version order

        Raises:
            ValidationError: If the input holds no package or a version holds no single CSV
            ManifestParseError: If an input file is not valid YAML
            SerializationError: If an output file cannot be rendered
            OSError: If a directory cannot be read or a file cannot be written
        """
        self.validate()

        package = load_package_manifest(self.pkgmanifest_dir)
        versions = find_version_directories(self.pkgmanifest_dir)
        if not versions:
            raise ValidationError(ErrorMessages.ValidationError.NO_PACKAGES.format(directory=self.pkgmanifest_dir))
        self._check_unique_versions(versions)

        logger.info(f"Converting package {package.package_name}: {len(versions)} version(s)")
        prepare_output_dir(self.output_dir)

        return [self.convert_version(package, version_dir) for version_dir in versions]

    @staticmethod
    def _check_unique_versions(versions: List[VersionDirectory]) -> None:
        # "1.0.0" and "v1.0.0" would write the same bundle directory
        seen = {}
        for version_dir in versions:
            version = str(version_dir.version)
            if version in seen:
                raise ValidationError(ErrorMessages.ValidationError.DUPLICATE_VERSION.format(
                    first=seen[version], second=version_dir.name, version=version))
            seen[version] = version_dir.name

    def convert_version(self, package: PackageManifest, version_dir: VersionDirectory) -> ConversionResult:
        """
        Convert one version directory into a bundle.

        Args:
            package: Package-level facts
            version_dir: Version directory to convert

        Returns:
            ConversionResult
        """
        version = str(version_dir.version)
        manifest_set = collect_manifests(version_dir.path, version)
        entries = assign_file_names(get_manifest_objects(manifest_set))

        bundle_dir = self.bundle_dir_for(version)
        prepare_output_dir(bundle_dir)
        write_objects_to_files(bundle_dir / BundleConstants.MANIFESTS_DIR, entries)

        metadata = build_bundle_metadata(bundle_dir, package, manifest_set.csv_annotations())
        generate_metadata(metadata)

        logger.info(f"Created bundle {bundle_dir} with {len(entries)} manifest(s)")
        return ConversionResult(
            version=version,
            bundle_dir=bundle_dir,
            manifest_files=[entry.file_name for entry in entries],
        )
