"""
Metadata Synthesizer

Derives bundle metadata from package-level facts and renders
bundle.Dockerfile, metadata/annotations.yaml and the scorecard configuration
from one shared value model.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml
from jinja2 import Template, TemplateError

from ..core.constants import BundleConstants, ErrorMessages, FileConstants
from ..core.exceptions import SerializationError
from ..core.utils import atomic_write_text
from .package import PackageManifest
from .templates import ANNOTATIONS_TEMPLATE, DOCKERFILE_TEMPLATE, SCORECARD_CONFIG

logger = logging.getLogger(__name__)

Label = BundleConstants.Label


@dataclass(frozen=True)
class BundleMetadata:
    """Metadata of one bundle directory"""
    bundle_dir: Path
    package_name: str
    channels: str
    default_channel: Optional[str] = None
    other_labels: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AnnotationValues:
    """Values rendered into both bundle.Dockerfile and annotations.yaml"""
    package_name: str
    channels: str
    default_channel: Optional[str]
    other_labels: List[str]

    def labels(self) -> Dict[str, str]:
        """The label set both rendered files must express, in render order"""
        labels = {
            str(Label.MEDIATYPE): "registry+v1",
            str(Label.MANIFESTS): "manifests/",
            str(Label.METADATA): "metadata/",
            str(Label.PACKAGE): self.package_name,
            str(Label.CHANNELS): self.channels,
        }
        if self.default_channel:
            labels[str(Label.DEFAULT_CHANNEL)] = self.default_channel
        for label in self.other_labels:
            key, _, value = label.partition('=')
            labels[key] = value
        labels[str(Label.TEST_MEDIATYPE)] = "scorecard+v1"
        labels[str(Label.TEST_CONFIG)] = "tests/scorecard/"
        return labels


def channels_label(channels: Sequence[str]) -> str:
    """
    Join channel names with commas.

    Falls back to 'alpha' with a warning when no channel is known.
    """
    names = [name for name in channels if name]
    if not names:
        logger.warning(f"No channels found for package, defaulting to '{BundleConstants.DEFAULT_CHANNEL}'")
        return BundleConstants.DEFAULT_CHANNEL
    return ','.join(names)


def carried_labels(csv_annotations: Mapping[str, Any]) -> Dict[str, str]:
    """
    Map the CSV's builder and project layout annotations to bundle labels.

    Any other annotation is dropped.
    """
    labels = {}
    for annotation, label in BundleConstants.CARRIED_ANNOTATIONS.items():
        value = csv_annotations.get(annotation)
        if value is not None and value != '':
            labels[label] = str(value)
    return labels


def build_bundle_metadata(bundle_dir: Path, package: PackageManifest,
                          csv_annotations: Mapping[str, Any]) -> BundleMetadata:
    """
    Assemble the metadata of one bundle.

    Args:
        bundle_dir: Bundle output directory
        package: Package-level facts
        csv_annotations: Annotations of the version's CSV

    Returns:
        BundleMetadata
    """
    return BundleMetadata(
        bundle_dir=Path(bundle_dir),
        package_name=package.package_name,
        channels=channels_label(package.channels),
        default_channel=package.default_channel,
        other_labels=carried_labels(csv_annotations),
    )


def build_annotation_values(metadata: BundleMetadata) -> AnnotationValues:
    """Shared value model for both templates; pass-through labels sorted by key"""
    return AnnotationValues(
        package_name=metadata.package_name,
        channels=metadata.channels,
        default_channel=metadata.default_channel,
        other_labels=[f"{key}={value}" for key, value in sorted(metadata.other_labels.items())],
    )


def _render(template: Template, values: AnnotationValues, name: str) -> str:
    try:
        return template.render(
            package_name=values.package_name,
            channels=values.channels,
            default_channel=values.default_channel,
            other_labels=values.other_labels,
        )
    except TemplateError as e:
        raise SerializationError(ErrorMessages.ManifestError.RENDER_FAILED.format(template=name, error=e)) from e


def render_dockerfile(values: AnnotationValues) -> str:
    """Render bundle.Dockerfile"""
    return _render(DOCKERFILE_TEMPLATE, values, BundleConstants.DOCKERFILE_NAME)


def render_annotations(values: AnnotationValues) -> str:
    """Render metadata/annotations.yaml"""
    return _render(ANNOTATIONS_TEMPLATE, values, BundleConstants.ANNOTATIONS_FILE)


def parse_dockerfile_labels(content: str) -> Dict[str, str]:
    """Recover the labels declared by LABEL lines of a Dockerfile"""
    labels = {}
    for line in content.splitlines():
        line = line.strip()
        if not line.startswith('LABEL '):
            continue
        key, _, value = line[len('LABEL '):].partition('=')
        labels[key.strip()] = value.strip()
    return labels


def parse_annotations(content: str) -> Dict[str, str]:
    """Recover the annotations of an annotations.yaml document, every value as a string"""
    data = yaml.load(content, Loader=yaml.BaseLoader) or {}
    return dict(data.get('annotations') or {})


def generate_metadata(metadata: BundleMetadata) -> List[Path]:
    """
    Write bundle.Dockerfile, metadata/annotations.yaml and tests/scorecard/config.yaml.

    Args:
        metadata: Bundle metadata

    Returns:
        List of written paths

    Raises:
        OSError: If a directory or file cannot be written
        SerializationError: If a template fails to render
    """
    bundle_dir = Path(metadata.bundle_dir)
    metadata_dir = bundle_dir / BundleConstants.METADATA_DIR
    scorecard_dir = bundle_dir / BundleConstants.SCORECARD_DIR
    for directory in (bundle_dir, metadata_dir, scorecard_dir):
        directory.mkdir(mode=FileConstants.DIR_MODE, parents=True, exist_ok=True)

    values = build_annotation_values(metadata)
    files = {
        bundle_dir / BundleConstants.DOCKERFILE_NAME: render_dockerfile(values),
        metadata_dir / BundleConstants.ANNOTATIONS_FILE: render_annotations(values),
        scorecard_dir / BundleConstants.SCORECARD_CONFIG_FILE: SCORECARD_CONFIG,
    }

    for path, content in files.items():
        logger.info(f"Creating {path}")
        atomic_write_text(path, content)

    logger.info("Bundle metadata generated successfully")
    return list(files)
