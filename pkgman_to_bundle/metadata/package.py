"""
Package Manifest Loader

Reads the package-level facts (name, channels, default channel) from the
root of a package manifest directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.constants import BundleConstants, ErrorMessages, FileConstants
from ..core.exceptions import ValidationError
from ..manifests.serialization import load_documents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageManifest:
    """Package name and channel information shared by every version"""
    package_name: str
    channels: Tuple[str, ...] = ()
    default_channel: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PackageManifest':
        """
        Build a PackageManifest from a parsed package.yaml document.

        Channels without a name are recorded as the default 'alpha' channel;
        repeated channel names are kept once, in first-seen order.
        """
        channels: List[str] = []
        for channel in data.get('channels') or []:
            name = channel.get('name') if isinstance(channel, dict) else None
            name = name or BundleConstants.DEFAULT_CHANNEL
            if name not in channels:
                channels.append(name)

        return cls(
            package_name=data.get('packageName') or '',
            channels=tuple(channels),
            default_channel=data.get('defaultChannel') or None,
        )


def find_package_files(root: Union[str, Path]) -> List[Path]:
    """
    Find package manifest files directly under root.

    Files named *package.yaml are preferred; otherwise any YAML file holding
    a packageName key is used.

    Args:
        root: Package manifest root directory

    Returns:
        Sorted list of candidate files
    """
    root = Path(root)
    files = sorted(p for p in root.iterdir() if p.is_file())

    named = [p for p in files if p.name.endswith(FileConstants.PACKAGE_FILE_SUFFIX)]
    if named:
        return named

    extensions = FileConstants.FileExtension.get_manifest_extensions()
    candidates = []
    for path in files:
        if path.suffix.lower() not in extensions:
            continue
        if any('packageName' in doc for doc in load_documents(path)):
            candidates.append(path)
    return candidates


def load_package_manifest(root: Union[str, Path]) -> PackageManifest:
    """
    Load the package manifest of a package manifest directory.

    Args:
        root: Package manifest root directory

    Returns:
        PackageManifest

    Raises:
        ValidationError: If no package manifest, more than one, or no package name is found
        OSError: If the directory or file cannot be read
    """
    root = Path(root)
    files = find_package_files(root)

    if not files:
        raise ValidationError(ErrorMessages.ValidationError.NO_PACKAGES.format(directory=root))
    if len(files) > 1:
        raise ValidationError(ErrorMessages.ValidationError.MULTIPLE_PACKAGES.format(
            directory=root, paths=', '.join(p.name for p in files)))

    documents = load_documents(files[0])
    data = next((doc for doc in documents if 'packageName' in doc), documents[0] if documents else {})
    package = PackageManifest.from_dict(data)

    if not package.package_name:
        raise ValidationError(ErrorMessages.ValidationError.NO_PACKAGE_NAME.format(path=files[0]))

    logger.info(f"Loaded package {package.package_name} from {files[0]}")
    return package
