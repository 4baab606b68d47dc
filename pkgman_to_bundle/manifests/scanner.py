"""
Version Directory Scanner

Finds the version subdirectories of a package manifest root.
"""

import logging
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# semver 2.0.0 grammar
SEMVER_PATTERN = re.compile(
    r'^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)'
    r'(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)'
    r'(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?'
    r'(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$'
)


class SemanticVersion(NamedTuple):
    """Parsed semantic version"""
    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    def precedence_key(self) -> Tuple:
        """Sort key following semver precedence rules (build metadata ignored)"""
        if self.prerelease is None:
            pre_key = (1,)
        else:
            identifiers = []
            for ident in self.prerelease.split('.'):
                if ident.isdigit():
                    identifiers.append((0, int(ident), ""))
                else:
                    identifiers.append((1, 0, ident))
            pre_key = (0, tuple(identifiers))
        return (self.major, self.minor, self.patch, pre_key)


class VersionDirectory(NamedTuple):
    """A package manifest subdirectory holding one operator version"""
    name: str
    version: SemanticVersion
    path: Path


def parse_version(value: str) -> Optional[SemanticVersion]:
    """
    Parse a semantic version, tolerating a single leading 'v'.

    Args:
        value: Candidate version string (e.g. "0.1.0", "v1.2.3-rc.1")

    Returns:
        SemanticVersion, or None if the string is not a semantic version
    """
    candidate = value[1:] if value.startswith('v') else value
    match = SEMVER_PATTERN.match(candidate)
    if not match:
        return None
    return SemanticVersion(
        major=int(match.group('major')),
        minor=int(match.group('minor')),
        patch=int(match.group('patch')),
        prerelease=match.group('prerelease'),
        build=match.group('build'),
    )


def find_version_directories(root: Union[str, Path]) -> List[VersionDirectory]:
    """
    List the immediate subdirectories of root named with a semantic version.

    Entries that are not directories or whose name is not a semantic version
    are skipped and logged. Results are ordered by version precedence.

    Args:
        root: Package manifest root directory

    Returns:
        List of VersionDirectory in version order

    Raises:
        OSError: If root cannot be listed
    """
    root = Path(root)
    found = []

    for entry in sorted(root.iterdir()):
        if not entry.is_dir():
            logger.debug(f"Skipping {entry}: not a directory")
            continue

        version = parse_version(entry.name)
        if version is None:
            logger.info(f"Skipping {entry}: directory name is not a semantic version")
            continue

        found.append(VersionDirectory(name=entry.name, version=version, path=entry))

    found.sort(key=lambda d: (d.version.precedence_key(), d.name))
    logger.debug(f"Found {len(found)} version directories in {root}")
    return found
