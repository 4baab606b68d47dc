"""
Bundle Writer

Writes classified objects into a bundle's manifests directory.
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from ..core.constants import FileConstants
from ..core.utils import atomic_write_text, remove_tree
from .models import BundleFileEntry
from .serialization import dump_object

logger = logging.getLogger(__name__)


def prepare_output_dir(path: Union[str, Path]) -> Path:
    """
    Delete whatever exists at path so a conversion starts from a clean tree.

    Args:
        path: Output directory

    Returns:
        Path of the (now absent) directory
    """
    path = Path(path)
    if remove_tree(path):
        logger.info(f"Removed existing output at {path}")
    return path


def write_objects_to_files(directory: Union[str, Path], entries: Iterable[BundleFileEntry]) -> int:
    """
    Write one YAML file per entry into directory.

    Each file is written atomically. The first failure stops the loop and
    propagates; files written before it are left in place.

    Args:
        directory: Destination directory, created with missing parents
        entries: File name and object pairs

    Returns:
        int: Number of files written

    Raises:
        OSError: If the directory or a file cannot be written
        SerializationError: If an object cannot be serialized
    """
    directory = Path(directory)
    directory.mkdir(mode=FileConstants.DIR_MODE, parents=True, exist_ok=True)

    written = 0
    for entry in entries:
        content = dump_object(entry.obj.obj, entry.file_name)
        atomic_write_text(directory / entry.file_name, content)
        logger.debug(f"Wrote {directory / entry.file_name}")
        written += 1

    return written
