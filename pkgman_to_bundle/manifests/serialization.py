"""
Manifest Serialization

YAML loading and dumping for Kubernetes manifests. Timestamps are kept as
plain strings so that CSV annotations such as createdAt survive unchanged.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..core.constants import ErrorMessages
from ..core.exceptions import ManifestParseError, SerializationError

logger = logging.getLogger(__name__)

TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class ManifestLoader(yaml.SafeLoader):
    """SafeLoader that does not convert timestamps to datetime objects"""
    pass


ManifestLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ManifestDumper(yaml.SafeDumper):
    """SafeDumper that indents sequences under their parent key"""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def load_documents(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load every non-empty YAML document of a file.

    Args:
        path: YAML or JSON file

    Returns:
        List of documents that are mappings, in file order

    Raises:
        ManifestParseError: If the file is not valid UTF-8 YAML
        OSError: If the file cannot be read
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            documents = list(yaml.load_all(f, Loader=ManifestLoader))
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ManifestParseError(ErrorMessages.ManifestError.PARSE_FAILED.format(path=path, error=e)) from e

    mappings = []
    for doc in documents:
        if doc is None:
            continue
        if not isinstance(doc, dict):
            logger.debug(f"Ignoring non-mapping document in {path}")
            continue
        mappings.append(doc)
    return mappings


def dump_object(obj: Dict[str, Any], file_name: str = "<object>") -> str:
    """
    Serialize a Kubernetes object to YAML, keeping key order.

    Args:
        obj: Object to serialize
        file_name: Destination name, used in error messages

    Returns:
        YAML string

    Raises:
        SerializationError: If the object cannot be represented as YAML
    """
    try:
        return yaml.dump(obj, Dumper=ManifestDumper, default_flow_style=False,
                         sort_keys=False, allow_unicode=True)
    except yaml.YAMLError as e:
        raise SerializationError(
            ErrorMessages.ManifestError.SERIALIZE_FAILED.format(file_name=file_name, error=e)
        ) from e
