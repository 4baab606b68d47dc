"""
Manifest Collector

Loads the Kubernetes objects of one package manifest version directory and
partitions them by kind.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

from ..core.constants import BundleConstants, ErrorMessages, FileConstants, KubernetesConstants
from ..core.exceptions import MultipleCSVError, NoCSVFoundError
from .models import KubeObject, VersionedManifestSet
from .serialization import load_documents

logger = logging.getLogger(__name__)

Kind = KubernetesConstants.Kind


def iter_manifest_files(directory: Union[str, Path]) -> List[Path]:
    """
    List manifest files under a directory, recursively and in sorted order.

    Args:
        directory: Version directory

    Returns:
        List of .yaml, .yml and .json files
    """
    extensions = FileConstants.FileExtension.get_manifest_extensions()
    files = []
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames.sort()
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1].lower() in extensions:
                files.append(Path(dirpath) / filename)
    return files


def load_objects(directory: Union[str, Path]) -> List[KubeObject]:
    """
    Load every Kubernetes object found under a directory.

    Documents without a string apiVersion and kind are not Kubernetes objects and are skipped.

    Args:
        directory: Version directory

    Returns:
        List of objects in file order
    """
    objects = []
    for path in iter_manifest_files(directory):
        for doc in load_documents(path):
            api_version, kind = doc.get('apiVersion'), doc.get('kind')
            if not (isinstance(api_version, str) and api_version and isinstance(kind, str) and kind):
                logger.debug(f"Skipping document in {path}: apiVersion and kind must be non-empty strings")
                continue
            objects.append(doc)
    return objects


def csv_permission_objects(csv: KubeObject, section: str, kind: str) -> List[KubeObject]:
    """
    Build standalone Role or ClusterRole objects from a CSV permission section.

    Args:
        csv: ClusterServiceVersion object
        section: 'permissions' or 'clusterPermissions'
        kind: 'Role' or 'ClusterRole'

    Returns:
        One object per permission entry, named after its service account
    """
    install_spec = ((csv.get('spec') or {}).get('install') or {}).get('spec') or {}
    objects = []
    for permission in install_spec.get(section) or []:
        service_account = permission.get('serviceAccountName') or ''
        if not service_account:
            logger.warning(f"Skipping {section} entry without serviceAccountName in CSV {_name_of(csv)}")
            continue
        objects.append({
            'apiVersion': KubernetesConstants.RBAC_API_VERSION,
            'kind': kind,
            'metadata': {'name': service_account},
            'rules': copy.deepcopy(permission.get('rules') or []),
        })
    return objects


def partition_objects(version: str, directory: Path, objects: List[KubeObject]) -> VersionedManifestSet:
    """
    Partition loaded objects by kind.

    Args:
        version: Normalized version string
        directory: Directory the objects were loaded from
        objects: Loaded objects

    Returns:
        VersionedManifestSet for the directory

    Raises:
        NoCSVFoundError: If no ClusterServiceVersion is present
        MultipleCSVError: If more than one ClusterServiceVersion is present
    """
    csvs = [obj for obj in objects if obj.get('kind') == Kind.CLUSTER_SERVICE_VERSION]
    if not csvs:
        raise NoCSVFoundError(ErrorMessages.ValidationError.NO_CSV.format(directory=directory))
    if len(csvs) > 1:
        raise MultipleCSVError(
            ErrorMessages.ValidationError.MULTIPLE_CSVS.format(count=len(csvs), directory=directory)
        )

    manifest_set = VersionedManifestSet(version=version, source_dir=Path(directory), csv=csvs[0])

    for obj in objects:
        kind = obj.get('kind')
        if kind == Kind.CLUSTER_SERVICE_VERSION:
            continue
        if kind == Kind.CUSTOM_RESOURCE_DEFINITION:
            api_version = obj.get('apiVersion')
            if api_version == KubernetesConstants.CRD_V1_API_VERSION:
                manifest_set.v1_crds.append(obj)
            elif api_version == KubernetesConstants.CRD_V1BETA1_API_VERSION:
                manifest_set.v1beta1_crds.append(obj)
            else:
                logger.debug(f"Dropping CustomResourceDefinition {_name_of(obj)} with apiVersion {api_version}")
        elif kind == Kind.SERVICE_ACCOUNT:
            manifest_set.service_accounts.append(obj)
        elif kind == Kind.SERVICE:
            manifest_set.services.append(obj)
        elif kind in BundleConstants.SUPPORTED_KINDS:
            manifest_set.others.append(obj)
        else:
            logger.debug(f"Dropping {kind} {_name_of(obj)}: kind is not supported in bundles")

    manifest_set.roles = csv_permission_objects(manifest_set.csv, 'permissions', Kind.ROLE.value)
    manifest_set.cluster_roles = csv_permission_objects(manifest_set.csv, 'clusterPermissions',
                                                        Kind.CLUSTER_ROLE.value)
    return manifest_set


def collect_manifests(directory: Union[str, Path], version: str) -> VersionedManifestSet:
    """
    Load and classify all objects of a version directory.

    Args:
        directory: Version directory
        version: Normalized version string

    Returns:
        VersionedManifestSet for the directory
    """
    directory = Path(directory)
    objects = load_objects(directory)
    manifest_set = partition_objects(version, directory, objects)
    logger.debug(f"Collected {len(objects)} objects from {directory} "
                 f"(crd v1/v1beta1, sa, svc, other, role, clusterrole: {manifest_set.counts()})")
    return manifest_set


def _name_of(obj: Dict[str, Any]) -> str:
    return (obj.get('metadata') or {}).get('name', '<unnamed>')
