"""
Object Classifier & Deduplicator

Decides which collected objects go into a bundle, in which order, and under
which file name.
"""

import logging
from typing import Callable, Dict, Iterable, List

from ..core.constants import BundleConstants
from .models import BundleFileEntry, BundleObject, GroupVersionKind, KubeObject, ObjectVariant, VersionedManifestSet

logger = logging.getLogger(__name__)


def make_object_file_name(obj: KubeObject) -> str:
    """
    Generic file name: <name>_<group>_<version>_<kind>.yaml

    The group segment is left out entirely for the core API group.
    """
    gvk = GroupVersionKind.from_object(obj)
    name = (obj.get('metadata') or {}).get('name', '')
    kind = gvk.kind.lower()
    if not gvk.group:
        return f"{name}_{gvk.version}_{kind}.yaml"
    return f"{name}_{gvk.group}_{gvk.version}_{kind}.yaml"


def make_crd_file_name(obj: KubeObject) -> str:
    """CRD file name <group>_<plural>.yaml, falling back to the generic rule"""
    spec = obj.get('spec') or {}
    group = spec.get('group') or ''
    plural = (spec.get('names') or {}).get('plural') or ''
    if group and plural:
        return f"{group}_{plural}.yaml"
    return make_object_file_name(obj)


NAMING_RULES: Dict[ObjectVariant, Callable[[KubeObject], str]] = {
    ObjectVariant.CRD_V1: make_crd_file_name,
    ObjectVariant.CRD_V1BETA1: make_crd_file_name,
    ObjectVariant.OTHER: make_object_file_name,
}


def file_name_for(bundle_object: BundleObject) -> str:
    """Base file name of an object according to its variant"""
    return NAMING_RULES[bundle_object.variant](bundle_object.obj)


def is_supported(obj: KubeObject) -> bool:
    """Whether a bundle may carry objects of this kind"""
    return obj.get('kind') in BundleConstants.SUPPORTED_KINDS


def get_manifest_objects(manifest_set: VersionedManifestSet) -> List[BundleObject]:
    """
    List the objects to write into a bundle's manifests/ directory.

    Objects come out in a fixed order: v1 CRDs, v1beta1 CRDs, ServiceAccounts,
    Services, other supported kinds, Roles and ClusterRoles built from the CSV
    permissions, then the CSV. Every returned object has no namespace.

    Args:
        manifest_set: Collected objects of one version

    Returns:
        List of BundleObject
    """
    tagged = [BundleObject(ObjectVariant.CRD_V1, obj) for obj in manifest_set.v1_crds]
    tagged += [BundleObject(ObjectVariant.CRD_V1BETA1, obj) for obj in manifest_set.v1beta1_crds]
    for group in (manifest_set.service_accounts, manifest_set.services, manifest_set.others,
                  manifest_set.roles, manifest_set.cluster_roles, [manifest_set.csv]):
        tagged += [BundleObject(ObjectVariant.OTHER, obj) for obj in group]

    objects = []
    for bundle_object in tagged:
        if not is_supported(bundle_object.obj):
            logger.debug(f"Dropping {bundle_object.kind} {bundle_object.name}: kind is not supported in bundles")
            continue
        bundle_object.clear_namespace()
        objects.append(bundle_object)
    return objects


def assign_file_names(objects: Iterable[BundleObject]) -> List[BundleFileEntry]:
    """
    Give every object a unique file name.

    A name already taken gets a dup<N>_ prefix, N being the number of
    collisions seen so far in this bundle.

    Args:
        objects: Objects in encounter order

    Returns:
        List of BundleFileEntry in the same order
    """
    seen = set()
    dup_count = 0
    entries = []

    for bundle_object in objects:
        base_name = file_name_for(bundle_object)
        file_name = base_name
        while file_name in seen:
            file_name = f"{BundleConstants.DUPLICATE_PREFIX}{dup_count}_{base_name}"
            dup_count += 1
        if file_name != base_name:
            logger.warning(f"Duplicate file name {base_name} for {bundle_object.kind} "
                           f"{bundle_object.name}, writing it as {file_name}")
        seen.add(file_name)
        entries.append(BundleFileEntry(file_name=file_name, obj=bundle_object))

    return entries
