"""
Manifest Data Models

Typed containers for the objects of one package manifest version.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

KubeObject = Dict[str, Any]


class ObjectVariant(Enum):
    """Closed set of object variants, each with its own file naming rule"""
    CRD_V1 = "crd_v1"
    CRD_V1BETA1 = "crd_v1beta1"
    OTHER = "other"


class GroupVersionKind(NamedTuple):
    """API group, version and kind of an object"""
    group: str
    version: str
    kind: str

    @classmethod
    def from_object(cls, obj: KubeObject) -> 'GroupVersionKind':
        """Split an object's apiVersion into group and version"""
        api_version = obj.get('apiVersion') or ''
        group, _, version = api_version.rpartition('/')
        return cls(group=group, version=version, kind=obj.get('kind') or '')


@dataclass
class BundleObject:
    """A Kubernetes object tagged with its naming variant"""
    variant: ObjectVariant
    obj: KubeObject

    @property
    def kind(self) -> str:
        return self.obj.get('kind', '')

    @property
    def name(self) -> str:
        return (self.obj.get('metadata') or {}).get('name', '')

    @property
    def namespace(self) -> str:
        return (self.obj.get('metadata') or {}).get('namespace') or ''

    def clear_namespace(self) -> None:
        """Drop metadata.namespace; OLM assigns the namespace at install time"""
        metadata = self.obj.get('metadata')
        if isinstance(metadata, dict):
            metadata.pop('namespace', None)


class BundleFileEntry(NamedTuple):
    """Destination file name of an object inside manifests/"""
    file_name: str
    obj: BundleObject


@dataclass
class VersionedManifestSet:
    """All objects found in one version directory, partitioned by kind"""
    version: str
    source_dir: Path
    csv: KubeObject
    v1_crds: List[KubeObject] = field(default_factory=list)
    v1beta1_crds: List[KubeObject] = field(default_factory=list)
    service_accounts: List[KubeObject] = field(default_factory=list)
    services: List[KubeObject] = field(default_factory=list)
    others: List[KubeObject] = field(default_factory=list)
    roles: List[KubeObject] = field(default_factory=list)
    cluster_roles: List[KubeObject] = field(default_factory=list)

    @property
    def csv_name(self) -> Optional[str]:
        return (self.csv.get('metadata') or {}).get('name')

    def csv_annotations(self) -> Dict[str, Any]:
        """Annotations declared on the CSV"""
        return (self.csv.get('metadata') or {}).get('annotations') or {}

    def counts(self) -> Tuple[int, ...]:
        return (len(self.v1_crds), len(self.v1beta1_crds), len(self.service_accounts),
                len(self.services), len(self.others), len(self.roles), len(self.cluster_roles))
