"""
Shared fixtures: a small package manifest directory with two versions.
"""

import pytest

from test_constants import ManifestFactory, PackageTestConstants as C


@pytest.fixture
def pkgmanifest_dir(tmp_path):
    """
    Package manifest tree:

        memcached-operator.package.yaml
        README.md
        docs/notes.yaml             (not a version directory)
        0.0.1/                      v1beta1 CRD + CSV
        0.0.2/                      v1 CRD, RBAC in CSV, SA, Service, ConfigMap, Deployment
    """
    root = tmp_path / "packagemanifests"
    ManifestFactory.write(
        root / f"{C.PACKAGE_NAME}.package.yaml",
        ManifestFactory.package(
            C.PACKAGE_NAME,
            [{"name": C.STABLE_CHANNEL, "currentCSV": f"{C.PACKAGE_NAME}.v0.0.2"},
             {"name": C.FAST_CHANNEL, "currentCSV": f"{C.PACKAGE_NAME}.v0.0.2"}],
            default_channel=C.STABLE_CHANNEL,
        ),
    )
    (root / "README.md").write_text("# memcached-operator\n")
    ManifestFactory.write(root / "docs" / "notes.yaml", {"notes": "not a version"})

    ManifestFactory.write(
        root / "0.0.1" / f"{C.PACKAGE_NAME}.v0.0.1.clusterserviceversion.yaml",
        ManifestFactory.csv(f"{C.PACKAGE_NAME}.v0.0.1"),
    )
    ManifestFactory.write(
        root / "0.0.1" / "memcacheds.crd.yaml",
        ManifestFactory.crd(C.CRD_GROUP, C.CRD_PLURAL, C.CRD_KIND, api_version="apiextensions.k8s.io/v1beta1"),
    )

    ManifestFactory.write(
        root / "0.0.2" / f"{C.PACKAGE_NAME}.v0.0.2.clusterserviceversion.yaml",
        ManifestFactory.csv(
            f"{C.PACKAGE_NAME}.v0.0.2",
            namespace="placeholder",
            annotations={
                C.BUILDER_ANNOTATION: C.BUILDER,
                C.LAYOUT_ANNOTATION: C.PROJECT_LAYOUT,
                "capabilities": "Basic Install",
            },
            permissions=[{"serviceAccountName": C.SERVICE_ACCOUNT, "rules": C.RULES}],
            cluster_permissions=[{"serviceAccountName": C.SERVICE_ACCOUNT, "rules": C.CLUSTER_RULES}],
        ),
    )
    ManifestFactory.write(
        root / "0.0.2" / "memcacheds.crd.yaml",
        ManifestFactory.crd(C.CRD_GROUP, C.CRD_PLURAL, C.CRD_KIND),
    )
    ManifestFactory.write(
        root / "0.0.2" / "extras.yaml",
        ManifestFactory.object("v1", "ServiceAccount", C.SERVICE_ACCOUNT, namespace="memcached-system"),
        ManifestFactory.object("v1", "Service", "memcached-operator-metrics", namespace="memcached-system"),
        ManifestFactory.object("v1", "ConfigMap", "memcached-operator-manager-config", namespace="memcached-system"),
        ManifestFactory.object("apps/v1", "Deployment", "memcached-operator-controller-manager"),
        {"description": "not a kubernetes object"},
    )
    return root
