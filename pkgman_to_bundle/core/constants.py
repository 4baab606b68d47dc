"""
Constants Module

Centralized constants for the package manifest to bundle converter to
eliminate magic strings and improve maintainability.
"""

from enum import Enum


class KubernetesConstants:
    """Kubernetes-related constants"""

    # API versions
    RBAC_API_VERSION = "rbac.authorization.k8s.io/v1"
    CRD_V1_API_VERSION = "apiextensions.k8s.io/v1"
    CRD_V1BETA1_API_VERSION = "apiextensions.k8s.io/v1beta1"

    class Kind(str, Enum):
        """Kubernetes object kinds the converter handles explicitly"""
        CLUSTER_SERVICE_VERSION = "ClusterServiceVersion"
        CUSTOM_RESOURCE_DEFINITION = "CustomResourceDefinition"
        SERVICE_ACCOUNT = "ServiceAccount"
        SERVICE = "Service"
        ROLE = "Role"
        CLUSTER_ROLE = "ClusterRole"

        def __str__(self) -> str:
            """Return the kind for use in manifests"""
            return self.value


class BundleConstants:
    """Bundle layout constants"""

    # Kinds a bundle may carry. Anything else found in a package manifest is dropped.
    SUPPORTED_KINDS = frozenset({
        "ClusterServiceVersion",
        "CustomResourceDefinition",
        "Secret",
        "ClusterRole",
        "ClusterRoleBinding",
        "ConfigMap",
        "ServiceAccount",
        "Service",
        "Role",
        "RoleBinding",
        "PrometheusRule",
        "ServiceMonitor",
        "PodDisruptionBudget",
        "PriorityClass",
        "VerticalPodAutoscaler",
        "ConsoleYAMLSample",
        "ConsoleQuickStart",
        "ConsoleCLIDownload",
        "ConsoleLink",
        "NetworkPolicy",
    })

    # Directory and file names inside a bundle
    BUNDLE_DIR_PREFIX = "bundle-"
    MANIFESTS_DIR = "manifests"
    METADATA_DIR = "metadata"
    SCORECARD_DIR = "tests/scorecard"
    DOCKERFILE_NAME = "bundle.Dockerfile"
    ANNOTATIONS_FILE = "annotations.yaml"
    SCORECARD_CONFIG_FILE = "config.yaml"

    DEFAULT_CHANNEL = "alpha"
    DUPLICATE_PREFIX = "dup"

    class Label(str, Enum):
        """Labels written to bundle.Dockerfile and annotations.yaml"""
        MEDIATYPE = "operators.operatorframework.io.bundle.mediatype.v1"
        MANIFESTS = "operators.operatorframework.io.bundle.manifests.v1"
        METADATA = "operators.operatorframework.io.bundle.metadata.v1"
        PACKAGE = "operators.operatorframework.io.bundle.package.v1"
        CHANNELS = "operators.operatorframework.io.bundle.channels.v1"
        DEFAULT_CHANNEL = "operators.operatorframework.io.bundle.channel.default.v1"
        TEST_MEDIATYPE = "operators.operatorframework.io.test.mediatype.v1"
        TEST_CONFIG = "operators.operatorframework.io.test.config.v1"

        def __str__(self) -> str:
            """Return the label key"""
            return self.value

    # CSV annotation -> bundle label for the carried provenance annotations
    CARRIED_ANNOTATIONS = {
        "operators.operatorframework.io/builder": "operators.operatorframework.io.metrics.builder",
        "operators.operatorframework.io/project_layout": "operators.operatorframework.io.metrics.project_layout",
    }


class FileConstants:
    """File related constants"""

    PACKAGE_FILE_SUFFIX = "package.yaml"
    DEFAULT_OUTPUT_DIR = "bundle"
    DEFAULT_BUILD_CMD = "docker build -t"
    DIR_MODE = 0o755

    class FileExtension(str, Enum):
        """File extensions read from a package manifest directory"""
        YAML = ".yaml"
        YML = ".yml"
        JSON = ".json"

        def __str__(self) -> str:
            """Return the extension value for use in file operations"""
            return self.value

        @classmethod
        def get_manifest_extensions(cls) -> list:
            """Get file extensions for Kubernetes manifests"""
            return [cls.YAML.value, cls.YML.value, cls.JSON.value]


class ErrorMessages:
    """Centralized error message templates"""

    class ValidationError(str, Enum):
        """Input validation error message templates"""
        ARGUMENT_REQUIRED = "a package manifest directory argument is required"
        NOT_A_DIRECTORY = "package manifest path {directory} is not a directory"
        NO_PACKAGES = "no packages found in directory {directory}"
        OUTPUT_CONTAINS_INPUT = "output directory {output_dir} must not contain the package manifest directory {directory}"
        DUPLICATE_VERSION = "directories {first} and {second} both hold version {version}"
        NO_PACKAGE_NAME = "package manifest {path} has no packageName"
        MULTIPLE_PACKAGES = "more than one package manifest found in {directory}: {paths}"
        NO_CSV = "no CSV found in {directory}"
        MULTIPLE_CSVS = "found {count} ClusterServiceVersions in {directory}, expected exactly one"

        def __str__(self) -> str:
            """Return the error message template"""
            return self.value

    class ManifestError(str, Enum):
        """Manifest parsing and serialization error message templates"""
        PARSE_FAILED = "failed to parse {path}: {error}"
        SERIALIZE_FAILED = "failed to serialize {file_name}: {error}"
        RENDER_FAILED = "failed to render {template}: {error}"

        def __str__(self) -> str:
            """Return the error message template"""
            return self.value

    class ConfigError(str, Enum):
        """Configuration-related error message templates"""
        CONFIG_FILE_NOT_FOUND = "Configuration file not found: {config_path}"
        CONFIG_NOT_A_FILE = "Configuration path is not a file: {config_path}"
        INVALID_YAML = "Invalid YAML in configuration file {config_path}: {error}"

        def __str__(self) -> str:
            """Return the error message template"""
            return self.value
