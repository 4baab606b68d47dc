"""
Exceptions

Exception hierarchy for the package manifest to bundle converter.
I/O failures are not wrapped: the underlying OSError propagates with its path.
"""


class PkgmanToBundleError(Exception):
    """Base exception for all conversion errors"""
    pass


class ValidationError(PkgmanToBundleError):
    """Invalid input: bad arguments, missing package data or CSV"""
    pass


class NoCSVFoundError(ValidationError):
    """A version directory holds no ClusterServiceVersion"""
    pass


class MultipleCSVError(ValidationError):
    """A version directory holds more than one ClusterServiceVersion"""
    pass


class ManifestParseError(PkgmanToBundleError):
    """An input file is not valid YAML"""
    pass


class SerializationError(PkgmanToBundleError):
    """An object or template could not be serialized"""
    pass


class ConfigurationError(PkgmanToBundleError):
    """Configuration file could not be loaded or is invalid"""
    pass
