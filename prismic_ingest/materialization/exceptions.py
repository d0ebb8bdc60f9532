class MaterializationError(Exception):
    """Base exception for field materialization failures."""


class UnexpectedValueError(MaterializationError):
    """Raised when a raw value does not have the shape its registered type needs."""


class RemoteFileFetchError(MaterializationError):
    """Raised when a remote file cannot be downloaded or stored."""
