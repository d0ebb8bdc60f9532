class SchemaError(Exception):
    """Base exception for custom type schema failures."""


class SchemaLoadError(SchemaError):
    """Raised when a custom type file cannot be read or decoded."""


class SchemaCompilationError(SchemaError):
    """Raised when a custom type cannot be compiled. Never recoverable."""


class UnknownFieldKindError(SchemaCompilationError):
    """Raised when a field declares a kind outside the supported set."""


class MalformedFieldConfigError(SchemaCompilationError):
    """Raised when a field's config does not match the shape its kind requires."""


class DuplicateTypePathError(SchemaCompilationError):
    """Raised when two fields resolve to the same structural path."""
