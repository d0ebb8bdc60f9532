class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class CompiledSchemaNotFoundError(ProcessorError):
    """Raised when no compiled schema is stored for a custom type."""


class UnsupportedDocumentError(ProcessorError):
    """Raised when a raw document has no custom type to materialize it with."""
