class ExtractorError(Exception):
    """Base class for recoverable errors of the extraction flow."""


class ValidationError(ExtractorError):
    """Input rejected before any network activity (e.g. not an image)."""


class EncodingError(ExtractorError):
    """File content could not be read or encoded."""


class ConfigurationError(RuntimeError):
    """Missing or invalid startup configuration. Not recoverable at runtime."""
