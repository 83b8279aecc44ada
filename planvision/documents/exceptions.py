class IngestionError(Exception):
    """Base exception for all per-file ingestion errors."""


class UnsupportedFormatError(IngestionError):
    """Raised when neither extension nor content type matches a known format."""


class ExtractionFailureError(IngestionError):
    """Raised when format-specific text extraction fails."""


class FileTooLargeError(IngestionError):
    """Raised when an upload exceeds the configured size limit."""


class FileReadError(IngestionError):
    """Raised when an upload's bytes cannot be read or staged at all."""


class RasterizationError(IngestionError):
    """Raised when a PDF cannot be opened for page rendering."""


class ImageProcessingError(IngestionError):
    """Raised when an uploaded image cannot be decoded or re-encoded."""


class TooManyFilesError(Exception):
    """Raised when a request carries more files than allowed."""
