from planvision.documents.exceptions import ExtractionFailureError


class PdfExtractionError(ExtractionFailureError):
    """Raised when a PDF text layer cannot be read."""
