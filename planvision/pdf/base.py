import importlib
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

# PDFium and MuPDF are not thread-safe. Every call into either backend,
# from any adapter or renderer, holds this lock for the duration of that call.
NATIVE_BACKEND_LOCK = threading.Lock()


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    backend_modules: ClassVar[tuple[str, ...]]

    @abstractmethod
    def extract(self, path: Path) -> str:
        """Extract the embedded text layer of a PDF.

        Args:
            path: Location of the PDF on disk.

        Returns:
            Extracted text as a single normalized string. Scanned or
            image-only PDFs yield an empty string.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """

    def self_check(self) -> None:
        """Import the backend libraries; raises if any cannot be loaded."""
        for module in self.backend_modules:
            importlib.import_module(module)
