from pathlib import Path

from planvision.pdf.base import NATIVE_BACKEND_LOCK, BasePdfExtractor
from planvision.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    backend_modules = ("pymupdf",)

    def extract(self, path: Path) -> str:
        import pymupdf

        try:
            with NATIVE_BACKEND_LOCK:
                with pymupdf.open(str(path), filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                    pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
