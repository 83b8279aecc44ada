from planvision.config.settings import Settings
from planvision.pdf.base import BasePdfExtractor
from planvision.pdf.pdfplumber_adapter import PdfPlumberAdapter
from planvision.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Maps the configured text engine name to a PDF text-layer adapter."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings, engine: str | None = None) -> BasePdfExtractor:
        name = (engine or settings.pdf_engine).strip().lower()
        try:
            return cls.ADAPTERS[name]()
        except KeyError:
            raise ValueError(
                f"Unknown PDF text engine '{name}'. Choose from: {sorted(cls.ADAPTERS)}"
            ) from None
