from planvision.config.settings import Settings
from planvision.rendering.base import BasePageRenderer
from planvision.rendering.pdfplumber_renderer import PdfPlumberRenderer
from planvision.rendering.pymupdf_renderer import PyMuPdfRenderer


class PageRendererFactory:
    """Maps the configured render engine name to a page renderer."""

    ADAPTERS: dict[str, type[BasePageRenderer]] = {
        "pymupdf": PyMuPdfRenderer,
        "pdfplumber": PdfPlumberRenderer,
    }

    @classmethod
    def create(cls, settings: Settings, engine: str | None = None) -> BasePageRenderer:
        name = (engine or settings.render_engine).strip().lower()
        try:
            adapter_cls = cls.ADAPTERS[name]
        except KeyError:
            raise ValueError(
                f"Unknown render engine '{name}'. Choose from: {sorted(cls.ADAPTERS)}"
            ) from None
        return adapter_cls(scale=settings.render_scale)
