import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from PIL import Image

from planvision.rendering.base import BasePageRenderer, PageSource


class _PdfPlumberPages(PageSource):
    def __init__(self, pdf: Any, resolution: int, lock: threading.Lock) -> None:
        self._pdf = pdf
        self._resolution = resolution
        self._lock = lock

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def render(self, page_index: int) -> Image.Image:
        page = self._pdf.pages[page_index]
        # to_image opens the file in pypdfium2 for each page
        with self._lock:
            page_image = page.to_image(resolution=self._resolution)
            return page_image.original.convert("RGB")


class PdfPlumberRenderer(BasePageRenderer):
    """Rasterizes PDF pages through pdfplumber's pypdfium2 backend."""

    backend_modules = ("pdfplumber", "pypdfium2")
    package_name = "pdfplumber"

    @contextmanager
    def open(self, path: Path) -> Iterator[PageSource]:
        import pdfplumber

        with pdfplumber.open(path) as pdf:
            yield _PdfPlumberPages(pdf, round(72 * self._scale), self.backend_lock)
