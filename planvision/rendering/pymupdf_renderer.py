import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from PIL import Image

from planvision.rendering.base import BasePageRenderer, PageSource


class _PyMuPdfPages(PageSource):
    def __init__(self, document: Any, scale: float, lock: threading.Lock) -> None:
        self._document = document
        self._scale = scale
        self._lock = lock

    @property
    def page_count(self) -> int:
        with self._lock:
            return int(self._document.page_count)

    def render(self, page_index: int) -> Image.Image:
        import pymupdf

        with self._lock:
            page = self._document.load_page(page_index)
            pixmap = page.get_pixmap(matrix=pymupdf.Matrix(self._scale, self._scale), alpha=False)
            return Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)


class PyMuPdfRenderer(BasePageRenderer):
    """Rasterizes PDF pages with PyMuPDF (MuPDF)."""

    backend_modules = ("pymupdf",)
    package_name = "pymupdf"

    @contextmanager
    def open(self, path: Path) -> Iterator[PageSource]:
        import pymupdf

        with self.backend_lock:
            document = pymupdf.open(str(path), filetype="pdf")  # type: ignore[no-untyped-call]
        try:
            yield _PyMuPdfPages(document, self._scale, self.backend_lock)
        finally:
            with self.backend_lock:
                document.close()

    def self_check(self) -> None:
        super().self_check()
        import pymupdf

        with self.backend_lock:
            with pymupdf.open() as document:  # type: ignore[no-untyped-call]
                page = document.new_page(width=72, height=72)
                page.get_pixmap()
