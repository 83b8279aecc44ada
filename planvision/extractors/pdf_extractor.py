from pathlib import Path

from planvision.extractors.base import BaseTextExtractor
from planvision.pdf.base import BasePdfExtractor


class PdfTextExtractor(BaseTextExtractor):
    """Reads the embedded text layer through the configured PDF adapter."""

    def __init__(self, adapter: BasePdfExtractor, max_chars: int) -> None:
        super().__init__(max_chars)
        self._adapter = adapter

    def _read(self, path: Path) -> str:
        return self._adapter.extract(path)
