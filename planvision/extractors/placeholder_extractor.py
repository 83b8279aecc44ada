from pathlib import Path

from planvision.extractors.base import BaseTextExtractor

WORD_DOCUMENT_PLACEHOLDER = "[Word document - text extraction requires additional processing]"
IMAGE_PLACEHOLDER = "[Image file - ready for vision analysis]"


class PlaceholderExtractor(BaseTextExtractor):
    """Returns a fixed marker for formats whose text is not parsed."""

    def __init__(self, placeholder: str, max_chars: int) -> None:
        super().__init__(max_chars)
        self._placeholder = placeholder

    def _read(self, path: Path) -> str:
        return self._placeholder
