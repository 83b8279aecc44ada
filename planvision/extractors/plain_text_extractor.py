from pathlib import Path

from planvision.extractors.base import BaseTextExtractor


class PlainTextExtractor(BaseTextExtractor):
    """Decodes the file as UTF-8; undecodable bytes become U+FFFD."""

    def _read(self, path: Path) -> str:
        return path.read_bytes().decode("utf-8", errors="replace")
