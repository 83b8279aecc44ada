from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from planvision.logging.logger import Log


@dataclass(frozen=True)
class TextExtraction:
    """Text pulled from one file, or the reason it could not be."""

    text: str = ""
    error: str | None = None
    truncated: bool = False


class BaseTextExtractor(ABC):
    """Contract for per-format text extractors.

    Subclasses implement ``_read``; ``extract`` owns the length bound and
    turns any failure into ``TextExtraction.error`` so one bad file never
    aborts its siblings.
    """

    def __init__(self, max_chars: int) -> None:
        self._max_chars = max_chars

    def extract(self, path: Path) -> TextExtraction:
        try:
            text = self._read(path)
        except Exception as exc:
            Log.warning(f"{type(self).__name__} failed on {path.name}: {exc}")
            return TextExtraction(error=str(exc) or type(exc).__name__)
        if len(text) > self._max_chars:
            return TextExtraction(text=text[: self._max_chars], truncated=True)
        return TextExtraction(text=text)

    @abstractmethod
    def _read(self, path: Path) -> str:
        """Return the full text of the file at *path*."""
