import re
from pathlib import PurePath
from typing import ClassVar

from planvision.documents.exceptions import UnsupportedFormatError
from planvision.documents.models import Classification, FormatStrategy


class FormatClassifier:
    """Selects a handling strategy and flags drawing-like uploads.

    The extension decides first; the declared content type is the fallback
    when the extension is missing or unknown. The blueprint flag is an
    advisory heuristic over the filename only.
    """

    EXTENSIONS: ClassVar[dict[str, FormatStrategy]] = {
        ".pdf": FormatStrategy.PDF,
        ".xlsx": FormatStrategy.SPREADSHEET,
        ".xls": FormatStrategy.SPREADSHEET,
        ".txt": FormatStrategy.PLAIN_TEXT,
        ".md": FormatStrategy.PLAIN_TEXT,
        ".csv": FormatStrategy.PLAIN_TEXT,
        ".jpg": FormatStrategy.IMAGE,
        ".jpeg": FormatStrategy.IMAGE,
        ".png": FormatStrategy.IMAGE,
        ".gif": FormatStrategy.IMAGE,
        ".webp": FormatStrategy.IMAGE,
        ".tif": FormatStrategy.IMAGE,
        ".tiff": FormatStrategy.IMAGE,
        ".doc": FormatStrategy.UNSUPPORTED,
        ".docx": FormatStrategy.UNSUPPORTED,
    }

    CONTENT_TYPES: ClassVar[dict[str, FormatStrategy]] = {
        "application/pdf": FormatStrategy.PDF,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (
            FormatStrategy.SPREADSHEET
        ),
        "application/vnd.ms-excel": FormatStrategy.SPREADSHEET,
        "text/plain": FormatStrategy.PLAIN_TEXT,
        "text/markdown": FormatStrategy.PLAIN_TEXT,
        "text/csv": FormatStrategy.PLAIN_TEXT,
        "image/jpeg": FormatStrategy.IMAGE,
        "image/png": FormatStrategy.IMAGE,
        "image/gif": FormatStrategy.IMAGE,
        "image/webp": FormatStrategy.IMAGE,
        "image/tiff": FormatStrategy.IMAGE,
        "application/msword": FormatStrategy.UNSUPPORTED,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (
            FormatStrategy.UNSUPPORTED
        ),
    }

    BLUEPRINT_KEYWORDS: ClassVar[tuple[str, ...]] = (
        "floor", "plan", "blueprint", "drawing", "drwg", "layout", "elevation",
        "section", "detail", "sheet", "dwg", "arch", "mep", "elec", "technology",
        "reflected", "ceiling", "rcp", "site", "civil", "structural",
        "mechanical", "plumbing", "fire", "life safety", "security",
    )

    # A1, E-101, M1.1, FP2, LS1 at the start; A0.01 / E-1.01 anywhere, even glued to a word.
    SHEET_PATTERNS: ClassVar[tuple[re.Pattern[str], ...]] = (
        re.compile(r"^(?:[aemps]|fp|fa|ls)-?\d+(?:\.\d+)?", re.IGNORECASE),
        re.compile(r"[aemps]-?\d+\.\d+", re.IGNORECASE),
    )

    def classify(self, filename: str, content_type: str = "") -> Classification:
        """Return the strategy and blueprint flag for an upload.

        Raises:
            UnsupportedFormatError: if neither extension nor content type is known.
        """
        extension = PurePath(filename).suffix.lower()
        strategy = self.EXTENSIONS.get(extension)
        if strategy is None:
            strategy = self.CONTENT_TYPES.get(self._base_type(content_type))
        if strategy is None:
            raise UnsupportedFormatError(
                f"File type not allowed: '{filename}' ({content_type or 'no content type'})"
            )
        return Classification(
            strategy=strategy,
            is_blueprint_like=self.is_blueprint_like(filename),
            extension=extension,
        )

    def is_blueprint_like(self, filename: str) -> bool:
        name = PurePath(filename).name.lower()
        if any(keyword in name for keyword in self.BLUEPRINT_KEYWORDS):
            return True
        stem = PurePath(name).stem
        return any(pattern.search(stem) for pattern in self.SHEET_PATTERNS)

    @staticmethod
    def _base_type(content_type: str) -> str:
        return content_type.split(";", 1)[0].strip().lower()
