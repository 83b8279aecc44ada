import base64
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FormatStrategy(str, Enum):
    """Handling strategy selected for an upload."""

    PDF = "pdf"
    SPREADSHEET = "spreadsheet"
    PLAIN_TEXT = "plain_text"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


class ResultStatus(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class Classification:
    """Output of the format classifier."""

    strategy: FormatStrategy
    is_blueprint_like: bool
    extension: str = ""


@dataclass(frozen=True)
class UploadedFile:
    """A file handed over by the upload transport.

    Exactly one of ``content`` or ``path`` is set. When ``delete_after`` is
    true the file at ``path`` is treated as temporary storage and removed
    once ingestion finishes with it.
    """

    filename: str
    content_type: str
    size_bytes: int
    content: bytes | None = field(default=None, repr=False)
    path: Path | None = None
    delete_after: bool = False

    def __post_init__(self) -> None:
        if (self.content is None) == (self.path is None):
            raise ValueError("UploadedFile needs exactly one of content or path")

    @classmethod
    def from_bytes(cls, filename: str, content: bytes, content_type: str = "") -> "UploadedFile":
        return cls(
            filename=filename,
            content_type=content_type,
            size_bytes=len(content),
            content=content,
        )

    @classmethod
    def from_path(
        cls,
        path: Path,
        content_type: str = "",
        filename: str | None = None,
        delete_after: bool = False,
    ) -> "UploadedFile":
        return cls(
            filename=filename or path.name,
            content_type=content_type,
            size_bytes=path.stat().st_size,
            path=path,
            delete_after=delete_after,
        )


@dataclass(frozen=True)
class RasterPage:
    """One encoded page image ready for a multimodal analyzer."""

    source_filename: str
    page_index: int  # 1-based
    image_bytes: bytes = field(repr=False)
    media_type: str
    width: int = 0
    height: int = 0
    oversized: bool = False  # still above the byte budget after the single retry

    @property
    def byte_size(self) -> int:
        return len(self.image_bytes)

    def to_base64(self) -> str:
        return base64.b64encode(self.image_bytes).decode("ascii")

    def to_content_block(self) -> dict[str, object]:
        """Render as a base64 image block for multimodal message APIs."""
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": self.media_type,
                "data": self.to_base64(),
            },
        }


@dataclass
class ExtractionResult:
    """Per-file outcome of ingestion."""

    filename: str
    content_type: str
    size_bytes: int = 0
    strategy: FormatStrategy | None = None
    text_content: str = ""
    is_blueprint_like: bool = False
    pages: list[RasterPage] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None
    error_type: str | None = None

    @property
    def status(self) -> ResultStatus:
        if self.error is not None:
            return ResultStatus.FAILED
        if self.warnings:
            return ResultStatus.DEGRADED
        return ResultStatus.OK

    @property
    def has_vision_data(self) -> bool:
        return bool(self.pages)

    def to_dict(self) -> dict[str, object]:
        """JSON-ready summary; image bytes are reported by size only."""
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "size_bytes": self.size_bytes,
            "strategy": self.strategy.value if self.strategy else None,
            "status": self.status.value,
            "text_length": len(self.text_content),
            "is_blueprint_like": self.is_blueprint_like,
            "pages": [
                {
                    "page_index": page.page_index,
                    "media_type": page.media_type,
                    "byte_size": page.byte_size,
                    "width": page.width,
                    "height": page.height,
                    "oversized": page.oversized,
                }
                for page in self.pages
            ],
            "warnings": list(self.warnings),
            "error": self.error,
            "error_type": self.error_type,
        }


@dataclass(frozen=True)
class VisionBatch:
    """Order-preserving, page-capped image collection across one upload."""

    pages: tuple[RasterPage, ...] = ()
    dropped_page_count: int = 0
    total_candidate_pages: int = 0

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[RasterPage]:
        return iter(self.pages)

    @property
    def is_truncated(self) -> bool:
        return self.dropped_page_count > 0

    def to_content_blocks(self) -> list[dict[str, object]]:
        return [page.to_content_block() for page in self.pages]
