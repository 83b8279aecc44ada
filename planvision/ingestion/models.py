from dataclasses import dataclass, field

from planvision.capabilities.models import CapabilityReport
from planvision.config.settings import Settings
from planvision.documents.models import ExtractionResult, ResultStatus, VisionBatch


@dataclass(frozen=True)
class IngestionConfig:
    """Request-level limits recognized by the ingestor."""

    max_file_size_bytes: int
    max_files_per_upload: int
    max_batch_pages: int
    stop_at_batch_cap: bool = False

    def __post_init__(self) -> None:
        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        if self.max_files_per_upload <= 0:
            raise ValueError("max_files_per_upload must be positive")
        if self.max_batch_pages < 0:
            raise ValueError("max_batch_pages must be >= 0")

    @classmethod
    def from_settings(cls, settings: Settings) -> "IngestionConfig":
        return cls(
            max_file_size_bytes=settings.max_file_size_bytes,
            max_files_per_upload=settings.max_files_per_upload,
            max_batch_pages=settings.max_batch_pages,
            stop_at_batch_cap=settings.stop_at_batch_cap,
        )


@dataclass(frozen=True)
class IngestionOutcome:
    """Everything one ingest call produced, including partial failures."""

    results: list[ExtractionResult] = field(default_factory=list)
    batch: VisionBatch = field(default_factory=VisionBatch)
    capabilities: CapabilityReport | None = None

    @property
    def successful(self) -> list[ExtractionResult]:
        return [r for r in self.results if r.status is not ResultStatus.FAILED]

    @property
    def errors(self) -> list[dict[str, str | None]]:
        return [
            {"filename": r.filename, "error": r.error, "error_type": r.error_type}
            for r in self.results
            if r.status is ResultStatus.FAILED
        ]

    def to_dict(self) -> dict[str, object]:
        return {
            "processed": len(self.successful),
            "failed": len(self.errors),
            "documents": [r.to_dict() for r in self.results],
            "errors": self.errors,
            "batch": {
                "pages": [
                    {"source_filename": p.source_filename, "page_index": p.page_index}
                    for p in self.batch.pages
                ],
                "dropped_page_count": self.batch.dropped_page_count,
                "total_candidate_pages": self.batch.total_candidate_pages,
            },
            "capabilities": self.capabilities.to_status() if self.capabilities else None,
        }
