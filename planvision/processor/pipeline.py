from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from planvision.documents.models import Classification, RasterPage, UploadedFile


@dataclass(slots=True)
class FileContext:
    upload: UploadedFile
    page_limit: int
    max_file_size_bytes: int
    path: Path | None = None
    classification: Classification | None = None
    text: str = ""
    pages: list[RasterPage] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: FileContext) -> FileContext:
        raise NotImplementedError
