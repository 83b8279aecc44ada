from pathlib import Path

from planvision.capabilities.models import CapabilityReport
from planvision.config.settings import Settings
from planvision.documents.classifier import FormatClassifier
from planvision.documents.exceptions import IngestionError
from planvision.documents.models import ExtractionResult, UploadedFile
from planvision.extractors.factory import TextExtractorFactory
from planvision.logging.logger import Log
from planvision.pdf.base import BasePdfExtractor
from planvision.processor.file_loader import FileLoader
from planvision.processor.pipeline import FileContext, PipelineStep
from planvision.processor.steps import (
    CheckSizeStep,
    ClassifyStep,
    ExtractTextStep,
    NormalizeImageStep,
    RasterizeStep,
)
from planvision.rendering.base import BasePageRenderer
from planvision.rendering.budget import ImageBudget
from planvision.rendering.image_normalizer import ImageNormalizer
from planvision.rendering.rasterizer import PageRasterizer


class FileProcessor:
    """Runs the per-file pipeline inside one staged-storage scope.

    Pipeline: checks -> stage -> classify -> extract text ->
    rasterize (PDF) / normalize (image) -> release.
    ``checks`` run on the upload metadata before anything is written to
    disk; a rejected upload is released without being staged.
    Any failure becomes the ``error`` of the returned result.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        file_loader: FileLoader,
        checks: list[PipelineStep] | None = None,
    ) -> None:
        self._steps = steps
        self._checks = checks or []
        self._file_loader = file_loader

    def process(
        self,
        upload: UploadedFile,
        page_limit: int,
        max_file_size_bytes: int,
    ) -> ExtractionResult:
        """Process one upload; never raises."""
        Log.info(f"Processing {upload.filename} ({upload.size_bytes} bytes)")
        context = FileContext(
            upload=upload,
            page_limit=page_limit,
            max_file_size_bytes=max_file_size_bytes,
        )
        try:
            for check in self._checks:
                context = check.run(context)
        except IngestionError as exc:
            self._file_loader.release(upload)
            Log.warning(f"{upload.filename} rejected: {exc}")
            return self._failed(context, exc)

        try:
            with self._file_loader.stage(upload) as path:
                context.path = path
                for step in self._steps:
                    context = step.run(context)
        except IngestionError as exc:
            Log.warning(f"{upload.filename} failed: {exc}")
            return self._failed(context, exc)
        except Exception as exc:
            Log.exception(f"Unexpected error while processing {upload.filename}: {exc}")
            return self._failed(context, exc)

        result = self._to_result(context)
        Log.info(
            f"{upload.filename}: {result.status.value}, {len(result.text_content)} chars, "
            f"{len(result.pages)} pages, blueprint-like={result.is_blueprint_like}"
        )
        return result

    def discard(self, upload: UploadedFile) -> None:
        """Release an upload that will not be processed."""
        self._file_loader.release(upload)

    def _to_result(self, context: FileContext) -> ExtractionResult:
        classification = context.classification
        return ExtractionResult(
            filename=context.upload.filename,
            content_type=context.upload.content_type,
            size_bytes=context.upload.size_bytes,
            strategy=classification.strategy if classification else None,
            text_content=context.text,
            is_blueprint_like=classification.is_blueprint_like if classification else False,
            pages=list(context.pages),
            warnings=list(context.warnings),
        )

    def _failed(self, context: FileContext, exc: Exception) -> ExtractionResult:
        result = self._to_result(context)
        result.text_content = ""
        result.pages = []
        result.error = str(exc) or type(exc).__name__
        result.error_type = type(exc).__name__
        return result


def build_processor(
    settings: Settings,
    capabilities: CapabilityReport,
    renderer: BasePageRenderer,
    pdf_adapter: BasePdfExtractor,
    temp_root: Path | None = None,
) -> FileProcessor:
    """Build a FileProcessor with all required adapters."""
    budget = ImageBudget(
        max_bytes=settings.max_page_bytes,
        max_dimension=settings.max_image_dimension,
        quality=settings.jpeg_quality,
        retry_quality=settings.retry_jpeg_quality,
    )
    steps: list[PipelineStep] = [
        ClassifyStep(FormatClassifier()),
        ExtractTextStep(
            TextExtractorFactory.create(settings, pdf_adapter=pdf_adapter),
            pdf_text_available=capabilities.text_extractor_available,
        ),
        RasterizeStep(PageRasterizer(renderer, budget, capabilities)),
        NormalizeImageStep(ImageNormalizer(budget)),
    ]
    if temp_root is None and settings.temp_dir:
        temp_root = Path(settings.temp_dir)
    return FileProcessor(
        steps=steps,
        file_loader=FileLoader(temp_root=temp_root),
        checks=[CheckSizeStep()],
    )
