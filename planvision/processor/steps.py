from planvision.documents.classifier import FormatClassifier
from planvision.documents.exceptions import (
    ExtractionFailureError,
    FileTooLargeError,
    RasterizationError,
)
from planvision.documents.models import FormatStrategy
from planvision.extractors.factory import TextExtractorFactory
from planvision.logging.logger import Log
from planvision.processor.pipeline import FileContext, PipelineStep
from planvision.rendering.image_normalizer import ImageNormalizer
from planvision.rendering.rasterizer import PageRasterizer


def _strategy(context: FileContext) -> FormatStrategy:
    if context.classification is None:
        raise ValueError("FileContext.classification must be set before this step")
    return context.classification.strategy


def _oversized_warning(page_index: int, byte_size: int) -> str:
    return f"SizeBudgetExceeded: page {page_index} is {byte_size} bytes after resizing"


class CheckSizeStep(PipelineStep):
    def run(self, context: FileContext) -> FileContext:
        upload = context.upload
        if upload.size_bytes > context.max_file_size_bytes:
            raise FileTooLargeError(
                f"File too large: {upload.size_bytes} bytes exceeds "
                f"the {context.max_file_size_bytes} byte limit"
            )
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: FormatClassifier) -> None:
        self._classifier = classifier

    def run(self, context: FileContext) -> FileContext:
        context.classification = self._classifier.classify(
            context.upload.filename, context.upload.content_type
        )
        Log.debug(
            f"Classified {context.upload.filename} as {context.classification.strategy.value} "
            f"(blueprint-like={context.classification.is_blueprint_like})"
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(
        self,
        extractors: TextExtractorFactory,
        pdf_text_available: bool = True,
    ) -> None:
        self._extractors = extractors
        self._pdf_text_available = pdf_text_available

    def run(self, context: FileContext) -> FileContext:
        if context.path is None:
            raise ValueError("FileContext.path must be set before text extraction")
        strategy = _strategy(context)
        if strategy is FormatStrategy.PDF and not self._pdf_text_available:
            context.warnings.append(
                "TextExtractionUnavailable: PDF text layer skipped, page images only"
            )
            return context
        extractor = self._extractors.for_strategy(strategy)
        extraction = extractor.extract(context.path)
        if extraction.error is not None:
            raise ExtractionFailureError(extraction.error)
        context.text = extraction.text
        Log.info(
            f"Extracted {len(context.text)} chars from {context.upload.filename}"
            f"{' (truncated)' if extraction.truncated else ''}"
        )
        return context


class RasterizeStep(PipelineStep):
    def __init__(self, rasterizer: PageRasterizer) -> None:
        self._rasterizer = rasterizer

    def run(self, context: FileContext) -> FileContext:
        if _strategy(context) is not FormatStrategy.PDF or context.path is None:
            return context
        if not self._rasterizer.available:
            context.warnings.append(
                "RasterizationUnavailable: PDF page images skipped, text only"
            )
            return context
        if context.page_limit <= 0:
            context.warnings.append("BatchCapExceeded: page rendering skipped, batch is full")
            return context

        try:
            for page in self._rasterizer.rasterize(
                context.path, context.upload.filename, context.page_limit
            ):
                context.pages.append(page)
                if page.oversized:
                    context.warnings.append(_oversized_warning(page.page_index, page.byte_size))
        except RasterizationError as exc:
            Log.warning(str(exc))
            context.warnings.append(f"RasterizationError: {exc}")
        Log.info(f"Rendered {len(context.pages)} pages from {context.upload.filename}")
        return context


class NormalizeImageStep(PipelineStep):
    def __init__(self, normalizer: ImageNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: FileContext) -> FileContext:
        if _strategy(context) is not FormatStrategy.IMAGE or context.path is None:
            return context
        if context.page_limit <= 0:
            context.warnings.append("BatchCapExceeded: image skipped, batch is full")
            return context

        page = self._normalizer.normalize(context.path, context.upload.filename)
        context.pages.append(page)
        if page.oversized:
            context.warnings.append(_oversized_warning(page.page_index, page.byte_size))
        return context
