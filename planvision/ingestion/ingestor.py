from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from planvision.batch.assembler import BatchAssembler
from planvision.capabilities.models import CapabilityReport
from planvision.capabilities.prober import CapabilityProber
from planvision.config.settings import Settings
from planvision.documents.exceptions import TooManyFilesError
from planvision.documents.models import ExtractionResult, UploadedFile
from planvision.ingestion.models import IngestionConfig, IngestionOutcome
from planvision.logging.logger import Log
from planvision.pdf.factory import PdfExtractorFactory
from planvision.processor.processor import FileProcessor, build_processor
from planvision.rendering.factory import PageRendererFactory


class Ingestor:
    """Drives one upload request: per-file pipelines, then one batch.

    Files are independent and run on a bounded thread pool; results keep
    upload order whatever the pool size.
    """

    def __init__(
        self,
        processor: FileProcessor,
        assembler: BatchAssembler,
        capabilities: CapabilityReport,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._assembler = assembler
        self._capabilities = capabilities
        self._settings = settings

    def capabilities(self) -> CapabilityReport:
        return self._capabilities

    def ingest(
        self,
        files: Sequence[UploadedFile],
        config: IngestionConfig | None = None,
    ) -> IngestionOutcome:
        """Process every upload and assemble the vision batch.

        Raises:
            TooManyFilesError: if more files than ``max_files_per_upload``
                were handed over; every upload is released first.
        """
        config = config or IngestionConfig.from_settings(self._settings)
        if len(files) > config.max_files_per_upload:
            for upload in files:
                self._processor.discard(upload)
            raise TooManyFilesError(
                f"Too many files: {len(files)} exceeds the limit of {config.max_files_per_upload}"
            )

        Log.info(f"Ingesting {len(files)} files (max {config.max_batch_pages} batch pages)")
        page_limit = min(self._settings.max_pages_per_document, config.max_batch_pages)
        if config.stop_at_batch_cap:
            results = self._ingest_until_cap(files, config, page_limit)
        else:
            results = self._ingest_parallel(files, config, page_limit)

        batch = self._assembler.assemble(results, config.max_batch_pages)
        outcome = IngestionOutcome(results=results, batch=batch, capabilities=self._capabilities)
        Log.info(
            f"Ingestion complete: {len(outcome.successful)} successful, "
            f"{len(outcome.errors)} failed, {len(batch)} batch pages, "
            f"{batch.dropped_page_count} dropped"
        )
        return outcome

    def _ingest_parallel(
        self,
        files: Sequence[UploadedFile],
        config: IngestionConfig,
        page_limit: int,
    ) -> list[ExtractionResult]:
        if not files:
            return []
        workers = max(1, min(self._settings.ingest_workers, len(files)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ingest") as pool:
            return list(
                pool.map(
                    lambda upload: self._processor.process(
                        upload, page_limit, config.max_file_size_bytes
                    ),
                    files,
                )
            )

    def _ingest_until_cap(
        self,
        files: Sequence[UploadedFile],
        config: IngestionConfig,
        page_limit: int,
    ) -> list[ExtractionResult]:
        """Upload-order pass that stops rendering once the batch is full."""
        results: list[ExtractionResult] = []
        remaining = config.max_batch_pages
        for upload in files:
            result = self._processor.process(
                upload, min(page_limit, remaining), config.max_file_size_bytes
            )
            remaining = max(0, remaining - len(result.pages))
            results.append(result)
        return results


def build_ingestor(settings: Settings, prober: CapabilityProber | None = None) -> Ingestor:
    """Probe capabilities once and wire the ingestion pipeline around the report."""
    renderer = PageRendererFactory.create(settings)
    pdf_adapter = PdfExtractorFactory.create(settings)
    prober = prober or CapabilityProber(renderer=renderer, pdf_extractor=pdf_adapter)
    capabilities = prober.probe()
    processor = build_processor(settings, capabilities, renderer, pdf_adapter)
    return Ingestor(
        processor=processor,
        assembler=BatchAssembler(),
        capabilities=capabilities,
        settings=settings,
    )
