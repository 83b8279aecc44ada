from collections.abc import Sequence

from planvision.documents.models import ExtractionResult, RasterPage, VisionBatch


class BatchAssembler:
    """Folds per-file pages into one capped, order-preserving batch."""

    def assemble(self, results: Sequence[ExtractionResult], max_batch_pages: int) -> VisionBatch:
        """Take pages in upload order, then page order, up to *max_batch_pages*.

        Pages past the cap are counted in ``dropped_page_count``.
        """
        if max_batch_pages < 0:
            raise ValueError("max_batch_pages must be >= 0")

        selected: list[RasterPage] = []
        total = 0
        for result in results:
            total += len(result.pages)
            for page in result.pages:
                if len(selected) >= max_batch_pages:
                    break
                selected.append(page)

        return VisionBatch(
            pages=tuple(selected),
            dropped_page_count=total - len(selected),
            total_candidate_pages=total,
        )
