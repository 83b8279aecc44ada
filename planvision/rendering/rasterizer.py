from collections.abc import Iterator
from contextlib import ExitStack
from pathlib import Path

from planvision.capabilities.models import CapabilityReport
from planvision.documents.exceptions import RasterizationError
from planvision.documents.models import RasterPage
from planvision.logging.logger import Log
from planvision.rendering.base import BasePageRenderer
from planvision.rendering.budget import ImageBudget


class PageRasterizer:
    """Turns PDF pages into budget-bounded JPEG pages, lazily and in order."""

    def __init__(
        self,
        renderer: BasePageRenderer,
        budget: ImageBudget,
        capabilities: CapabilityReport,
    ) -> None:
        self._renderer = renderer
        self._budget = budget
        self._capabilities = capabilities

    @property
    def available(self) -> bool:
        return self._capabilities.rasterizer_available

    def rasterize(self, path: Path, filename: str, max_pages: int) -> Iterator[RasterPage]:
        """Yield up to *max_pages* rendered pages of the PDF at *path*.

        Yields nothing when the rasterization backend is unavailable. A page
        that fails to render is logged and skipped; the following pages are
        still attempted. Closing the generator early stops rendering.

        Raises:
            RasterizationError: if the document cannot be opened at all.
        """
        if not self.available:
            Log.warning(f"Rasterizer unavailable, skipping page images for {filename}")
            return
        if max_pages <= 0:
            return

        with ExitStack() as stack:
            try:
                source = stack.enter_context(self._renderer.open(path))
                page_count = source.page_count
            except Exception as exc:
                raise RasterizationError(
                    f"Cannot open '{filename}' for rendering: {exc}"
                ) from exc

            produced = 0
            for page_index in range(page_count):
                if produced >= max_pages:
                    break
                try:
                    image = source.render(page_index)
                    encoded = self._budget.fit(image)
                except Exception as exc:
                    Log.error(f"Failed to render page {page_index + 1} of {filename}: {exc}")
                    continue
                produced += 1
                Log.debug(
                    f"Rendered page {page_index + 1} of {filename} "
                    f"({encoded.byte_size // 1024}KB{', oversized' if encoded.oversized else ''})"
                )
                yield RasterPage(
                    source_filename=filename,
                    page_index=page_index + 1,
                    image_bytes=encoded.data,
                    media_type=encoded.media_type,
                    width=encoded.width,
                    height=encoded.height,
                    oversized=encoded.oversized,
                )
