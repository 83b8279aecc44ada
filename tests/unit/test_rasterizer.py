from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest
from PIL import Image

from planvision.capabilities.models import CapabilityReport
from planvision.documents.exceptions import RasterizationError
from planvision.rendering.base import BasePageRenderer, PageSource
from planvision.rendering.budget import ImageBudget
from planvision.rendering.pdfplumber_renderer import PdfPlumberRenderer
from planvision.rendering.pymupdf_renderer import PyMuPdfRenderer
from planvision.rendering.rasterizer import PageRasterizer


class FakeSource(PageSource):
    def __init__(self, pages: list[Image.Image | Exception]) -> None:
        self._pages = pages
        self.rendered: list[int] = []
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def render(self, page_index: int) -> Image.Image:
        self.rendered.append(page_index)
        page = self._pages[page_index]
        if isinstance(page, Exception):
            raise page
        return page


class FakeRenderer(BasePageRenderer):
    backend_modules = ()
    package_name = "fake"

    def __init__(self, source: FakeSource | None = None, open_error: Exception | None = None) -> None:
        super().__init__()
        self.source = source
        self.open_error = open_error
        self.open_calls = 0

    @contextmanager
    def open(self, path: Path) -> Iterator[PageSource]:
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        assert self.source is not None
        try:
            yield self.source
        finally:
            self.source.closed = True


def _page() -> Image.Image:
    return Image.new("RGB", (40, 30), "white")


def _rasterizer(renderer: BasePageRenderer, capabilities: CapabilityReport) -> PageRasterizer:
    return PageRasterizer(renderer, ImageBudget(max_bytes=4 * 1024 * 1024), capabilities)


class TestDegrade:
    def test_no_pages_when_rasterizer_unavailable(
        self, tmp_path: Path, text_only_capabilities: CapabilityReport
    ) -> None:
        renderer = FakeRenderer(FakeSource([_page()]))
        pages = list(_rasterizer(renderer, text_only_capabilities).rasterize(tmp_path, "a.pdf", 5))
        assert pages == []
        assert renderer.open_calls == 0


class TestOrderingAndLimits:
    def test_pages_in_document_order(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        renderer = FakeRenderer(FakeSource([_page(), _page(), _page()]))
        pages = list(_rasterizer(renderer, available_capabilities).rasterize(tmp_path, "a.pdf", 10))
        assert [p.page_index for p in pages] == [1, 2, 3]
        assert all(p.source_filename == "a.pdf" for p in pages)
        assert all(p.media_type == "image/jpeg" for p in pages)

    def test_stops_rendering_at_max_pages(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        source = FakeSource([_page() for _ in range(6)])
        rasterizer = _rasterizer(FakeRenderer(source), available_capabilities)
        pages = list(rasterizer.rasterize(tmp_path, "a.pdf", 2))
        assert [p.page_index for p in pages] == [1, 2]
        assert source.rendered == [0, 1]

    def test_zero_max_pages_yields_nothing(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        renderer = FakeRenderer(FakeSource([_page()]))
        assert list(_rasterizer(renderer, available_capabilities).rasterize(tmp_path, "a.pdf", 0)) == []

    def test_closing_generator_closes_document(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        source = FakeSource([_page(), _page(), _page()])
        generator = _rasterizer(FakeRenderer(source), available_capabilities).rasterize(
            tmp_path, "a.pdf", 10
        )
        next(generator)
        generator.close()
        assert source.closed is True
        assert source.rendered == [0]


class TestFailures:
    def test_failing_page_is_skipped(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        source = FakeSource([_page(), RuntimeError("bad page"), _page()])
        pages = list(_rasterizer(FakeRenderer(source), available_capabilities).rasterize(tmp_path, "a.pdf", 10))
        assert [p.page_index for p in pages] == [1, 3]

    def test_failed_page_does_not_count_towards_limit(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        source = FakeSource([RuntimeError("bad page"), _page(), _page()])
        pages = list(_rasterizer(FakeRenderer(source), available_capabilities).rasterize(tmp_path, "a.pdf", 1))
        assert [p.page_index for p in pages] == [2]

    def test_unopenable_document_raises(
        self, tmp_path: Path, available_capabilities: CapabilityReport
    ) -> None:
        renderer = FakeRenderer(open_error=ValueError("not a pdf"))
        with pytest.raises(RasterizationError, match="not a pdf"):
            list(_rasterizer(renderer, available_capabilities).rasterize(tmp_path, "a.pdf", 3))


@pytest.mark.parametrize("renderer_cls", [PyMuPdfRenderer, PdfPlumberRenderer])
class TestRealRenderers:
    def test_renders_every_page_within_budget(
        self,
        renderer_cls: type[BasePageRenderer],
        tmp_path: Path,
        multi_page_pdf_bytes: bytes,
        available_capabilities: CapabilityReport,
    ) -> None:
        path = tmp_path / "doc.pdf"
        path.write_bytes(multi_page_pdf_bytes)
        budget = ImageBudget(max_bytes=4 * 1024 * 1024)
        rasterizer = PageRasterizer(renderer_cls(scale=1.0), budget, available_capabilities)

        pages = list(rasterizer.rasterize(path, "doc.pdf", 10))

        assert [p.page_index for p in pages] == [1, 2]
        assert all(p.byte_size <= budget.max_bytes for p in pages)
        # letter size at 72 dpi
        assert abs(pages[0].width - 612) <= 1
        assert abs(pages[0].height - 792) <= 1

    def test_self_check_passes(self, renderer_cls: type[BasePageRenderer]) -> None:
        renderer_cls().self_check()
