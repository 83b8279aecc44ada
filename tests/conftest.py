import io
from collections.abc import Callable

import pytest
from openpyxl import Workbook
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from planvision.capabilities.models import CapabilityReport


def build_pdf(page_texts: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in page_texts:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


def build_image(size: tuple[int, int] = (64, 48), fmt: str = "PNG", noise: bool = False) -> bytes:
    if noise:
        image = Image.effect_noise(size, 120).convert("RGB")
    else:
        image = Image.new("RGB", size, (200, 30, 30))
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return build_pdf(["Hello PDF World"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return build_pdf(["Page one content", "Page two content"])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return build_pdf([""])


@pytest.fixture()
def make_pdf() -> Callable[[int, str], bytes]:
    """Factory for PDFs with *pages* pages labelled '<label> page N'."""

    def _make(pages: int, label: str = "Sheet") -> bytes:
        return build_pdf([f"{label} page {n}" for n in range(1, pages + 1)])

    return _make


@pytest.fixture()
def budget_xlsx_bytes() -> bytes:
    """Workbook with 'Summary' and 'Detail' sheets, in that order."""
    workbook = Workbook()
    summary = workbook.active
    summary.title = "Summary"
    summary.append(["Item", "Total"])
    summary.append(["Cameras", 12500])
    detail = workbook.create_sheet("Detail")
    detail.append(["Device", "Qty", "Unit"])
    detail.append(["Dome camera", 24, 350.5])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    return build_image()


@pytest.fixture()
def available_capabilities() -> CapabilityReport:
    return CapabilityReport(
        rasterizer_available=True,
        text_extractor_available=True,
        raster_engine="pymupdf",
        text_engine="pdfplumber",
    )


@pytest.fixture()
def text_only_capabilities() -> CapabilityReport:
    return CapabilityReport(
        rasterizer_available=False,
        text_extractor_available=True,
        recommendations=("PDF page rendering unavailable",),
        raster_engine="pymupdf",
        text_engine="pdfplumber",
    )


@pytest.fixture()
def make_image() -> Callable[..., bytes]:
    """Factory for encoded test images; ``noise=True`` defeats compression."""
    return build_image
