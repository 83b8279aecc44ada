from unittest.mock import MagicMock

from planvision.capabilities.models import CapabilityReport
from planvision.capabilities.prober import CapabilityProber, build_tool_instructions


def _renderer(error: Exception | None = None) -> MagicMock:
    renderer = MagicMock()
    renderer.package_name = "pymupdf"
    if error is not None:
        renderer.self_check.side_effect = error
    return renderer


def _pdf_extractor(error: Exception | None = None) -> MagicMock:
    extractor = MagicMock()
    extractor.backend_modules = ("pdfplumber",)
    if error is not None:
        extractor.self_check.side_effect = error
    return extractor


class TestProbe:
    def test_all_available(self) -> None:
        report = CapabilityProber(_renderer(), _pdf_extractor(), platform="linux").probe()
        assert report.rasterizer_available is True
        assert report.text_extractor_available is True
        assert report.recommendations == ()
        assert report.vision_enabled is True

    def test_missing_rasterizer_degrades_without_raising(self) -> None:
        prober = CapabilityProber(
            _renderer(ImportError("No module named 'pymupdf'")), _pdf_extractor(), platform="linux"
        )
        report = prober.probe()
        assert report.rasterizer_available is False
        assert report.text_extractor_available is True
        assert any("pip install --force-reinstall pymupdf" in r for r in report.recommendations)
        assert any("build-essential" in r for r in report.recommendations)

    def test_windows_recommends_build_tools(self) -> None:
        prober = CapabilityProber(_renderer(OSError("DLL load failed")), _pdf_extractor(), platform="win32")
        report = prober.probe()
        assert any("C++ Build Tools" in r for r in report.recommendations)

    def test_missing_text_backend_reported(self) -> None:
        prober = CapabilityProber(_renderer(), _pdf_extractor(ImportError("nope")), platform="darwin")
        report = prober.probe()
        assert report.text_extractor_available is False
        assert any("pip install pdfplumber" in r for r in report.recommendations)

    def test_probe_runs_once(self) -> None:
        renderer = _renderer()
        prober = CapabilityProber(renderer, _pdf_extractor(), platform="linux")
        first = prober.probe()
        second = prober.probe()
        assert first is second
        renderer.self_check.assert_called_once()


class TestBuildToolInstructions:
    def test_macos(self) -> None:
        assert any("xcode-select" in step for step in build_tool_instructions("darwin"))

    def test_linux(self) -> None:
        assert any("apt-get" in step for step in build_tool_instructions("linux"))


class TestStatus:
    def test_text_only_mode(self, text_only_capabilities: CapabilityReport) -> None:
        status = text_only_capabilities.to_status()
        assert status["mode"] == "text-only"
        assert status["vision_enabled"] is False
        assert status["recommendations"] == ["PDF page rendering unavailable"]

    def test_visual_mode(self, available_capabilities: CapabilityReport) -> None:
        assert available_capabilities.to_status()["mode"] == "visual"
