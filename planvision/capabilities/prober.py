import platform as platform_module
import sys
import threading
from collections.abc import Callable

from planvision.capabilities.models import CapabilityReport
from planvision.logging.logger import Log
from planvision.pdf.base import BasePdfExtractor
from planvision.rendering.base import BasePageRenderer


def build_tool_instructions(platform: str) -> list[str]:
    """Platform-specific steps for building native wheels from source."""
    if platform.startswith("win"):
        return [
            "Install Microsoft C++ Build Tools from "
            "https://visualstudio.microsoft.com/visual-cpp-build-tools/",
        ]
    if platform == "darwin":
        return ["Install the Xcode command line tools: xcode-select --install"]
    return [
        "Ubuntu/Debian: sudo apt-get install build-essential python3-dev",
        "Fedora/RHEL: sudo dnf install gcc gcc-c++ make python3-devel",
    ]


class CapabilityProber:
    """Checks once whether the native PDF backends load in this process.

    ``probe`` never raises; a backend that fails to load is reported as
    unavailable together with remediation steps. The first result is
    memoized, so repeated calls return the same report.
    """

    def __init__(
        self,
        renderer: BasePageRenderer,
        pdf_extractor: BasePdfExtractor,
        platform: str | None = None,
    ) -> None:
        self._renderer = renderer
        self._pdf_extractor = pdf_extractor
        self._platform = platform or sys.platform
        self._report: CapabilityReport | None = None
        self._lock = threading.Lock()

    def probe(self) -> CapabilityReport:
        with self._lock:
            if self._report is None:
                self._report = self._run()
            return self._report

    def _run(self) -> CapabilityReport:
        recommendations: list[str] = []

        rasterizer_ok = self._check(type(self._renderer).__name__, self._renderer.self_check)
        if not rasterizer_ok:
            package = self._renderer.package_name
            recommendations.append(
                f"PDF page rendering unavailable: reinstall with 'pip install --force-reinstall {package}'"
            )
            recommendations.extend(build_tool_instructions(self._platform))
            recommendations.append(
                "Alternatively upload drawings as JPG or PNG images; they are analyzed without PDF rendering"
            )

        text_ok = self._check(type(self._pdf_extractor).__name__, self._pdf_extractor.self_check)
        if not text_ok:
            modules = " ".join(self._pdf_extractor.backend_modules)
            recommendations.append(
                f"PDF text extraction unavailable: install with 'pip install {modules}'"
            )

        report = CapabilityReport(
            rasterizer_available=rasterizer_ok,
            text_extractor_available=text_ok,
            recommendations=tuple(recommendations),
            raster_engine=self._renderer.package_name,
            text_engine=",".join(self._pdf_extractor.backend_modules),
            platform=self._platform,
            python_version=platform_module.python_version(),
        )
        if report.vision_enabled:
            Log.info("PDF rasterizer loaded - page images enabled")
        else:
            Log.warning("PDF rasterizer not available - ingestion runs text-only for PDFs")
        return report

    @staticmethod
    def _check(name: str, check: Callable[[], None]) -> bool:
        try:
            check()
        except Exception as exc:
            Log.warning(f"{name} self-check failed: {exc}")
            return False
        return True
