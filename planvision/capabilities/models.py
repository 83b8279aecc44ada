from dataclasses import dataclass


@dataclass(frozen=True)
class CapabilityReport:
    """What this process can do; computed once and passed to dependents."""

    rasterizer_available: bool
    text_extractor_available: bool
    recommendations: tuple[str, ...] = ()
    raster_engine: str = ""
    text_engine: str = ""
    platform: str = ""
    python_version: str = ""

    @property
    def vision_enabled(self) -> bool:
        return self.rasterizer_available

    def to_status(self) -> dict[str, object]:
        """Read-only status payload for health/capability endpoints."""
        return {
            "mode": "visual" if self.vision_enabled else "text-only",
            "vision_enabled": self.vision_enabled,
            "rasterizer_available": self.rasterizer_available,
            "text_extractor_available": self.text_extractor_available,
            "raster_engine": self.raster_engine,
            "text_engine": self.text_engine,
            "system": {
                "platform": self.platform,
                "python_version": self.python_version,
            },
            "recommendations": list(self.recommendations),
        }
