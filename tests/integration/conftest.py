from pathlib import Path
from unittest.mock import MagicMock

import pytest

from planvision.capabilities.models import CapabilityReport
from planvision.config.settings import Settings
from planvision.ingestion import Ingestor, build_ingestor


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    root = tmp_path / "staging"
    root.mkdir()
    return root


@pytest.fixture
def test_settings(staging_root: Path) -> Settings:
    return Settings(temp_dir=str(staging_root), ingest_workers=2)


@pytest.fixture
def ingestor(test_settings: Settings) -> Ingestor:
    ingestor = build_ingestor(test_settings)
    if not ingestor.capabilities().rasterizer_available:
        pytest.skip("PDF rasterizer backend not loadable in this environment")
    return ingestor


@pytest.fixture
def text_only_ingestor(
    test_settings: Settings,
    text_only_capabilities: CapabilityReport,
) -> Ingestor:
    prober = MagicMock()
    prober.probe.return_value = text_only_capabilities
    return build_ingestor(test_settings, prober=prober)
