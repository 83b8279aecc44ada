import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from planvision.capabilities.models import CapabilityReport
from planvision.documents.exceptions import TooManyFilesError
from planvision.documents.models import ExtractionResult
from planvision.ingestion import IngestionOutcome
from planvision.main import load_uploads, main


@pytest.fixture(autouse=True)
def _no_log_handler():
    with patch("planvision.main.Log.configure"):
        yield


def _ingestor(outcome: IngestionOutcome | None = None) -> MagicMock:
    ingestor = MagicMock()
    ingestor.capabilities.return_value = CapabilityReport(
        rasterizer_available=True, text_extractor_available=True
    )
    if outcome is not None:
        ingestor.ingest.return_value = outcome
    return ingestor


class TestMain:
    def test_capabilities_flag_prints_status(self, capsys) -> None:
        with patch("planvision.main.build_ingestor", return_value=_ingestor()):
            code = main(["--capabilities"])

        status = json.loads(capsys.readouterr().out)
        assert code == 0
        assert status["mode"] == "visual"

    def test_missing_file_exits_with_usage_error(self, tmp_path: Path) -> None:
        ingestor = _ingestor()
        with patch("planvision.main.build_ingestor", return_value=ingestor):
            code = main([str(tmp_path / "absent.pdf")])

        assert code == 2
        ingestor.ingest.assert_not_called()

    def test_failed_file_sets_exit_code(self, tmp_path: Path, capsys) -> None:
        source = tmp_path / "broken.xlsx"
        source.write_bytes(b"junk")
        failed = ExtractionResult(
            filename="broken.xlsx",
            content_type="",
            error="bad workbook",
            error_type="ExtractionFailureError",
        )
        ingestor = _ingestor(IngestionOutcome(results=[failed]))
        with patch("planvision.main.build_ingestor", return_value=ingestor):
            code = main([str(source), "--max-batch-pages", "5"])

        summary = json.loads(capsys.readouterr().out)
        config = ingestor.ingest.call_args.args[1]
        assert code == 1
        assert config.max_batch_pages == 5
        assert summary["failed"] == 1

    def test_too_many_files_exits_with_usage_error(self, tmp_path: Path) -> None:
        source = tmp_path / "a.txt"
        source.write_text("x")
        ingestor = _ingestor()
        ingestor.ingest.side_effect = TooManyFilesError("Too many files")
        with patch("planvision.main.build_ingestor", return_value=ingestor):
            assert main([str(source)]) == 2


def test_load_uploads_guesses_content_type(tmp_path: Path) -> None:
    source = tmp_path / "plan.pdf"
    source.write_bytes(b"%PDF")

    (upload,) = load_uploads([source])

    assert upload.filename == "plan.pdf"
    assert upload.content_type == "application/pdf"
    assert upload.size_bytes == 4
    assert upload.delete_after is False
