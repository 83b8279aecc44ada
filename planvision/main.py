import argparse
import json
import mimetypes
from pathlib import Path

from planvision.config.settings import Settings
from planvision.documents.exceptions import TooManyFilesError
from planvision.documents.models import UploadedFile
from planvision.ingestion import IngestionConfig, build_ingestor
from planvision.logging.logger import Log


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="planvision",
        description="Extract bounded text and page images from uploaded documents.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="documents to ingest")
    parser.add_argument(
        "--capabilities",
        action="store_true",
        help="print whether visual analysis is available and exit",
    )
    parser.add_argument("--max-batch-pages", type=int, default=None)
    parser.add_argument("--stop-at-batch-cap", action="store_true")
    return parser.parse_args(argv)


def load_uploads(paths: list[Path]) -> list[UploadedFile]:
    uploads = []
    for path in paths:
        content_type, _ = mimetypes.guess_type(path.name)
        uploads.append(UploadedFile.from_path(path, content_type=content_type or ""))
    return uploads


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> probe -> ingest files -> print JSON summary."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    ingestor = build_ingestor(settings)
    if args.capabilities or not args.files:
        print(json.dumps(ingestor.capabilities().to_status(), indent=2))
        return 0

    missing = [str(path) for path in args.files if not path.is_file()]
    if missing:
        Log.error(f"Files not found: {', '.join(missing)}")
        return 2

    defaults = IngestionConfig.from_settings(settings)
    config = IngestionConfig(
        max_file_size_bytes=defaults.max_file_size_bytes,
        max_files_per_upload=defaults.max_files_per_upload,
        max_batch_pages=(
            args.max_batch_pages if args.max_batch_pages is not None else defaults.max_batch_pages
        ),
        stop_at_batch_cap=args.stop_at_batch_cap or defaults.stop_at_batch_cap,
    )
    try:
        outcome = ingestor.ingest(load_uploads(args.files), config)
    except TooManyFilesError as exc:
        Log.error(str(exc))
        return 2
    print(json.dumps(outcome.to_dict(), indent=2))
    return 1 if outcome.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
