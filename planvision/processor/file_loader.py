import re
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePath

from planvision.documents.exceptions import FileReadError
from planvision.documents.models import UploadedFile
from planvision.logging.logger import Log

_UNSAFE_CHARS = re.compile(r"[^\w.\- ]+")


def staged_filename(filename: str) -> str:
    """Strip directories and odd characters, keeping the extension."""
    name = _UNSAFE_CHARS.sub("_", PurePath(filename.replace("\\", "/")).name).strip(" .")
    return name or "upload"


class FileLoader:
    """Gives each upload a path on disk for exactly as long as it is processed."""

    def __init__(self, temp_root: Path | None = None) -> None:
        self._temp_root = temp_root

    @contextmanager
    def stage(self, upload: UploadedFile) -> Iterator[Path]:
        """Yield a readable path for *upload* and release it on exit.

        Byte uploads are written into a private temporary directory that is
        removed afterwards. Path uploads are used in place and deleted
        afterwards only when ``delete_after`` is set.

        Raises:
            FileReadError: if the upload cannot be placed or found on disk.
        """
        if upload.path is not None:
            try:
                if not upload.path.is_file():
                    raise FileReadError(f"File not found: {upload.path}")
                yield upload.path
            finally:
                self.release(upload)
            return

        workdir = Path(tempfile.mkdtemp(prefix="planvision-", dir=self._temp_root))
        try:
            path = workdir / staged_filename(upload.filename)
            try:
                path.write_bytes(upload.content or b"")
            except OSError as exc:
                raise FileReadError(f"Cannot stage '{upload.filename}': {exc}") from exc
            yield path
        finally:
            self._remove_tree(workdir)

    def release(self, upload: UploadedFile) -> None:
        """Delete the upload's own file if it was handed over as temporary storage."""
        if upload.path is None or not upload.delete_after:
            return
        try:
            upload.path.unlink(missing_ok=True)
        except OSError as exc:
            Log.warning(f"Could not remove temporary upload {upload.path}: {exc}")

    @staticmethod
    def _remove_tree(workdir: Path) -> None:
        try:
            shutil.rmtree(workdir)
        except OSError as exc:
            Log.warning(f"Could not remove staging directory {workdir}: {exc}")
