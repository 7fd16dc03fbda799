import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from evalsummary.logging.logger import Log
from evalsummary.processor.exceptions import UploadReadError


class UploadStager:
    """Holds uploaded files in a temporary directory while they are processed."""

    def __init__(self, upload_dir: Path) -> None:
        self._upload_dir = upload_dir

    @contextmanager
    def stage(self, content: bytes, upload_name: str = "") -> Iterator[Path]:
        """Write *content* to a unique temp file and remove it on exit."""
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(upload_name).suffix.lower()
        path = self._upload_dir / f"{uuid.uuid4().hex}{suffix}"
        try:
            path.write_bytes(content)
            Log.debug("Upload staged", path=str(path), size=len(content))
            yield path
        finally:
            path.unlink(missing_ok=True)
            Log.debug("Upload removed", path=str(path))

    @staticmethod
    def read(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise UploadReadError(f"Cannot read staged upload {path}: {exc}") from exc
