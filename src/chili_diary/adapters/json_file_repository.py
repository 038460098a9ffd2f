"""JSON file repository for the diary store document."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from chili_diary.domain.errors import WriteFailedError


class DocumentRepository(Protocol):
    """Interface for reading and replacing the whole store document."""

    def read(self) -> bytes | None:
        """Return the stored document bytes, or None if nothing is stored."""

    def write(self, data: bytes) -> None:
        """Replace the stored document with ``data``."""


@dataclass
class JsonFileDocumentRepository(DocumentRepository):
    """Stores the whole diary as a single JSON file."""

    path: Path

    def read(self) -> bytes | None:
        """Return the stored document, or None when no file exists yet."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def write(self, data: bytes) -> None:
        """Atomically replace the stored document."""
        write_atomic(self.path, data)


def write_atomic(path: Path, data: bytes) -> None:
    """Write bytes through a sibling temp file and rename it into place."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise WriteFailedError(f"Failed to write {path}: {exc}") from exc
