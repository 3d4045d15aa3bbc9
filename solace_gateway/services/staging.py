"""Local staging directory for request-scoped audio files."""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from fastapi.concurrency import run_in_threadpool

from solace_gateway.domain.models import StagedFile

logger = logging.getLogger(__name__)


class StagingArea:
    """Write and remove uniquely named files under one shared directory.

    Concurrent requests share the directory; uuid4 names keep them apart, so
    no locking is needed.
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def new_path(self, extension: str = "mp3") -> Path:
        """Reserve a unique `audio_<uuid>.<extension>` name without touching disk."""

        return self._root / f"audio_{uuid4().hex}.{extension.lstrip('.')}"

    async def write(
        self,
        data: bytes,
        *,
        path: Path | None = None,
        extension: str = "mp3",
    ) -> StagedFile:
        """Persist `data` at `path` (or a fresh name), creating the directory on demand."""

        return await run_in_threadpool(self._write_sync, data, path or self.new_path(extension))

    def _write_sync(self, data: bytes, path: Path) -> StagedFile:
        self._root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return StagedFile(path=path, size_bytes=len(data))

    def remove(self, path: Path) -> None:
        """Delete a staged file if it still exists."""

        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete staged file %s: %s", path, exc)


__all__ = ["StagingArea"]
