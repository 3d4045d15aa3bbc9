"""ffmpeg-backed audio normalisation."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from fastapi.concurrency import run_in_threadpool

from solace_gateway.config.settings import MediaConfig

logger = logging.getLogger(__name__)


class TranscoderError(RuntimeError):
    """Raised when the ffmpeg conversion command fails."""


class AudioTranscoder(Protocol):
    def output_path_for(self, source: Path) -> Path: ...

    async def is_available(self) -> bool: ...

    async def convert(self, source: Path) -> Path: ...


class FfmpegTranscoder:
    """Re-encode staged audio so its bytes match the declared MP3 MIME type."""

    def __init__(self, config: MediaConfig) -> None:
        self._binary = config.ffmpeg_binary
        self._probe_timeout = config.probe_timeout_seconds
        self._convert_timeout = config.transcode_timeout_seconds
        self._codec = config.audio_codec
        self._bitrate = config.audio_bitrate

    def output_path_for(self, source: Path) -> Path:
        """Where `convert` writes its result for `source`."""

        return source.with_name(f"{source.stem}_converted.mp3")

    async def is_available(self) -> bool:
        """Run `ffmpeg -version` and report whether the binary answered."""

        return await run_in_threadpool(self._probe_sync)

    async def convert(self, source: Path) -> Path:
        """Convert `source` next to itself and return the output path."""

        return await run_in_threadpool(self._convert_sync, source)

    def _probe_sync(self) -> bool:
        try:
            subprocess.run(
                [self._binary, "-version"],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                timeout=self._probe_timeout,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("ffmpeg not found. Audio conversion will not be available: %s", exc)
            return False
        return True

    def _convert_sync(self, source: Path) -> Path:
        output = self.output_path_for(source)
        command = [
            self._binary,
            "-y",
            "-i", str(source),
            "-acodec", self._codec,
            "-b:a", self._bitrate,
            str(output),
        ]
        try:
            subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                timeout=self._convert_timeout,
            )
        except subprocess.CalledProcessError as exc:
            output.unlink(missing_ok=True)
            error_msg = exc.stderr.decode("utf-8", errors="replace") if exc.stderr else "No stderr"
            raise TranscoderError(f"ffmpeg exited with {exc.returncode}: {error_msg.strip()[-500:]}") from exc
        except subprocess.TimeoutExpired as exc:
            # ffmpeg may leave a partial file behind when killed.
            output.unlink(missing_ok=True)
            raise TranscoderError(f"ffmpeg timed out after {self._convert_timeout}s") from exc
        except OSError as exc:
            raise TranscoderError(f"ffmpeg could not be started: {exc}") from exc
        return output


__all__ = ["AudioTranscoder", "FfmpegTranscoder", "TranscoderError"]
