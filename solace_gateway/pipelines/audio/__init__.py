"""Audio generation pipeline package.

Modules are organised by the order in which `/api/audio` executes:

1. `ingestion` – decode and stage the base64 recording.
2. `transcoding` – ffmpeg normalisation plus the integrity gate.
3. `polling` – the upload readiness state machine.
4. `generation` – model calls shared with the tips and task endpoints.
5. `flow` – the orchestrator tying the stages together with cleanup.
"""

from .flow import AudioGenerationPipeline, PipelineStage
from .generation import generate_from_upload, generate_text
from .ingestion import decode_audio_payload, parse_audio_payload, stage_audio
from .polling import raise_for_outcome, wait_until_ready
from .transcoding import ensure_uploadable, normalize_audio

__all__ = [
    "AudioGenerationPipeline",
    "PipelineStage",
    "decode_audio_payload",
    "ensure_uploadable",
    "generate_from_upload",
    "generate_text",
    "normalize_audio",
    "parse_audio_payload",
    "raise_for_outcome",
    "stage_audio",
    "wait_until_ready",
]
