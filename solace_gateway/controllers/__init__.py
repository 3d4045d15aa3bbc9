"""HTTP controllers (routers) for the gateway."""

from . import audio, tasks, tips, tts

__all__ = ["audio", "tasks", "tips", "tts"]
