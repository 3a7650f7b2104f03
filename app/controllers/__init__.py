"""FastAPI routers acting as controllers in the MVC architecture."""

from . import chat, downloads, recognition, system, transcription, tts

__all__ = ["chat", "downloads", "recognition", "system", "transcription", "tts"]
