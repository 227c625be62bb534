"""Text-to-speech for reading stories aloud, using edge-tts."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

from .exceptions import SpeechSynthesisError, SpeechUnavailableError

LOGGER = logging.getLogger(__name__)

VOICES = {
    "en-US": "en-US-AriaNeural",
    "hi-IN": "hi-IN-SwaraNeural",
    "ta-IN": "ta-IN-PallaviNeural",
}


def locale_for(language: str) -> str:
    if language == "en":
        return "en-US"
    if language == "hi":
        return "hi-IN"
    return "ta-IN"


class Speaker:
    """Speak one text at a time; a new request cancels the one in progress."""

    def __init__(self, output_dir: Path, filename: str = "speech.mp3") -> None:
        self.output_dir = Path(output_dir)
        self.filename = filename
        self._current: Optional[asyncio.Task] = None

    def _backend(self) -> Any:
        try:
            import edge_tts
        except ImportError as e:
            raise SpeechUnavailableError("TTS not supported in this environment.") from e
        return edge_tts

    def speak(self, text: str, language: str) -> Optional[asyncio.Task]:
        """Start speaking ``text``; returns the synthesis task, or None for empty text.

        Raises:
            SpeechUnavailableError: If no speech backend is installed.
        """
        if not text:
            return None
        backend = self._backend()
        self.cancel()
        locale = locale_for(language)
        self._current = asyncio.create_task(self._synthesize(backend, text, locale))
        return self._current

    def cancel(self) -> None:
        if self._current is not None and not self._current.done():
            LOGGER.debug("Cancelling utterance in progress")
            self._current.cancel()
        self._current = None

    async def _synthesize(self, backend: Any, text: str, locale: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / self.filename
        LOGGER.info("Speaking %d characters with voice %s", len(text), VOICES[locale])
        try:
            communicate = backend.Communicate(text, voice=VOICES[locale])
            await communicate.save(str(path))
        except Exception as e:
            raise SpeechSynthesisError(f"Failed to synthesize speech: {e}") from e
        return path
