# healthtranslate/services/speech.py
"""
Síntesis de voz (texto -> MP3).

Dos motores con la misma firma `synthesize(text) -> bytes`:
  - OpenAISpeech: audio.speech (tts-1 / alloy), voz fija.
  - GttsSpeech: Google Translate TTS vía gTTS, ligado a un idioma.
El límite de 6000 caracteres de OpenAISpeech se comprueba antes de cualquier
llamada de red.
"""

from __future__ import annotations

import io
import logging
import threading
from typing import Any, Callable, Optional

from gtts import gTTS, gTTSError
from openai import OpenAIError

from healthtranslate.errors import UpstreamError, ValidationError
from healthtranslate.services.clients import openai_client
from healthtranslate.validators import check_speech_length

log = logging.getLogger(__name__)

AUDIO_MIMETYPE = "audio/mpeg"


class OpenAISpeech:
    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "tts-1",
        voice: str = "alloy",
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
        self.voice = voice
        self.timeout = timeout
        self._client = client
        self._lock = threading.Lock()

    def _get_client(self):
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                self._client = openai_client(self.api_key, self.timeout)
        return self._client

    def synthesize(self, text: str) -> bytes:
        check_speech_length(text)
        client = self._get_client()

        try:
            resp = client.audio.speech.create(
                model=self.model,
                voice=self.voice,
                input=text,
                response_format="mp3",
            )
        except OpenAIError as e:
            log.warning("openai speech failed: %s", e)
            raise UpstreamError(f"Speech synthesis failed: {e}") from e

        audio = getattr(resp, "content", None)
        if not isinstance(audio, (bytes, bytearray)) or not audio:
            raise UpstreamError("Speech synthesis returned no audio")
        return bytes(audio)


class GttsSpeech:
    """
    gTTS no necesita credencial; el idioma se fija por petición (ttsLang).
    Sin límite de longitud: gTTS trocea el texto y la entrada del usuario ya se
    validó en la ruta.
    `tts_factory` permite sustituir gTTS en tests.
    """

    def __init__(self, tts_factory: Callable[..., Any] = gTTS):
        self.tts_factory = tts_factory

    def synthesize(self, text: str, lang: str = "en") -> bytes:
        try:
            tts = self.tts_factory(text=text, lang=lang)
        except ValueError as e:
            # gTTS valida el idioma en el constructor
            raise ValidationError(f"Unsupported TTS language: {lang}") from e

        buf = io.BytesIO()
        try:
            tts.write_to_fp(buf)
        except gTTSError as e:
            log.warning("gtts synthesis failed (lang=%s): %s", lang, e)
            raise UpstreamError(f"Speech synthesis failed: {e}") from e

        audio = buf.getvalue()
        if not audio:
            raise UpstreamError("Speech synthesis returned no audio")
        return audio
