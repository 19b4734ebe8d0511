# healthtranslate/services/whisper.py
# -*- coding: utf-8 -*-
"""
Wrapper de transcripción.

Función pública:
    WhisperTranscriber.transcribe(audio: bytes, filename: str, mimetype: str) -> str

Comportamiento:
  - Sube los bytes tal cual (webm/opus o wav); no se transcodifica nada.
  - Devuelve la transcripción recortada.
  - Si Whisper no devuelve texto utilizable => TranscriptionError.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from openai import OpenAIError

from healthtranslate.errors import TranscriptionError, UpstreamError
from healthtranslate.services.clients import openai_client

log = logging.getLogger(__name__)


class WhisperTranscriber:
    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "whisper-1",
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
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

    def transcribe(self, audio: bytes, filename: str = "audio.webm", mimetype: str = "audio/webm") -> str:
        client = self._get_client()

        try:
            resp = client.audio.transcriptions.create(
                model=self.model,
                file=(filename, audio, mimetype),
            )
        except OpenAIError as e:
            log.warning("whisper transcription failed: %s", e)
            raise UpstreamError(f"Transcription request failed: {e}") from e

        # el SDK devuelve objeto con .text normalmente
        transcript = getattr(resp, "text", None)
        if not isinstance(transcript, str) or not transcript.strip():
            raise TranscriptionError()
        return transcript.strip()
