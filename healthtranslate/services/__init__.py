# healthtranslate/services/__init__.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import current_app

from healthtranslate.services.llm import LanguageModel, build_language_model
from healthtranslate.services.speech import GttsSpeech, OpenAISpeech
from healthtranslate.services.whisper import WhisperTranscriber

EXTENSION_KEY = "healthtranslate"


@dataclass
class Services:
    llm: LanguageModel
    speech: OpenAISpeech
    gtts: GttsSpeech
    transcriber: WhisperTranscriber


def build_services(config: Any) -> Services:
    """Construye los adaptadores con la configuración explícita de la app."""
    return Services(
        llm=build_language_model(config),
        speech=OpenAISpeech(
            config.get("OPENAI_API_KEY"),
            model=config.get("TTS_MODEL", "tts-1"),
            voice=config.get("TTS_VOICE", "alloy"),
            timeout=config.get("UPSTREAM_TIMEOUT"),
        ),
        gtts=GttsSpeech(),
        transcriber=WhisperTranscriber(
            config.get("OPENAI_API_KEY"),
            model=config.get("TRANSCRIBE_MODEL", "whisper-1"),
            timeout=config.get("UPSTREAM_TIMEOUT"),
        ),
    )


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
