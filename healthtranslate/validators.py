# healthtranslate/validators.py
"""
Validación de cuerpos de petición.

Cada parse_* recibe el payload ya decodificado (dict JSON o formulario de
Flask) y devuelve un dataclass inmutable, o lanza ValidationError con un
mensaje que nombra el campo problemático. No hay efectos secundarios.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from werkzeug.datastructures import FileStorage

from healthtranslate.errors import PayloadTooLargeError, ValidationError

TASKS = ("translate", "summarize")
DEFAULT_TASK = "translate"
DEFAULT_TARGET_LANGUAGE = "English"
DEFAULT_TTS_LANG = "en"

MAX_SPEECH_CHARS = 6000

# webm/opus (MediaRecorder) o wav
AUDIO_MIMETYPES = {
    "audio/webm",
    "video/webm",
    "audio/wav",
    "audio/wave",
    "audio/x-wav",
    "audio/vnd.wave",
}
AUDIO_EXTENSIONS = {".webm", ".wav"}


@dataclass(frozen=True)
class TranslationRequest:
    text: str
    target_language: str
    task: str = DEFAULT_TASK


@dataclass(frozen=True)
class SpeechRequest:
    text: str


@dataclass(frozen=True)
class SpeechTaskRequest:
    text: str
    task: str
    target_language: str
    tts_lang: str


@dataclass(frozen=True)
class TranscriptionRequest:
    audio: bytes
    filename: str
    mimetype: str
    target_language: str


# ---------------------- utilidades ---------------------- #
def ensure_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload


def _optional_str(payload: Mapping[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"Field '{key}' must be a string")
    value = value.strip()
    return value or default


def require_text(payload: Mapping[str, Any], key: str = "text") -> str:
    """
    Devuelve el texto tal cual (sin recortar el contenido), pero exige que no
    sea vacío después de strip().
    """
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Text is required")
    return value


def normalize_task(raw: Optional[str]) -> str:
    if raw is None:
        return DEFAULT_TASK
    task = raw.strip().lower()
    if task not in TASKS:
        raise ValidationError(f"Unsupported task: {raw}")
    return task


def check_speech_length(text: str) -> None:
    if len(text) > MAX_SPEECH_CHARS:
        raise PayloadTooLargeError(f"Text too long (max ~{MAX_SPEECH_CHARS} chars)")


# ---------------------- API pública ---------------------- #
def parse_translate(payload: Any) -> TranslationRequest:
    """Body de /api/translate: {text, targetLanguage}."""
    payload = ensure_object(payload)
    text = require_text(payload)
    target = _optional_str(payload, "targetLanguage")
    if not target:
        raise ValidationError("Target language is required")
    return TranslationRequest(text=text, target_language=target)


def parse_task(payload: Any) -> TranslationRequest:
    """Body JSON de /api/transcribe-and-translate: {text, task, targetLang}."""
    payload = ensure_object(payload)
    text = require_text(payload)
    task = normalize_task(_optional_str(payload, "task"))
    target = _optional_str(payload, "targetLang", DEFAULT_TARGET_LANGUAGE)
    return TranslationRequest(text=text, target_language=target, task=task)


def parse_speech(payload: Any) -> SpeechRequest:
    payload = ensure_object(payload)
    text = require_text(payload)
    check_speech_length(text)
    return SpeechRequest(text=text)


def parse_speech_task(payload: Any) -> SpeechTaskRequest:
    """Body de /api/speech-gtts: {text, task, targetLang, ttsLang}."""
    req = parse_task(payload)
    check_speech_length(req.text)
    tts_lang = _optional_str(payload, "ttsLang", DEFAULT_TTS_LANG)
    return SpeechTaskRequest(
        text=req.text,
        task=req.task,
        target_language=req.target_language,
        tts_lang=tts_lang.lower(),
    )


def _base_mimetype(mimetype: Optional[str]) -> str:
    # "audio/webm;codecs=opus" -> "audio/webm"
    return (mimetype or "").split(";", 1)[0].strip().lower()


def is_supported_audio(filename: str, mimetype: Optional[str]) -> bool:
    if _base_mimetype(mimetype) in AUDIO_MIMETYPES:
        return True
    return os.path.splitext(filename or "")[1].lower() in AUDIO_EXTENSIONS


def parse_transcription(files: Mapping[str, FileStorage], form: Mapping[str, str]) -> TranscriptionRequest:
    """
    Formulario multipart de /api/transcribe-and-translate: audio + targetLanguage.
    Se valida el archivo antes que el idioma, igual que el cliente lo envía.
    """
    up = files.get("audio")
    if up is None:
        raise ValidationError("Audio file is missing.")

    filename = (up.filename or "").strip() or "audio.webm"
    mimetype = up.mimetype or ""
    if not is_supported_audio(filename, mimetype):
        raise ValidationError(f"Unsupported audio format: {mimetype or filename}")

    audio = up.read()
    if not audio:
        raise ValidationError("Audio file is empty.")

    target = (form.get("targetLanguage") or "").strip()
    if not target:
        raise ValidationError("Target language is missing.")

    return TranscriptionRequest(
        audio=audio,
        filename=filename,
        mimetype=_base_mimetype(mimetype),
        target_language=target,
    )
