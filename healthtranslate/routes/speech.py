# healthtranslate/routes/speech.py
from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from healthtranslate.services import get_services
from healthtranslate.services.prompts import build_prompt
from healthtranslate.services.speech import AUDIO_MIMETYPE
from healthtranslate.validators import parse_speech, parse_speech_task

bp = Blueprint("speech", __name__, url_prefix="/api")


def _audio_response(audio: bytes) -> Response:
    resp = Response(audio, status=200, mimetype=AUDIO_MIMETYPE)
    resp.headers["Content-Length"] = str(len(audio))
    resp.headers["Cache-Control"] = "no-store"
    return resp


@bp.post("/speech")
def speech_api():
    """
    Body JSON: { "text": "..." } (máx. ~6000 caracteres) -> audio/mpeg
    """
    req = parse_speech(request.get_json(silent=True))
    audio = get_services().speech.synthesize(req.text)
    return _audio_response(audio)


@bp.post("/speech-gtts")
def speech_gtts_api():
    """
    Body JSON:
      { "text": "...", "task": "translate|summarize", "targetLang": "French", "ttsLang": "fr" }
    El texto del usuario se limita a ~6000 caracteres; la salida del modelo
    va entera a gTTS.
    """
    req = parse_speech_task(request.get_json(silent=True))
    services = get_services()

    prompt = build_prompt(req.task, req.text, req.target_language)
    output = services.llm.generate(prompt)

    audio = services.gtts.synthesize(output, lang=req.tts_lang)
    current_app.logger.info(
        "speech-gtts %s -> %d chars, %d bytes (%s)", req.task, len(output), len(audio), req.tts_lang
    )
    return _audio_response(audio)
