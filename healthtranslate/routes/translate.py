# healthtranslate/routes/translate.py
from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from healthtranslate.errors import EmptyResultError, UpstreamError
from healthtranslate.services import get_services
from healthtranslate.services.prompts import build_prompt
from healthtranslate.validators import parse_task, parse_transcription, parse_translate

bp = Blueprint("translate", __name__, url_prefix="/api")

_FORM_MIMETYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _json_body():
    # silent=True: un body ilegible llega como None y lo rechaza el validador
    return request.get_json(silent=True)


def _generate(task: str, text: str, target_language: str) -> str:
    prompt = build_prompt(task, text, target_language)
    return get_services().llm.generate(prompt)


@bp.post("/translate")
def translate_api():
    """
    Body JSON:
      { "text": "...", "targetLanguage": "es" }
    """
    req = parse_translate(_json_body())
    translation = _generate("translate", req.text, req.target_language)
    return jsonify({"translation": translation}), 200


@bp.post("/transcribe-and-translate")
def transcribe_and_translate_api():
    """
    Dos formas de entrada:
      - multipart: audio + targetLanguage  -> { text, translation }
      - JSON: { text, task, targetLang }   -> { result }
    """
    if request.mimetype in _FORM_MIMETYPES:
        return _from_audio()

    req = parse_task(_json_body())
    result = _generate(req.task, req.text, req.target_language)
    return jsonify({"result": result}), 200


def _from_audio():
    req = parse_transcription(request.files, request.form)
    services = get_services()

    # 1) Transcripción
    text = services.transcriber.transcribe(req.audio, req.filename, req.mimetype)
    current_app.logger.info(
        "transcribed %s (%d bytes) -> %d chars", req.filename, len(req.audio), len(text)
    )

    # 2) Traducción
    try:
        translation = _generate("translate", text, req.target_language)
    except EmptyResultError as e:
        raise UpstreamError("Translation failed or returned empty result.") from e

    return jsonify({"text": text, "translation": translation}), 200
