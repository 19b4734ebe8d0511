import os

from dotenv import load_dotenv

# .env opcional; nunca pisa variables ya exportadas
load_dotenv(override=False)


def _float_or_none(value):
    if value is None or not str(value).strip():
        return None
    return float(value)


class Config:
    # ==========================
    #  FLASK
    # ==========================
    SECRET_KEY = os.getenv("SECRET_KEY") or os.getenv("FLASK_SECRET_KEY", "change-me")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Whisper acepta hasta 25 MB por archivo
    MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "25"))
    MAX_CONTENT_LENGTH = MAX_UPLOAD_MB * 1024 * 1024

    # ==========================
    #  CREDENCIALES
    # ==========================
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

    # ==========================
    #  MODELO DE LENGUAJE
    # ==========================
    # openai | gemini
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").strip().lower()
    # Vacío => default del proveedor (o el selector de modelos en Gemini)
    LLM_MODEL = (os.getenv("LLM_MODEL") or os.getenv("GENAI_MODEL") or "").strip() or None
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))

    # ==========================
    #  VOZ
    # ==========================
    TTS_MODEL = os.getenv("TTS_MODEL", "tts-1")
    TTS_VOICE = os.getenv("TTS_VOICE", "alloy")
    TRANSCRIBE_MODEL = os.getenv("TRANSCRIBE_MODEL", "whisper-1")

    # Timeout (segundos) del cliente OpenAI; None => default del SDK
    UPSTREAM_TIMEOUT = _float_or_none(os.getenv("UPSTREAM_TIMEOUT"))
