# healthtranslate/services/prompts.py
"""
Construcción de prompts para el modelo de lenguaje.

Reglas:
  1) 'translate' => pide SOLO la traducción, sin preámbulo.
  2) 'summarize' => pide un resumen de 3-5 frases, SOLO el resumen.
  3) Sin idioma destino => English.
El texto del usuario va siempre entre triple comilla y sin tocar, de modo que
las dos tareas solo difieren en la instrucción.
"""

from __future__ import annotations

from typing import Optional

from healthtranslate.validators import DEFAULT_TARGET_LANGUAGE, TASKS

# Códigos que ofrece el selector de idioma del cliente
LANGUAGE_NAMES = {
    "es": "Spanish",
    "en": "English",
    "fr": "French",
    "de": "German",
    "zh": "Chinese",
    "ar": "Arabic",
    "ru": "Russian",
    "hi": "Hindi",
    "ja": "Japanese",
}

SYSTEM_PROMPT = (
    "You are a precise medical-grade translation assistant. "
    "Preserve meaning, tone and proper nouns. "
    "Return ONLY the requested output, with no explanations or preamble."
)

_INSTRUCTIONS = {
    "translate": "Translate to {language}. Output ONLY the translation:",
    "summarize": "Summarize in 3-5 sentences. Output ONLY the summary:",
}


def language_name(code: Optional[str]) -> str:
    """'es' -> 'Spanish'; cualquier otro valor se respeta tal cual."""
    if not code or not code.strip():
        return DEFAULT_TARGET_LANGUAGE
    c = code.strip()
    return LANGUAGE_NAMES.get(c.lower(), c)


def build_prompt(task: str, text: str, target_language: Optional[str] = None) -> str:
    if task not in TASKS:
        raise ValueError(f"unknown task: {task!r}")
    instruction = _INSTRUCTIONS[task].format(language=language_name(target_language))
    return f'{instruction}\n\n"""{text}"""'
