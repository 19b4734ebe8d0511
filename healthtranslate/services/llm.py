# healthtranslate/services/llm.py
# -*- coding: utf-8 -*-
"""
Adaptadores del modelo de lenguaje.

Función pública de cada adaptador:
    generate(prompt: str, model_id: Optional[str] = None) -> str

Comportamiento:
  - Una sola llamada aguas arriba, sin reintentos.
  - Devuelve el texto del primer candidato, recortado.
  - Error del SDK, timeout o texto vacío => UpstreamError.
  - Sin credencial => UpstreamConfigError (antes de tocar la red).
"""

from __future__ import annotations

import logging
import re
import threading
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Tuple

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
from openai import OpenAIError

from healthtranslate.errors import (
    EmptyResultError,
    NoModelAvailableError,
    UpstreamConfigError,
    UpstreamError,
)
from healthtranslate.services.clients import openai_client
from healthtranslate.services.prompts import SYSTEM_PROMPT

log = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# Orden de preferencia del selector de modelos Gemini
MODEL_PREFERENCE = ("pro", "flash")
_EXCLUDED_MODEL_HINTS = ("embedding", "vision", "tts", "image", "aqa")
_UNSTABLE_MODEL_HINTS = ("exp", "preview")
_VERSION_RX = re.compile(r"-(\d+(?:\.\d+)*)")
# Errores de la API y de transporte (google-genai no envuelve los de httpx)
_GENAI_ERRORS = (genai_errors.APIError, httpx.HTTPError)
GENERATE_ACTION = "generateContent"


class LanguageModel(ABC):
    @abstractmethod
    def generate(self, prompt: str, model_id: Optional[str] = None) -> str:
        raise NotImplementedError


def _require_output(text: Optional[str], model_id: str) -> str:
    out = (text or "").strip()
    if not out:
        raise EmptyResultError(f"Model {model_id} returned an empty result.")
    return out


# ---------------------- OpenAI ---------------------- #
class OpenAIChatModel(LanguageModel):
    """Chat Completions (openai==1.x) con prompt de sistema fijo."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        default_model: Optional[str] = None,
        temperature: float = 0.2,
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        self.api_key = api_key
        self.default_model = default_model or DEFAULT_OPENAI_MODEL
        self.temperature = temperature
        self.timeout = timeout
        self._client = client
        self._lock = threading.Lock()

    def _get_client(self):
        # Cliente perezoso: la app arranca aunque falte la clave
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                self._client = openai_client(self.api_key, self.timeout)
        return self._client

    def generate(self, prompt: str, model_id: Optional[str] = None) -> str:
        client = self._get_client()
        use_model = (model_id or self.default_model).strip()

        try:
            resp = client.chat.completions.create(
                model=use_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=float(self.temperature),
            )
        except OpenAIError as e:
            log.warning("openai generate failed (model=%s): %s", use_model, e)
            raise UpstreamError(f"Language model request failed: {e}") from e

        return _require_output(_first_choice_text(resp), use_model)


def _first_choice_text(resp: Any) -> Optional[str]:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


# ---------------------- Gemini ---------------------- #
def _model_id(name: str) -> str:
    # "models/gemini-1.5-pro" -> "gemini-1.5-pro"
    return name.split("/", 1)[1] if name.startswith("models/") else name


def pick_model(models: Iterable[Any], preference: Iterable[str] = MODEL_PREFERENCE) -> str:
    """
    Elige un modelo entre los visibles para la credencial.

    Solo se consideran los que soportan generateContent; entre ellos gana la
    primera palabra clave de `preference` que aparezca en el nombre y, a
    igualdad, los estables antes que exp/preview y la versión numérica más alta.
    """
    usable = []
    for m in models:
        name = _model_id(getattr(m, "name", "") or "")
        actions = getattr(m, "supported_actions", None) or []
        if not name or GENERATE_ACTION not in actions:
            continue
        if any(hint in name for hint in _EXCLUDED_MODEL_HINTS):
            continue
        usable.append(name)

    for keyword in preference:
        matches = [n for n in usable if keyword in n]
        if matches:
            return max(matches, key=_model_rank)

    raise NoModelAvailableError()


def _model_rank(name: str) -> Tuple[bool, Tuple[int, ...], str]:
    # "gemini-2.5-pro" -> (True, (2, 5), ...); "gemini-2.5-pro-exp-03-25" -> (False, (2, 5), ...)
    stable = not any(hint in name for hint in _UNSTABLE_MODEL_HINTS)
    m = _VERSION_RX.search(name)
    version = tuple(int(p) for p in m.group(1).split(".")) if m else ()
    return stable, version, name


class GeminiModel(LanguageModel):
    """google-genai; si no hay modelo fijado se consulta la lista de modelos."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        default_model: Optional[str] = None,
        temperature: float = 0.2,
        client: Any = None,
    ):
        self.api_key = api_key
        self.default_model = default_model
        self.temperature = temperature
        self._client = client
        self._picked: Optional[str] = None
        self._lock = threading.Lock()

    def _get_client(self):
        if self._client is not None:
            return self._client
        if not self.api_key:
            raise UpstreamConfigError("GOOGLE_API_KEY is not set")
        with self._lock:
            if self._client is None:
                self._client = genai.Client(api_key=self.api_key)
        return self._client

    def resolve_model(self) -> str:
        if self.default_model:
            return self.default_model
        if self._picked is not None:
            return self._picked
        client = self._get_client()
        with self._lock:
            if self._picked is None:
                try:
                    listed = list(client.models.list())
                except _GENAI_ERRORS as e:
                    raise UpstreamError(f"Could not list models: {e}") from e
                self._picked = pick_model(listed)
                log.info("gemini model picked: %s", self._picked)
        return self._picked

    def generate(self, prompt: str, model_id: Optional[str] = None) -> str:
        client = self._get_client()
        use_model = model_id or self.resolve_model()

        config = genai_types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            temperature=float(self.temperature),
        )
        try:
            resp = client.models.generate_content(
                model=use_model,
                contents=prompt,
                config=config,
            )
        except _GENAI_ERRORS as e:
            log.warning("gemini generate failed (model=%s): %s", use_model, e)
            raise UpstreamError(f"Language model request failed: {e}") from e

        return _require_output(_response_text(resp), use_model)


def _response_text(resp: Any) -> Optional[str]:
    # .text lanza ValueError en algunas versiones si la respuesta fue bloqueada
    try:
        text = getattr(resp, "text", None)
    except ValueError:
        return None
    return text if isinstance(text, str) else None


def build_language_model(config) -> LanguageModel:
    provider = (config.get("LLM_PROVIDER") or "openai").lower()
    if provider == "openai":
        return OpenAIChatModel(
            config.get("OPENAI_API_KEY"),
            default_model=config.get("LLM_MODEL"),
            temperature=config.get("LLM_TEMPERATURE", 0.2),
            timeout=config.get("UPSTREAM_TIMEOUT"),
        )
    if provider == "gemini":
        return GeminiModel(
            config.get("GOOGLE_API_KEY"),
            default_model=config.get("LLM_MODEL"),
            temperature=config.get("LLM_TEMPERATURE", 0.2),
        )
    raise UpstreamConfigError(f"Unknown LLM_PROVIDER: {provider}")
