# healthtranslate/services/clients.py
from __future__ import annotations

from typing import Optional

from openai import OpenAI

from healthtranslate.errors import UpstreamConfigError


def openai_client(api_key: Optional[str], timeout: Optional[float] = None) -> OpenAI:
    """
    OpenAI (openai==1.x) con la clave recibida; sin clave => UpstreamConfigError.
    max_retries=0: una sola llamada por petición, sin reintentos del SDK.
    """
    if not api_key:
        raise UpstreamConfigError("OPENAI_API_KEY is not set")
    kwargs: dict = {"api_key": api_key, "max_retries": 0}
    if timeout is not None:
        kwargs["timeout"] = timeout
    return OpenAI(**kwargs)
