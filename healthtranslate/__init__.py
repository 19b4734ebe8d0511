# healthtranslate/__init__.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask


def create_app(overrides: Optional[Mapping[str, Any]] = None, services: Any = None) -> Flask:
    """
    Factory de la app.

    - overrides: claves de configuración que pisan a Config (tests, scripts).
    - services: adaptadores ya construidos; si no llegan se crean a partir de
      la configuración (credenciales incluidas) con build_services().
    """
    from healthtranslate.config import Config
    from healthtranslate.errors import register_error_handlers
    from healthtranslate.routes import register_routes
    from healthtranslate.services import EXTENSION_KEY, build_services

    app = Flask(__name__)

    # -----------------------------------------------------------
    # CONFIG
    # -----------------------------------------------------------
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False
    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # -----------------------------------------------------------
    # ADAPTADORES (modelo de lenguaje, voz, transcripción)
    # -----------------------------------------------------------
    app.extensions[EXTENSION_KEY] = services if services is not None else build_services(app.config)

    # -----------------------------------------------------------
    # ERRORES + BLUEPRINTS
    # -----------------------------------------------------------
    register_error_handlers(app)
    register_routes(app)

    # -----------------------------------------------------------
    # HEALTHCHECK
    # -----------------------------------------------------------
    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    app.logger.info(
        "healthtranslate ready (llm=%s, openai_key=%s, google_key=%s)",
        app.config.get("LLM_PROVIDER"),
        "set" if app.config.get("OPENAI_API_KEY") else "missing",
        "set" if app.config.get("GOOGLE_API_KEY") else "missing",
    )
    return app
