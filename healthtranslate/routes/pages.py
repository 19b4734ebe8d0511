# healthtranslate/routes/pages.py
from __future__ import annotations

import os

from flask import Blueprint, abort, current_app, render_template, send_from_directory

from healthtranslate.services.prompts import LANGUAGE_NAMES

bp = Blueprint("pages", __name__)


@bp.get("/")
def index():
    # Página principal: grabar / escribir, traducir y escuchar
    return render_template(
        "index.html",
        languages=LANGUAGE_NAMES,
        default_language="es",
    )


@bp.get("/favicon.ico")
def favicon():
    static_folder = current_app.static_folder or "static"
    path = os.path.join(static_folder, "favicon.ico")
    if os.path.exists(path):
        return send_from_directory(static_folder, "favicon.ico")
    abort(404)
