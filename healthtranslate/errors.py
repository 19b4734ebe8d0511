# healthtranslate/errors.py
"""
Errores de la aplicación y su mapeo a respuestas HTTP.

Todas las rutas lanzan subclases de AppError; los handlers registrados en
create_app() las convierten en {"error": "<mensaje>"} con su status.
"""

from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class PayloadTooLargeError(AppError):
    status_code = 413
    default_message = "Payload too large"


class UpstreamConfigError(AppError):
    """Falta una credencial o la configuración del proveedor es inválida."""

    status_code = 500
    default_message = "Upstream API is not configured"


class UpstreamError(AppError):
    status_code = 502
    default_message = "Upstream request failed"


class EmptyResultError(UpstreamError):
    default_message = "Model returned an empty result."


class TranscriptionError(UpstreamError):
    default_message = "Failed to transcribe audio."


class NoModelAvailableError(UpstreamError):
    default_message = "No generative model available for these credentials"


def _error_response(message: str, status: int):
    return jsonify({"error": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        # 4xx: entrada del cliente; 5xx: algo falló de nuestro lado o aguas arriba
        if err.status_code >= 500:
            app.logger.error("%s %s -> %s: %s", request.method, request.path,
                             err.status_code, err.message)
        else:
            app.logger.info("%s %s -> %s: %s", request.method, request.path,
                            err.status_code, err.message)
        return _error_response(err.message, err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        # Solo las rutas /api responden JSON; el resto conserva la página de werkzeug
        if not request.path.startswith("/api/"):
            return err
        if err.code == 413:
            return _error_response("Uploaded file is too large.", 413)
        return _error_response(err.description or err.name, err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("unhandled error on %s %s: %s", request.method, request.path, err)
        return _error_response(str(err) or "Unexpected server error.", 500)
