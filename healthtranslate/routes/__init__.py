# healthtranslate/routes/__init__.py
from __future__ import annotations


def register_routes(app):
    # Importa y registra blueprints aquí para evitar imports circulares
    from healthtranslate.routes.pages import bp as pages_bp
    app.register_blueprint(pages_bp)

    from healthtranslate.routes.translate import bp as translate_bp
    app.register_blueprint(translate_bp)

    from healthtranslate.routes.speech import bp as speech_bp
    app.register_blueprint(speech_bp)
