# run_waitress.py
# Sirve la app Flask con Waitress (producción, también en Windows).

import logging
import os

from waitress import serve

from healthtranslate import create_app

if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    application = create_app()
    logging.getLogger(__name__).info("[Waitress] Sirviendo en http://%s:%s", host, port)
    serve(application, listen=f"{host}:{port}", threads=8)
