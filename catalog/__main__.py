"""
Entrypoint for running the catalog in development.
In production run create_app() under a WSGI server (gunicorn/uwsgi).
"""
import os
from . import create_app, get_storage

# Respect APP_ENV for configuration selection (handled in get_config())
app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_RUN_PORT", "3000"))
    debug = bool(os.getenv("FLASK_DEBUG", str(app.config.get("DEBUG", True))).lower() in ("1", "true", "yes"))
    try:
        app.run(host=host, port=port, debug=debug)
    finally:
        with app.app_context():
            get_storage().dispose()
