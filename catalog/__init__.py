import logging

from flask import Flask, current_app, redirect, request, url_for
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from models.db_storage import DBStorage

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Local Library Catalog",
        "version": "1.0.0",
        "description": "HTML pages for browsing and editing authors, books, book copies and genres.",
    },
    "basePath": "/",
    "schemes": ["http"],
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}

logger = logging.getLogger(__name__)


def get_storage() -> DBStorage:
    """The DBStorage built by create_app() for the current application."""
    return current_app.extensions["storage"]


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("catalog").setLevel(level)


def create_app(config_name: str | None = None, storage: DBStorage | None = None, **overrides) -> Flask:
    """
    Application factory: creates and configures the Flask app.
      - configuration chosen by name or APP_ENV, then `overrides`
      - one DBStorage per app (pass `storage` to inject one, e.g. in tests),
        ready before the first request and disposed by the caller on shutdown
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    configure_logging(app)

    if storage is None:
        storage = DBStorage(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))
    storage.reload()
    app.extensions["storage"] = storage

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Every unhandled failure ends on the error page
    register_error_handlers(app)

    from .health import bp as health_bp
    from .home import bp as home_bp
    from .authors import bp as authors_bp
    from .books import bp as books_bp
    from .bookinstances import bp as bookinstances_bp
    from .genres import bp as genres_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(home_bp, url_prefix="/catalog")
    app.register_blueprint(authors_bp, url_prefix="/catalog")
    app.register_blueprint(books_bp, url_prefix="/catalog")
    app.register_blueprint(bookinstances_bp, url_prefix="/catalog")
    app.register_blueprint(genres_bp, url_prefix="/catalog")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.after_request
    def log_request(response):
        logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.route("/")
    def root():
        return redirect(url_for("home.index"))

    return app
