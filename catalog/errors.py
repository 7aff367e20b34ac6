import logging
import traceback

from flask import current_app, render_template
from werkzeug.exceptions import HTTPException
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, err: Exception | None = None):
    """Render the generic error page; exception detail only in debug mode."""
    details = None
    if err is not None and current_app and current_app.debug:
        details = {
            "type": err.__class__.__name__,
            "message": str(err),
            "traceback": "".join(traceback.format_exception(type(err), err, err.__traceback__)),
        }
    return render_template("error.html", title="Error", message=message, status=status, error=details), status


def register_error_handlers(app):
    # Werkzeug HTTPExceptions (404 from lookups and unknown routes, 405, 400...) keep their status
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if current_app and current_app.debug:
            logger.info("%s %s", err.code, err.description)
        return error_response(err.description or err.name, err.code or 500, err)

    # Store failures: fatal to the request, never retried
    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(err: SQLAlchemyError):
        logger.exception("Store failure", exc_info=err)
        return error_response("The catalog database is unavailable", 500, err)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        return error_response("An unexpected error occurred", 500, err)
