from flask import Blueprint

from . import get_storage

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    """
    Health check
    ---
    tags:
      - Health
    responses:
      200:
        description: Catalog is up and the database answers
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            version:
              type: string
              example: 1.0.0
            records:
              type: integer
              example: 42
    """
    return {"status": "ok", "version": "1.0.0", "records": get_storage().count()}, 200
