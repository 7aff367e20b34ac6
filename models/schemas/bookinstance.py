from marshmallow import fields, validate

from models.bookinstance import STATUSES, DEFAULT_STATUS
from models.schemas.common import FormSchema, required, iso_date


class BookInstanceFormSchema(FormSchema):
    escaped = ("book", "imprint", "status")

    # Reference to a Book identity
    book = fields.String(validate=required("Book must be specified"))
    imprint = fields.String(validate=required("Imprint must be specified"))
    status = fields.String(
        load_default=DEFAULT_STATUS,
        validate=validate.OneOf(STATUSES, error="Status must be one of: {choices}."),
    )
    due_back = iso_date("Invalid date")
