from marshmallow import fields

from models.schemas.common import FormSchema, required, max_length


class BookFormSchema(FormSchema):
    escaped = ("title", "author", "summary", "isbn", "genre")

    title = fields.String(validate=[
        required("Title must not be empty."),
        max_length(255, "Title must not exceed 255 characters."),
    ])
    # Reference to an Author identity
    author = fields.String(validate=required("Author must not be empty."))
    summary = fields.String(validate=required("Summary must not be empty."))
    isbn = fields.String(validate=[
        required("ISBN must not be empty"),
        max_length(32, "ISBN must not exceed 32 characters."),
    ])
    # Genre identities (checkboxes); may be empty
    genre = fields.List(fields.String(), load_default=list)
