from marshmallow import fields, validate

from models.schemas.common import FormSchema, required


class GenreFormSchema(FormSchema):
    escaped = ("name",)

    name = fields.String(validate=[
        required("Genre name required"),
        validate.Length(min=3, max=100, error="Genre name must be between {min} and {max} characters."),
    ])
