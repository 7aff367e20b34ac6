from marshmallow import fields

from models.schemas.common import FormSchema, required, max_length, alphanumeric, iso_date


class AuthorFormSchema(FormSchema):
    escaped = ("first_name", "family_name")

    first_name = fields.String(validate=[
        required("First name must be specified."),
        max_length(100, "First name must not exceed 100 characters."),
        alphanumeric("First name has non-alphanumeric characters."),
    ])
    family_name = fields.String(validate=[
        required("Family name must be specified."),
        max_length(100, "Family name must not exceed 100 characters."),
        alphanumeric("Family name has non-alphanumeric characters."),
    ])
    date_of_birth = iso_date("Invalid date of birth")
    date_of_death = iso_date("Invalid date of death")
