from marshmallow import Schema, fields, validate, EXCLUDE, missing
from markupsafe import escape

ALPHANUMERIC_RE = r"^[A-Za-z0-9]+$"


def required(message: str) -> validate.Length:
    """Non-empty after trimming."""
    return validate.Length(min=1, error=message)


def max_length(limit: int, message: str) -> validate.Length:
    return validate.Length(max=limit, error=message)


def alphanumeric(message: str) -> validate.Regexp:
    return validate.Regexp(ALPHANUMERIC_RE, error=message)


def iso_date(message: str) -> fields.Date:
    """Optional ISO-8601 date; an empty input loads as None."""
    return fields.Date(allow_none=True, load_default=None, error_messages={"invalid": message})


class FormSchema(Schema):
    """
    Base for the HTML form schemas.

    Validators on each field run in declaration order and every failure is
    reported (marshmallow does not stop at the first failing validator).
    sanitize() produces the values the validators see.
    """

    class Meta:
        unknown = EXCLUDE

    # Free-text fields that are HTML-escaped after trimming
    escaped: tuple = ()

    def _clean(self, name: str, value) -> str:
        value = "" if value is None else str(value).strip()
        if name in self.escaped:
            value = str(escape(value))
        return value

    def sanitize(self, form) -> dict:
        """
        Read every declared field from a request body (a MultiDict or a plain dict):
        - strings are trimmed, escaped fields are HTML-escaped
        - empty dates become None, other empty fields with a default take it
        - list fields keep every non-empty submitted value
        """
        values = {}
        for name, field in self.declared_fields.items():
            if isinstance(field, fields.List):
                raw = form.getlist(name) if hasattr(form, "getlist") else form.get(name, [])
                if isinstance(raw, str):
                    raw = [raw]
                values[name] = [v for v in (self._clean(name, item) for item in raw) if v]
                continue

            value = self._clean(name, form.get(name))
            if value == "":
                if isinstance(field, fields.Date):
                    value = None
                elif field.load_default is not missing and field.load_default is not None:
                    default = field.load_default
                    value = default() if callable(default) else default
            values[name] = value
        return values
