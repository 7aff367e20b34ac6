"""
Form processing shared by the create/update handlers.

validate_form() turns a request body into sanitized values plus an ordered
list of failures. It has no side effects: the handlers decide between
re-rendering the form and persisting.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, List, NamedTuple

from marshmallow import ValidationError, fields

from models.schemas.common import FormSchema


class Failure(NamedTuple):
    field: str
    message: str

    @property
    def msg(self) -> str:
        return self.message


@dataclass
class FormResult:
    values: dict
    failures: List[Failure] = dataclasses.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


def _messages(value) -> List[str]:
    # List fields report per-item errors as {index: [messages]}
    if isinstance(value, dict):
        out: List[str] = []
        for item in value.values():
            out.extend(_messages(item))
        return out
    if isinstance(value, (list, tuple)):
        return [str(m) for m in value]
    return [str(value)]


def flatten_errors(schema: FormSchema, messages: dict) -> List[Failure]:
    """marshmallow's {field: [messages]} as failures in field declaration order."""
    failures = []
    for name in schema.declared_fields:
        if name in messages:
            failures.extend(Failure(name, m) for m in _messages(messages[name]))
    return failures


def validate_form(schema: FormSchema, form) -> FormResult:
    """
    Sanitize then validate a submitted form.

    On success `values` holds the loaded (typed) values. On failure it holds
    the sanitized input, with the fields that did validate already typed and
    rejected dates set to None, so the form can be shown again.
    """
    sanitized = schema.sanitize(form)
    try:
        return FormResult(schema.load(sanitized))
    except ValidationError as err:
        values = dict(sanitized)
        if isinstance(err.valid_data, dict):
            values.update(err.valid_data)
        for name in err.messages:
            if isinstance(schema.declared_fields.get(name), fields.Date):
                values[name] = None
        return FormResult(values, flatten_errors(schema, err.messages))
