#!/usr/bin/env python3
"""
Shared SQLAlchemy base for the library catalog.

- UUID primary key (String(36)) assigned when the record is built
- created_at / updated_at timestamps set by the database
- canonical resource path derived from the identity
- to_dict() that formats timestamps and removes SA internals

Notes:
- The identity is immutable: DBStorage.update() copies stored fields onto an
  existing row and never writes `id`.
- We use server-side defaults (func.now()) so timestamps are set consistently by the DB.
"""

from __future__ import annotations

from datetime import date, datetime
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

TIME_FMT = "%Y-%m-%dT%H:%M:%S.%f"

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


def format_date_med(d: date | None) -> str:
    """Medium date format, e.g. 'Oct 6, 2014'. Empty string for no date."""
    if not d:
        return ""
    return f"{d:%b} {d.day}, {d.year}"


def format_date_iso(d: date | None) -> str:
    """YYYY-MM-DD for pre-filling <input type="date">."""
    return d.isoformat() if d else ""


class BaseModel:
    """
    Base mixin for all catalog entities.

    Subclasses set `url_segment`; `url` is `/catalog/<url_segment>/<id>`.
    """

    url_segment: str = ""

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Stored fields that an update may replace; the identity and timestamps are never part of it.
    PROTECTED_FIELDS = ("id", "created_at", "updated_at")

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        Passing `id` explicitly keeps that identity (used by the update forms).
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)
        # Ensure an id exists if caller passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __str__(self) -> str:
        """Human-friendly representation including id and fields."""
        return f"[{self.__class__.__name__}] ({self.id}) {self.to_dict()}"

    @property
    def url(self) -> str:
        return f"/catalog/{self.url_segment}/{self.id}"

    def to_dict(self) -> dict:
        """
        Return a dictionary of stored fields:
        - Adds __class__
        - Formats created_at / updated_at to TIME_FMT if they are datetime objects
        - Removes SQLAlchemy internal state
        """
        d = {k: v for k, v in self.__dict__.items() if k != "_sa_instance_state"}
        if isinstance(d.get("created_at"), datetime):
            d["created_at"] = d["created_at"].strftime(TIME_FMT)
        if isinstance(d.get("updated_at"), datetime):
            d["updated_at"] = d["updated_at"].strftime(TIME_FMT)
        d["__class__"] = self.__class__.__name__
        return d
