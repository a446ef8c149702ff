"""Timezone-aware timestamp helpers shared by the tables."""

import datetime

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def timestamp_field():
    """A non-null ``TIMESTAMP WITH TIME ZONE`` column defaulting to now (UTC)."""
    return Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
