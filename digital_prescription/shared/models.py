"""Shared document building blocks."""

from datetime import datetime, timezone
from pydantic import Field


def utc_now() -> datetime:
    """Current UTC time without tzinfo, the form MongoDB hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    """created_at / updated_at pair carried by every stored document."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def update_timestamp(self) -> None:
        self.updated_at = utc_now()
