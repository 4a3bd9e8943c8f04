"""Pydantic model for the email context passed to tag resolvers."""
from __future__ import annotations

from pydantic import BaseModel, Field


class EmailContext(BaseModel):
    """Describes the email being sent.

    Only ``context`` is read by this package; the other fields are there for
    resolvers that want them. Any object with a ``context`` attribute can be
    passed in its place.
    """

    context: str = "order"
    recipient: str = "customer"
    metadata: dict[str, object] = Field(default_factory=dict)
