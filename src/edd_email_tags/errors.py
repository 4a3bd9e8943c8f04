"""Exception types for edd-email-tags.

Only developer-time mistakes surface as exceptions. Failures inside a tag's
resolver are contained by :meth:`EmailTag.wrapped_resolver` and never reach
the email pipeline.
"""
from __future__ import annotations


class EmailTagsError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(EmailTagsError, RuntimeError):
    """Raised when a tag definition is incomplete at registration time.

    Parameters
    ----------
    tag:
        Identifier of the offending tag.
    reason:
        Human-readable description of what is missing.
    """

    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"{reason}: {tag}")
