"""EmailTag — immutable definition of a single email tag.

An EmailTag holds everything the host needs to register a merge field:
its identifier, label, description, allowed contexts and recipients, and
the resolver that produces the replacement text. The resolver handed to the
host is never the raw callable but the one returned by
:meth:`EmailTag.wrapped_resolver`, which filters on context and contains
resolver failures so that one faulty tag never aborts an email.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from edd_email_tags.config import get_settings

logger = logging.getLogger(__name__)

#: Signature of a user-supplied resolver: ``(subject_id, subject, email)``.
Resolver = Callable[[Any, Any, Any], Any]

#: Signature of the resolver registered with the host.
WrappedResolver = Callable[..., Any]

DEFAULT_CONTEXTS: tuple[str, ...] = ("order",)


@dataclass(frozen=True)
class EmailTag:
    """A finalized email tag.

    Parameters
    ----------
    tag:
        Tag identifier, used as ``{tag}`` in templates. Uniqueness is left
        to the host.
    description:
        Free-text description shown in the host's tag list.
    label:
        Human-readable name of the tag.
    resolver:
        Callable invoked as ``resolver(subject_id, subject, email)`` at send
        time.
    contexts:
        Email contexts the tag applies to. Empty means every context.
    recipients:
        Recipient roles the tag applies to. Passed through to the host
        without interpretation.
    """

    tag: str
    description: str
    label: str
    resolver: Resolver = field(repr=False)
    contexts: tuple[str, ...] = DEFAULT_CONTEXTS
    recipients: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Freeze list arguments so the record cannot change after wrapping.
        object.__setattr__(self, "contexts", as_values(self.contexts))
        object.__setattr__(self, "recipients", as_values(self.recipients))

    # ------------------------------------------------------------------
    # Resolvers
    # ------------------------------------------------------------------

    def wrapped_resolver(self) -> WrappedResolver:
        """Return the resolver to register with the host.

        The returned callable accepts ``(subject_id, subject=None,
        email=None)`` and always returns a value suitable for substitution:

        - an empty string when ``contexts`` is non-empty, an email context is
          given and its ``context`` is not one of ``contexts``;
        - an empty string when the resolver returns None;
        - an empty string when the resolver raises. The error is logged only
          when the debug setting is enabled.

        Returns
        -------
        Callable
            The context-filtering, failure-containing resolver.
        """
        tag = self.tag
        contexts = self.contexts
        resolver = self.resolver

        def resolve(subject_id: Any, subject: Any = None, email: Any = None) -> Any:
            if contexts and email is not None:
                if getattr(email, "context", None) not in contexts:
                    return ""

            try:
                result = resolver(subject_id, subject, email)
            except Exception as exc:
                if _debug_enabled():
                    logger.error('Email tag callback error for tag "%s": %s', tag, exc)
                return ""

            return result if result is not None else ""

        resolve.__name__ = f"resolve_{tag}"
        resolve.__qualname__ = resolve.__name__
        return resolve

    def raw_resolver(self) -> Resolver:
        """Return the original resolver without filtering or error handling."""
        return self.resolver

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, object]:
        """Serialize the descriptive fields to a plain dictionary."""
        return {
            "tag": self.tag,
            "label": self.label,
            "description": self.description,
            "contexts": list(self.contexts),
            "recipients": list(self.recipients),
        }

    def __str__(self) -> str:
        return self.tag


def as_values(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Normalize a context or recipient list. A bare string counts as one value."""
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _debug_enabled() -> bool:
    # Settings problems must not escape a resolver; treat them as debug off.
    try:
        return get_settings().debug
    except Exception:
        return False
