"""TagBuilder — fluent construction of a single EmailTag.

Obtained from :meth:`EmailTags.tag`. Setters overwrite and return the
builder; :meth:`TagBuilder.register` validates, builds the immutable
:class:`EmailTag` and hands it to the owning factory.

Example
-------
::

    tags = EmailTags.register(__file__)
    (
        tags.tag("license_key")
        .description("The license key issued for the order")
        .contexts(["order", "license"])
        .callback(lambda order_id, order, email: lookup_key(order_id))
        .register()
    )
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from edd_email_tags.errors import ConfigurationError
from edd_email_tags.tags.email_tag import DEFAULT_CONTEXTS, EmailTag, Resolver, as_values

if TYPE_CHECKING:
    from edd_email_tags.tags.factory import EmailTags


def default_label(tag: str) -> str:
    """Derive a label from a tag id: underscores become spaces, first letter upper-cased.

    Only an ASCII ``a``-``z`` first character is upper-cased, so the label
    never changes length.

    >>> default_label("first_name")
    'First name'
    """
    text = tag.replace("_", " ")
    first = text[:1]
    if "a" <= first <= "z":
        first = first.upper()
    return first + text[1:]


class TagBuilder:
    """Mutable, single-use builder for one tag definition.

    Parameters
    ----------
    factory:
        The factory the finished tag is added to.
    tag:
        Tag identifier.
    """

    def __init__(self, factory: EmailTags, tag: str) -> None:
        self._factory = factory
        self._tag = tag
        self._description = ""
        self._label = ""
        self._resolver: Optional[Resolver] = None
        self._contexts: list[str] = list(DEFAULT_CONTEXTS)
        self._recipients: list[str] = []

    # ------------------------------------------------------------------
    # Fluent setters
    # ------------------------------------------------------------------

    def description(self, description: str) -> TagBuilder:
        self._description = description
        return self

    def label(self, label: str) -> TagBuilder:
        self._label = label
        return self

    def callback(self, callback: Resolver) -> TagBuilder:
        """Set the resolver. The last call wins."""
        self._resolver = callback
        return self

    def contexts(self, contexts: Iterable[str]) -> TagBuilder:
        """Restrict the tag to these email contexts. An empty list removes the restriction."""
        self._contexts = list(as_values(contexts))
        return self

    def recipients(self, recipients: Iterable[str]) -> TagBuilder:
        self._recipients = list(as_values(recipients))
        return self

    # ------------------------------------------------------------------
    # Terminal operation
    # ------------------------------------------------------------------

    def build(self) -> EmailTag:
        """Build the EmailTag without adding it to the factory.

        Raises
        ------
        ConfigurationError
            If no callback has been set.
        """
        if self._resolver is None:
            raise ConfigurationError(self._tag, "Callback must be set for email tag")

        return EmailTag(
            tag=self._tag,
            description=self._description,
            label=self._label or default_label(self._tag),
            resolver=self._resolver,
            contexts=tuple(self._contexts),
            recipients=tuple(self._recipients),
        )

    def register(self) -> EmailTags:
        """Build the tag, add it to the owning factory and return the factory.

        Raises
        ------
        ConfigurationError
            If no callback has been set. Nothing is added in that case.
        """
        return self._factory.add_tag(self.build())

    def __repr__(self) -> str:
        return f"TagBuilder(tag={self._tag!r}, owner={self._factory.owner_key!r})"
