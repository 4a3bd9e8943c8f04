"""In-process email tag host.

:class:`EmailTagHost` is the contract the factory relies on: a presence
check and a per-tag registration primitive. :class:`InMemoryEmailTagHost`
implements it together with the parts of the host's email subsystem needed
to exercise registered tags: tag lookup, the one-shot tag-registration
signal and plain ``{tag}`` substitution.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from edd_email_tags.host.hooks import ADD_EMAIL_TAGS, HookRegistry, get_hooks

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@runtime_checkable
class EmailTagHost(Protocol):
    """What the factory needs from the host email subsystem."""

    def is_active(self) -> bool: ...

    def add_email_tag(
        self,
        tag: str,
        description: str,
        callback: Callable[..., Any],
        label: str,
        contexts: Sequence[str],
        recipients: Sequence[str],
    ) -> None: ...


@dataclass
class RegisteredTag:
    """A tag as stored by the host."""

    tag: str
    description: str
    callback: Callable[..., Any] = field(repr=False)
    label: str
    contexts: list[str] = field(default_factory=list)
    recipients: list[str] = field(default_factory=list)


class InMemoryEmailTagHost:
    """Reference host that keeps registered tags in memory.

    Parameters
    ----------
    active:
        Result of the presence check. An inactive host never fires the
        tag-registration signal, leaving factories dormant.
    """

    def __init__(self, active: bool = True) -> None:
        self.active = active
        self._tags: dict[str, RegisteredTag] = {}
        self._setup_done = False

    def is_active(self) -> bool:
        return self.active

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_email_tag(
        self,
        tag: str,
        description: str,
        callback: Callable[..., Any],
        label: str,
        contexts: Sequence[str],
        recipients: Sequence[str],
    ) -> None:
        """Register a tag. A later registration of the same id replaces the earlier one."""
        if tag in self._tags:
            logger.debug("Replacing email tag %r", tag)
        self._tags[tag] = RegisteredTag(
            tag=tag,
            description=description,
            callback=callback,
            label=label,
            contexts=list(contexts),
            recipients=list(recipients),
        )

    def remove_email_tag(self, tag: str) -> None:
        self._tags.pop(tag, None)

    def setup_email_tags(self, hooks: Optional[HookRegistry] = None) -> None:
        """Fire the tag-registration signal. Only the first call has an effect."""
        if self._setup_done:
            return
        self._setup_done = True
        (hooks or get_hooks()).do_action(ADD_EMAIL_TAGS)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_tags(self) -> list[RegisteredTag]:
        return list(self._tags.values())

    def get_tag(self, tag: str) -> Optional[RegisteredTag]:
        return self._tags.get(tag)

    def tag_exists(self, tag: str) -> bool:
        return tag in self._tags

    # ------------------------------------------------------------------
    # Substitution
    # ------------------------------------------------------------------

    def do_tags(
        self,
        content: str,
        subject_id: Any,
        subject: Any = None,
        email: Any = None,
    ) -> str:
        """Replace each ``{tag}`` in *content* with its callback's output.

        Placeholders that do not name a registered tag are left as-is.
        """

        def replace(match: re.Match[str]) -> str:
            registered = self._tags.get(match.group(1))
            if registered is None:
                return match.group(0)
            return str(registered.callback(subject_id, subject, email))

        return _PLACEHOLDER.sub(replace, content)


_default_host: EmailTagHost = InMemoryEmailTagHost()


def get_host() -> EmailTagHost:
    """Return the process-wide host."""
    return _default_host


def set_host(host: EmailTagHost) -> EmailTagHost:
    """Install *host* as the process-wide host and return the previous one."""
    global _default_host
    previous = _default_host
    _default_host = host
    return previous
