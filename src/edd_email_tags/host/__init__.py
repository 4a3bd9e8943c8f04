"""Host collaborators.

The factory talks to the host through two seams: the action hooks it
subscribes to (:class:`HookRegistry`) and the email subsystem that accepts
tag declarations (:class:`EmailTagHost`). Both have process-wide defaults
that can be replaced.
"""
from __future__ import annotations

from edd_email_tags.host.hooks import (
    ADD_EMAIL_TAGS,
    PLUGINS_LOADED,
    HookRegistry,
    get_hooks,
    set_hooks,
)
from edd_email_tags.host.memory import (
    EmailTagHost,
    InMemoryEmailTagHost,
    RegisteredTag,
    get_host,
    set_host,
)

__all__ = [
    "ADD_EMAIL_TAGS",
    "EmailTagHost",
    "HookRegistry",
    "InMemoryEmailTagHost",
    "PLUGINS_LOADED",
    "RegisteredTag",
    "get_hooks",
    "get_host",
    "set_hooks",
    "set_host",
]
