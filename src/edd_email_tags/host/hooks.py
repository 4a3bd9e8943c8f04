"""HookRegistry — synchronous action hooks.

A minimal action dispatcher modelled on the host CMS's ``add_action`` /
``do_action`` pair. Callbacks run in ascending priority, ties in the order
they were added. A process-wide default instance is available through
:func:`get_hooks`; tests and embedders can swap it with :func:`set_hooks`.
"""
from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

#: Fired once after every plugin has loaded.
PLUGINS_LOADED = "plugins_loaded"

#: Fired by the email subsystem when it accepts tag declarations.
ADD_EMAIL_TAGS = "edd_add_email_tags"

DEFAULT_PRIORITY = 10


@dataclass(order=True)
class _Action:
    priority: int
    sequence: int
    callback: Callable[..., Any] = field(compare=False)


class HookRegistry:
    """Registry of action callbacks keyed by hook name.

    Example
    -------
    ::

        hooks = HookRegistry()
        hooks.add_action("plugins_loaded", boot)
        hooks.do_action("plugins_loaded")
        assert hooks.did_action("plugins_loaded") == 1
    """

    def __init__(self) -> None:
        self._actions: dict[str, list[_Action]] = {}
        self._fired: dict[str, int] = {}
        self._sequence = itertools.count()

    def add_action(
        self,
        hook: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Subscribe *callback* to *hook*."""
        self._actions.setdefault(hook, []).append(
            _Action(priority=priority, sequence=next(self._sequence), callback=callback)
        )

    def do_action(self, hook: str, *args: Any) -> None:
        """Run every callback subscribed to *hook* with *args*.

        Callbacks added while the hook is running are not called in the
        current pass.
        """
        self._fired[hook] = self._fired.get(hook, 0) + 1
        actions = sorted(self._actions.get(hook, []))
        logger.debug("Running %d callback(s) for hook %r", len(actions), hook)
        for action in actions:
            action.callback(*args)

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def did_action(self, hook: str) -> int:
        """Return how many times *hook* has been fired."""
        return self._fired.get(hook, 0)

    def remove_all_actions(self, hook: str) -> None:
        self._actions.pop(hook, None)


_default_hooks = HookRegistry()


def get_hooks() -> HookRegistry:
    """Return the process-wide hook registry."""
    return _default_hooks


def set_hooks(hooks: HookRegistry) -> HookRegistry:
    """Install *hooks* as the process-wide registry and return the previous one."""
    global _default_hooks
    previous = _default_hooks
    _default_hooks = hooks
    return previous
