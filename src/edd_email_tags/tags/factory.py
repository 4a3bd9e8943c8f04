"""EmailTags — per-plugin factory and registry of email tags.

Each embedding plugin owns exactly one EmailTags instance, keyed by an
owner key (conventionally the plugin's main file path). The instance
collects tags declared through :meth:`EmailTags.tag` and pushes them to the
host when the host fires its tag-registration signal.

Lifecycle
---------
::

    created --plugins_loaded--> dormant                 (host absent)
                            \\-> awaiting_registration  (host present)
                                   --edd_add_email_tags--> registered
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import ClassVar, Optional

from edd_email_tags.host.hooks import ADD_EMAIL_TAGS, PLUGINS_LOADED, HookRegistry, get_hooks
from edd_email_tags.host.memory import EmailTagHost, get_host
from edd_email_tags.tags.builder import TagBuilder
from edd_email_tags.tags.email_tag import EmailTag

logger = logging.getLogger(__name__)

_CONSTRUCT = object()


class FactoryState(str, Enum):
    """Where a factory is in the host lifecycle."""

    CREATED = "created"
    DORMANT = "dormant"
    AWAITING_REGISTRATION = "awaiting_registration"
    REGISTERED = "registered"


class EmailTags:
    """Collects email tags for one owner and registers them with the host.

    Instances are obtained with :meth:`register`; the constructor is not
    public.

    Example
    -------
    ::

        tags = EmailTags.register(__file__)
        tags.tag("first_name").callback(get_first_name).register()
        tags.tag("vip_note").contexts([]).callback(get_vip_note).register()
    """

    _registry: ClassVar[dict[str, EmailTags]] = {}

    def __init__(
        self,
        owner_key: str,
        hooks: HookRegistry,
        host: EmailTagHost,
        *,
        _token: object = None,
    ) -> None:
        if _token is not _CONSTRUCT:
            raise TypeError("Use EmailTags.register(owner_key) to obtain an instance.")
        self._owner_key = owner_key
        self._hooks = hooks
        self._host = host
        self._tags: list[EmailTag] = []
        self._state = FactoryState.CREATED
        hooks.add_action(PLUGINS_LOADED, self.initialize)

    # ------------------------------------------------------------------
    # Process-wide registry
    # ------------------------------------------------------------------

    @classmethod
    def register(
        cls,
        owner_key: str,
        hooks: Optional[HookRegistry] = None,
        host: Optional[EmailTagHost] = None,
    ) -> EmailTags:
        """Return the factory for *owner_key*, creating it on first use.

        Parameters
        ----------
        owner_key:
            Identity of the embedding plugin.
        hooks:
            Hook registry to subscribe to. Defaults to the process-wide one.
        host:
            Email subsystem to register tags with. Defaults to the
            process-wide one.

        ``hooks`` and ``host`` only apply when the factory is created; later
        calls return the cached instance unchanged.
        """
        factory = cls._registry.get(owner_key)
        if factory is None:
            factory = cls(
                owner_key,
                hooks if hooks is not None else get_hooks(),
                host if host is not None else get_host(),
                _token=_CONSTRUCT,
            )
            cls._registry[owner_key] = factory
        return factory

    @classmethod
    def get_by(cls, owner_key: str) -> list[EmailTag]:
        """Return the tags declared for *owner_key*, or an empty list if it is unknown."""
        factory = cls._registry.get(owner_key)
        if factory is None:
            return []
        return list(factory._tags)

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def tag(self, tag: str) -> TagBuilder:
        """Start a new tag definition."""
        return TagBuilder(self, tag)

    def add_tag(self, tag: EmailTag) -> EmailTags:
        """Append a finished tag and return self."""
        self._tags.append(tag)
        return self

    # ------------------------------------------------------------------
    # Host lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Subscribe to the tag-registration signal if the host is active."""
        if not self._host.is_active():
            logger.debug("Email host inactive; tags for %r will not be registered", self._owner_key)
            self._state = FactoryState.DORMANT
            return

        self._hooks.add_action(ADD_EMAIL_TAGS, self.register_tags)
        self._state = FactoryState.AWAITING_REGISTRATION

    def register_tags(self) -> None:
        """Register every collected tag with the host."""
        self.push_to(self._host)
        self._state = FactoryState.REGISTERED

    def push_to(self, host: EmailTagHost) -> None:
        """Hand every collected tag, with its wrapped resolver, to *host*.

        Does not change the lifecycle state; :meth:`register_tags` is the
        entry point the host signal calls.
        """
        logger.info("Registering %d email tag(s) for %r", len(self._tags), self._owner_key)
        for tag in self._tags:
            logger.debug("Registering email tag %r", tag.tag)
            host.add_email_tag(
                tag.tag,
                tag.description,
                tag.wrapped_resolver(),
                tag.label,
                list(tag.contexts),
                list(tag.recipients),
            )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def owner_key(self) -> str:
        return self._owner_key

    @property
    def tags(self) -> list[EmailTag]:
        """A copy of the collected tags in declaration order."""
        return list(self._tags)

    @property
    def state(self) -> FactoryState:
        return self._state

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"EmailTags(owner_key={self._owner_key!r}, tags={len(self._tags)}, state={self._state.value})"
