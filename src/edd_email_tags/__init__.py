"""edd-email-tags — fluent registration of Easy Digital Downloads email tags.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import edd_email_tags
>>> edd_email_tags.__version__
'0.1.0'

Quick start
-----------
::

    from edd_email_tags import EmailTags

    tags = EmailTags.register(__file__)
    (
        tags.tag("customer_name")
        .description("The customer's full name")
        .callback(lambda order_id, order, email: order.customer_name)
        .register()
    )
"""
from __future__ import annotations

__version__: str = "0.1.0"

from edd_email_tags.config import Settings, configure, get_settings
from edd_email_tags.context import EmailContext
from edd_email_tags.errors import ConfigurationError, EmailTagsError

# ------------------------------------------------------------------
# Tag declaration
# ------------------------------------------------------------------
from edd_email_tags.tags.builder import TagBuilder, default_label
from edd_email_tags.tags.email_tag import EmailTag
from edd_email_tags.tags.factory import EmailTags, FactoryState

# ------------------------------------------------------------------
# Host collaborators
# ------------------------------------------------------------------
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
    get_host,
    set_host,
)

__all__ = [
    # version
    "__version__",
    # config
    "Settings",
    "configure",
    "get_settings",
    # errors
    "ConfigurationError",
    "EmailTagsError",
    # tags
    "EmailContext",
    "EmailTag",
    "EmailTags",
    "FactoryState",
    "TagBuilder",
    "default_label",
    # host
    "ADD_EMAIL_TAGS",
    "EmailTagHost",
    "HookRegistry",
    "InMemoryEmailTagHost",
    "PLUGINS_LOADED",
    "get_hooks",
    "get_host",
    "set_hooks",
    "set_host",
]
