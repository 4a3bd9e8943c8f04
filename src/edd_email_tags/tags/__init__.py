"""Email tag declaration.

Quick start
-----------
::

    from edd_email_tags.tags import EmailTags

    tags = EmailTags.register(__file__)
    tags.tag("first_name").callback(
        lambda order_id, order, email: order.first_name
    ).register()
"""
from __future__ import annotations

from edd_email_tags.tags.builder import TagBuilder, default_label
from edd_email_tags.tags.email_tag import DEFAULT_CONTEXTS, EmailTag
from edd_email_tags.tags.factory import EmailTags, FactoryState

__all__ = [
    "DEFAULT_CONTEXTS",
    "EmailTag",
    "EmailTags",
    "FactoryState",
    "TagBuilder",
    "default_label",
]
