"""Test that the quickstart API works for edd-email-tags."""
from __future__ import annotations

import uuid


def test_quickstart_import() -> None:
    from edd_email_tags import EmailTags

    tags = EmailTags.register(f"quickstart-{uuid.uuid4().hex}")
    assert tags is not None


def test_quickstart_declare_and_render() -> None:
    from edd_email_tags import (
        PLUGINS_LOADED,
        EmailContext,
        EmailTags,
        HookRegistry,
        InMemoryEmailTagHost,
    )

    hooks = HookRegistry()
    host = InMemoryEmailTagHost()
    tags = EmailTags.register(f"quickstart-{uuid.uuid4().hex}", hooks=hooks, host=host)
    tags.tag("customer_name").callback(lambda order_id, order, email: "Ada Lovelace").register()

    hooks.do_action(PLUGINS_LOADED)
    host.setup_email_tags(hooks)

    assert host.do_tags("Dear {customer_name},", 1, None, EmailContext()) == "Dear Ada Lovelace,"


def test_quickstart_version() -> None:
    import edd_email_tags

    assert edd_email_tags.__version__ == "0.1.0"
