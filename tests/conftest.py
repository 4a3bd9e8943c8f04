"""Shared fixtures.

The factory registry is process-wide and has no teardown, so every test
works with its own owner key and its own hook registry and host.
"""
from __future__ import annotations

import uuid
from collections.abc import Iterator

import pytest

from edd_email_tags.config import Settings, configure
from edd_email_tags.host.hooks import HookRegistry
from edd_email_tags.host.memory import InMemoryEmailTagHost


@pytest.fixture()
def owner_key() -> str:
    return f"/var/www/wp-content/plugins/test-{uuid.uuid4().hex}/plugin.php"


@pytest.fixture()
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture()
def host() -> InMemoryEmailTagHost:
    return InMemoryEmailTagHost()


@pytest.fixture(autouse=True)
def _default_settings() -> Iterator[None]:
    configure(Settings())
    yield
    configure(Settings())
