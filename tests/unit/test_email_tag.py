"""Tests for edd_email_tags.tags.email_tag — EmailTag."""
from __future__ import annotations

import dataclasses
import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from edd_email_tags import config
from edd_email_tags.config import Settings, configure
from edd_email_tags.context import EmailContext
from edd_email_tags.tags import email_tag
from edd_email_tags.tags.email_tag import EmailTag


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_tag(
    resolver: object = None,
    contexts: list[str] | None = None,
    recipients: list[str] | None = None,
) -> EmailTag:
    return EmailTag(
        tag="first_name",
        description="Customer first name",
        label="First name",
        resolver=resolver or (lambda subject_id, subject, email: "Ada"),
        contexts=["order"] if contexts is None else contexts,
        recipients=recipients or [],
    )


def _failing(subject_id: object, subject: object, email: object) -> str:
    raise ValueError("order not found")


# ---------------------------------------------------------------------------
# Construction and accessors
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_fields_are_stored(self) -> None:
        tag = _make_tag(contexts=["order", "license"], recipients=["admin"])
        assert tag.tag == "first_name"
        assert tag.description == "Customer first name"
        assert tag.label == "First name"
        assert tag.contexts == ("order", "license")
        assert tag.recipients == ("admin",)

    def test_default_contexts_and_recipients(self) -> None:
        tag = EmailTag("x", "", "X", lambda *args: "")
        assert tag.contexts == ("order",)
        assert tag.recipients == ()

    def test_context_case_is_preserved(self) -> None:
        tag = _make_tag(contexts=["Order"])
        assert tag.contexts == ("Order",)

    def test_is_frozen(self) -> None:
        tag = _make_tag()
        with pytest.raises(dataclasses.FrozenInstanceError):
            tag.label = "Changed"  # type: ignore[misc]

    def test_later_list_mutation_does_not_leak(self) -> None:
        contexts = ["order"]
        tag = _make_tag(contexts=contexts)
        contexts.append("purchase")
        assert tag.contexts == ("order",)

    def test_str_is_tag_id(self) -> None:
        assert str(_make_tag()) == "first_name"

    def test_bare_string_contexts_count_as_one_value(self) -> None:
        tag = EmailTag("x", "", "X", lambda *args: "", contexts="order", recipients="admin")  # type: ignore[arg-type]
        assert tag.contexts == ("order",)
        assert tag.recipients == ("admin",)

    def test_to_dict(self) -> None:
        d = _make_tag(recipients=["customer"]).to_dict()
        assert d == {
            "tag": "first_name",
            "label": "First name",
            "description": "Customer first name",
            "contexts": ["order"],
            "recipients": ["customer"],
        }


# ---------------------------------------------------------------------------
# wrapped_resolver — context filtering
# ---------------------------------------------------------------------------


class TestContextFiltering:
    def test_mismatched_context_returns_empty_without_calling(self) -> None:
        resolver = MagicMock(return_value="Ada")
        wrapped = _make_tag(resolver=resolver).wrapped_resolver()
        assert wrapped(1, None, EmailContext(context="purchase")) == ""
        resolver.assert_not_called()

    def test_matching_context_calls_resolver(self) -> None:
        resolver = MagicMock(return_value="Ada")
        email = EmailContext(context="order")
        wrapped = _make_tag(resolver=resolver).wrapped_resolver()
        assert wrapped(42, "order-object", email) == "Ada"
        resolver.assert_called_once_with(42, "order-object", email)

    def test_match_is_case_sensitive(self) -> None:
        resolver = MagicMock(return_value="Ada")
        wrapped = _make_tag(resolver=resolver).wrapped_resolver()
        assert wrapped(1, None, EmailContext(context="Order")) == ""
        resolver.assert_not_called()

    def test_no_email_context_calls_resolver(self) -> None:
        resolver = MagicMock(return_value="Ada")
        wrapped = _make_tag(resolver=resolver).wrapped_resolver()
        assert wrapped(1) == "Ada"
        resolver.assert_called_once_with(1, None, None)

    def test_any_object_with_context_attribute(self) -> None:
        wrapped = _make_tag().wrapped_resolver()
        assert wrapped(1, None, SimpleNamespace(context="order")) == "Ada"
        assert wrapped(1, None, SimpleNamespace(context="refund")) == ""

    def test_email_without_context_attribute_is_filtered(self) -> None:
        wrapped = _make_tag().wrapped_resolver()
        assert wrapped(1, None, object()) == ""


class TestEmptyContexts:
    def test_any_context_is_allowed(self) -> None:
        resolver = MagicMock(return_value="Ada")
        wrapped = _make_tag(resolver=resolver, contexts=[]).wrapped_resolver()
        assert wrapped(1, None, EmailContext(context="purchase")) == "Ada"
        assert wrapped(1, None, EmailContext(context="anything")) == "Ada"
        assert resolver.call_count == 2

    def test_no_email_context(self) -> None:
        wrapped = _make_tag(contexts=[]).wrapped_resolver()
        assert wrapped(1) == "Ada"


# ---------------------------------------------------------------------------
# wrapped_resolver — results and failure containment
# ---------------------------------------------------------------------------


class TestResults:
    def test_none_becomes_empty_string(self) -> None:
        wrapped = _make_tag(resolver=lambda *args: None).wrapped_resolver()
        assert wrapped(1) == ""

    def test_string_is_returned_unchanged(self) -> None:
        wrapped = _make_tag(resolver=lambda *args: "5").wrapped_resolver()
        assert wrapped(1) == "5"

    def test_empty_string_is_not_an_error(self) -> None:
        wrapped = _make_tag(resolver=lambda *args: "").wrapped_resolver()
        assert wrapped(1) == ""


class TestFailureContainment:
    def test_exception_returns_empty_string(self) -> None:
        wrapped = _make_tag(resolver=_failing).wrapped_resolver()
        assert wrapped(1, None, EmailContext()) == ""

    def test_each_call_is_independent(self) -> None:
        calls = {"n": 0}

        def flaky(subject_id: object, subject: object, email: object) -> str:
            calls["n"] += 1
            if calls["n"] == 1:
                raise RuntimeError("transient")
            return "ok"

        wrapped = _make_tag(resolver=flaky).wrapped_resolver()
        assert wrapped(1) == ""
        assert wrapped(1) == "ok"

    def test_silent_when_debug_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        wrapped = _make_tag(resolver=_failing).wrapped_resolver()
        with caplog.at_level(logging.DEBUG, logger="edd_email_tags"):
            wrapped(1)
        assert caplog.records == []

    def test_logged_when_debug_enabled(self, caplog: pytest.LogCaptureFixture) -> None:
        configure(Settings(debug=True))
        wrapped = _make_tag(resolver=_failing).wrapped_resolver()
        with caplog.at_level(logging.ERROR, logger="edd_email_tags"):
            assert wrapped(1) == ""
        assert len(caplog.records) == 1
        message = caplog.records[0].getMessage()
        assert '"first_name"' in message
        assert "order not found" in message

    def test_bad_log_level_in_environment_does_not_escape(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EDD_EMAIL_TAGS_LOG_LEVEL", "verbose")
        monkeypatch.setattr(config, "_settings", None)
        wrapped = _make_tag(resolver=_failing).wrapped_resolver()
        assert wrapped(1) == ""
        assert wrapped(2) == ""

    def test_unreadable_settings_count_as_debug_off(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        def _broken_settings() -> Settings:
            raise RuntimeError("settings unavailable")

        monkeypatch.setattr(email_tag, "get_settings", _broken_settings)
        wrapped = _make_tag(resolver=_failing).wrapped_resolver()
        with caplog.at_level(logging.DEBUG, logger="edd_email_tags"):
            assert wrapped(1) == ""
        assert caplog.records == []

    def test_debug_setting_read_at_call_time(self, caplog: pytest.LogCaptureFixture) -> None:
        wrapped = _make_tag(resolver=_failing).wrapped_resolver()
        configure(Settings(debug=True))
        with caplog.at_level(logging.ERROR, logger="edd_email_tags"):
            wrapped(1)
        assert len(caplog.records) == 1


# ---------------------------------------------------------------------------
# raw_resolver
# ---------------------------------------------------------------------------


class TestRawResolver:
    def test_returns_original_callable(self) -> None:
        tag = _make_tag(resolver=_failing)
        assert tag.raw_resolver() is _failing

    def test_raw_resolver_propagates_errors(self) -> None:
        with pytest.raises(ValueError):
            _make_tag(resolver=_failing).raw_resolver()(1, None, None)
