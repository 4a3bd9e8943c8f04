#!/usr/bin/env python3
"""Example: Quickstart

Declares a few email tags for a plugin, runs the host lifecycle with the
in-memory host and renders a receipt template.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install edd-email-tags
"""
from __future__ import annotations

import edd_email_tags
from edd_email_tags import EmailContext, EmailTags, PLUGINS_LOADED, get_hooks, get_host

ORDERS = {
    101: {"first_name": "Ada", "total": "42.00", "license": "ABCD-1234"},
}


def main() -> None:
    print(f"edd-email-tags version: {edd_email_tags.__version__}")

    # Step 1: Declare tags for this plugin
    tags = EmailTags.register(__file__)
    (
        tags.tag("first_name")
        .description("The buyer's first name")
        .callback(lambda order_id, order, email: ORDERS[order_id]["first_name"])
        .register()
    )
    (
        tags.tag("license_key")
        .label("License Key")
        .contexts(["order", "license"])
        .callback(lambda order_id, order, email: ORDERS[order_id]["license"])
        .register()
    )
    tags.tag("order_total").callback(lambda order_id, order, email: ORDERS[order_id]["total"]).register()

    # Step 2: The host finishes loading and asks for tags
    get_hooks().do_action(PLUGINS_LOADED)
    host = get_host()
    host.setup_email_tags()

    # Step 3: Render a receipt
    template = "Hi {first_name}, your key is {license_key} (total {order_total})."
    print(host.do_tags(template, 101, None, EmailContext(context="order")))

    # A missing order makes the resolver raise; the tag renders empty.
    print(host.do_tags(template, 999, None, EmailContext(context="order")))


if __name__ == "__main__":
    main()
