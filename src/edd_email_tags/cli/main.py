"""CLI entry point for edd-email-tags.

Invoked as::

    edd-email-tags [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m edd_email_tags.cli.main

Commands
--------
version   Show version information
list      List the tags a module declares for an owner key
preview   Render a template with the tags a module declares for an owner key
"""
from __future__ import annotations

import importlib
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from edd_email_tags.config import LOG_LEVELS

console = Console()


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="edd-email-tags")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (defaults to EDD_EMAIL_TAGS_LOG_LEVEL or WARNING).",
)
def cli(log_level: str | None) -> None:
    """Inspect and preview Easy Digital Downloads email tags."""
    from edd_email_tags.config import get_settings

    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level))


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from edd_email_tags import __version__

    console.print(f"[bold]edd-email-tags[/bold] v{__version__}")


# ------------------------------------------------------------------
# list
# ------------------------------------------------------------------


@cli.command(name="list")
@click.argument("module")
@click.option("--owner", "-o", required=True, help="Owner key the tags were registered under.")
def list_command(module: str, owner: str) -> None:
    """List the email tags MODULE declares for an owner key.

    MODULE is an importable module name that declares its tags on import.
    """
    from edd_email_tags.tags import EmailTags

    _import_module(module)
    tags = EmailTags.get_by(owner)

    if not tags:
        console.print(f"[yellow]No email tags registered for {owner!r}.[/yellow]")
        return

    table = Table(title=f"Email Tags — {owner}", show_header=True)
    table.add_column("Tag", style="cyan")
    table.add_column("Label")
    table.add_column("Contexts")
    table.add_column("Recipients")
    table.add_column("Description")

    for tag in tags:
        table.add_row(
            f"{{{tag.tag}}}",
            tag.label,
            ", ".join(tag.contexts) or "(any)",
            ", ".join(tag.recipients) or "(any)",
            tag.description,
        )

    console.print(table)
    console.print(f"\nTotal: {len(tags)} tag(s)")


# ------------------------------------------------------------------
# preview
# ------------------------------------------------------------------


@cli.command(name="preview")
@click.argument("module")
@click.argument("template")
@click.option("--owner", "-o", required=True, help="Owner key whose tags are rendered.")
@click.option(
    "--context",
    "-c",
    default="order",
    show_default=True,
    help="Email context the template is rendered for.",
)
@click.option(
    "--subject-id",
    "-s",
    default="1",
    show_default=True,
    help="Identifier passed to each tag resolver.",
)
@click.option("--debug", is_flag=True, default=False, help="Log resolver failures.")
def preview_command(
    module: str,
    template: str,
    owner: str,
    context: str,
    subject_id: str,
    debug: bool,
) -> None:
    """Render TEMPLATE with the email tags MODULE declares for an owner key.

    Only the owner's tags are handed to a fresh in-memory host; tags other
    owners declare in the same module are left out.
    """
    from edd_email_tags.config import configure, get_settings
    from edd_email_tags.context import EmailContext
    from edd_email_tags.host.memory import InMemoryEmailTagHost
    from edd_email_tags.tags import EmailTags

    if debug:
        configure(get_settings().model_copy(update={"debug": True}))

    _import_module(module)

    host = InMemoryEmailTagHost()
    if EmailTags.get_by(owner):
        EmailTags.register(owner).push_to(host)
    else:
        console.print(f"[yellow]No email tags registered for {owner!r}.[/yellow]")

    rendered = host.do_tags(template, subject_id, None, EmailContext(context=context))
    console.print(rendered, markup=False, highlight=False)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _import_module(module: str) -> None:
    try:
        importlib.import_module(module)
    except Exception as exc:
        console.print(f"[red]Error:[/red] could not import {module!r}: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
