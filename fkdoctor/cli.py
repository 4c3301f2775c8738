"""
fk-doctor CLI

Turns a MySQL foreign key error from a migration into a remediation prompt
for a language model.

Usage:
    fk-doctor --error "SQLSTATE[HY000]: ... CONSTRAINT `FK_818C32519EB6921` ..."
    fk-doctor --error "..." --debug

The prompt is the only thing written to stdout, so it can be piped or copied
as-is. Errors and logs go to stderr.
"""

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape

from fkdoctor import __version__
from fkdoctor.config import ConfigurationError, get_settings
from fkdoctor.pipeline.runner import DiagnosisRunner

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def _report_error(exc: Exception, debug: bool) -> None:
    if debug:
        message = f"Error: {type(exc).__name__}: {exc}"
    else:
        message = f"Error occurred: {exc}"
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)


def _require_text(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value.strip():
        raise click.BadParameter("must not be empty")
    return value


@click.command()
@click.version_option(version=__version__, prog_name="fk-doctor")
@click.option(
    "--error",
    "error_message",
    required=True,
    callback=_require_text,
    help="The foreign key error message printed by the migration.",
)
@click.option("--debug", is_flag=True, help="Enable verbose diagnostic logging.")
def cli(error_message: str, debug: bool):
    """Build an LLM remediation prompt for a failing MySQL foreign key constraint."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        _report_error(e, debug)
        sys.exit(1)

    settings.logging.configure(debug=debug)

    try:
        prompt = asyncio.run(DiagnosisRunner(settings).run(error_message))
    except Exception as e:
        logger.debug("Diagnosis failed", exc_info=True)
        _report_error(e, debug)
        sys.exit(1)

    click.echo(prompt)


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
