"""daybook CLI - one journal per day."""

import logging
import sys

import click

from .commands import HELP_TEXT, SYNOPSIS, ShowHelp, parse_command
from .config import load_config
from .errors import DaybookError, UsageError
from .session import JournalSession

logger = logging.getLogger(__name__)


@click.command(
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
    add_help_option=False,
)
@click.option("--config", "config_path", default=None, help="Path to daybook.conf")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="daybook")
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def main(config_path: str | None, debug: bool, tokens: tuple[str, ...]):
    """daybook - one journal per day."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    try:
        command = parse_command(tokens)
    except UsageError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(SYNOPSIS, err=True)
        sys.exit(e.exit_code)

    if isinstance(command, ShowHelp):
        click.echo(HELP_TEXT)
        return

    try:
        config = load_config(config_path)
        session = JournalSession.from_config(config)
        session.run(command)
    except DaybookError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
