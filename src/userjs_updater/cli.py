"""Command line interface for updating a profile's user.js."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer as t

from userjs_updater.config import UpdaterConfig
from userjs_updater.errors import UpdaterError
from userjs_updater.log import configure_logging, get_logger
from userjs_updater.models import Outcome, UpdateAttempt
from userjs_updater.workflow import UpdateWorkflow


logger = get_logger(__name__)

cli = t.Typer(
    help="Keep a Firefox user.js in sync with upstream while keeping your overrides.",
    add_completion=False,
)

DIRECTORY_HELP = "Firefox profile directory containing user.js"
CONFIG_HELP = "YAML file with updater settings"
UNATTENDED_HELP = "Run without user input"
MINIFY_HELP = "Merge overrides into a deduplicated user.js instead of appending them"
SINGLE_BACKUP_HELP = "Keep only the newest user.js backup"
URL_HELP = "Upstream user.js location"
VERBOSE_HELP = "Enable debug logging"

INTRO = """
This tool should be run from your Firefox profile directory.
It will download the latest version of ghacks user.js from github and then
append any of your own changes from user-overrides.js to it.
Visit the wiki for more detailed information.
"""

HELP_TEXT = """
Available options:

    --minify, -m

Merge overrides instead of appending them. Only the upstream banner and the
user_pref lines survive; comments and blank lines outside the banner are
dropped. When an override names a pref that upstream already sets, the
override value replaces it in place. Prefs that only appear in the overrides
are added at the end. When the same pref is declared more than once, the
last declaration wins.

    --unattended, -u

Run without user input.

    --singlebackup

After a successful update, delete older user-backup-*.js files so only the
newest backup remains.
"""

MENU = ("Start", "Help", "Exit")


def select_action() -> str:
    """Show the start menu and return the chosen entry."""
    for idx, item in enumerate(MENU, start=1):
        t.echo(f"  {idx}) {item}")
    while True:
        try:
            answer = t.prompt("Select", default="1").strip()
        except t.Abort:
            return "Exit"
        for idx, item in enumerate(MENU, start=1):
            if answer in (str(idx), item.lower(), item):
                return item
        t.echo(f"Invalid choice: {answer!r}")


def report(attempt: UpdateAttempt) -> None:
    """Print the result of a finished run."""
    if attempt.outcome is not Outcome.COMMITTED:
        t.echo("Update completed without any changes")
        return
    t.echo(f"Old version: {attempt.old_version}")
    t.echo(f"New version: {attempt.new_version}")
    if attempt.backup_path:
        t.echo(f"Backed up to {attempt.backup_path.name}")
    for path in attempt.removed_backups:
        t.echo(f"Removed old backup {path.name}")
    t.echo("Update complete!")


@cli.command()
def update(
    directory: Annotated[
        Path,
        t.Option("--directory", "-d", help=DIRECTORY_HELP, file_okay=False),
    ] = Path(),
    unattended: Annotated[bool, t.Option("--unattended", "-u", help=UNATTENDED_HELP)] = False,
    minify: Annotated[bool, t.Option("--minify", "-m", help=MINIFY_HELP)] = False,
    single_backup: Annotated[bool, t.Option("--singlebackup", help=SINGLE_BACKUP_HELP)] = False,
    config_file: Annotated[Path | None, t.Option("--config", "-c", help=CONFIG_HELP)] = None,
    url: Annotated[str | None, t.Option("--url", help=URL_HELP)] = None,
    verbose: Annotated[bool, t.Option("--verbose", "-v", help=VERBOSE_HELP)] = False,
) -> None:
    """Download the latest user.js and apply user-overrides.js to it."""
    configure_logging("DEBUG" if verbose else "WARNING")

    # Flags only override file settings when given.
    flags: dict[str, object] = {
        k: v
        for k, v in {
            "unattended": unattended,
            "minify": minify,
            "single_backup": single_backup,
            "url": url,
        }.items()
        if v
    }
    try:
        if config_file:
            config = UpdaterConfig.from_file(config_file, **flags)
        else:
            config = UpdaterConfig.model_validate(flags)
        workflow = UpdateWorkflow(directory, config)

        version = workflow.read_local_version()
        t.echo(f"Found version: {version}")

        if not config.unattended:
            t.echo(INTRO)
            choice = select_action()
            if choice == "Exit":
                return
            if choice == "Help":
                t.echo(HELP_TEXT)
                return

        t.echo("Retrieving latest user.js file from github repository...")
        attempt = asyncio.run(workflow.run())
    except UpdaterError as e:
        logger.debug("Run aborted", error_type=type(e).__name__)
        t.echo(f"An error occurred during execution:\n{e}", err=True)
        raise t.Exit(1) from e

    report(attempt)


def main() -> None:
    cli()
