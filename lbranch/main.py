"""lbranch CLI — link the current git branch to a Linear issue."""

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from lbranch.errors import LbranchError
from lbranch.git import Git
from lbranch.linker import link
from lbranch.models import Cancelled
from lbranch.providers.linear import LinearProvider
from lbranch.settings import TeamConfigStore
from lbranch.ui import Prompter, Reporter

app = typer.Typer(
    help="Link your current work to a Linear issue and name your branch correctly.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def main(
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Issue ID (ENG-142), search text, or a new issue title", show_default=False),
    ] = None,
    auto: Annotated[
        bool,
        typer.Option("--auto", help="Unattended mode: never prompt, fail instead of waiting for input"),
    ] = False,
    create: Annotated[bool, typer.Option("--create", "-c", help="Create a new issue")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
) -> None:
    """Find, search or create a Linear issue, assign it to you, and name the branch after it.

    \b
      lbranch                     browse your todos and recent issues
      lbranch ENG-142             link to an existing issue
      lbranch fix login bug       search, or create if nothing fits
      lbranch -c "Add search"     create a new issue
      lbranch --auto ENG-142      same, without any prompts
    """
    _configure_logging(verbose)
    reporter = Reporter(auto=auto)

    try:
        result = asyncio.run(
            link(
                args or [],
                auto=auto,
                create=create,
                git=Git(),
                prompter=Prompter(),
                reporter=reporter,
                store=TeamConfigStore(),
                tracker_factory=LinearProvider,
            )
        )
    except LbranchError as exc:
        reporter.error(str(exc))
        raise typer.Exit(1) from exc

    if isinstance(result, Cancelled):
        reporter.cancelled()
        raise typer.Exit(0)
