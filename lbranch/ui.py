"""Terminal output and interactive prompts."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import questionary
import typer
from questionary import Choice, Style
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from lbranch.models import Cancelled, CreatePick, Issue, IssuePick, MenuEntry, SearchRequest, Team

PROMPT_STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("pointer", "fg:cyan bold"),
        ("instruction", "fg:#888888 italic"),
    ]
)

_CREATE_KEY = "action:create"


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class Reporter:
    """Progress and result messages.

    In unattended mode everything is plain text; otherwise rich spinners and panels.
    """

    def __init__(
        self,
        auto: bool = False,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.auto = auto
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        if self.auto:
            yield
            return
        with self.console.status(message):
            yield

    def success(self, message: str) -> None:
        if self.auto:
            typer.echo(message)
        else:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def info(self, message: str) -> None:
        if self.auto:
            typer.echo(message)
        else:
            self.console.print(f"[cyan]●[/cyan] {escape(message)}")

    def error(self, message: str) -> None:
        if self.auto:
            typer.echo(message, err=True)
        else:
            self.err_console.print(f"[red]✗ {escape(message)}[/red]")

    def cancelled(self) -> None:
        if self.auto:
            typer.echo("Cancelled.")
        else:
            self.console.print("[dim]Cancelled.[/dim]")

    def summary(self, lines: list[str], title: str = "Summary") -> None:
        if self.auto:
            typer.echo("\n".join(lines))
            return
        self.console.print(Panel(escape("\n".join(lines)), title=title, title_align="left", expand=False))


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def format_issue_label(issue: Issue, context: str | None = None) -> str:
    """ENG-12  Fix login  ·  In Progress · You"""
    if context:
        meta = [context]
    else:
        meta = [issue.state]
        if issue.assignee:
            meta.append("You" if issue.assignee.is_me else issue.assignee.display_name)
        else:
            meta.append("Unassigned")
    return f"{issue.identifier}  {issue.title}  ·  {' · '.join(meta)}"


def _required(label: str) -> Callable[[str], bool | str]:
    def validate(value: str) -> bool | str:
        return bool(value.strip()) or f"{label} is required"

    return validate


class Prompter:
    """questionary prompts; every method returns Cancelled when the user aborts."""

    def __init__(self, style: Style = PROMPT_STYLE) -> None:
        self.style = style

    async def _ask(self, question: questionary.Question) -> Any:
        answer = await question.ask_async(kbi_msg="")
        return Cancelled() if answer is None else answer

    async def select_team(self, teams: list[Team]) -> Team | Cancelled:
        choices = [Choice(title=f"{t.name} ({t.key})", value=t.id) for t in teams]
        answer = await self._ask(questionary.select("Which team?", choices=choices, style=self.style))
        if isinstance(answer, Cancelled):
            return answer
        return next(t for t in teams if t.id == answer)

    async def pick_issue(self, entries: list[MenuEntry]) -> IssuePick | CreatePick | Cancelled:
        by_key = {f"issue:{e.issue.identifier}": e.issue for e in entries}
        choices = [
            Choice(title=format_issue_label(e.issue, e.context), value=f"issue:{e.issue.identifier}") for e in entries
        ]
        choices.append(Choice(title="Create a new issue", value=_CREATE_KEY))
        answer = await self._ask(questionary.select("Pick an issue", choices=choices, style=self.style))
        if isinstance(answer, Cancelled):
            return answer
        if answer == _CREATE_KEY:
            return CreatePick()
        return IssuePick(issue=by_key[answer])

    async def show_menu(self, entries: list[MenuEntry]) -> IssuePick | CreatePick | SearchRequest | Cancelled:
        """Free-text search first; an empty answer falls through to the issue picker."""
        query = await self._ask(
            questionary.text(
                "Search or create an issue",
                instruction="(type a query, or press Enter to browse)",
                style=self.style,
            )
        )
        if isinstance(query, Cancelled):
            return query
        if query.strip():
            return SearchRequest(query=query.strip())
        return await self.pick_issue(entries)

    async def issue_title(self) -> str | Cancelled:
        answer = await self._ask(
            questionary.text(
                "Issue title",
                instruction="(e.g. Add channel search endpoint)",
                validate=_required("Title"),
                style=self.style,
            )
        )
        return answer if isinstance(answer, Cancelled) else answer.strip()

    async def git_name(self) -> str | Cancelled:
        answer = await self._ask(
            questionary.text(
                "Your name (lowercase, first name)",
                instruction="(e.g. fletcher)",
                validate=_required("Name"),
                style=self.style,
            )
        )
        return answer if isinstance(answer, Cancelled) else answer.strip()
