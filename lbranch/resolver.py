"""Turn an intent into exactly one Linear issue."""

import asyncio
import logging

from lbranch.errors import ConfigError, UsageError, ValidationError
from lbranch.models import (
    AutoIntent,
    Cancelled,
    CreateIntent,
    CreatePick,
    DirectIntent,
    Intent,
    InteractiveIntent,
    Issue,
    MenuEntry,
    SearchIntent,
    SearchRequest,
    TeamConfig,
)
from lbranch.naming import looks_like_issue_id
from lbranch.providers.base import IssueTracker
from lbranch.settings import TeamConfigStore
from lbranch.ui import Prompter, Reporter

logger = logging.getLogger(__name__)

TODO_LIMIT = 3
RECENT_FETCH_LIMIT = 6
RECENT_SHOWN_LIMIT = 3

_AUTO_USAGE = (
    "--auto requires an issue ID or description\n"
    "   Usage: lbranch --auto ENG-142\n"
    '   Usage: lbranch --auto "task description"'
)


def build_menu(todos: list[Issue], recent: list[Issue]) -> list[MenuEntry]:
    """Todos first, then up to three recent issues not already listed."""
    seen: set[str] = set()
    entries: list[MenuEntry] = []
    for issue in todos:
        if issue.identifier in seen:
            continue
        seen.add(issue.identifier)
        entries.append(MenuEntry(issue=issue, context="My Todo"))

    fresh = [i for i in recent if i.identifier not in seen]
    for issue in fresh[:RECENT_SHOWN_LIMIT]:
        seen.add(issue.identifier)
        entries.append(MenuEntry(issue=issue, context="Recent"))
    return entries


def _plural(count: int) -> str:
    return f"{count} issue{'' if count == 1 else 's'}"


class IssueResolver:
    def __init__(
        self,
        tracker: IssueTracker,
        prompter: Prompter,
        reporter: Reporter,
        store: TeamConfigStore,
        *,
        auto: bool = False,
    ) -> None:
        self.tracker = tracker
        self.prompter = prompter
        self.reporter = reporter
        self.store = store
        self.auto = auto

    async def resolve(self, intent: Intent) -> Issue | Cancelled:
        team_config = self.store.load()

        match intent:
            case DirectIntent(issue_id=issue_id):
                return await self._lookup(issue_id)
            case CreateIntent(title=title):
                return await self._create(title)
            case AutoIntent(arg=None):
                raise UsageError(_AUTO_USAGE)
            case AutoIntent(arg=arg) if looks_like_issue_id(arg, team_config):
                return await self._lookup(arg)
            case AutoIntent(arg=arg):
                return await self._create(arg)
            case SearchIntent(query=query) if looks_like_issue_id(query, team_config):
                return await self._lookup(query)
            case SearchIntent(query=query):
                return await self._search(query)
            case InteractiveIntent():
                return await self._browse()
            case _:
                raise UsageError(f"Unsupported mode: {intent!r}")

    async def resolve_team(self) -> TeamConfig | Cancelled:
        """Return the cached team, fetching and saving a selection on a miss."""
        cached = self.store.load()
        if cached:
            logger.debug("Using cached team %s", cached.team_key)
            return cached

        with self.reporter.status("Fetching teams from Linear..."):
            teams = await self.tracker.list_teams()
        self.reporter.success("Teams loaded")
        if not teams:
            raise ConfigError("No teams found in your Linear workspace")

        if len(teams) == 1 or self.auto:
            team = teams[0]
        else:
            selected = await self.prompter.select_team(teams)
            if isinstance(selected, Cancelled):
                return selected
            team = selected

        config = TeamConfig(team_id=team.id, team_key=team.key)
        self.store.save(config)
        self.reporter.info(f"Saved team selection ({team.key}) to {self.store.path}")
        return config

    async def _lookup(self, issue_id: str) -> Issue:
        with self.reporter.status(f"Looking up {issue_id}..."):
            issue = await self.tracker.get_issue(issue_id)
        self.reporter.success(f"Found: {issue.identifier} - {issue.title}")
        return issue

    async def _create(self, title: str | None = None) -> Issue | Cancelled:
        if title is None and not self.auto:
            answer = await self.prompter.issue_title()
            if isinstance(answer, Cancelled):
                return answer
            title = answer
        if not title or not title.strip():
            raise ValidationError("Title is required")

        team = await self.resolve_team()
        if isinstance(team, Cancelled):
            return team

        with self.reporter.status("Creating issue..."):
            issue = await self.tracker.create_issue(title.strip(), team.team_id)
        self.reporter.success(f"Created {issue.identifier}: {issue.title}")
        return issue

    async def _search(self, query: str) -> Issue | Cancelled:
        with self.reporter.status(f'Searching Linear for "{query}"...'):
            issues = await self.tracker.search_issues(query)
        self.reporter.success(f"Found {_plural(len(issues))}")

        # Shown even when empty so "Create a new issue" stays reachable.
        picked = await self.prompter.pick_issue([MenuEntry(issue=i) for i in issues])
        if isinstance(picked, Cancelled):
            return picked
        if isinstance(picked, CreatePick):
            return await self._create()
        return picked.issue

    async def _browse(self) -> Issue | Cancelled:
        with self.reporter.status("Loading..."):
            todos, recent = await asyncio.gather(
                self.tracker.list_assigned_todos(TODO_LIMIT),
                self.tracker.list_recent_unassigned(RECENT_FETCH_LIMIT),
            )

        choice = await self.prompter.show_menu(build_menu(todos, recent))
        match choice:
            case Cancelled():
                return choice
            case SearchRequest(query=query):
                return await self.resolve(SearchIntent(query=query))
            case CreatePick():
                return await self._create()
            case _:
                return choice.issue
