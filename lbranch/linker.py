"""The link pipeline: credentials → git name → intent → issue → Linear update → branch."""

import asyncio
import logging
from collections.abc import Callable

from lbranch.git import Git
from lbranch.intent import classify, refine
from lbranch.models import AlreadyLinked, Cancelled, Issue, LinkResult, Linked, WorkflowState
from lbranch.naming import detect_link, first_name_of, make_branch_name
from lbranch.providers.base import IssueTracker
from lbranch.resolver import IssueResolver
from lbranch.settings import LbranchSettings, TeamConfigStore, load_settings
from lbranch.ui import Prompter, Reporter

logger = logging.getLogger(__name__)

TRUNK_BRANCHES = ("main", "master")
UNATTENDED_GIT_NAME = "ci"

TrackerFactory = Callable[[LbranchSettings], IssueTracker]


def find_in_progress_state(states: list[WorkflowState]) -> WorkflowState | None:
    """Prefer the state named "In Progress", else a started state mentioning progress."""
    for state in states:
        if state.name == "In Progress":
            return state
    for state in states:
        if state.type == "started" and "progress" in state.name.lower():
            return state
    return None


async def resolve_git_name(git: Git, prompter: Prompter, *, auto: bool) -> str | Cancelled:
    name = first_name_of(await git.user_name())
    if name:
        return name
    if auto:
        return UNATTENDED_GIT_NAME
    return await prompter.git_name()


async def _start_progress(tracker: IssueTracker, reporter: Reporter, issue: Issue) -> None:
    with reporter.status("Updating issue in Linear..."):
        viewer_id, states = await asyncio.gather(
            tracker.get_viewer_id(),
            tracker.list_workflow_states(issue.identifier),
        )
        in_progress = find_in_progress_state(states)
        if in_progress is None:
            logger.debug("No in-progress state for %s; leaving state unchanged", issue.identifier)
        # Always sent, even when both fields are empty.
        await tracker.update_issue(
            issue.identifier,
            assignee_id=viewer_id,
            state_id=in_progress.id if in_progress else None,
        )
    reporter.success("Issue updated")


async def _switch_branch(git: Git, reporter: Reporter, current: str, branch: str) -> None:
    if current in TRUNK_BRANCHES:
        with reporter.status(f"Creating branch: {branch}"):
            await git.pull(current)
            await git.create_branch(branch)
    else:
        with reporter.status(f"Renaming branch → {branch}"):
            await git.rename_branch(branch)
    reporter.success(f"Branch: {branch}")


async def link(
    args: list[str],
    *,
    auto: bool = False,
    create: bool = False,
    git: Git,
    prompter: Prompter,
    reporter: Reporter,
    store: TeamConfigStore,
    tracker_factory: TrackerFactory,
) -> LinkResult:
    """Link the current branch to a Linear issue.

    Every step must succeed before the next one starts; errors propagate to the caller.
    """
    settings = load_settings(await git.root())

    async with tracker_factory(settings) as tracker:
        git_name = await resolve_git_name(git, prompter, auto=auto)
        if isinstance(git_name, Cancelled):
            return git_name

        current = await git.current_branch()
        link_state = detect_link(current)
        if link_state.linked and link_state.issue_id:
            reporter.info(f"Already linked to {link_state.issue_id} on branch: {current}")
            return AlreadyLinked(issue_id=link_state.issue_id, branch=current)

        intent = refine(classify(args, auto=auto, create=create), store.load())
        logger.debug("Resolved mode: %s", intent)

        resolver = IssueResolver(tracker, prompter, reporter, store, auto=auto)
        issue = await resolver.resolve(intent)
        if isinstance(issue, Cancelled):
            return issue

        await _start_progress(tracker, reporter, issue)

        branch = make_branch_name(git_name, issue)
        await _switch_branch(git, reporter, current, branch)

        url = await tracker.get_issue_url(issue.identifier)
        lines = [f"Linked to {issue.identifier}: {issue.title}", "", f"   Branch:  {branch}"]
        if url:
            lines.append(f"   Issue:   {url}")
        lines.append(f'   Commits: Prefix with "{issue.identifier}: ..."')
        reporter.summary(lines)

        return Linked(issue=issue, branch=branch, url=url)
