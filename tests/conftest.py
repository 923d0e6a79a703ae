"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from lbranch.git import Git
from lbranch.models import Assignee, Issue, Team, TeamConfig, WorkflowState
from lbranch.providers.base import IssueTracker
from lbranch.settings import TeamConfigStore
from lbranch.ui import Prompter, Reporter


@pytest.fixture
def linear_issue() -> Issue:
    return Issue(
        identifier="ENG-142",
        title="Fix login bug",
        state="Todo",
        assignee=Assignee(display_name="Jane Doe", is_me=False),
        url="https://linear.app/acme/issue/ENG-142",
    )


@pytest.fixture
def sample_team() -> Team:
    return Team(id="team_xyz", name="Engineering", key="ENG")


@pytest.fixture
def workflow_states() -> list[WorkflowState]:
    return [
        WorkflowState(id="s_todo", name="Todo", type="unstarted"),
        WorkflowState(id="s_prog", name="In Progress", type="started"),
        WorkflowState(id="s_done", name="Done", type="completed"),
    ]


@pytest.fixture
def store(tmp_path: Path) -> TeamConfigStore:
    return TeamConfigStore(tmp_path / "lbranch" / "config")


@pytest.fixture
def cached_store(store: TeamConfigStore) -> TeamConfigStore:
    store.save(TeamConfig(team_id="team_xyz", team_key="ENG"))
    return store


@pytest.fixture
def tracker(linear_issue: Issue, sample_team: Team, workflow_states: list[WorkflowState]) -> AsyncMock:
    mock = AsyncMock(spec=IssueTracker)
    mock.__aenter__.return_value = mock
    mock.get_issue.return_value = linear_issue
    mock.search_issues.return_value = [linear_issue]
    mock.create_issue.return_value = linear_issue
    mock.list_teams.return_value = [sample_team]
    mock.get_viewer_id.return_value = "user_me"
    mock.list_workflow_states.return_value = workflow_states
    mock.get_issue_url.return_value = linear_issue.url
    mock.list_assigned_todos.return_value = []
    mock.list_recent_unassigned.return_value = []
    return mock


@pytest.fixture
def prompter() -> AsyncMock:
    return AsyncMock(spec=Prompter)


@pytest.fixture
def reporter() -> Reporter:
    return Reporter(auto=True)


@pytest.fixture
def git() -> AsyncMock:
    mock = AsyncMock(spec=Git)
    mock.root.return_value = None
    mock.user_name.return_value = "Alice Smith"
    mock.current_branch.return_value = "main"
    return mock
