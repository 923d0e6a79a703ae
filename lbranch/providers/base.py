"""Abstract base class for issue trackers."""

from abc import ABC, abstractmethod
from types import TracebackType

from lbranch.models import Issue, Team, WorkflowState


class IssueTracker(ABC):
    async def __aenter__(self) -> "IssueTracker":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:  # noqa: B027
        pass

    @abstractmethod
    async def get_issue(self, issue_id: str) -> Issue: ...

    @abstractmethod
    async def search_issues(self, query: str, first: int = 10) -> list[Issue]: ...

    @abstractmethod
    async def create_issue(self, title: str, team_id: str) -> Issue: ...

    @abstractmethod
    async def list_teams(self) -> list[Team]: ...

    @abstractmethod
    async def get_viewer_id(self) -> str | None: ...

    @abstractmethod
    async def list_workflow_states(self, issue_id: str) -> list[WorkflowState]: ...

    @abstractmethod
    async def update_issue(
        self,
        issue_id: str,
        assignee_id: str | None = None,
        state_id: str | None = None,
    ) -> None: ...

    @abstractmethod
    async def get_issue_url(self, issue_id: str) -> str | None: ...

    @abstractmethod
    async def list_assigned_todos(self, first: int) -> list[Issue]: ...

    @abstractmethod
    async def list_recent_unassigned(self, first: int) -> list[Issue]: ...
