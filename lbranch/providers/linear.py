"""Linear GraphQL API provider."""

import logging

import httpx

from lbranch.errors import NotFoundError, TransportError
from lbranch.models import Assignee, Issue, Team, WorkflowState
from lbranch.providers.base import IssueTracker
from lbranch.settings import LbranchSettings

logger = logging.getLogger(__name__)

ENDPOINT = "https://api.linear.app/graphql"

_ISSUE_FIELDS = "identifier title url state { name } assignee { displayName isMe }"

_GET_ISSUE = f"""
query GetIssue($id: String!) {{
  issue(id: $id) {{ {_ISSUE_FIELDS} }}
}}
"""

_SEARCH_ISSUES = f"""
query SearchIssues($term: String!, $first: Int) {{
  searchIssues(term: $term, first: $first) {{
    nodes {{ {_ISSUE_FIELDS} }}
  }}
}}
"""

_CREATE_ISSUE = f"""
mutation CreateIssue($title: String!, $teamId: String!) {{
  issueCreate(input: {{ title: $title, teamId: $teamId }}) {{
    success
    issue {{ {_ISSUE_FIELDS} }}
  }}
}}
"""

_LIST_TEAMS = """
query ListTeams {
  teams {
    nodes {
      id
      name
      key
    }
  }
}
"""

_VIEWER = """
query Viewer {
  viewer { id }
}
"""

_TEAM_STATES = """
query TeamStates($id: String!) {
  issue(id: $id) {
    team {
      states { nodes { id name type } }
    }
  }
}
"""

_UPDATE_ISSUE = """
mutation UpdateIssue($id: String!, $assigneeId: String, $stateId: String) {
  issueUpdate(id: $id, input: { assigneeId: $assigneeId, stateId: $stateId }) {
    success
  }
}
"""

_ISSUE_URL = """
query IssueUrl($id: String!) {
  issue(id: $id) { url }
}
"""

_ASSIGNED_TODOS = f"""
query AssignedTodos($first: Int) {{
  viewer {{
    assignedIssues(
      first: $first
      filter: {{ state: {{ type: {{ eq: "unstarted" }} }} }}
      orderBy: updatedAt
    ) {{
      nodes {{ {_ISSUE_FIELDS} }}
    }}
  }}
}}
"""

_RECENT_UNASSIGNED = f"""
query RecentUnassigned($first: Int) {{
  issues(
    first: $first
    filter: {{ assignee: {{ null: true }}, state: {{ type: {{ nin: ["completed", "canceled"] }} }} }}
    orderBy: createdAt
  ) {{
    nodes {{ {_ISSUE_FIELDS} }}
  }}
}}
"""


class LinearProvider(IssueTracker):
    def __init__(self, settings: LbranchSettings, client: httpx.AsyncClient | None = None) -> None:
        if not settings.linear_api_key:
            raise RuntimeError("linear_api_key is required")
        self._api_key = settings.linear_api_key.get_secret_value()
        self._client = client or httpx.AsyncClient(timeout=30)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _gql(self, query: str, variables: dict | None = None) -> dict:
        logger.debug("Linear request: %s", query.strip().splitlines()[0])
        try:
            response = await self._client.post(
                ENDPOINT,
                json={"query": query, "variables": variables or {}},
                headers={
                    "Authorization": self._api_key,
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Linear API request failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(f"Linear API error: {response.status_code} {response.reason_phrase}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("Linear API returned invalid JSON") from exc
        if payload.get("errors"):
            messages = ", ".join(e.get("message", "unknown error") for e in payload["errors"])
            raise TransportError(f"Linear GraphQL error: {messages}")
        if not payload.get("data"):
            raise TransportError("Linear API returned no data")
        return payload["data"]

    def _issue_from_node(self, node: dict) -> Issue:
        assignee = node.get("assignee")
        return Issue(
            identifier=node["identifier"],
            title=node["title"],
            state=node["state"]["name"],
            assignee=Assignee(display_name=assignee["displayName"], is_me=assignee.get("isMe", False))
            if assignee
            else None,
            url=node.get("url"),
        )

    async def get_issue(self, issue_id: str) -> Issue:
        data = await self._gql(_GET_ISSUE, {"id": issue_id})
        node = data["issue"]
        if not node:
            raise NotFoundError(f"Issue {issue_id} not found in Linear")
        return self._issue_from_node(node)

    async def search_issues(self, query: str, first: int = 10) -> list[Issue]:
        data = await self._gql(_SEARCH_ISSUES, {"term": query, "first": first})
        return [self._issue_from_node(n) for n in data["searchIssues"]["nodes"]]

    async def create_issue(self, title: str, team_id: str) -> Issue:
        data = await self._gql(_CREATE_ISSUE, {"title": title, "teamId": team_id})
        result = data["issueCreate"]
        if not result["success"] or not result.get("issue"):
            raise TransportError("Failed to create issue: Linear issueCreate returned success=false")
        return self._issue_from_node(result["issue"])

    async def list_teams(self) -> list[Team]:
        data = await self._gql(_LIST_TEAMS)
        return [Team(id=n["id"], name=n["name"], key=n["key"]) for n in data["teams"]["nodes"]]

    async def get_viewer_id(self) -> str | None:
        data = await self._gql(_VIEWER)
        viewer = data.get("viewer")
        return viewer["id"] if viewer else None

    async def list_workflow_states(self, issue_id: str) -> list[WorkflowState]:
        data = await self._gql(_TEAM_STATES, {"id": issue_id})
        node = data["issue"]
        if not node:
            raise NotFoundError(f"Issue {issue_id} not found in Linear")
        return [
            WorkflowState(id=s["id"], name=s["name"], type=s["type"]) for s in node["team"]["states"]["nodes"]
        ]

    async def update_issue(
        self,
        issue_id: str,
        assignee_id: str | None = None,
        state_id: str | None = None,
    ) -> None:
        # Unset variables leave the field untouched; an explicit null would clear it.
        variables: dict = {"id": issue_id}
        if assignee_id:
            variables["assigneeId"] = assignee_id
        if state_id:
            variables["stateId"] = state_id
        data = await self._gql(_UPDATE_ISSUE, variables)
        if not data["issueUpdate"]["success"]:
            raise TransportError("Linear issueUpdate returned success=false")

    async def get_issue_url(self, issue_id: str) -> str | None:
        data = await self._gql(_ISSUE_URL, {"id": issue_id})
        node = data["issue"]
        return node["url"] if node else None

    async def list_assigned_todos(self, first: int) -> list[Issue]:
        data = await self._gql(_ASSIGNED_TODOS, {"first": first})
        return [self._issue_from_node(n) for n in data["viewer"]["assignedIssues"]["nodes"]]

    async def list_recent_unassigned(self, first: int) -> list[Issue]:
        data = await self._gql(_RECENT_UNASSIGNED, {"first": first})
        return [self._issue_from_node(n) for n in data["issues"]["nodes"]]
