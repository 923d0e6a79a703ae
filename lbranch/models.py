"""Shared pydantic models — the contract between the tracker, the prompts and the pipeline."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Assignee(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    is_me: bool = False


class Issue(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str  # ENG-123
    title: str
    state: str  # workflow state name
    assignee: Assignee | None = None
    url: str | None = None


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    key: str  # issue prefix, e.g. ENG


class TeamConfig(BaseModel):
    """Cached team selection, stored as {"teamId": ..., "teamKey": ...}."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    team_id: str = Field(alias="teamId", min_length=1)
    team_key: str = Field(alias="teamKey", min_length=1)


class WorkflowState(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str  # started | unstarted | completed | canceled | backlog | triage


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------


class InteractiveIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["interactive"] = "interactive"


class DirectIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["direct"] = "direct"
    issue_id: str


class SearchIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["search"] = "search"
    query: str


class CreateIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["create"] = "create"
    title: str | None = None


class AutoIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["auto"] = "auto"
    arg: str | None = None


Intent = Annotated[
    InteractiveIntent | DirectIntent | SearchIntent | CreateIntent | AutoIntent,
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Prompt outcomes
# ---------------------------------------------------------------------------


class Cancelled(BaseModel):
    """The user aborted a prompt. Returned, never raised."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["cancelled"] = "cancelled"


class MenuEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue: Issue
    context: str | None = None  # "My Todo", "Recent"; None shows state + assignee


class IssuePick(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["issue"] = "issue"
    issue: Issue


class CreatePick(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["create"] = "create"


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["search"] = "search"
    query: str


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------


class LinkState(BaseModel):
    model_config = ConfigDict(frozen=True)

    linked: bool
    issue_id: str | None = None


class Linked(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["linked"] = "linked"
    issue: Issue
    branch: str
    url: str | None = None


class AlreadyLinked(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["already_linked"] = "already_linked"
    issue_id: str
    branch: str


LinkResult = Annotated[Linked | AlreadyLinked | Cancelled, Field(discriminator="kind")]
