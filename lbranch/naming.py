"""Branch naming: slugs, git short names, issue-ID patterns and link detection."""

import re

from lbranch.models import Issue, LinkState, TeamConfig

MAX_SLUG_WORDS = 5

# <gitname>/<ISSUE-ID>-<slug>, e.g. alice/ENG-142-fix-login
_LINKED_BRANCH_RE = re.compile(r"[a-z]+/([A-Z]+-[0-9]+)-[a-z0-9-]+")
_GENERIC_ISSUE_ID_RE = re.compile(r"[A-Z]+-[0-9]+")


def slugify(title: str) -> str:
    """Return a branch-safe slug of at most five words.

    "Fix Login Bug!!" → fix-login-bug
    """
    words = re.sub(r"[^a-z0-9 ]", "", title.lower()).strip().split()
    return "-".join(words[:MAX_SLUG_WORDS])


def first_name_of(full_name: str | None) -> str:
    """Return the lower-cased first token of a full name, or "" when there is none."""
    if not full_name:
        return ""
    parts = full_name.split()
    return parts[0].lower() if parts else ""


def make_branch_name(git_name: str, issue: Issue) -> str:
    return f"{git_name}/{issue.identifier}-{slugify(issue.title)}"


def issue_id_pattern(team_config: TeamConfig | None) -> re.Pattern[str]:
    """Pattern for bare issue IDs: the cached team key if any, else any uppercase prefix."""
    if team_config:
        return re.compile(rf"{re.escape(team_config.team_key)}-[0-9]+")
    return _GENERIC_ISSUE_ID_RE


def looks_like_issue_id(text: str, team_config: TeamConfig | None) -> bool:
    return issue_id_pattern(team_config).fullmatch(text) is not None


def detect_link(branch: str) -> LinkState:
    match = _LINKED_BRANCH_RE.fullmatch(branch)
    if match:
        return LinkState(linked=True, issue_id=match.group(1))
    return LinkState(linked=False)
