"""Classify command-line input into an intent."""

from lbranch.models import (
    AutoIntent,
    CreateIntent,
    DirectIntent,
    Intent,
    InteractiveIntent,
    SearchIntent,
    TeamConfig,
)
from lbranch.naming import looks_like_issue_id


def classify(args: list[str], *, auto: bool = False, create: bool = False) -> Intent:
    """Map flags and positional words to an intent.

    --auto wins over --create when both are given.
    """
    text = " ".join(args).strip()
    if auto:
        return AutoIntent(arg=text or None)
    if create:
        return CreateIntent(title=text or None)
    if not text:
        return InteractiveIntent()
    return SearchIntent(query=text)


def refine(intent: Intent, team_config: TeamConfig | None) -> Intent:
    """Promote a search whose query is an issue ID to a direct lookup."""
    if isinstance(intent, SearchIntent) and looks_like_issue_id(intent.query, team_config):
        return DirectIntent(issue_id=intent.query)
    return intent
