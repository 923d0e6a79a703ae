"""Tests for slugs, names, issue-ID patterns and link detection."""

import re

import pytest

from lbranch.models import Issue, TeamConfig
from lbranch.naming import (
    detect_link,
    first_name_of,
    issue_id_pattern,
    looks_like_issue_id,
    make_branch_name,
    slugify,
)


def _issue(identifier: str, title: str) -> Issue:
    return Issue(identifier=identifier, title=title, state="Todo")


class TestSlugify:
    def test_basic(self) -> None:
        assert slugify("Fix Login Bug!!") == "fix-login-bug"

    def test_keeps_first_five_words(self) -> None:
        assert slugify("one two three four five six seven") == "one-two-three-four-five"

    def test_special_chars_dropped(self) -> None:
        slug = slugify("Fix: null & undefined (edge case)")
        assert slug == "fix-null-undefined-edge-case"

    def test_collapses_whitespace(self) -> None:
        assert slugify("  lots    of   space  ") == "lots-of-space"

    def test_empty(self) -> None:
        assert slugify("") == ""
        assert slugify("!!! ???") == ""

    def test_hyphens_are_dropped(self) -> None:
        assert slugify("Add sign-in page") == "add-signin-page"

    def test_hyphenated_words_count_once(self) -> None:
        assert slugify("Fix e-mail sign-in flow now please") == "fix-email-signin-flow-now"

    @pytest.mark.parametrize(
        "title",
        ["Fix Login Bug!!", "a-b c--d", "Über naïve café 2024", "   ", "x y z w v u t s"],
    )
    def test_output_is_branch_safe(self, title: str) -> None:
        slug = slugify(title)
        assert re.fullmatch(r"[a-z0-9-]*", slug)
        assert len([w for w in slug.split("-") if w]) <= 5

    @pytest.mark.parametrize("title", ["Fix!!", "Über", "   ", "release2024"])
    def test_idempotent_on_single_word_slugs(self, title: str) -> None:
        slug = slugify(title)
        assert slugify(slug) == slug


class TestFirstNameOf:
    def test_takes_first_token_lowercased(self) -> None:
        assert first_name_of("Alice Smith") == "alice"

    def test_extra_whitespace(self) -> None:
        assert first_name_of("  Bob\tJones ") == "bob"

    def test_empty_and_none(self) -> None:
        assert first_name_of("") == ""
        assert first_name_of("   ") == ""
        assert first_name_of(None) == ""


class TestMakeBranchName:
    def test_round_trip(self) -> None:
        assert make_branch_name("alice", _issue("ENG-142", "Fix login bug")) == "alice/ENG-142-fix-login-bug"

    def test_made_branch_is_detected_as_linked(self) -> None:
        branch = make_branch_name("alice", _issue("ENG-7", "Add channel search endpoint"))
        state = detect_link(branch)
        assert state.linked
        assert state.issue_id == "ENG-7"


class TestIssueIdPattern:
    def test_team_key_pattern(self) -> None:
        config = TeamConfig(team_id="t1", team_key="ENG")
        assert issue_id_pattern(config).fullmatch("ENG-142")
        assert not issue_id_pattern(config).fullmatch("DES-142")

    def test_generic_pattern_without_team(self) -> None:
        assert looks_like_issue_id("DES-9", None)
        assert not looks_like_issue_id("eng-9", None)
        assert not looks_like_issue_id("fix ENG-9", None)
        assert not looks_like_issue_id("ENG-9\n", None)


class TestDetectLink:
    def test_linked(self) -> None:
        state = detect_link("alice/ENG-142-fix-login")
        assert state.linked is True
        assert state.issue_id == "ENG-142"

    def test_trunk_not_linked(self) -> None:
        state = detect_link("main")
        assert state.linked is False
        assert state.issue_id is None

    @pytest.mark.parametrize(
        "branch",
        [
            "feature/login",
            "Alice/ENG-1-fix",
            "alice/eng-1-fix",
            "alice/ENG-1",
            "alice/ENG-1-Fix",
            "alice/team/ENG-1-fix",
        ],
    )
    def test_non_matching(self, branch: str) -> None:
        assert detect_link(branch).linked is False
