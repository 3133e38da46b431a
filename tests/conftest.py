"""Test fixtures for pytest."""

from typing import Generator
from unittest.mock import MagicMock

import pytest

from assign_lib.data_types import AssignConfig, EventContext, Issue, PullRequest

KNOWN_USERS = {"alice": 1, "bob": 2, "carol": 3, "dave": 4, "erin": 5}

TEAM_MEMBERS = {
    ("org", "team-x"): ["carol", "dave"],
    ("org", "team-y"): ["erin"],
}

PR_PAYLOAD = {
    "action": "opened",
    "pull_request": {
        "number": 7,
        "title": "Add feature",
        "user": {"login": "alice"},
        "assignees": [],
        "requested_reviewers": [],
        "requested_teams": [],
    },
}

ISSUE_PAYLOAD = {
    "action": "opened",
    "issue": {
        "number": 12,
        "title": "Something is broken",
        "user": {"login": "alice"},
        "assignees": [],
    },
}


def make_config(**kwargs) -> AssignConfig:
    return AssignConfig(github_token="token", **kwargs)


def _get_user(username: str) -> MagicMock:
    if username not in KNOWN_USERS:
        raise Exception(f"Not Found: {username}")
    return MagicMock(id=KNOWN_USERS[username], login=username)


def _get_organization(org: str) -> MagicMock:
    def get_team_by_slug(slug: str) -> MagicMock:
        if (org, slug) not in TEAM_MEMBERS:
            raise Exception(f"Not Found: {org}/{slug}")
        members = []
        for login in TEAM_MEMBERS[(org, slug)]:
            member = MagicMock()
            member.login = login
            members.append(member)
        team = MagicMock()
        team.get_members.return_value.get_page.return_value = members
        return team

    organization = MagicMock()
    organization.get_team_by_slug.side_effect = get_team_by_slug
    return organization


@pytest.fixture(scope="function")
def mocked_github() -> Generator[MagicMock, None, None]:
    """GitHub client that knows KNOWN_USERS and TEAM_MEMBERS."""
    gh = MagicMock()
    gh.get_user.side_effect = _get_user
    gh.get_organization.side_effect = _get_organization
    yield gh


@pytest.fixture(scope="function")
def mocked_repo() -> Generator[MagicMock, None, None]:
    """Repository with no reviewers, assignees or labels."""
    repo = MagicMock()
    repo.get_pull.return_value.requested_reviewers = []
    repo.get_pull.return_value.requested_teams = []
    repo.get_pull.return_value.assignees = []
    repo.get_issue.return_value.assignees = []
    repo.get_issue.return_value.get_labels.return_value.get_page.return_value = []
    yield repo


@pytest.fixture(scope="function")
def pr_subject() -> PullRequest:
    return PullRequest(number=7, author="alice", title="Add feature")


@pytest.fixture(scope="function")
def issue_subject() -> Issue:
    return Issue(number=12, author="alice", title="Something is broken")


@pytest.fixture(scope="function")
def pr_context(pr_subject: PullRequest) -> EventContext:
    return EventContext(
        event_name="pull_request",
        action="opened",
        repository="org/repo",
        subject=pr_subject,
    )


@pytest.fixture(scope="function")
def issue_context(issue_subject: Issue) -> EventContext:
    return EventContext(
        event_name="issues",
        action="opened",
        repository="org/repo",
        subject=issue_subject,
    )
