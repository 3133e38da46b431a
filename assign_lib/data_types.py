"""Data type definitions for the reviewer and assignee automation."""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Union


@dataclass
class AssignConfig:
    """
    Action inputs, parsed once per run.

    Attributes:
        github_token: Token used to authenticate against the GitHub API
        reviewers: Reviewer candidates (usernames or "org/team-slug")
        assignees: Assignee candidates, None falls back to reviewers
        number_of_reviewers: How many reviewers to pick (0 = all)
        number_of_assignees: How many assignees to pick
            (0 or None = fall back to number_of_reviewers)
        add_reviewers: Whether to request reviewers on pull requests
        add_assignees: Whether to add assignees to pull requests and issues
        skip_keywords: Title keywords that skip the whole run
        include_labels: Run only when one of these labels is present
        exclude_labels: Skip the run when one of these labels is present
    """

    github_token: str
    reviewers: Optional[List[str]] = None
    assignees: Optional[List[str]] = None
    number_of_reviewers: int = 0
    number_of_assignees: Optional[int] = None
    add_reviewers: bool = True
    add_assignees: bool = True
    skip_keywords: List[str] = field(default_factory=list)
    include_labels: List[str] = field(default_factory=list)
    exclude_labels: List[str] = field(default_factory=list)


@dataclass
class Selection:
    """Chosen candidates, split into individual users and team slugs."""

    users: List[str] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)


@dataclass
class RepoState:
    """Reviewers, teams and assignees already set on the platform."""

    reviewers: List[str] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)
    assignees: List[str] = field(default_factory=list)


@dataclass
class Subject:
    """Fields shared by pull requests and issues."""

    kind: ClassVar[str] = ""

    number: int
    author: str
    title: str = ""
    assignees: List[str] = field(default_factory=list)


@dataclass
class PullRequest(Subject):
    kind: ClassVar[str] = "PR"

    requested_reviewers: List[str] = field(default_factory=list)
    requested_teams: List[str] = field(default_factory=list)


@dataclass
class Issue(Subject):
    kind: ClassVar[str] = "issue"


@dataclass
class EventContext:
    """
    The triggering event, read from the runner environment.

    Attributes:
        event_name: Value of GITHUB_EVENT_NAME (e.g. "pull_request")
        action: The payload "action" field, if any (e.g. "opened")
        repository: "owner/name" of the current repository
        subject: The pull request or issue, None if the payload has neither
    """

    event_name: str
    action: Optional[str]
    repository: str
    subject: Union[PullRequest, Issue, None] = None

    @property
    def owner(self) -> str:
        return self.repository.split("/")[0]
