from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Union

from github import Auth, Github
from github.Repository import Repository

from assign_lib.data_types import EventContext, PullRequest, RepoState, Subject
from assign_lib.env_constants import PAGE_SIZE, TEAM_SEPARATOR, get_api_url


def log_debug(message: str) -> None:
    """Print a line that the runner only shows with step debug logging on."""
    print(f"::debug::{message}")


def skip(context: EventContext, message: str) -> None:
    kind = "PR" if isinstance(context.subject, PullRequest) else "issue"
    print(f"Skip to run since the {kind} {message}")


def is_valid_event(
    context: EventContext,
    event: str,
    action: Union[str, Sequence[str], None] = None,
) -> bool:
    """
    Check whether the triggering event matches the given event and action.

    Args:
        context: The triggering event
        event: Expected event name (exact match)
        action: Accepted action, or list of accepted actions.
            None accepts any action.
    """
    if event != context.event_name:
        return False
    if action is None:
        return True
    return bool(context.action) and (
        action == context.action or context.action in action
    )


def has_skip_keywords(title: str, keywords: List[str]) -> bool:
    title_lower_case = title.lower()
    return any(word.lower() in title_lower_case for word in keywords)


@contextmanager
def get_github_client(token: str) -> Iterator[Github]:
    """
    Open an authenticated GitHub API client.

    Every list call returns at most PAGE_SIZE items per page. The base URL
    follows GITHUB_API_URL so the same code works on GitHub Enterprise.
    """
    client = Github(
        auth=Auth.Token(token), base_url=get_api_url(), per_page=PAGE_SIZE
    )
    try:
        yield client
    finally:
        client.close()


def is_valid_user(gh: Github, username: str) -> bool:
    """
    Check that a username resolves to an existing account.

    Any failure (unknown login, network error, rate limit) counts as
    invalid. This function never raises.
    """
    try:
        user = gh.get_user(username)
        return user.id > 0
    except Exception:  # noqa: BLE001 # pylint: disable=broad-except
        return False


def get_team_members(
    gh: Github, team: str, default_org: Optional[str] = None
) -> List[str]:
    """
    List the logins of a team's members (first page only).

    Args:
        gh: GitHub client
        team: "org/slug", or a bare slug. A missing org falls back to
            default_org (the repository owner).
        default_org: Organization used when team carries none

    Raises:
        github.GithubException: The team or organization could not be read
    """
    if TEAM_SEPARATOR in team:
        org, slug = team.split(TEAM_SEPARATOR, 1)
    else:
        org, slug = "", team
    org = org or default_org

    members = (
        gh.get_organization(org)
        .get_team_by_slug(slug)
        .get_members()
        .get_page(0)
    )
    return [member.login for member in members]


def get_issue_labels(repo: Repository, issue_number: int) -> List[str]:
    labels = repo.get_issue(number=issue_number).get_labels().get_page(0)
    return [label.name for label in labels]


def get_state(repo: Repository, subject: Optional[Subject]) -> RepoState:
    """Fetch the reviewers, teams and assignees currently set upstream."""
    state = RepoState()

    if isinstance(subject, PullRequest):
        pr = repo.get_pull(subject.number)
        state.teams = [team.slug for team in pr.requested_teams or []]
        state.reviewers = [user.login for user in pr.requested_reviewers or []]
        state.assignees = [user.login for user in pr.assignees or []]
    elif subject is not None:
        issue = repo.get_issue(number=subject.number)
        state.assignees = [user.login for user in issue.assignees or []]

    return state
