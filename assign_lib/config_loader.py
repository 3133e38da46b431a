"""
Configuration Loader

Loads the action inputs and the triggering event from the runner
environment. GitHub Actions exposes every input as an environment variable
named INPUT_<NAME>, with the name upper-cased and spaces replaced by
underscores. For local runs the same variables can be set in a .env file.
"""
import json
import os
from typing import List, Optional

from assign_lib.data_types import (
    AssignConfig,
    EventContext,
    Issue,
    PullRequest,
)
from assign_lib.env_constants import (
    DEFAULT_ADD_ASSIGNEES,
    DEFAULT_ADD_REVIEWERS,
    DEFAULT_NUMBER_OF_REVIEWERS,
    EVENT_NAME_ENV,
    EVENT_PATH_ENV,
    LIST_SEPARATORS,
    REPOSITORY_ENV,
    TRUTHY_VALUES,
    InputNames,
)


class ConfigurationError(Exception):
    """Raised when a required input is missing or an input is malformed."""


def get_input(name: str, required: bool = False) -> str:
    key = "INPUT_" + name.replace(" ", "_").upper()
    value = os.environ.get(key, "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def parse_list(value: str) -> List[str]:
    """
    Split a multi-value input on newlines and commas.

    Example:
        "alice, bob\\norg/team-x" -> ["alice", "bob", "org/team-x"]
    """
    items = [value]
    for separator in LIST_SEPARATORS:
        items = [part for item in items for part in item.split(separator)]
    return [item.strip() for item in items if item.strip()]


def get_list_input(name: str) -> Optional[List[str]]:
    """Returns None when the input is absent, so callers can fall back."""
    value = get_input(name)
    if not value:
        return None
    return parse_list(value)


def get_bool_input(name: str, default: bool) -> bool:
    value = get_input(name)
    if not value:
        return default
    return value.lower() in TRUTHY_VALUES


def get_int_input(name: str) -> Optional[int]:
    value = get_input(name)
    if not value:
        return None
    try:
        number = int(value)
    except ValueError as exc:
        raise ConfigurationError(
            f"Input {name} must be a non-negative integer, got {value!r}"
        ) from exc
    if number < 0:
        raise ConfigurationError(
            f"Input {name} must be a non-negative integer, got {number}"
        )
    return number


def load_config() -> AssignConfig:
    """
    Build the run configuration from the action inputs.

    Returns:
        AssignConfig with defaults applied for every absent input

    Raises:
        ConfigurationError: GITHUB_TOKEN is missing or a number is invalid
    """
    number_of_reviewers = get_int_input(InputNames.NUMBER_OF_REVIEWERS.value)

    return AssignConfig(
        github_token=get_input(InputNames.GITHUB_TOKEN.value, required=True),
        reviewers=get_list_input(InputNames.REVIEWERS.value),
        assignees=get_list_input(InputNames.ASSIGNEES.value),
        number_of_reviewers=(
            DEFAULT_NUMBER_OF_REVIEWERS
            if number_of_reviewers is None
            else number_of_reviewers
        ),
        number_of_assignees=get_int_input(
            InputNames.NUMBER_OF_ASSIGNEES.value
        ),
        add_reviewers=get_bool_input(
            InputNames.ADD_REVIEWERS.value, DEFAULT_ADD_REVIEWERS
        ),
        add_assignees=get_bool_input(
            InputNames.ADD_ASSIGNEES.value, DEFAULT_ADD_ASSIGNEES
        ),
        skip_keywords=get_list_input(InputNames.SKIP_KEYWORDS.value) or [],
        include_labels=get_list_input(InputNames.INCLUDE_LABELS.value) or [],
        exclude_labels=get_list_input(InputNames.EXCLUDE_LABELS.value) or [],
    )


def _logins(users: Optional[list]) -> List[str]:
    return [user["login"] for user in users or []]


def parse_event_payload(
    event_name: str, repository: str, payload: dict
) -> EventContext:
    """Map a raw webhook payload onto the PR / issue tagged union."""
    subject = None
    pr = payload.get("pull_request")
    issue = payload.get("issue")

    if pr:
        subject = PullRequest(
            number=pr["number"],
            author=pr["user"]["login"],
            title=pr.get("title") or "",
            assignees=_logins(pr.get("assignees")),
            requested_reviewers=_logins(pr.get("requested_reviewers")),
            requested_teams=[
                team["slug"] for team in pr.get("requested_teams") or []
            ],
        )
    elif issue:
        subject = Issue(
            number=issue["number"],
            author=issue["user"]["login"],
            title=issue.get("title") or "",
            assignees=_logins(issue.get("assignees")),
        )

    return EventContext(
        event_name=event_name,
        action=payload.get("action"),
        repository=repository,
        subject=subject,
    )


def load_event_context() -> EventContext:
    """
    Read the triggering event provided by the Actions runner.

    Raises:
        ConfigurationError: The runner variables are not set
    """
    event_name = os.environ.get(EVENT_NAME_ENV, "")
    event_path = os.environ.get(EVENT_PATH_ENV, "")
    repository = os.environ.get(REPOSITORY_ENV, "")

    if not all([event_name, event_path, repository]):
        raise ConfigurationError(
            f"{EVENT_NAME_ENV}, {EVENT_PATH_ENV} and {REPOSITORY_ENV} "
            "must be set by the Actions runner"
        )

    with open(event_path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    return parse_event_payload(event_name, repository, payload)
