import os
from enum import Enum

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())


# Input names enum
class InputNames(str, Enum):
    """Action input names, as declared in action.yml"""

    GITHUB_TOKEN = "GITHUB_TOKEN"
    REVIEWERS = "reviewers"
    ASSIGNEES = "assignees"
    NUMBER_OF_REVIEWERS = "numberOfReviewers"  # 0 = all
    NUMBER_OF_ASSIGNEES = "numberOfAssignees"  # 0 = fall back to reviewers
    ADD_REVIEWERS = "addReviewers"
    ADD_ASSIGNEES = "addAssignees"
    SKIP_KEYWORDS = "skipKeywords"
    INCLUDE_LABELS = "includeLabels"
    EXCLUDE_LABELS = "excludeLabels"


# Runner environment variables
EVENT_NAME_ENV = "GITHUB_EVENT_NAME"
EVENT_PATH_ENV = "GITHUB_EVENT_PATH"
REPOSITORY_ENV = "GITHUB_REPOSITORY"
API_URL_ENV = "GITHUB_API_URL"

DEFAULT_API_URL = "https://api.github.com"


def get_api_url() -> str:
    """Base URL of the GitHub API, GITHUB_API_URL on GitHub Enterprise."""
    return os.environ.get(API_URL_ENV) or DEFAULT_API_URL


# "org/team-slug" identifies a team, anything else is a username
TEAM_SEPARATOR = "/"

# Multi-value inputs may be newline or comma separated
LIST_SEPARATORS = ("\n", ",")

TRUTHY_VALUES = {"true", "yes", "1", "on"}

# Single bounded page for every list call
PAGE_SIZE = 100

# Events that trigger an assignment: (event name, accepted actions).
# None accepts any action.
TRIGGERS = [
    ("pull_request", ["opened", "reopened", "ready_for_review"]),
    ("pull_request_target", ["opened", "reopened", "ready_for_review"]),
    ("issues", ["opened", "reopened"]),
]

DEFAULT_NUMBER_OF_REVIEWERS = 0  # select all
DEFAULT_ADD_REVIEWERS = True
DEFAULT_ADD_ASSIGNEES = True
