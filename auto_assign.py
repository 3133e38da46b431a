"""
Auto Assign - Reviewer and Assignee Selection for Pull Requests and Issues

This script runs as a GitHub Actions step and picks reviewers and
assignees from a configured candidate pool.

BUSINESS LOGIC:
1. Candidates are usernames ("alice") or teams ("org/team-slug")
   - Anything containing "/" is a team, the slug is the part after it
   - The PR / issue author is never picked (case-insensitive)

2. Reviewers (pull requests only):
   a) Split candidates into users and teams
   b) Randomly pick "numberOfReviewers" users AND "numberOfReviewers"
      teams (0 = pick everyone)
   c) Drop users that do not resolve to a GitHub account
   d) Request the remaining users and teams in a single call

3. Assignees (pull requests and issues):
   a) Candidates are "assignees", falling back to "reviewers"
   b) Count is "numberOfAssignees", falling back to "numberOfReviewers"
   c) Teams are expanded to their members, a team that cannot be read
      contributes nobody
   d) Randomly pick from the combined users, drop unknown accounts
   e) Add the remaining users in a single call

4. The run is skipped when:
   - The event / action is not one of env_constants.TRIGGERS
   - The title contains one of "skipKeywords"
   - None of "includeLabels" is present, or one of "excludeLabels" is
   - Reviewers (or assignees) are already set on the PR / issue

EXAMPLE:
Candidates: alice, bob, org/team-x
Author: alice
Number of Reviewers: 1
Result: reviewers=[bob], team_reviewers=[team-x]
"""

import random
import sys
import traceback
from typing import List, Optional

from github import Github
from github.Repository import Repository

from assign_lib.config_loader import load_config, load_event_context
from assign_lib.data_types import (
    AssignConfig,
    EventContext,
    PullRequest,
    Selection,
    Subject,
)
from assign_lib.env_constants import TEAM_SEPARATOR, TRIGGERS
from assign_lib.utilities import (
    get_github_client,
    get_issue_labels,
    get_state,
    get_team_members,
    has_skip_keywords,
    is_valid_event,
    is_valid_user,
    log_debug,
    skip,
)


def partition_candidates(candidates: List[str], author: str) -> Selection:
    """Split identifiers into team slugs and usernames, dropping the author."""
    selection = Selection()
    for candidate in candidates:
        if TEAM_SEPARATOR in candidate:
            selection.teams.append(candidate.split(TEAM_SEPARATOR, 1)[1])
        elif candidate.lower() != author.lower():
            selection.users.append(candidate)
    return selection


def sample_candidates(pool: List[str], count: int) -> List[str]:
    """Pick `count` distinct names at random, 0 = all, no duplicates."""
    names = list(dict.fromkeys(pool))

    # all-assign
    if count == 0:
        return names

    return random.sample(names, min(count, len(names)))


def filter_valid_users(
    gh: Github, usernames: List[str], role: str
) -> List[str]:
    """Keep the usernames that resolve to an account, logging the rest."""
    valid_users = []
    for username in usernames:
        if is_valid_user(gh, username):
            valid_users.append(username)
        else:
            print(f'  ignored unknown {role}: "{username}"')
    return valid_users


def choose_reviewers(author: str, config: AssignConfig) -> Selection:
    """
    Pick reviewers and team reviewers from the configured candidates.

    Users and teams are sampled separately, each with
    config.number_of_reviewers, so the combined total can exceed it.
    """
    chosen = partition_candidates(config.reviewers or [], author)
    return Selection(
        users=sample_candidates(chosen.users, config.number_of_reviewers),
        teams=sample_candidates(chosen.teams, config.number_of_reviewers),
    )


def add_reviewers(
    gh: Github,
    repo: Repository,
    subject: Optional[Subject],
    config: AssignConfig,
) -> Selection:
    """
    Request reviewers on a pull request.

    Unknown users are dropped. Team slugs are passed through as they are.
    Nothing is requested when both lists end up empty. Errors from the
    request itself are not caught.
    """
    if not config.add_reviewers or not isinstance(subject, PullRequest):
        return Selection()

    print("")
    print(f"Adding reviewers for pr #[{subject.number}]")
    chosen = choose_reviewers(subject.author, config)
    reviewers = filter_valid_users(gh, chosen.users, "reviewer")

    print(f"  add reviewers: [{', '.join(reviewers)}]")
    print(f"  add team_reviewers: [{', '.join(chosen.teams)}]")

    if reviewers or chosen.teams:
        repo.get_pull(subject.number).create_review_request(
            reviewers=reviewers, team_reviewers=chosen.teams
        )

    return Selection(users=reviewers, teams=chosen.teams)


def choose_assignees(
    gh: Github,
    author: str,
    config: AssignConfig,
    default_org: Optional[str] = None,
) -> List[str]:
    """
    Pick assignees, expanding every team candidate into its members.

    Candidates fall back to config.reviewers and the count falls back to
    config.number_of_reviewers. A team whose members cannot be listed is
    logged and skipped.
    """
    count = config.number_of_assignees or config.number_of_reviewers or 0
    if config.assignees is not None:
        candidates = config.assignees
    else:
        candidates = config.reviewers or []

    users: List[str] = []
    teams: List[str] = []
    for candidate in candidates:
        if TEAM_SEPARATOR in candidate:
            teams.append(candidate)
        else:
            users.append(candidate)

    for team in teams:
        try:
            users.extend(get_team_members(gh, team, default_org))
        except Exception as exc:  # noqa: BLE001 # pylint: disable=broad-except
            print(f'  failed to get team members of "{team}": {exc}')

    log_debug(f"assignee candidates: [{', '.join(users)}]")
    return sample_candidates(partition_candidates(users, author).users, count)


def add_assignees(
    gh: Github,
    repo: Repository,
    subject: Optional[Subject],
    config: AssignConfig,
    default_org: Optional[str] = None,
) -> List[str]:
    """
    Add assignees to a pull request or an issue.

    Teams given without an organization are looked up in default_org.
    Errors from the assignment itself are not caught.
    """
    if not config.add_assignees or subject is None:
        return []

    print("")
    print(f"Adding assignees for {subject.kind.lower()} #[{subject.number}]")

    candidates = choose_assignees(gh, subject.author, config, default_org)
    assignees = filter_valid_users(gh, candidates, "assignee")

    print(f"  add assignees: [{', '.join(assignees)}]")

    if assignees:
        repo.get_issue(number=subject.number).add_to_assignees(*assignees)

    return assignees


def is_triggered(context: EventContext) -> bool:
    """Whether the event and action match one of env_constants.TRIGGERS."""
    return any(
        is_valid_event(context, event, actions) for event, actions in TRIGGERS
    )


def run(gh: Github, config: AssignConfig, context: EventContext) -> None:
    """
    Decide whether the event applies, then add reviewers and assignees.

    Reviewers and assignees are handled one after the other, each behind
    its own flag. Skips are logged and return normally.
    """
    if not is_triggered(context):
        skip(
            context,
            f"event [{context.event_name}] with action [{context.action}] "
            "is not configured",
        )
        return

    subject = context.subject
    if subject is None:
        skip(context, "payload is missing")
        return

    if has_skip_keywords(subject.title, config.skip_keywords):
        skip(context, "title includes skip-keywords")
        return

    repo = gh.get_repo(context.repository)

    if config.include_labels or config.exclude_labels:
        labels = get_issue_labels(repo, subject.number)
        if config.include_labels and not any(
            label in labels for label in config.include_labels
        ):
            skip(context, "is not labeled with any of the include labels")
            return
        if any(label in labels for label in config.exclude_labels):
            skip(context, "is labeled with one of the exclude labels")
            return

    state = get_state(repo, subject)

    if config.add_reviewers and isinstance(subject, PullRequest):
        if state.reviewers or state.teams:
            skip(context, "already has reviewers")
        else:
            add_reviewers(gh, repo, subject, config)

    if config.add_assignees:
        if state.assignees:
            skip(context, "already has assignees")
        else:
            add_assignees(gh, repo, subject, config, context.owner)


if __name__ == "__main__":
    try:
        assign_config = load_config()
        event_context = load_event_context()
        with get_github_client(assign_config.github_token) as client:
            run(client, assign_config, event_context)
    except Exception as exc:  # noqa: BLE001 # pylint: disable=broad-except
        traceback.print_exc()
        print(f"::error::{str(exc) or str(type(exc))}")
        sys.exit(1)
