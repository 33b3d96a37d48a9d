# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Release classification from the head commit of a branch.

A release is regular (minor bump) when the latest commit is the merge of the
integration branch, and a hotfix (patch bump) otherwise. The check relies on
the default message GitHub writes when a pull request is merged:

    Merge pull request #42 from <owner>/develop

References:
    - Semantic Versioning 2.0.0: https://semver.org/
"""

from __future__ import annotations

import enum
import logging
import re
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from gh_release.github_api import GitHubAPI

logger = logging.getLogger(__name__)

DEFAULT_INTEGRATION_BRANCH = "develop"

MergeMatcher = Callable[[str], bool]


class BumpKind(str, enum.Enum):
    """Part of the version bumped by a release."""

    MINOR = "minor"
    PATCH = "patch"

    def __str__(self) -> str:
        return self.value


def first_line(message: str) -> str:
    """Return the first line of a commit message."""
    return message.split("\n", 1)[0]


def integration_merge_matcher(owner: str, branch: str = DEFAULT_INTEGRATION_BRANCH) -> MergeMatcher:
    """Build a matcher for merges of '<owner>/<branch>'.

    The matcher compares the trailing characters of the line, as many as
    '<owner>/<branch>' has, against '<owner>/<branch>'.

    Args:
        owner: Repository owner the pull request head belongs to.
        branch: Name of the integration branch (default: 'develop').

    Returns:
        A predicate over the first line of a commit message.

    Examples:
        >>> matcher = integration_merge_matcher("acme")
        >>> matcher("Merge pull request #7 from acme/develop")
        True
        >>> matcher("Merge pull request #8 from acme/hotfix-login")
        False
    """
    source = f"{owner}/{branch}"

    def matches(line: str) -> bool:
        return line[-len(source) :] == source

    return matches


def pattern_merge_matcher(pattern: str | re.Pattern[str]) -> MergeMatcher:
    """Build a matcher that searches the line with a regular expression.

    Args:
        pattern: Regular expression, searched anywhere in the line.

    Returns:
        A predicate over the first line of a commit message.

    Raises:
        re.error: If the pattern does not compile.

    Examples:
        >>> matcher = pattern_merge_matcher(r"from [^/]+/(develop|next)$")
        >>> matcher("Merge pull request #9 from acme/next")
        True
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def matches(line: str) -> bool:
        return compiled.search(line) is not None

    return matches


def classify_message(message: str, matcher: MergeMatcher) -> BumpKind:
    """Classify a commit message as a regular release or a hotfix.

    Args:
        message: Full commit message; only its first line is inspected.
        matcher: Predicate recognizing a merge from the integration branch.

    Returns:
        BumpKind.MINOR for an integration merge, BumpKind.PATCH otherwise.
    """
    line = first_line(message)
    if matcher(line):
        return BumpKind.MINOR
    return BumpKind.PATCH


def classify_release(
    api: GitHubAPI,
    branch_ref: str,
    owner: str,
    matcher: MergeMatcher | None = None,
) -> BumpKind:
    """Decide the bump kind from the latest commit on a branch.

    Resolves the ref, fetches its head commit and classifies the first line of
    the commit message. Remote failures are not retried.

    Args:
        api: GitHubAPI instance for the repository.
        branch_ref: Ref relative to 'refs/' (e.g., 'heads/master').
        owner: Repository owner, used by the default matcher.
        matcher: Optional predicate replacing the '<owner>/develop' suffix check.

    Returns:
        BumpKind.MINOR or BumpKind.PATCH.

    Raises:
        GithubException: If the ref or commit lookup fails.
    """
    if matcher is None:
        matcher = integration_merge_matcher(owner)

    sha = api.resolve_ref(branch_ref)
    logger.debug("Ref '%s' points to %s", branch_ref, sha[:7])

    message = api.get_commit_message(sha)
    kind = classify_message(message, matcher)
    logger.info("Last commit on '%s': %s", branch_ref, first_line(message))
    if kind is BumpKind.PATCH:
        logger.info("Last merge is not from the integration branch, treating release as a hotfix")
    return kind
