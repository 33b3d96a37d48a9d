# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Release commit, tag and push.

The root version bump is delegated to npm: 'npm version' updates the root
package.json, commits everything staged by the module propagation and creates
the 'v<version>' tag in one step.

References:
    - npm version: https://docs.npmjs.com/cli/commands/npm-version
"""

from __future__ import annotations

import logging
from pathlib import Path

from gh_release import shell
from gh_release.classify import BumpKind
from gh_release.errors import PublishError, VersionMismatchError
from gh_release.version import read_base_version

logger = logging.getLogger(__name__)

# npm replaces %s with the new version
COMMIT_MESSAGE = "New release: %s"


def version_command(kind: BumpKind) -> list[str]:
    """Build the npm command bumping the root module."""
    return ["npm", "version", kind.value, "--force", "-m", COMMIT_MESSAGE]


def bump_and_tag(kind: BumpKind, root: Path) -> str:
    """Bump the root version, commit the staged changes and tag the release.

    Args:
        kind: Part of the version to increment.
        root: Repository root directory.

    Returns:
        The output of npm (the new tag, e.g. 'v1.5.0').

    Raises:
        PublishError: If npm exits with a non-zero code.
    """
    cmd = version_command(kind)
    result = shell.run(cmd, cwd=root)
    if result.returncode != 0:
        logger.error("Error preparing the release")
        if result.stderr:
            logger.error("%s", result.stderr.strip())
        raise PublishError(cmd, result.returncode, result.stdout, result.stderr)
    return result.stdout.strip()


def push(root: Path) -> None:
    """Push the release commit and its tag.

    Exit codes of the pushes are logged but not treated as failures.
    """
    for cmd in (["git", "push"], ["git", "push", "--tags"]):
        result = shell.run(cmd, cwd=root)
        if result.returncode != 0:
            logger.warning("'%s' exited with %d: %s", " ".join(cmd), result.returncode, result.stderr.strip())
            # the tags are pushed only after the branch
            return


def publish(kind: BumpKind, root: Path, expected_version: str | None = None, dry_run: bool = False) -> None:
    """Commit, tag and push a release.

    Args:
        kind: Part of the version to increment.
        root: Repository root directory.
        expected_version: Version the submodules were moved to; the root must
            match it before anything is pushed.
        dry_run: Log the commands instead of running them.

    Raises:
        PublishError: If the version bump fails; nothing is pushed then.
        VersionMismatchError: If npm wrote another root version than
            expected_version; nothing is pushed then.
    """
    if dry_run:
        logger.info("[DRY-RUN] Would run '%s'", " ".join(version_command(kind)))
        logger.info("[DRY-RUN] Would run 'git push' and 'git push --tags'")
        return

    output = bump_and_tag(kind, root)
    if output:
        logger.info("%s", output)

    if expected_version is not None:
        actual = read_base_version(root)
        if actual != expected_version:
            raise VersionMismatchError(expected_version, actual)

    logger.info("Pushing new release to GitHub")
    push(root)
