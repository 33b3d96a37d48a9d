# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Command line entry point for gh-release.

Bumps the version of a multi-module repository from the last merge commit on
a branch: a merge from the integration branch is a minor release, anything
else is a hotfix. Submodules are moved to the new version, then the release
is committed, tagged and pushed.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - GitHub Actions Environment Variables:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/store-information-in-variables#default-environment-variables
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from gh_release.classify import (
    DEFAULT_INTEGRATION_BRANCH,
    BumpKind,
    MergeMatcher,
    classify_release,
    integration_merge_matcher,
    pattern_merge_matcher,
)
from gh_release.errors import ManifestError, PublishError, VersionMismatchError
from gh_release.github_api import GitHubAPI
from gh_release.modules import propagate
from gh_release.publish import publish
from gh_release.refs import DEFAULT_REF, normalize_ref
from gh_release.version import next_version, read_base_version

logger = logging.getLogger(__name__)


@dataclass
class ReleaseConfig:
    """Parsed release inputs from the command line and the environment."""

    owner: str
    repo: str
    token: str
    ref: str = DEFAULT_REF
    working_dir: Path = field(default_factory=Path.cwd)
    integration_branch: str = DEFAULT_INTEGRATION_BRANCH
    merge_pattern: str = ""
    dry_run: bool = False
    debug: bool = False

    def matcher(self) -> MergeMatcher:
        """Return the predicate recognizing integration merges."""
        if self.merge_pattern:
            return pattern_merge_matcher(self.merge_pattern)
        return integration_merge_matcher(self.owner, self.integration_branch)


@dataclass
class ReleaseResult:
    """Outcome of a release run."""

    kind: BumpKind
    previous_version: str
    version: str
    modules: list[str] = field(default_factory=list)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its 'release' subcommand."""
    parser = argparse.ArgumentParser(
        prog="gh-release",
        description="Bump the project version and tag the new release in git",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (used as defaults when CLI args not provided):
  GITHUB_TOKEN                 GitHub token for authentication
  CURRENT_REF                  Branch ref to inspect (default: refs/heads/master)
  INPUT_DEBUG                  Enable debug logging (true/false)

Examples:
  gh-release release --owner acme --repo widgets
  CURRENT_REF=refs/heads/main gh-release release --owner acme --repo widgets --dry-run
        """,
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    release = subparsers.add_parser(
        "release",
        help="bumps the project version and tags the new release in git",
        description="Bump the project version and tag the new release in git",
    )
    release.add_argument("--owner", required=True, help="the repository owner")
    release.add_argument("--repo", required=True, help="the repository name")
    release.add_argument(
        "--token",
        default=os.environ.get("GITHUB_TOKEN", ""),
        help="GitHub token for authentication (default: from GITHUB_TOKEN env)",
    )
    release.add_argument(
        "--ref",
        default=os.environ.get("CURRENT_REF") or DEFAULT_REF,
        help=f"Branch ref holding the release (default: from CURRENT_REF env or {DEFAULT_REF})",
    )
    release.add_argument(
        "--working-dir",
        type=Path,
        default=None,
        help="Repository root holding the root package.json (default: current directory)",
    )
    release.add_argument(
        "--integration-branch",
        default=DEFAULT_INTEGRATION_BRANCH,
        help=f"Branch whose merges produce minor releases (default: {DEFAULT_INTEGRATION_BRANCH})",
    )
    release.add_argument(
        "--merge-pattern",
        default="",
        help="Regex matched against the last commit subject instead of '<owner>/<integration-branch>'",
    )
    release.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry-run mode - classify and compute the version without changing anything",
    )
    release.add_argument(
        "--debug",
        action="store_true",
        default=os.environ.get("INPUT_DEBUG", "false").lower() == "true",
        help="Enable debug logging",
    )
    return parser


def parse_inputs(args: list[str] | None = None) -> ReleaseConfig:
    """Parse the command line into a ReleaseConfig.

    CLI arguments take precedence over environment variables.

    Args:
        args: CLI arguments, sys.argv[1:] when None.

    Returns:
        ReleaseConfig with parsed values.
    """
    parser = build_parser()
    parsed = parser.parse_args(args)

    if parsed.merge_pattern:
        try:
            re.compile(parsed.merge_pattern)
        except re.error as e:
            parser.error(f"invalid --merge-pattern '{parsed.merge_pattern}': {e}")

    return ReleaseConfig(
        owner=parsed.owner,
        repo=parsed.repo,
        token=parsed.token,
        ref=parsed.ref,
        working_dir=(parsed.working_dir or Path.cwd()).resolve(),
        integration_branch=parsed.integration_branch,
        merge_pattern=parsed.merge_pattern,
        dry_run=parsed.dry_run,
        debug=parsed.debug,
    )


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag.

    Args:
        debug: If True, enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def release(api: GitHubAPI, config: ReleaseConfig) -> ReleaseResult:
    """Run the release workflow.

    Args:
        api: GitHubAPI instance for the repository.
        config: Release configuration.

    Returns:
        ReleaseResult with the bump kind and versions.

    Raises:
        GithubException: If the ref or commit lookup fails.
        ManifestError: If a manifest cannot be read.
        PublishError: If a version bump fails.
        VersionMismatchError: If npm bumped the root to another version.
    """
    branch_ref = normalize_ref(config.ref)
    kind = classify_release(api, branch_ref, config.owner, config.matcher())

    previous = read_base_version(config.working_dir)
    target = next_version(previous, kind)
    logger.info("Preparing %s release: %s", kind, target)

    modules = propagate(config.working_dir, target, dry_run=config.dry_run)
    publish(kind, config.working_dir, expected_version=target, dry_run=config.dry_run)

    if config.dry_run:
        return ReleaseResult(kind=kind, previous_version=previous, version=target, modules=modules)

    final = read_base_version(config.working_dir)
    logger.info("Release prepared successfully, new version is %s", final)
    logger.info("Release successful")
    return ReleaseResult(kind=kind, previous_version=previous, version=final, modules=modules)


def main(args: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    config = parse_inputs(args)
    configure_logging(config.debug)
    logger.debug("Release of %s/%s from %s in %s", config.owner, config.repo, config.ref, config.working_dir)

    try:
        api = GitHubAPI(token=config.token, owner=config.owner, repo=config.repo)
    except ValueError as e:
        logger.error("Failed to initialize GitHub API: %s", e)
        sys.exit(1)

    try:
        release(api, config)
    except ManifestError as e:
        logger.error("Invalid manifest: %s", e)
        sys.exit(1)
    except ValueError as e:
        logger.error("Invalid version: %s", e)
        sys.exit(1)
    except PublishError as e:
        logger.error("%s", e)
        sys.exit(1)
    except VersionMismatchError as e:
        logger.error("Release not pushed: %s", e)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
