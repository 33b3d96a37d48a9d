# Copyright (c) 2026 Mark Ferrell. MIT License.
"""gh-release - Version bump and tagging for multi-module repositories."""

from gh_release.classify import BumpKind, classify_release
from gh_release.github_api import GitHubAPI
from gh_release.refs import normalize_ref
from gh_release.version import next_version

__all__ = ["BumpKind", "GitHubAPI", "classify_release", "next_version", "normalize_ref"]
