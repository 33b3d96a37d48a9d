# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version calculation for the root module.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - python-semver: https://python-semver.readthedocs.io/
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import semver

from gh_release.classify import BumpKind
from gh_release.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def next_version(base_version: str, kind: BumpKind) -> str:
    """Apply a semantic version increment.

    Args:
        base_version: Current version (e.g., '1.4.2').
        kind: BumpKind.MINOR resets the patch number, BumpKind.PATCH only
            increments it.

    Returns:
        The incremented version string.

    A prerelease is released rather than skipped, the way npm increments it:
    '1.2.3-rc.1' becomes '1.2.3' on a patch and '1.3.0-rc.1' becomes '1.3.0'
    on a minor bump.

    Raises:
        ValueError: If base_version is not a valid semantic version.

    Examples:
        >>> next_version("1.4.2", BumpKind.MINOR)
        '1.5.0'
        >>> next_version("1.4.2", BumpKind.PATCH)
        '1.4.3'
    """
    version = semver.Version.parse(base_version)
    if version.prerelease and (kind is BumpKind.PATCH or version.patch == 0):
        return str(version.finalize_version())
    if kind is BumpKind.MINOR:
        return str(version.bump_minor())
    return str(version.bump_patch())


def read_manifest(path: Path) -> dict:
    """Load a package manifest.

    Raises:
        ManifestError: If the file is missing, is not valid JSON or is not a
            JSON object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except FileNotFoundError as e:
        raise ManifestError(path, "manifest not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(path, f"cannot read manifest: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(path, "manifest is not a JSON object")
    return data


def read_base_version(root: Path) -> str:
    """Return the version of the root module.

    Args:
        root: Directory holding the root package.json.

    Returns:
        The 'version' field of the root manifest.

    Raises:
        ManifestError: If the manifest is unusable or has no string version.
    """
    path = root / MANIFEST_NAME
    version = read_manifest(path).get("version")
    if not isinstance(version, str) or not version:
        raise ManifestError(path, "missing 'version' field")
    return version
