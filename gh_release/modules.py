# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version propagation into the submodules of the repository.

A submodule is an immediate subdirectory holding its own package.json. Every
submodule is moved to the release version of the root module with
'npm version --no-git-tag-version', which keeps the manifest formatting, syncs
the lockfile and runs the module's version scripts. No git tags are created
for submodules; the changes are only staged and land in the release commit.

References:
    - npm version: https://docs.npmjs.com/cli/commands/npm-version
    - package.json version: https://docs.npmjs.com/cli/configuring-npm/package-json#version
"""

from __future__ import annotations

import logging
from pathlib import Path

from gh_release import shell
from gh_release.errors import PublishError
from gh_release.version import MANIFEST_NAME, read_manifest

logger = logging.getLogger(__name__)

# Directories never treated as submodules
IGNORED_DIRS = {"node_modules"}


def discover_modules(root: Path) -> list[Path]:
    """List the submodule directories of a repository.

    Args:
        root: Repository root directory.

    Returns:
        Immediate child directories containing a package.json, sorted by name.
        Hidden directories, node_modules and symlinks are skipped.
    """
    modules = [
        entry
        for entry in root.iterdir()
        if entry.is_dir()
        and not entry.is_symlink()
        and not entry.name.startswith(".")
        and entry.name not in IGNORED_DIRS
        and (entry / MANIFEST_NAME).is_file()
    ]
    return sorted(modules, key=lambda p: p.name)


def module_version_command(version: str) -> list[str]:
    """Build the npm command moving a submodule to a version."""
    return ["npm", "version", version, "--no-git-tag-version", "--allow-same-version"]


def set_module_version(module_dir: Path, version: str) -> None:
    """Move a submodule to a version.

    Args:
        module_dir: Directory of the submodule.
        version: Version to set.

    Raises:
        PublishError: If npm exits with a non-zero code.
    """
    cmd = module_version_command(version)
    result = shell.run(cmd, cwd=module_dir)
    if result.returncode != 0:
        logger.error("Error bumping module %s", module_dir.name)
        if result.stderr:
            logger.error("%s", result.stderr.strip())
        raise PublishError(cmd, result.returncode, result.stdout, result.stderr)


def propagate(root: Path, next_version: str, dry_run: bool = False) -> list[str]:
    """Bump every submodule to the release version and stage the changes.

    All manifests are parsed before any module is bumped, so an unreadable
    manifest leaves the working tree untouched.

    Args:
        root: Repository root directory.
        next_version: Version every submodule is moved to.
        dry_run: Only report the modules that would be bumped.

    Returns:
        Names of the discovered modules, in the order they were processed.

    Raises:
        ManifestError: If a manifest cannot be parsed.
        PublishError: If npm fails to bump a module.
    """
    module_dirs = discover_modules(root)
    manifests = {module_dir.name: read_manifest(module_dir / MANIFEST_NAME) for module_dir in module_dirs}
    names = list(manifests)
    logger.info("Bumping modules versions up to %s: %s", next_version, ", ".join(names) or "(none)")

    if dry_run:
        for name, manifest in manifests.items():
            logger.info("[DRY-RUN] Would set %s from %s to %s", name, manifest.get("version"), next_version)
        return names

    for module_dir in module_dirs:
        set_module_version(module_dir, next_version)
        logger.debug("Set %s to %s", module_dir.name, next_version)

    stage_all(root)
    return names


def stage_all(root: Path) -> None:
    """Stage every change of the working tree.

    A failing 'git add' is only logged; the release commit created afterwards
    reports it.
    """
    result = shell.run(["git", "add", "."], cwd=root)
    if result.returncode != 0:
        logger.warning("git add failed: %s", result.stderr.strip())
