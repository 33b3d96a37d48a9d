# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Errors raised by the release workflow."""

from __future__ import annotations

from pathlib import Path


class ManifestError(ValueError):
    """A module manifest is missing, unreadable or has no usable version."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class PublishError(RuntimeError):
    """The version bump subprocess reported a failure."""

    def __init__(self, command: list[str], returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"{' '.join(command)} failed (exit {returncode})")


class VersionMismatchError(RuntimeError):
    """The root version written by npm is not the computed release version."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"root version is {actual}, expected {expected}")
