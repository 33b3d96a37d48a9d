# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Allow running gh-release with 'python -m gh_release'."""

from gh_release.main import main

main()
