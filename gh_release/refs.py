# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Git ref handling for the release workflow.

References:
    - Git references: https://git-scm.com/book/en/v2/Git-Internals-Git-References
    - GitHub refs API: https://docs.github.com/en/rest/git/refs#get-a-reference
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

REFS_PREFIX = "refs/"

DEFAULT_REF = "refs/heads/master"


def normalize_ref(ref: str) -> str:
    """Strip the leading 'refs/' from a fully qualified ref.

    The GitHub refs API addresses references relative to 'refs/', so
    'refs/heads/master' is looked up as 'heads/master'. The prefix is removed
    once; refs without it are returned unchanged.

    Args:
        ref: The ref to normalize (e.g., 'refs/heads/master').

    Returns:
        The ref without its 'refs/' prefix.

    Examples:
        >>> normalize_ref("refs/heads/master")
        'heads/master'
        >>> normalize_ref("heads/main")
        'heads/main'
        >>> normalize_ref("refs/refs/heads/x")
        'refs/heads/x'
    """
    if ref.startswith(REFS_PREFIX):
        normalized = ref[len(REFS_PREFIX) :]
        logger.debug("Normalized ref '%s' to '%s'", ref, normalized)
        return normalized
    return ref
