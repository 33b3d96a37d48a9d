# Copyright (c) 2026 Mark Ferrell. MIT License.
"""GitHub API wrapper for ref and commit lookups.

References:
    - GitHub REST API: https://docs.github.com/en/rest
    - PyGithub Documentation: https://pygithub.readthedocs.io/
"""

from __future__ import annotations

from github import Github


class GitHubAPI:
    """Read-only wrapper around PyGithub for the release classifier.

    All writes of a release happen locally through git and npm, so the API is
    only used to resolve a branch and read its head commit.

    References:
        - Authentication: https://docs.github.com/en/rest/authentication
    """

    def __init__(self, token: str, owner: str, repo: str) -> None:
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication.
            owner: Repository owner (user or organization).
            repo: Repository name.

        Raises:
            ValueError: If the token, owner or repository name is empty.

        References:
            - Get a repository: https://docs.github.com/en/rest/repos/repos#get-a-repository
        """
        if not token:
            raise ValueError("GitHub token is required. Set GITHUB_TOKEN or pass --token.")
        if not owner or not repo:
            raise ValueError("Repository owner and name are required.")

        self.owner = owner
        self.repo = repo
        self._github = Github(token)
        self._repo = self._github.get_repo(f"{owner}/{repo}", lazy=True)

    def resolve_ref(self, ref: str) -> str:
        """Resolve a ref to the SHA it points to.

        Args:
            ref: Ref relative to 'refs/' (e.g., 'heads/master').

        Returns:
            The SHA of the object the ref points to.

        Raises:
            GithubException: If the ref does not exist or access fails.

        References:
            - Get a reference: https://docs.github.com/en/rest/git/refs#get-a-reference
        """
        return self._repo.get_git_ref(ref).object.sha

    def get_commit_message(self, sha: str) -> str:
        """Get the full message of a commit.

        Args:
            sha: SHA of the commit.

        Returns:
            The commit message, including any body lines.

        Raises:
            GithubException: If the commit does not exist or access fails.

        References:
            - Get a commit: https://docs.github.com/en/rest/commits/commits#get-a-commit
        """
        return self._repo.get_commit(sha).commit.message
