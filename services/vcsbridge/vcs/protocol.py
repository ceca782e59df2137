"""
VCS client protocol and shared exceptions.

Defines the VCSClient Protocol the orchestrating tool works against, so
providers can be swapped without touching callers.
"""

from typing import Protocol, runtime_checkable

from vcsbridge.models import CommandName, CommitStatus, PullRequest, Repo

# --- Exceptions ---


class VCSError(Exception):
    """Base exception for VCS client operations."""


class CodeCommitError(VCSError):
    """Raised when a CodeCommit API call fails.

    `step` names the logical operation that failed (e.g. "minimize comment
    abc"); `error_code` is the provider's error code when it sent one.
    """

    def __init__(self, step: str, detail: str = "", error_code: str = "") -> None:
        self.step = step
        self.error_code = error_code
        message = f"{step}: {detail}" if detail else step
        super().__init__(message)


class MalformedResponseError(VCSError):
    """Raised when a successful provider response lacks a required field."""


# --- Protocol ---


@runtime_checkable
class VCSClient(Protocol):
    """Operations the tool needs from a VCS host.

    Remote operations are async. Implementations must satisfy this
    interface structurally; no inheritance required.
    """

    async def get_modified_files(self, repo: Repo, pull: PullRequest) -> list[str]:
        """Return every path the pull request touches.

        Renamed files contribute both their old and new path.
        """
        ...

    async def create_comment(self, repo: Repo, pull_num: int, comment: str) -> None:
        """Post a comment, splitting it into several if it is too large."""
        ...

    async def hide_prev_command_comments(
        self, repo: Repo, pull_num: int, command: str = CommandName.PLAN
    ) -> None:
        """Hide earlier comments the tool posted for `command`."""
        ...

    async def pull_is_approved(self, repo: Repo, pull: PullRequest) -> bool:
        ...

    async def pull_is_mergeable(self, repo: Repo, pull: PullRequest) -> bool:
        ...

    async def update_status(
        self,
        repo: Repo,
        pull: PullRequest,
        state: CommitStatus,
        src: str,
        description: str,
        url: str,
    ) -> None:
        """Reflect the tool's verdict on the pull request."""
        ...

    async def merge_pull(self, pull: PullRequest) -> None:
        ...

    def markdown_pull_link(self, pull: PullRequest) -> str:
        """Return a link to the pull request suitable for markdown."""
        ...

    def get_clone_url(self, repo_name: str) -> str:
        ...

    async def get_file_content(self, pull: PullRequest, path: str) -> tuple[bool, bytes]:
        """Fetch one file at the pull request's head.

        Returns (False, b"") if the file does not exist.
        """
        ...

    def supports_single_file_download(self, repo: Repo) -> bool:
        ...

    async def close(self) -> None:
        """Release any resources held by the client."""
        ...
