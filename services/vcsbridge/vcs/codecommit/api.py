"""
The subset of the CodeCommit API the client depends on.

Method names, keyword arguments and response dicts mirror the aioboto3
`codecommit` client, so the real client satisfies CodeCommitAPI
structurally and tests can substitute a scripted fake.
"""

from typing import Any, Protocol


class CodeCommitAPI(Protocol):
    """CodeCommit operations used by CodeCommitClient."""

    async def create_unreferenced_merge_commit(
        self,
        *,
        repositoryName: str,
        sourceCommitSpecifier: str,
        destinationCommitSpecifier: str,
        mergeOption: str,
    ) -> dict[str, Any]:
        """Returns {"commitId": ..., "treeId": ...}."""
        ...

    async def get_differences(self, **kwargs: Any) -> dict[str, Any]:
        """Accepts repositoryName, afterCommitSpecifier and optional nextToken.

        Returns {"differences": [{"beforeBlob": {"path"}, "afterBlob": {"path"},
        "changeType"}], "nextToken"?}.
        """
        ...

    async def get_pull_request(self, *, pullRequestId: str) -> dict[str, Any]:
        """Returns {"pullRequest": {"revisionId", "pullRequestTargets": [...]}}."""
        ...

    async def post_comment_for_pull_request(
        self,
        *,
        pullRequestId: str,
        repositoryName: str,
        beforeCommitId: str,
        afterCommitId: str,
        content: str,
    ) -> dict[str, Any]:
        ...

    async def get_comments_for_pull_request(self, **kwargs: Any) -> dict[str, Any]:
        """Accepts pullRequestId and optional nextToken.

        Returns {"commentsForPullRequestData": [{"comments": [...]}], "nextToken"?}.
        """
        ...

    async def delete_comment_content(self, *, commentId: str) -> dict[str, Any]:
        ...

    async def evaluate_pull_request_approval_rules(
        self, *, pullRequestId: str, revisionId: str
    ) -> dict[str, Any]:
        """Returns {"evaluation": {"approved": bool, ...}}."""
        ...

    async def get_merge_conflicts(
        self,
        *,
        repositoryName: str,
        destinationCommitSpecifier: str,
        sourceCommitSpecifier: str,
        mergeOption: str,
        conflictDetailLevel: str,
    ) -> dict[str, Any]:
        """Returns {"mergeable": bool, ...}."""
        ...

    async def update_pull_request_approval_state(
        self, *, pullRequestId: str, revisionId: str, approvalState: str
    ) -> dict[str, Any]:
        ...

    async def merge_pull_request_by_three_way(
        self,
        *,
        pullRequestId: str,
        repositoryName: str,
        conflictDetailLevel: str,
        commitMessage: str,
    ) -> dict[str, Any]:
        ...

    async def get_file(
        self, *, repositoryName: str, filePath: str, commitSpecifier: str
    ) -> dict[str, Any]:
        """Returns {"fileContent": bytes, ...}."""
        ...
