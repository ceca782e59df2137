"""
AWS CodeCommit VCS client.

Translates the tool's VCS operations into CodeCommit API calls via aioboto3.
Auth relies on the SDK credential chain (IRSA in K8s, env vars or profile
locally). No call is retried: every provider failure surfaces as a
CodeCommitError naming the step that failed.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from vcsbridge.logging_config import get_logger
from vcsbridge.models import ApprovalState, CommandName, CommitStatus, PullRequest, Repo
from vcsbridge.vcs.codecommit.api import CodeCommitAPI
from vcsbridge.vcs.common import AUTOMERGE_COMMIT_MSG, split_comment
from vcsbridge.vcs.protocol import CodeCommitError, MalformedResponseError

logger = get_logger(__name__)

COMMENT_SIZE_LIMIT = 1000
SEP_END = (
    "\n```\n</details>"
    "\n<br>\n\n**Warning**: Output length greater than max comment size. Continued in next comment."
)
SEP_START = "Continued from previous comment.\n<details><summary>Show Output</summary>\n\n```diff\n"

MERGE_OPTION = "THREE_WAY_MERGE"
CONFLICT_DETAIL_LEVEL = "LINE_LEVEL"

_APPROVAL_STATES = {
    CommitStatus.FAILED: ApprovalState.REVOKED,
    CommitStatus.SUCCESS: ApprovalState.APPROVED,
}

ApiMethod = Callable[..., Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class PullRequestInfo:
    """The parts of a GetPullRequest response the client acts on."""

    pull_request_id: str
    revision_id: str
    merge_base: str
    source_commit: str

    def require_revision(self) -> str:
        if not self.revision_id:
            raise MalformedResponseError(
                f"pull request {self.pull_request_id} has no revision id"
            )
        return self.revision_id

    def require_commit_pair(self) -> tuple[str, str]:
        """Return (merge base, source tip) for attaching comments."""
        if not self.merge_base or not self.source_commit:
            raise MalformedResponseError(
                f"pull request {self.pull_request_id} has no target commits"
            )
        return self.merge_base, self.source_commit


class CodeCommitClient:
    """VCS client backed by AWS CodeCommit."""

    def __init__(
        self,
        user_arn: str = "",
        region: str = "us-east-1",
        endpoint_url: str = "",
        console_base_url: str = "",
        app_name: str = "vcsbridge",
        api: CodeCommitAPI | None = None,
    ) -> None:
        self._user_arn = user_arn
        self._region = region
        self._endpoint_url = endpoint_url or None
        self._console_base_url = console_base_url.rstrip("/")
        self._app_name = app_name

        self._api: Any = api
        self._owns_api = api is None
        self._session = aioboto3.Session() if api is None else None

    async def _get_api(self) -> CodeCommitAPI:
        if self._api is None:
            self._api = await self._session.client(
                "codecommit",
                region_name=self._region,
                endpoint_url=self._endpoint_url,
            ).__aenter__()
            logger.info("CodeCommit client initialized", region=self._region)
        return self._api

    async def _call(self, step: str, method: ApiMethod, **kwargs: Any) -> dict[str, Any]:
        """Invoke one API method, translating SDK errors into CodeCommitError."""
        try:
            response = await method(**kwargs)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            raise CodeCommitError(step, str(e), error_code=error_code) from e
        except BotoCoreError as e:
            raise CodeCommitError(step, str(e)) from e
        return response or {}

    async def _paginate(
        self, step: str, method: ApiMethod, **kwargs: Any
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield pages until the provider stops returning a nextToken."""
        next_token: str | None = None
        while True:
            if next_token:
                kwargs["nextToken"] = next_token
            page = await self._call(step, method, **kwargs)
            yield page
            next_token = page.get("nextToken")
            if not next_token:
                return

    async def _get_pull_request(self, pull_num: int) -> PullRequestInfo:
        api = await self._get_api()
        pull_request_id = str(pull_num)
        response = await self._call(
            f"get pull request {pull_request_id}",
            api.get_pull_request,
            pullRequestId=pull_request_id,
        )

        pull_request = response.get("pullRequest")
        if not pull_request:
            logger.warning(
                "GetPullRequest returned no pull request", pull_request_id=pull_request_id
            )
            raise MalformedResponseError(f"pull request {pull_request_id} missing from response")

        targets = pull_request.get("pullRequestTargets") or []
        target = targets[0] if targets else {}
        return PullRequestInfo(
            pull_request_id=pull_request_id,
            revision_id=pull_request.get("revisionId", ""),
            merge_base=target.get("mergeBase", ""),
            source_commit=target.get("sourceCommit", ""),
        )

    async def get_modified_files(self, repo: Repo, pull: PullRequest) -> list[str]:
        api = await self._get_api()
        merge = await self._call(
            "create unreferenced merge commit",
            api.create_unreferenced_merge_commit,
            repositoryName=repo.name,
            destinationCommitSpecifier=pull.base_branch,
            sourceCommitSpecifier=pull.head_branch,
            mergeOption=MERGE_OPTION,
        )
        merge_commit = merge.get("commitId")
        if not merge_commit:
            raise MalformedResponseError("unreferenced merge commit has no commit id")

        files: list[str] = []
        async for page in self._paginate(
            f"get differences for {merge_commit}",
            api.get_differences,
            repositoryName=repo.name,
            afterCommitSpecifier=merge_commit,
        ):
            for diff in page.get("differences", []):
                after = (diff.get("afterBlob") or {}).get("path")
                before = (diff.get("beforeBlob") or {}).get("path")
                if after:
                    files.append(after)
                if before and before != after:
                    files.append(before)

        logger.debug(
            "Resolved modified files",
            repo=repo.name,
            pull_num=pull.num,
            merge_commit=merge_commit,
            count=len(files),
        )
        return files

    async def create_comment(self, repo: Repo, pull_num: int, comment: str) -> None:
        """Post a comment, split across several if it exceeds the size limit.

        Fragments are posted in order. If one fails, the ones already posted
        stay visible.
        """
        info = await self._get_pull_request(pull_num)
        before_commit, after_commit = info.require_commit_pair()

        fragments = split_comment(comment, COMMENT_SIZE_LIMIT, SEP_END, SEP_START)
        api = await self._get_api()
        for index, fragment in enumerate(fragments):
            await self._call(
                f"post comment {index + 1}/{len(fragments)}",
                api.post_comment_for_pull_request,
                pullRequestId=info.pull_request_id,
                repositoryName=repo.name,
                beforeCommitId=before_commit,
                afterCommitId=after_commit,
                content=fragment,
            )

        logger.info(
            "Comment posted",
            repo=repo.name,
            pull_num=pull_num,
            fragments=len(fragments),
        )

    async def hide_prev_command_comments(
        self, repo: Repo, pull_num: int, command: str = CommandName.PLAN
    ) -> None:
        """Delete the content of earlier comments the tool posted for command.

        A comment qualifies when its author matches the configured user ARN
        and its first line mentions the command (both case-insensitive).
        """
        api = await self._get_api()
        pull_request_id = str(pull_num)

        comments: list[dict[str, Any]] = []
        async for page in self._paginate(
            f"list comments for pull request {pull_request_id}",
            api.get_comments_for_pull_request,
            pullRequestId=pull_request_id,
        ):
            for thread in page.get("commentsForPullRequestData", []):
                comments.extend(thread.get("comments", []))

        keyword = str(command).lower()
        hidden = 0
        for comment in comments:
            if (comment.get("authorArn") or "").lower() != self._user_arn.lower():
                continue
            content = comment.get("content")
            if not content:
                continue
            first_line = content.split("\n", 1)[0].lower()
            if keyword not in first_line:
                continue

            comment_id = comment.get("commentId")
            if not comment_id:
                raise MalformedResponseError(
                    f"comment on pull request {pull_request_id} has no comment id"
                )
            await self._call(
                f"minimize comment {comment_id}",
                api.delete_comment_content,
                commentId=comment_id,
            )
            hidden += 1

        logger.info(
            "Previous comments hidden",
            repo=repo.name,
            pull_num=pull_num,
            command=keyword,
            scanned=len(comments),
            hidden=hidden,
        )

    async def hide_prev_plan_comments(self, repo: Repo, pull_num: int) -> None:
        await self.hide_prev_command_comments(repo, pull_num, CommandName.PLAN)

    async def pull_is_approved(self, repo: Repo, pull: PullRequest) -> bool:
        info = await self._get_pull_request(pull.num)
        revision_id = info.require_revision()

        api = await self._get_api()
        response = await self._call(
            f"evaluate approval rules for {info.pull_request_id}",
            api.evaluate_pull_request_approval_rules,
            pullRequestId=info.pull_request_id,
            revisionId=revision_id,
        )
        evaluation = response.get("evaluation") or {}
        if "approved" not in evaluation:
            raise MalformedResponseError(
                f"approval evaluation for pull request {info.pull_request_id} has no verdict"
            )
        return bool(evaluation["approved"])

    async def pull_is_mergeable(self, repo: Repo, pull: PullRequest) -> bool:
        api = await self._get_api()
        response = await self._call(
            f"get merge conflicts for {pull.head_branch}",
            api.get_merge_conflicts,
            repositoryName=pull.base_repo.name,
            destinationCommitSpecifier=pull.base_branch,
            sourceCommitSpecifier=pull.head_branch,
            mergeOption=MERGE_OPTION,
            conflictDetailLevel=CONFLICT_DETAIL_LEVEL,
        )
        if "mergeable" not in response:
            raise MalformedResponseError(
                f"merge conflict check for {pull.head_branch} has no verdict"
            )
        return bool(response["mergeable"])

    async def update_status(
        self,
        repo: Repo,
        pull: PullRequest,
        state: CommitStatus,
        src: str,
        description: str,
        url: str,
    ) -> None:
        """Set the pull request's approval state and announce it in a comment.

        CodeCommit has no commit status API, so src, description and url are
        not sent anywhere. Pending leaves the approval state untouched. The
        two remote writes are independent: the state can change even if the
        announcement fails.
        """
        if state == CommitStatus.PENDING:
            logger.debug("Pending status leaves approval unchanged", pull_num=pull.num)
            return

        approval_state = _APPROVAL_STATES.get(state)
        if approval_state is None:
            raise ValueError(f"Unknown commit status: {state!r}")

        info = await self._get_pull_request(pull.num)
        revision_id = info.require_revision()
        before_commit, after_commit = info.require_commit_pair()

        api = await self._get_api()
        await self._call(
            f"update approval state for {info.pull_request_id}",
            api.update_pull_request_approval_state,
            pullRequestId=info.pull_request_id,
            revisionId=revision_id,
            approvalState=str(approval_state),
        )

        await self._call(
            f"announce approval state for {info.pull_request_id}",
            api.post_comment_for_pull_request,
            pullRequestId=info.pull_request_id,
            repositoryName=repo.name,
            beforeCommitId=before_commit,
            afterCommitId=after_commit,
            content=f"{self._app_name} set pull status approval to : {approval_state}",
        )

        logger.info(
            "Pull request approval updated",
            repo=repo.name,
            pull_num=pull.num,
            approval_state=str(approval_state),
        )

    async def merge_pull(self, pull: PullRequest) -> None:
        api = await self._get_api()
        await self._call(
            f"merge pull request {pull.num}",
            api.merge_pull_request_by_three_way,
            pullRequestId=str(pull.num),
            repositoryName=pull.base_repo.name,
            conflictDetailLevel=CONFLICT_DETAIL_LEVEL,
            commitMessage=AUTOMERGE_COMMIT_MSG,
        )
        logger.info("Pull request merged", repo=pull.base_repo.name, pull_num=pull.num)

    def markdown_pull_link(self, pull: PullRequest) -> str:
        """Link to the pull request in the AWS console.

        Without a console base URL the path is relative, which resolves for
        repositories in the viewer's current account and region.
        """
        path = f"/codesuite/codecommit/repositories/{pull.base_repo.name}/pull-requests/{pull.num}"
        if not self._console_base_url:
            return path
        return f"{self._console_base_url}{path}/details?region={self._region}"

    def get_clone_url(self, repo_name: str) -> str:
        return f"https://git-codecommit.{self._region}.amazonaws.com/v1/repos/{repo_name}"

    async def get_file_content(self, pull: PullRequest, path: str) -> tuple[bool, bytes]:
        api = await self._get_api()
        try:
            response = await self._call(
                f"get file {path}",
                api.get_file,
                repositoryName=pull.base_repo.name,
                filePath=path,
                commitSpecifier=pull.head_commit or pull.head_branch,
            )
        except CodeCommitError as e:
            if e.error_code == "FileDoesNotExistException":
                return False, b""
            raise
        return True, response.get("fileContent", b"")

    def supports_single_file_download(self, repo: Repo) -> bool:
        return True

    async def close(self) -> None:
        if self._owns_api and self._api is not None:
            await self._api.__aexit__(None, None, None)
            self._api = None
            logger.info("CodeCommit client closed")
