"""Tests for the pull request operator CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from vcsbridge.cli.pr import build_parser, main, run_command
from vcsbridge.models import CommitStatus
from vcsbridge.vcs.protocol import CodeCommitError


def parse(*argv: str):
    return build_parser().parse_args(["--repo", "atlantis-test", "--pull", "3", *argv])


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock()
    for name in (
        "get_modified_files",
        "create_comment",
        "hide_prev_command_comments",
        "pull_is_approved",
        "pull_is_mergeable",
        "update_status",
        "merge_pull",
        "close",
    ):
        setattr(client, name, AsyncMock())
    return client


class TestParser:
    def test_requires_command(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--repo", "r", "--pull", "1"])

    def test_rejects_unknown_state(self) -> None:
        with pytest.raises(SystemExit):
            parse("status", "--state", "bogus")


class TestRunCommand:
    async def test_link(self, client: MagicMock) -> None:
        client.markdown_pull_link.return_value = "/link"
        assert await run_command(client, parse("link")) == "/link"
        pull = client.markdown_pull_link.call_args[0][0]
        assert pull.num == 3
        assert pull.base_repo.name == "atlantis-test"

    async def test_files(self, client: MagicMock) -> None:
        client.get_modified_files.return_value = ["a.tf", "b.tf"]
        out = await run_command(client, parse("--base", "main", "--head", "feature", "files"))
        assert out == "a.tf\nb.tf"
        pull = client.get_modified_files.call_args[0][1]
        assert (pull.base_branch, pull.head_branch) == ("main", "feature")

    async def test_approved(self, client: MagicMock) -> None:
        client.pull_is_approved.return_value = False
        assert await run_command(client, parse("approved")) == "false"

    async def test_comment(self, client: MagicMock) -> None:
        await run_command(client, parse("comment", "--body", "hello"))
        client.create_comment.assert_awaited_once()
        assert client.create_comment.call_args[0][1:] == (3, "hello")

    async def test_hide(self, client: MagicMock) -> None:
        await run_command(client, parse("hide"))
        assert client.hide_prev_command_comments.call_args[0][1:] == (3, "plan")

    async def test_status(self, client: MagicMock) -> None:
        await run_command(client, parse("status", "--state", "success"))
        assert client.update_status.call_args[0][2] == CommitStatus.SUCCESS

    async def test_merge(self, client: MagicMock) -> None:
        assert await run_command(client, parse("merge")) == "merged"
        client.merge_pull.assert_awaited_once()


class TestMain:
    @patch("vcsbridge.cli.pr.close_vcs_client", new_callable=AsyncMock)
    @patch("vcsbridge.cli.pr.init_vcs_client", new_callable=AsyncMock)
    @patch("vcsbridge.cli.pr.get_vcs_client_or_none", return_value=None)
    async def test_disabled_vcs(self, _get, _init, _close) -> None:
        assert await main(["--repo", "r", "--pull", "1", "link"]) == 2

    @patch("vcsbridge.cli.pr.close_vcs_client", new_callable=AsyncMock)
    @patch("vcsbridge.cli.pr.init_vcs_client", new_callable=AsyncMock)
    @patch("vcsbridge.cli.pr.get_vcs_client_or_none")
    async def test_vcs_error_exits_nonzero(self, mock_get, _init, mock_close, client) -> None:
        client.merge_pull.side_effect = CodeCommitError("merge pull request 1", "conflict")
        mock_get.return_value = client

        assert await main(["--repo", "r", "--pull", "1", "merge"]) == 1
        mock_close.assert_awaited_once()

    @patch("vcsbridge.cli.pr.close_vcs_client", new_callable=AsyncMock)
    @patch("vcsbridge.cli.pr.init_vcs_client", new_callable=AsyncMock)
    @patch("vcsbridge.cli.pr.get_vcs_client_or_none")
    async def test_success(self, mock_get, _init, _close, client, capsys) -> None:
        client.markdown_pull_link.return_value = "/codesuite/x"
        mock_get.return_value = client

        assert await main(["--repo", "r", "--pull", "1", "link"]) == 0
        assert "/codesuite/x" in capsys.readouterr().out
