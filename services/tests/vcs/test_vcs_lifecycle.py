"""Tests for VCS client lifecycle management."""

from unittest.mock import patch

import pytest

from vcsbridge import vcs
from vcsbridge.config import CodeCommitConfig, Settings, VCSConfig
from vcsbridge.vcs.codecommit import CodeCommitClient


@pytest.fixture(autouse=True)
def reset_client():
    vcs._client = None
    yield
    vcs._client = None


def make_settings(enabled: bool = True, user_arn: str = "arn:aws:iam::123:user/bot") -> Settings:
    return Settings(
        vcs=VCSConfig(
            enabled=enabled,
            codecommit=CodeCommitConfig(user_arn=user_arn, region="eu-west-2"),
        )
    )


class TestInitVCSClient:
    async def test_builds_codecommit_client(self) -> None:
        with patch("vcsbridge.vcs.settings", make_settings()):
            await vcs.init_vcs_client()

        client = vcs.get_vcs_client()
        assert isinstance(client, CodeCommitClient)
        assert client.get_clone_url("r").startswith("https://git-codecommit.eu-west-2.")

    async def test_disabled_leaves_no_client(self) -> None:
        with patch("vcsbridge.vcs.settings", make_settings(enabled=False)):
            await vcs.init_vcs_client()

        assert vcs.get_vcs_client_or_none() is None

    async def test_warns_without_user_arn(self) -> None:
        with (
            patch("vcsbridge.vcs.settings", make_settings(user_arn="")),
            patch("vcsbridge.vcs.logger") as mock_logger,
        ):
            await vcs.init_vcs_client()
            mock_logger.warning.assert_called_once()


class TestGetVCSClient:
    def test_raises_when_uninitialized(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            vcs.get_vcs_client()

    async def test_close_resets(self) -> None:
        with patch("vcsbridge.vcs.settings", make_settings()):
            await vcs.init_vcs_client()

        await vcs.close_vcs_client()
        assert vcs.get_vcs_client_or_none() is None

    async def test_close_when_uninitialized_is_noop(self) -> None:
        await vcs.close_vcs_client()
        assert vcs.get_vcs_client_or_none() is None
