"""
Shared fixtures for VCS client tests.
"""

import pytest
from codecommit_fakes import BOT_ARN, FakeCodeCommit

from vcsbridge.vcs.codecommit import CodeCommitClient


@pytest.fixture
def fake_api() -> FakeCodeCommit:
    return FakeCodeCommit()


@pytest.fixture
def client(fake_api: FakeCodeCommit) -> CodeCommitClient:
    return CodeCommitClient(user_arn=BOT_ARN, region="eu-west-2", api=fake_api)
