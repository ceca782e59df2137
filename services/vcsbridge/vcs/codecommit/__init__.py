"""AWS CodeCommit VCS client."""

from vcsbridge.vcs.codecommit.api import CodeCommitAPI
from vcsbridge.vcs.codecommit.client import CodeCommitClient

__all__ = ["CodeCommitAPI", "CodeCommitClient"]
