"""
Domain types shared by the VCS clients.

Everything here is fetched fresh per call and discarded afterwards; nothing
is persisted.
"""

from dataclasses import dataclass, field
from enum import StrEnum


class VCSHostType(StrEnum):
    """Supported VCS hosts."""

    CODECOMMIT = "codecommit"


class CommitStatus(StrEnum):
    """The tool's verdict on a pull request."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class ApprovalState(StrEnum):
    """CodeCommit pull request approval states."""

    APPROVED = "APPROVED"
    REVOKED = "REVOKED"


class CommandName(StrEnum):
    """Commands the tool posts output for.

    The value is the keyword that appears on the first line of the tool's
    comment for that command.
    """

    PLAN = "plan"
    APPLY = "apply"
    UNLOCK = "unlock"
    VERSION = "version"
    IMPORT = "import"
    STATE = "state"


@dataclass(frozen=True)
class Repo:
    """A repository, identified by name within the provider's namespace."""

    name: str
    full_name: str = ""
    clone_url: str = ""
    vcs_host_type: VCSHostType = VCSHostType.CODECOMMIT


@dataclass(frozen=True)
class PullRequest:
    """A pull request as seen by the tool.

    Lifecycle belongs to the provider; the tool only reads and reacts.
    """

    num: int
    base_repo: Repo = field(default_factory=lambda: Repo(name=""))
    base_branch: str = ""
    head_branch: str = ""
    head_commit: str = ""
    url: str = ""
    author: str = ""
