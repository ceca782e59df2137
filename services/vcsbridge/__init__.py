"""vcsbridge: pull request automation adapter for AWS CodeCommit."""

__version__ = "0.1.0"
