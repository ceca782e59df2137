"""
VCS client layer for vcsbridge.

Provides init_vcs_client() / close_vcs_client() for process lifespan and
get_vcs_client() for callers.
"""

from __future__ import annotations

from vcsbridge.config import settings
from vcsbridge.logging_config import get_logger
from vcsbridge.models import VCSHostType
from vcsbridge.vcs.protocol import VCSClient

logger = get_logger(__name__)

# Module-level client instance
_client: VCSClient | None = None


async def init_vcs_client() -> None:
    """Initialize the VCS client for the configured host."""
    global _client  # noqa: PLW0603
    cfg = settings.vcs
    if not cfg.enabled:
        logger.info("VCS integration disabled")
        return

    match cfg.host_type:
        case VCSHostType.CODECOMMIT:
            from vcsbridge.vcs.codecommit import CodeCommitClient

            _client = CodeCommitClient(
                user_arn=cfg.codecommit.user_arn,
                region=cfg.codecommit.region,
                endpoint_url=cfg.codecommit.endpoint_url,
                console_base_url=cfg.codecommit.console_base_url,
                app_name=settings.app_name,
            )
            if not cfg.codecommit.user_arn:
                logger.warning(
                    "No CodeCommit user ARN configured; "
                    "only comments without an author will be hidden"
                )
            logger.info(
                "VCS client initialized",
                host_type="codecommit",
                region=cfg.codecommit.region,
            )


async def close_vcs_client() -> None:
    """Close the VCS client and release resources."""
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.close()
        _client = None
        logger.info("VCS client closed")


def get_vcs_client() -> VCSClient:
    """Return the VCS client. Raises if not initialized."""
    if _client is None:
        raise RuntimeError("VCS client not initialized — call init_vcs_client() first")
    return _client


def get_vcs_client_or_none() -> VCSClient | None:
    """Return the VCS client if initialized, otherwise None."""
    return _client
