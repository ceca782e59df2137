"""
Configuration management for vcsbridge.

Non-secret configuration loaded from YAML file, overridden by environment
variables. AWS credentials are never configured here; the SDK credential
chain (IRSA in K8s, env vars or profile locally) resolves them.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vcsbridge.models import VCSHostType

CONFIG_PATH = Path("/etc/vcsbridge/config.yaml")


def yaml_config_settings_source() -> dict[str, Any]:
    """Load configuration from YAML file."""
    if CONFIG_PATH.exists():
        with open(CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


# --- VCS Configuration ---


class CodeCommitConfig(BaseModel):
    """AWS CodeCommit configuration."""

    user_arn: str = Field(
        default="",
        description="IAM ARN the tool comments as. Comments by this ARN are "
        "eligible for hiding. The effective identity is whatever the IAM "
        "credentials resolve to, so this must match them.",
    )
    region: str = Field(default="us-east-1", description="AWS region of the repositories")
    endpoint_url: str = Field(
        default="",
        description="Custom endpoint URL (for LocalStack in dev/CI)",
    )
    console_base_url: str = Field(
        default="",
        description="AWS console base URL (e.g. https://eu-west-2.console.aws.amazon.com). "
        "When empty, pull request links are console-relative paths.",
    )


class VCSConfig(BaseModel):
    """VCS integration configuration."""

    enabled: bool = Field(default=False, description="Enable VCS integration")
    host_type: VCSHostType = Field(default=VCSHostType.CODECOMMIT)
    codecommit: CodeCommitConfig = Field(default_factory=CodeCommitConfig)


# --- Main Settings ---


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="VCSBRIDGE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = Field(default="vcsbridge")
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True, description="JSON logging in production")

    vcs: VCSConfig = Field(default_factory=VCSConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings sources: env vars override YAML config."""
        return (
            init_settings,
            env_settings,
            yaml_config_settings_source,
            dotenv_settings,
            file_secret_settings,
        )


# Global settings instance
settings = Settings()
