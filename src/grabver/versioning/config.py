"""Configuration management using pydantic-settings.

Key patterns:
1. Multiple env files (.env, .env.local) - local overrides shared
2. validation_alias for explicit env var names
3. Singleton instance for easy import
4. An explicit ``VersioningConfig`` handed to the store, never read globally

Usage:
    from grabver.versioning.config import settings
    print(settings.release_tasks)
"""

import logging
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from grabver.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SKIP_ON_TASK = "clean"
DEFAULT_RELEASE_TASKS = ("assemble", "release", "assembleRelease", "test_release")
DEFAULT_PUBLISH_TASK = "bintrayUpload"


class Settings(BaseSettings):
    """Tool settings loaded from environment variables.

    All settings use the ``GRABVER_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        extra="ignore",
    )

    # ==========================================================================
    # VERSIONING
    # ==========================================================================

    skip_on_task: str = Field(
        default=DEFAULT_SKIP_ON_TASK,
        validation_alias="GRABVER_SKIP_ON_TASK",
        description="Task that skips versioning entirely",
    )

    release_tasks: list[str] = Field(
        default=list(DEFAULT_RELEASE_TASKS),
        validation_alias="GRABVER_RELEASE_TASKS",
        description="Tasks that increment the release code (JSON list)",
    )

    root_project: str | None = Field(
        default=None,
        validation_alias="GRABVER_ROOT_PROJECT",
        description="Root project name (None = base directory name)",
    )

    # ==========================================================================
    # PUBLISHING
    # ==========================================================================

    publish_task: str = Field(
        default=DEFAULT_PUBLISH_TASK,
        validation_alias="GRABVER_PUBLISH_TASK",
        description="Task that triggers publishing",
    )

    publish_command: list[str] = Field(
        default_factory=list,
        validation_alias="GRABVER_PUBLISH_COMMAND",
        description="Uploader command and arguments (JSON list, empty = disabled)",
    )

    publish_repo: str = Field(
        default="maven",
        validation_alias="GRABVER_PUBLISH_REPO",
        description="Target repository",
    )

    publish_name: str | None = Field(
        default=None,
        validation_alias="GRABVER_PUBLISH_NAME",
        description="Package name (None = module name)",
    )

    publish_description: str = Field(
        default="",
        validation_alias="GRABVER_PUBLISH_DESCRIPTION",
    )

    publish_website_url: str = Field(
        default="",
        validation_alias="GRABVER_PUBLISH_WEBSITE_URL",
    )

    publish_vcs_url: str = Field(
        default="",
        validation_alias="GRABVER_PUBLISH_VCS_URL",
    )

    publish_licenses: list[str] = Field(
        default_factory=lambda: ["Apache-2.0"],
        validation_alias="GRABVER_PUBLISH_LICENSES",
    )

    publish_labels: list[str] = Field(
        default_factory=list,
        validation_alias="GRABVER_PUBLISH_LABELS",
    )

    publish_sign: bool = Field(
        default=True,
        validation_alias="GRABVER_PUBLISH_SIGN",
        description="Ask the uploader to sign artifacts",
    )


class VersioningConfig(BaseModel):
    """Options steering intent resolution.

    Build with :meth:`create` or :meth:`from_settings` to get a
    ``ConfigError`` instead of a pydantic ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)

    skip_on_task: str = Field(default=DEFAULT_SKIP_ON_TASK, min_length=1)
    release_trigger_tasks: frozenset[str] = Field(
        default=frozenset(DEFAULT_RELEASE_TASKS)
    )

    @field_validator("release_trigger_tasks")
    @classmethod
    def check_release_tasks(cls, tasks: frozenset[str]) -> frozenset[str]:
        if not tasks:
            raise ValueError("at least one release task is required")
        if any(not task.strip() for task in tasks):
            raise ValueError("release task names must not be blank")
        return tasks

    @classmethod
    def create(cls, **kwargs: Any) -> Self:
        """Validate options, raising ``ConfigError`` on bad input."""
        try:
            return cls.model_validate(kwargs)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(details) from e

    @classmethod
    def from_settings(cls, source: Settings, **overrides: Any) -> Self:
        """Build from ``source``; overrides that are not None win."""
        options: dict[str, Any] = {
            "skip_on_task": source.skip_on_task,
            "release_trigger_tasks": frozenset(source.release_tasks),
        }
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls.create(**options)


# Singleton instance
settings = Settings.model_validate({})
