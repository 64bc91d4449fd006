"""Tests for settings and versioning configuration."""

import pytest

from grabver.errors import ConfigError
from grabver.versioning.config import (
    DEFAULT_RELEASE_TASKS,
    Settings,
    VersioningConfig,
)


class TestVersioningConfig:
    """Tests for VersioningConfig."""

    def test_defaults(self) -> None:
        """Defaults skip on clean and release on the usual tasks."""
        config = VersioningConfig()

        assert config.skip_on_task == "clean"
        assert config.release_trigger_tasks == frozenset(DEFAULT_RELEASE_TASKS)
        assert "test_release" in config.release_trigger_tasks

    def test_create_valid(self) -> None:
        """create() accepts valid options."""
        config = VersioningConfig.create(
            skip_on_task="wipe", release_trigger_tasks=frozenset({"ship"})
        )

        assert config.skip_on_task == "wipe"
        assert config.release_trigger_tasks == frozenset({"ship"})

    def test_empty_release_tasks(self) -> None:
        """An empty release task set is a ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            VersioningConfig.create(release_trigger_tasks=frozenset())

        assert "release_trigger_tasks" in str(exc_info.value)
        assert str(exc_info.value).startswith("config failed")

    def test_blank_release_task(self) -> None:
        """Blank release task names are a ConfigError."""
        with pytest.raises(ConfigError):
            VersioningConfig.create(release_trigger_tasks=frozenset({"release", " "}))

    def test_empty_skip_task(self) -> None:
        """An empty skip task is a ConfigError."""
        with pytest.raises(ConfigError):
            VersioningConfig.create(skip_on_task="")

    def test_from_settings(self) -> None:
        """Settings feed the versioning options."""
        source = Settings(GRABVER_SKIP_ON_TASK="purge", GRABVER_RELEASE_TASKS=["ship"])

        config = VersioningConfig.from_settings(source)

        assert config.skip_on_task == "purge"
        assert config.release_trigger_tasks == frozenset({"ship"})

    def test_from_settings_empty_tasks(self) -> None:
        """An empty release list in settings is a ConfigError."""
        source = Settings(GRABVER_RELEASE_TASKS=[])

        with pytest.raises(ConfigError):
            VersioningConfig.from_settings(source)

    def test_from_settings_overrides(self) -> None:
        """Given overrides replace settings; None keeps the setting."""
        source = Settings(GRABVER_SKIP_ON_TASK="purge", GRABVER_RELEASE_TASKS=["ship"])

        config = VersioningConfig.from_settings(
            source, skip_on_task=None, release_trigger_tasks=frozenset({"deploy"})
        )

        assert config.skip_on_task == "purge"
        assert config.release_trigger_tasks == frozenset({"deploy"})

    def test_from_settings_bad_override(self) -> None:
        """An override is validated like any other option."""
        with pytest.raises(ConfigError):
            VersioningConfig.from_settings(Settings(), skip_on_task="")


class TestSettings:
    """Tests for environment-driven Settings."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """GRABVER_* variables override defaults."""
        monkeypatch.setenv("GRABVER_RELEASE_TASKS", '["ship", "deploy"]')
        monkeypatch.setenv("GRABVER_PUBLISH_TASK", "upload")
        monkeypatch.setenv("GRABVER_PUBLISH_SIGN", "false")

        source = Settings()

        assert source.release_tasks == ["ship", "deploy"]
        assert source.publish_task == "upload"
        assert source.publish_sign is False

    def test_publish_disabled_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """No publish command is configured out of the box."""
        monkeypatch.delenv("GRABVER_PUBLISH_COMMAND", raising=False)

        assert Settings().publish_command == []
