"""Error classes for the versioning tool.

Every error names the stage that failed and, where there is one, the file
it failed on. All of them abort the invocation before anything is written.
"""

from pathlib import Path


class VersioningError(Exception):
    """Base class for fatal versioning errors."""

    stage = "versioning"

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.path is None:
            return f"{self.stage} failed: {self.message}"
        return f"{self.stage} failed for {self.path}: {self.message}"


class LoadError(VersioningError):
    """The version file exists but cannot be read or parsed."""

    stage = "load"


class SaveError(VersioningError):
    """The version file cannot be written."""

    stage = "save"


class ConfigError(VersioningError):
    """Invalid versioning configuration, e.g. no release tasks."""

    stage = "config"


class PublishError(VersioningError):
    """The external publishing command failed."""

    stage = "publish"
