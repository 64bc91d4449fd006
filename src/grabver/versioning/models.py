"""Version models.

The key pattern is:
1. ``VersionRecord`` is the immutable persisted entity, one per module
2. ``Intent`` classifies an invocation from its requested tasks
3. Every mutation returns a new record (``model_copy(update=...)``)
"""

import re
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

_DECIMAL_RE = re.compile(r"[0-9]+")


class VersionKey(StrEnum):
    """Keys of the version file, in the order they are written."""

    MAJOR = "MAJOR"
    MINOR = "MINOR"
    PATCH = "PATCH"
    PRE_RELEASE = "PRE_RELEASE"
    BUILD = "BUILD"
    CODE = "CODE"


class Intent(StrEnum):
    """What the current invocation asks the store to do."""

    CLEAN = "clean"
    RELEASE = "release"
    NORMAL = "normal"


# =============================================================================
# VERSION RECORD
# =============================================================================


class VersionRecord(BaseModel):
    """Persisted version of one module.

    - Major: user defined breaking changes
    - Minor: user defined new, backwards compatible features
    - Patch: bug fixes; back to 0 when Major or Minor changes
    - PreRelease: user defined label appended to the version name
    - Build: increases at each build
    - Code: increases at each release
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(default=0, ge=0, description="Breaking-change marker")
    minor: int = Field(default=0, ge=0, description="Feature marker")
    patch: int = Field(default=0, ge=0, description="Bugfix counter")
    pre_release: str = Field(default="", description="Pre-release label, e.g. beta")
    build: int = Field(default=0, ge=0, description="Build counter")
    code: int = Field(default=0, ge=0, description="Release counter")

    @property
    def name(self) -> str:
        """Display version, ``major.minor.patch[-preRelease]``."""
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.pre_release}" if self.pre_release else base

    @property
    def full_name(self) -> str:
        return f"{self.name} #{self.build}"

    def to_properties(self) -> list[tuple[str, str]]:
        """Serialize as ``(key, value)`` pairs in :class:`VersionKey` order."""
        values: dict[VersionKey, int | str] = {
            VersionKey.MAJOR: self.major,
            VersionKey.MINOR: self.minor,
            VersionKey.PATCH: self.patch,
            VersionKey.PRE_RELEASE: self.pre_release,
            VersionKey.BUILD: self.build,
            VersionKey.CODE: self.code,
        }
        return [(key.value, str(values[key])) for key in VersionKey]

    @classmethod
    def from_properties(cls, props: Mapping[str, str]) -> "VersionRecord":
        """Build a record from raw property values.

        Missing keys (and blank integer values) fall back to the defaults.

        Raises:
            ValueError: If an integer field is not a non-negative decimal.
        """
        fields: dict[str, int | str] = {}
        for key in VersionKey:
            if key not in props:
                continue
            raw = props[key]
            if key is VersionKey.PRE_RELEASE:
                fields["pre_release"] = raw
                continue
            value = raw.strip()
            if not value:
                continue
            if not _DECIMAL_RE.fullmatch(value):
                raise ValueError(f"{key} must be a non-negative integer, got {raw!r}")
            fields[key.lower()] = int(value)
        return cls.model_validate(fields)

    def __str__(self) -> str:
        return (
            f"[major={self.major}, minor={self.minor}, patch={self.patch}, "
            f"preRelease={self.pre_release!r}, build={self.build}, code={self.code}]"
        )


class DeclaredVersion(BaseModel):
    """Version parts declared by the user for this invocation.

    ``None`` keeps whatever is stored.
    """

    major: int | None = Field(default=None, ge=0)
    minor: int | None = Field(default=None, ge=0)
    pre_release: str | None = None


# =============================================================================
# STORE RESULTS
# =============================================================================


class LoadResult(BaseModel):
    """Outcome of loading a version file."""

    path: Path
    record: VersionRecord
    created: bool = Field(
        default=False, description="True when an empty file was created"
    )
    extra: dict[str, str] = Field(
        default_factory=dict, description="Unrelated keys, kept on save"
    )


class InvocationResult(BaseModel):
    """Complete result of one load, decide, apply, save cycle."""

    module_name: str
    path: Path
    intent: Intent
    previous: VersionRecord
    record: VersionRecord
    created: bool = False
    saved: bool = False
