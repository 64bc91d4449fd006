"""Hand-off of a computed version to an external uploader.

Publishing only happens when the publish task (``bintrayUpload`` by
default) is among the requested tasks. The uploader itself is an external
command: it gets its arguments with ``{version}``, ``{name}``, ``{repo}``
and ``{vcs_tag}`` filled in, and the full descriptor as JSON on stdin.

Examples::

    >>> publisher = CommandPublisher(["./upload.sh", "--version", "{version}"])
    >>> publish_version(
    ...     record, "app", ["assembleRelease", "bintrayUpload"], settings, publisher
    ... )
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

import sh

from grabver.errors import ConfigError, PublishError
from grabver.publishing.models import PackageDescriptor
from grabver.versioning.config import Settings
from grabver.versioning.models import VersionRecord
from grabver.versioning.store import task_base_name

logger = logging.getLogger(__name__)


class Publisher(Protocol):
    """Anything that can upload a described package version."""

    def publish(self, descriptor: PackageDescriptor) -> None: ...


def should_publish(task_names: Iterable[str], publish_task: str) -> bool:
    """True when the publish task was requested."""
    return any(task_base_name(task) == publish_task for task in task_names)


def build_descriptor(
    source: Settings,
    record: VersionRecord,
    module_name: str,
    *,
    released: datetime | None = None,
) -> PackageDescriptor:
    """Describe the package version for ``record`` using the publish settings."""
    return PackageDescriptor(
        repo=source.publish_repo,
        name=source.publish_name or module_name,
        description=source.publish_description,
        website_url=source.publish_website_url,
        vcs_url=source.publish_vcs_url,
        licenses=list(source.publish_licenses),
        labels=list(source.publish_labels),
        version=record.name,
        version_code=record.code,
        vcs_tag=record.name,
        released=released or datetime.now(UTC),
        sign=source.publish_sign,
    )


class CommandPublisher:
    """Runs an external upload command for a package descriptor.

    Args:
        command: Program and arguments; arguments may use the
            ``{version}``, ``{name}``, ``{repo}`` and ``{vcs_tag}`` placeholders.
        cwd: Working directory for the command (default: current).

    Raises:
        ConfigError: If ``command`` is empty.
    """

    def __init__(self, command: Sequence[str], *, cwd: Path | None = None) -> None:
        if not command:
            raise ConfigError(
                "publish command is empty (set GRABVER_PUBLISH_COMMAND)"
            )
        self.command = list(command)
        self.cwd = cwd

    def render_args(self, descriptor: PackageDescriptor) -> list[str]:
        fields = {
            "version": descriptor.version,
            "name": descriptor.name,
            "repo": descriptor.repo,
            "vcs_tag": descriptor.vcs_tag,
        }
        try:
            return [arg.format_map(fields) for arg in self.command]
        except (KeyError, ValueError, AttributeError, IndexError) as e:
            raise ConfigError(f"bad placeholder in publish command: {e}") from e

    def publish(self, descriptor: PackageDescriptor) -> None:
        program, *args = self.render_args(descriptor)
        try:
            cmd = sh.Command(program)
        except sh.CommandNotFound as e:
            raise PublishError(f"command not found: {program}") from e

        try:
            output = cmd(
                *args,
                _in=descriptor.model_dump_json(),
                _cwd=str(self.cwd) if self.cwd else None,
            )
        except sh.ErrorReturnCode as e:
            stderr = e.stderr.decode(errors="replace").strip()
            raise PublishError(f"{program} failed: {stderr}") from e

        logger.debug("Uploader output: %s", str(output).strip())


def publish_version(
    record: VersionRecord,
    module_name: str,
    task_names: Iterable[str],
    source: Settings,
    publisher: Publisher,
    *,
    released: datetime | None = None,
) -> PackageDescriptor | None:
    """Publish ``record`` when the publish task was requested.

    Returns:
        The descriptor handed to the publisher, or None when skipped.
    """
    if not should_publish(task_names, source.publish_task):
        logger.info("No '%s' task requested: not publishing", source.publish_task)
        return None

    descriptor = build_descriptor(source, record, module_name, released=released)
    logger.info("> Publishing: %s %s", descriptor.name, descriptor.version)
    publisher.publish(descriptor)
    return descriptor
