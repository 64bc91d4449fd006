"""Version Store: load, decide, apply, save.

One invocation is a single local file transaction::

    read file -> parse -> decide intent -> apply -> write file

A clean invocation stops after deciding and never writes. Any
``LoadError``, ``SaveError`` or ``ConfigError`` aborts before the write, so
the stored record is either fully updated or untouched. No locking is done:
one writer per file at a time is assumed.

Examples:
    Run one build of the ``app`` module::

        >>> config = VersioningConfig()
        >>> result = run_invocation("app", ["assembleRelease"], config)
        >>> result.intent
        <Intent.RELEASE: 'release'>
        >>> result.record.code
        1

    Drive the steps by hand::

        >>> loaded = load(Path("version.properties"))
        >>> intent = decide_intent(["build"], config)
        >>> record = apply(loaded.record, intent)
        >>> save(loaded.path, record, loaded.extra)
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from grabver.errors import LoadError, SaveError
from grabver.lib.paths import version_file_path
from grabver.lib.properties import read_properties, write_properties_atomic
from grabver.version import GRABVER_VERSION
from grabver.versioning.config import VersioningConfig
from grabver.versioning.models import (
    DeclaredVersion,
    Intent,
    InvocationResult,
    LoadResult,
    VersionKey,
    VersionRecord,
)

logger = logging.getLogger(__name__)


# -- Load / save --------------------------------------------------------------


def load(path: Path, *, create: bool = True) -> LoadResult:
    """Load the version record stored at ``path``.

    A missing file yields the all-zero record. With ``create`` (the default)
    an empty file is also created, along with missing parent directories,
    and ``LoadResult.created`` is set.

    Raises:
        LoadError: If the file exists but cannot be read or parsed, or a
            missing file cannot be created.
    """
    if not path.exists():
        if not create:
            return LoadResult(path=path, record=VersionRecord())
        logger.warning("Could not find properties file '%s'", path)
        logger.warning("Auto-generating content properties with default values!")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as e:
            raise LoadError(f"cannot create file ({e})", path) from e
        return LoadResult(path=path, record=VersionRecord(), created=True)

    try:
        props = read_properties(path)
    except OSError as e:
        raise LoadError(f"cannot read file ({e})", path) from e
    except ValueError as e:
        raise LoadError(f"cannot parse file ({e})", path) from e

    try:
        record = VersionRecord.from_properties(props)
    except ValueError as e:
        raise LoadError(str(e), path) from e

    known = {key.value for key in VersionKey}
    extra = {k: v for k, v in props.items() if k not in known}
    logger.debug("Loaded %s from %s", record, path)
    return LoadResult(path=path, record=record, extra=extra)


def save(
    path: Path,
    record: VersionRecord,
    extra: Mapping[str, str] | None = None,
) -> None:
    """Persist ``record`` (plus any unrelated ``extra`` keys) to ``path``.

    Raises:
        SaveError: If the target is not writable.
    """
    items = record.to_properties()
    if extra:
        items.extend(sorted(extra.items()))
    try:
        write_properties_atomic(path, items)
    except OSError as e:
        raise SaveError(f"cannot write file ({e})", path) from e


# -- Decide / apply -----------------------------------------------------------


def task_base_name(task: str) -> str:
    """Strip a Gradle project path, e.g. ``:app:build`` -> ``build``."""
    return task.rsplit(":", 1)[-1]


def decide_intent(task_names: Iterable[str], config: VersioningConfig) -> Intent:
    """Classify an invocation from its requested tasks.

    The skip task wins over everything, then any release task, else normal.
    """
    names = {task_base_name(task) for task in task_names}
    if config.skip_on_task in names:
        return Intent.CLEAN
    if names & config.release_trigger_tasks:
        return Intent.RELEASE
    return Intent.NORMAL


def apply(
    record: VersionRecord,
    intent: Intent,
    declared: DeclaredVersion | None = None,
) -> VersionRecord:
    """Return the record this invocation should persist.

    ``CLEAN`` returns ``record`` itself. Otherwise the declared major,
    minor and pre-release replace the stored ones (patch back to 0 when
    major or minor changed), ``build`` goes up by one, and ``code`` goes up
    by one on ``RELEASE``.
    """
    if intent is Intent.CLEAN:
        return record

    update: dict[str, int | str] = {"build": record.build + 1}

    if declared is not None:
        major = record.major if declared.major is None else declared.major
        minor = record.minor if declared.minor is None else declared.minor
        if (major, minor) != (record.major, record.minor):
            logger.info(
                "Version changed %d.%d -> %d.%d: resetting patch",
                record.major,
                record.minor,
                major,
                minor,
            )
            update.update(major=major, minor=minor, patch=0)
        if declared.pre_release is not None:
            update["pre_release"] = declared.pre_release

    if intent is Intent.RELEASE:
        update["code"] = record.code + 1

    return record.model_copy(update=update)


# -- Invocation ---------------------------------------------------------------


def run_invocation(
    module_name: str,
    task_names: Iterable[str],
    config: VersioningConfig,
    *,
    root_project_name: str | None = None,
    base_dir: Path | None = None,
    declared: DeclaredVersion | None = None,
) -> InvocationResult:
    """Run the full load, decide, apply, save cycle for one module.

    Args:
        module_name: Module being built; selects the version file.
        task_names: Tasks requested for this invocation, read only.
        config: Skip and release task configuration.
        root_project_name: Root project name (default: base dir name).
        base_dir: Directory of the root project (default: cwd).
        declared: User-declared major/minor/pre-release, if any.

    Returns:
        InvocationResult with the previous and the new record.

    Raises:
        LoadError: If the version file cannot be read.
        SaveError: If the version file cannot be written.
    """
    tasks = list(task_names)
    logger.info("====== STARTED GrabVer v%s", GRABVER_VERSION)
    logger.info("ProjectsName=%s", module_name)
    logger.info("runTasks=%s", tasks)

    path = version_file_path(
        module_name, root_project_name=root_project_name, base_dir=base_dir
    )
    intent = decide_intent(tasks, config)
    loaded = load(path, create=intent is not Intent.CLEAN)

    if intent is Intent.CLEAN:
        logger.info("Skipping on Task %s", config.skip_on_task)
    elif intent is Intent.RELEASE:
        logger.info("Running with 'release' task: Code number will auto increment")
    else:
        logger.info("Running with normal build: Code number unchanged")

    record = apply(loaded.record, intent, declared)
    saved = False
    if intent is not Intent.CLEAN:
        logger.info("Saving Versioning: %s", record.full_name)
        save(path, record, loaded.extra)
        saved = True

    logger.info("====== ENDED GrabVer")
    return InvocationResult(
        module_name=module_name,
        path=path,
        intent=intent,
        previous=loaded.record,
        record=record,
        created=loaded.created,
        saved=saved,
    )
