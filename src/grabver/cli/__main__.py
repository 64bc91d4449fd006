"""Command line entry point for build versioning.

The build host calls ``grabver bump`` once per build with the module being
built and the requested tasks, then ``grabver publish`` when uploading.

Usage:
    uv run grabver bump app assembleRelease
    uv run grabver bump app build --major 2 --minor 0 --pre-release beta
    uv run grabver show app --json
    uv run grabver publish app bintrayUpload --dry-run
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from grabver.errors import LoadError, VersioningError
from grabver.lib.paths import version_file_path
from grabver.publishing import (
    CommandPublisher,
    build_descriptor,
    publish_version,
    should_publish,
)
from grabver.versioning.config import VersioningConfig, settings
from grabver.versioning.models import DeclaredVersion, VersionRecord
from grabver.versioning.store import load, run_invocation

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="grabver",
    help="Automatic semantic versioning for build modules",
    no_args_is_help=True,
    add_completion=False,
)

BaseDirOption = Annotated[
    Path | None,
    typer.Option("--base-dir", "-C", help="Root project directory (default: cwd)"),
]
RootProjectOption = Annotated[
    str | None,
    typer.Option("--root-project", help="Root project name (default: dir name)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging"),
]


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


def _fail(error: VersioningError) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


def _version_path(
    module: str, root_project: str | None, base_dir: Path | None
) -> Path:
    return version_file_path(
        module,
        root_project_name=root_project or settings.root_project,
        base_dir=base_dir,
    )


def _record_dict(record: VersionRecord) -> dict[str, object]:
    return {**record.model_dump(), "name": record.name}


@app.command()
def bump(
    module: Annotated[str, typer.Argument(help="Module being built")],
    tasks: Annotated[
        list[str] | None, typer.Argument(help="Tasks requested for this build")
    ] = None,
    base_dir: BaseDirOption = None,
    root_project: RootProjectOption = None,
    major: Annotated[
        int | None, typer.Option("--major", min=0, help="Declared major version")
    ] = None,
    minor: Annotated[
        int | None, typer.Option("--minor", min=0, help="Declared minor version")
    ] = None,
    pre_release: Annotated[
        str | None, typer.Option("--pre-release", help="Declared pre-release label")
    ] = None,
    skip_on_task: Annotated[
        str | None, typer.Option("--skip-on-task", help="Task that skips versioning")
    ] = None,
    release_tasks: Annotated[
        list[str] | None,
        typer.Option("--release-task", "-r", help="Task that triggers a release"),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Update the module's version file for one build."""
    _setup_logging(verbose)

    try:
        config = VersioningConfig.from_settings(
            settings,
            skip_on_task=skip_on_task,
            release_trigger_tasks=frozenset(release_tasks) if release_tasks else None,
        )
        result = run_invocation(
            module,
            tasks or [],
            config,
            root_project_name=root_project or settings.root_project,
            base_dir=base_dir,
            declared=DeclaredVersion(
                major=major, minor=minor, pre_release=pre_release
            ),
        )
    except VersioningError as e:
        raise _fail(e)

    typer.echo(f"Intent: {result.intent}")
    typer.echo(f"Version: {result.record.name}")
    typer.echo(f"Code: {result.record.code}")
    typer.echo(f"Build: {result.record.build}")
    if not result.saved:
        typer.echo(f"Not saved: {result.path}")


@app.command()
def show(
    module: Annotated[str, typer.Argument(help="Module to inspect")],
    base_dir: BaseDirOption = None,
    root_project: RootProjectOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the stored version of a module without changing anything."""
    path = _version_path(module, root_project, base_dir)
    try:
        loaded = load(path, create=False)
    except VersioningError as e:
        raise _fail(e)

    record = loaded.record
    if as_json:
        typer.echo(json.dumps(_record_dict(record), indent=2))
        return

    table = Table(title=f"{module} ({path})")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in _record_dict(record).items():
        table.add_row(key, str(value))
    Console().print(table)
    if not path.exists():
        typer.echo("(no version file yet, showing defaults)")


@app.command()
def publish(
    module: Annotated[str, typer.Argument(help="Module to publish")],
    tasks: Annotated[
        list[str] | None, typer.Argument(help="Tasks requested for this build")
    ] = None,
    base_dir: BaseDirOption = None,
    root_project: RootProjectOption = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Print the package descriptor")
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Hand the stored version to the uploader when the publish task is requested."""
    _setup_logging(verbose)
    tasks = tasks or []

    if not should_publish(tasks, settings.publish_task):
        typer.echo(f"Nothing to publish: '{settings.publish_task}' not requested")
        return

    path = _version_path(module, root_project, base_dir)
    try:
        loaded = load(path, create=False)
        if not path.exists():
            raise LoadError("no version file, run 'grabver bump' first", path)

        if dry_run:
            descriptor = build_descriptor(settings, loaded.record, module)
            typer.echo(descriptor.model_dump_json(indent=2))
            return

        publisher = CommandPublisher(
            settings.publish_command, cwd=base_dir or Path.cwd()
        )
        descriptor = publish_version(loaded.record, module, tasks, settings, publisher)
    except VersioningError as e:
        raise _fail(e)

    if descriptor is not None:
        typer.echo(f"Published {descriptor.name} {descriptor.version}")


if __name__ == "__main__":
    app()
