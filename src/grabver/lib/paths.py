"""Version file locations.

Each module keeps its own ``version.properties``. The root project keeps it
at the base directory, every other module in a sub-directory named after
the module::

    <base_dir>/version.properties            # root project
    <base_dir>/<module>/version.properties   # any other module

The base directory defaults to the current working directory at call time.

Examples:
    >>> base = Path("/work/app")
    >>> version_file_path("app", root_project_name="app", base_dir=base)
    PosixPath('/work/app/version.properties')
    >>> version_file_path("lib", root_project_name="app", base_dir=base)
    PosixPath('/work/app/lib/version.properties')
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

VERSION_FILE_NAME = "version.properties"


def default_root_project_name(base_dir: Path | None = None) -> str:
    """Name of the root project when none is configured.

    Gradle names the root project after its directory; so do we.
    """
    return (base_dir or Path.cwd()).resolve().name


def is_root_project(module_name: str, root_project_name: str) -> bool:
    """Case-insensitive comparison of module and root project names."""
    return module_name.casefold() == root_project_name.casefold()


def version_file_path(
    module_name: str,
    *,
    root_project_name: str | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Return the ``version.properties`` path for a module."""
    base = base_dir if base_dir is not None else Path.cwd()
    root_name = root_project_name or default_root_project_name(base)

    if is_root_project(module_name, root_name):
        logger.info("Versioning Root Project '%s'", module_name)
        return base / VERSION_FILE_NAME

    logger.info("Versioning Module '%s'", module_name)
    return base / module_name / VERSION_FILE_NAME
