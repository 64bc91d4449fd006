"""Reusable helpers for the versioning tool.

Modules:
- paths: Version file location per module
- properties: ``key=value`` file parsing and atomic writing
"""

from grabver.lib.paths import (
    VERSION_FILE_NAME,
    default_root_project_name,
    is_root_project,
    version_file_path,
)
from grabver.lib.properties import (
    format_properties,
    parse_properties,
    read_properties,
    write_properties_atomic,
)

__all__ = [
    # Paths
    "VERSION_FILE_NAME",
    "default_root_project_name",
    "is_root_project",
    "version_file_path",
    # Properties
    "format_properties",
    "parse_properties",
    "read_properties",
    "write_properties_atomic",
]
