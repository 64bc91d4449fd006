"""Tool version tracking.

GRABVER_VERSION tracks the behavior of the versioning tool itself: the
intent rules, the properties format, the publishing hand-off. It is printed
in the start banner of every invocation.

Bump rules:
- Patch (0.2.x): bug fixes, logging tweaks
- Minor (0.x.0): new options, new CLI commands, new release triggers
- Major (x.0.0): changes to the version.properties format
"""

GRABVER_VERSION = "0.2.0"
