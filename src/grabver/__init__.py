"""Automatic semantic versioning for build modules.

This package keeps a per-module ``version.properties`` file up to date on
every build and hands the computed version to a publishing step.

Structure:
- grabver/versioning/: Version Store (the load, decide, apply, save cycle)
  - config.py: Settings via pydantic-settings, VersioningConfig
  - models.py: VersionRecord, Intent, DeclaredVersion
  - store.py: load/save, intent resolution, increments, run_invocation
- grabver/lib/: Reusable helpers
  - paths.py: version file location per module
  - properties.py: key=value file parsing and atomic writing
- grabver/publishing/: Hand-off to the external uploader
- grabver/cli/: ``grabver`` command line entry point
"""
