"""``grabver`` command line interface.

Usage:
    uv run grabver --help
    uv run python -m grabver.cli bump app assembleRelease
"""
