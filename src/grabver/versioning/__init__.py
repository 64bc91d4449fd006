"""Version Store for build modules.

Structure:
- config.py: Settings via pydantic-settings, VersioningConfig
- models.py: VersionRecord, Intent, DeclaredVersion, store results
- store.py: load, decide_intent, apply, save, run_invocation
"""

from grabver.versioning.config import Settings, VersioningConfig, settings
from grabver.versioning.models import (
    DeclaredVersion,
    Intent,
    InvocationResult,
    LoadResult,
    VersionKey,
    VersionRecord,
)
from grabver.versioning.store import (
    apply,
    decide_intent,
    load,
    run_invocation,
    save,
)

__all__ = [
    "DeclaredVersion",
    "Intent",
    "InvocationResult",
    "LoadResult",
    "Settings",
    "VersionKey",
    "VersionRecord",
    "VersioningConfig",
    "apply",
    "decide_intent",
    "load",
    "run_invocation",
    "save",
    "settings",
]
