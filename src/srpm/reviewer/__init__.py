# srpm-review/src/srpm/reviewer/__init__.py
"""
This package contains the core logic for reviewing source RPMs: extracting the
package identity, gating on the build recipe, driving builds across backends
and recording the reviewer's checklist verdicts.
"""

from .checklist.session import ReviewSession
from .models import (
    BuildOutcome,
    BuildTarget,
    BuildTargetKind,
    ChecklistItem,
    PackageIdentity,
    Verdict,
)
from .packaging.orchestrator import BuildOrchestrator

__all__ = [
    "BuildOrchestrator",
    "BuildOutcome",
    "BuildTarget",
    "BuildTargetKind",
    "ChecklistItem",
    "PackageIdentity",
    "ReviewSession",
    "Verdict",
]
