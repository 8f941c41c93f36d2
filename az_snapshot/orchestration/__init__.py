"""
Azure Snapshot - Orchestration Module

Coordinates the create and restore workflows.
"""

from az_snapshot.orchestration.create import CreateOrchestrator
from az_snapshot.orchestration.restore import (
    DiskNameGenerator,
    RestoreOrchestrator,
    RestoreResult
)
from az_snapshot.orchestration.state import (
    CreateState,
    RestoreState,
    StateTracker,
    OperationState
)

__all__ = [
    'CreateOrchestrator',
    'RestoreOrchestrator',
    'RestoreResult',
    'DiskNameGenerator',
    'CreateState',
    'RestoreState',
    'StateTracker',
    'OperationState',
]
