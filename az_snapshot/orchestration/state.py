"""
Azure Snapshot - Workflow State Tracking

The create and restore workflows are state machines. This module names
their states and records which ones were entered and how each step ended.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class CreateState(Enum):
    """States of the create workflow, in order."""
    NAME_COLLECTION = "Name Collection"
    CONFIRM = "Confirm"
    SNAPSHOT_CREATE = "Create Snapshot"
    DONE = "Done"
    ABORTED = "Aborted"
    FAILED = "Failed"


class RestoreState(Enum):
    """States of the restore workflow, in order."""
    SNAPSHOT_SELECTION = "Snapshot Selection"
    CONFIRM = "Confirm"
    FETCH_SNAPSHOT_ID = "Fetch Snapshot ID"
    FETCH_CURRENT_DISK_ID = "Fetch Current Disk ID"
    CREATE_DISK_FROM_SNAPSHOT = "Create Disk"
    STOP_VM = "Stop VM"
    DEALLOCATE_VM = "Deallocate VM"
    ATTACH_NEW_DISK = "Attach New Disk"
    START_VM = "Start VM"
    DELETE_OLD_DISK = "Delete Old Disk"
    DONE = "Done"
    ABORTED = "Aborted"
    FAILED = "Failed"


# From this state on the VM itself is being changed
POINT_OF_NO_RETURN = RestoreState.STOP_VM

TERMINAL_STATES = (
    CreateState.DONE, CreateState.ABORTED, CreateState.FAILED,
    RestoreState.DONE, RestoreState.ABORTED, RestoreState.FAILED,
)


@dataclass
class OperationState:
    """
    Outcome of a single step.
    """
    state: Enum
    success: bool
    message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def operation_name(self) -> str:
        return self.state.value


class StateTracker:
    """
    Tracks the current state and the outcome of every step of a workflow.

    Example:
        tracker = StateTracker()
        tracker.enter(RestoreState.STOP_VM)
        tracker.add_operation(RestoreState.STOP_VM, True, "VM stopped")

        tracker.has_succeeded(RestoreState.STOP_VM)  # True
    """

    def __init__(self):
        self.current: Optional[Enum] = None
        self.history: List[Enum] = []
        self.operations: List[OperationState] = []
        self.workflow_start_time = datetime.now()

    def enter(self, state: Enum):
        """Move to a new state."""
        self.current = state
        self.history.append(state)

    def add_operation(self, state: Enum, success: bool, message: str):
        """Record how a step ended."""
        self.operations.append(OperationState(state=state, success=success, message=message))

    def has_succeeded(self, *states: Enum) -> bool:
        """True if every given step was recorded as successful."""
        succeeded = {op.state for op in self.operations if op.success}
        return all(state in succeeded for state in states)

    def get_successful_operations(self) -> List[OperationState]:
        return [op for op in self.operations if op.success]

    def get_failed_operations(self) -> List[OperationState]:
        return [op for op in self.operations if not op.success]

    def is_finished(self) -> bool:
        return self.current in TERMINAL_STATES

    def get_summary(self) -> str:
        """Get summary of operations."""
        total = len(self.operations)
        successful = len(self.get_successful_operations())
        failed = len(self.get_failed_operations())

        duration = (datetime.now() - self.workflow_start_time).total_seconds()

        summary = f"Operations: {successful}/{total} succeeded"
        if failed > 0:
            summary += f", {failed} failed"
        summary += f" (took {duration:.1f}s)"

        return summary
