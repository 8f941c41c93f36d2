"""
Azure Snapshot - Create Orchestrator

Coordinates the create workflow:
1. Collects a snapshot name (prompting until it is non-empty)
2. Asks for confirmation
3. Snapshots the VM's current OS disk
"""

from typing import Optional

from az_snapshot.core.config import CreateConfig
from az_snapshot.core.exceptions import OperationFailedError, UserAbortError
from az_snapshot.core.provider import CloudControlPlane
from az_snapshot.operations import CreateSnapshotOperation
from az_snapshot.orchestration.state import CreateState, StateTracker
from az_snapshot.resolver import ResolvedVM
from az_snapshot.utils.logger import get_logger
from az_snapshot.utils.prompt import Prompter


class CreateOrchestrator:
    """
    Orchestrates snapshot creation.

    Example:
        orchestrator = CreateOrchestrator(
            control_plane=az,
            vm=resolved_vm,
            prompter=Prompter(),
            config=config,
            logger=logger
        )
        snapshot_id = orchestrator.execute(snapshot_name='before-upgrade')
    """

    def __init__(self, control_plane: CloudControlPlane, vm: ResolvedVM,
                 prompter: Prompter = None, config: CreateConfig = None, logger=None):
        self.control_plane = control_plane
        self.vm = vm
        self.prompter = prompter or Prompter()
        self.config = config or CreateConfig()
        self.logger = logger or get_logger()

        self.state_tracker = StateTracker()
        self.snapshot_name: Optional[str] = None
        self.snapshot_id: Optional[str] = None

    def execute(self, snapshot_name: Optional[str] = None) -> Optional[str]:
        """
        Run the workflow.

        Args:
            snapshot_name: Name for the snapshot, or None to ask for one

        Returns:
            ID of the new snapshot (None on a dry run)

        Raises:
            UserAbortError: If the operator did not confirm
            OperationFailedError: If the snapshot could not be created
        """
        self._collect_name(snapshot_name)
        self._confirm()

        if self.config.dry_run:
            self.logger.info(f"[DRY RUN] Would create snapshot '{self.snapshot_name}' "
                             f"of disk '{self.vm.os_disk_id}'")
            self.state_tracker.enter(CreateState.DONE)
            return None

        self._create_snapshot()

        self.state_tracker.enter(CreateState.DONE)
        self.logger.debug(self.state_tracker.get_summary())
        return self.snapshot_id

    def _collect_name(self, snapshot_name: Optional[str]):
        self.state_tracker.enter(CreateState.NAME_COLLECTION)
        if snapshot_name and snapshot_name.strip():
            self.snapshot_name = snapshot_name.strip()
        else:
            self.snapshot_name = self.prompter.ask_non_empty("Enter name for the snapshot to create: ")

    def _confirm(self):
        self.state_tracker.enter(CreateState.CONFIRM)
        message = (f"About to create snapshot with name '{self.snapshot_name}' of vm '{self.vm.vm_name}' "
                   f"in resource group '{self.vm.resource_group}' in location '{self.vm.location}'.")
        if not self.prompter.confirm(message):
            self.state_tracker.enter(CreateState.ABORTED)
            raise UserAbortError()

    def _create_snapshot(self):
        self.state_tracker.enter(CreateState.SNAPSHOT_CREATE)
        self.logger.info(f"Creating a snapshot of disk with ID '{self.vm.os_disk_id}' in location "
                         f"'{self.vm.location}' and resource group '{self.vm.resource_group}'")

        operation = CreateSnapshotOperation(self.control_plane, self.logger)
        result = operation.execute(
            group=self.vm.resource_group,
            snapshot_name=self.snapshot_name,
            location=self.vm.location,
            source_disk_id=self.vm.os_disk_id
        )
        self.state_tracker.add_operation(CreateState.SNAPSHOT_CREATE, result.success, result.message)

        if not result.success:
            self.state_tracker.enter(CreateState.FAILED)
            raise OperationFailedError(operation.name, result.error)

        self.snapshot_id = result.resource_id
        self.logger.info(f"Created snapshot with ID: {self.snapshot_id}")
