"""
Azure Snapshot - Restore Orchestrator

Coordinates the restore workflow:
1. Selects the snapshot and asks for confirmation
2. Fetches the snapshot ID and the VM's current OS disk ID
3. Creates a new disk from the snapshot
4. Stops and deallocates the VM
5. Attaches the new disk as OS disk
6. Starts the VM
7. Deletes the old disk

Nothing is rolled back on failure. The old disk is only deleted once
the VM runs on the new one; if any step fails the operator is told what
state the VM is in and how to finish by hand.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from az_snapshot.core.config import RestoreConfig
from az_snapshot.core.exceptions import (
    OperationFailedError,
    ProviderCallError,
    QueryFailedError,
    SnapshotToolError,
    UserAbortError,
    VMStartError
)
from az_snapshot.core.provider import CloudControlPlane
from az_snapshot.operations import (
    CreateDiskOperation,
    StopVMOperation,
    DeallocateVMOperation,
    SwapOSDiskOperation,
    StartVMOperation,
    DeleteDiskOperation
)
from az_snapshot.orchestration.recovery import restore_recovery, start_failure_commands
from az_snapshot.orchestration.state import RestoreState, StateTracker
from az_snapshot.resolver import ResolvedVM, ResourceResolver
from az_snapshot.utils.logger import get_logger
from az_snapshot.utils.progress import create_progress_tracker
from az_snapshot.utils.prompt import Prompter


class DiskNameGenerator:
    """
    Builds names for disks created from a snapshot.

    Format: <vm>__<snapshot>__<YYYY-MM-DD>_<epoch seconds>

    Timestamps handed out by one generator are strictly increasing, so
    two restores of the same VM from the same snapshot never share a name.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._last = None

    def next_name(self, vm_name: str, snapshot_name: str) -> str:
        stamp = int(self.clock())
        if self._last is not None and stamp <= self._last:
            stamp = self._last + 1
        self._last = stamp

        date = datetime.fromtimestamp(stamp).strftime('%Y-%m-%d')
        return f"{vm_name}__{snapshot_name}__{date}_{stamp}"


# Shared by every restore in this process that is not given its own generator
_DEFAULT_DISK_NAMES = DiskNameGenerator()


@dataclass
class RestoreResult:
    """What a restore produced."""
    snapshot_name: str
    snapshot_id: Optional[str] = None
    new_disk_name: Optional[str] = None
    new_disk_id: Optional[str] = None
    old_disk_id: Optional[str] = None
    old_disk_deleted: bool = False
    dry_run: bool = False


class RestoreOrchestrator:
    """
    Orchestrates restoring a VM's OS disk from a snapshot.

    Example:
        orchestrator = RestoreOrchestrator(
            control_plane=az,
            vm=resolved_vm,
            prompter=Prompter(),
            config=config,
            logger=logger
        )
        result = orchestrator.execute(snapshot_name='before-upgrade')
    """

    def __init__(self, control_plane: CloudControlPlane, vm: ResolvedVM,
                 prompter: Prompter = None, config: RestoreConfig = None, logger=None,
                 disk_names: DiskNameGenerator = None):
        self.control_plane = control_plane
        self.vm = vm
        self.prompter = prompter or Prompter()
        self.config = config or RestoreConfig()
        self.logger = logger or get_logger()
        self.disk_names = disk_names or _DEFAULT_DISK_NAMES

        self.state_tracker = StateTracker()
        self.result: Optional[RestoreResult] = None

    def execute(self, snapshot_name: Optional[str] = None) -> RestoreResult:
        """
        Run the workflow.

        Args:
            snapshot_name: Snapshot to restore, or None to choose one

        Returns:
            RestoreResult

        Raises:
            UserAbortError: If the operator did not confirm
            QueryFailedError: If a lookup failed (nothing changed yet)
            OperationFailedError: If a mutating step failed
            VMStartError: If the VM did not start on the new disk
        """
        self._select_snapshot(snapshot_name)
        self._confirm()
        self._fetch_snapshot_id()
        self._fetch_current_disk_id()

        if self.config.dry_run:
            self._log_plan()
            self.result.dry_run = True
            self.state_tracker.enter(RestoreState.DONE)
            return self.result

        total_steps = 6 if self.config.delete_old_disk else 5
        progress = create_progress_tracker(
            total_steps=total_steps,
            desc=f"Restore VM: {self.vm.vm_name}",
            enabled=self.config.show_progress
        )

        try:
            with progress:
                self._create_disk(progress)
                self._stop_vm(progress)
                self._deallocate_vm(progress)
                self._attach_new_disk(progress)
                self._start_vm(progress)
                if self.config.delete_old_disk:
                    self._delete_old_disk(progress)
                else:
                    self.logger.info(f"Keeping the old disk with id {self.result.old_disk_id}")
        except SnapshotToolError:
            raise
        except (Exception, KeyboardInterrupt) as e:
            # Ctrl-C included: the VM may already be stopped
            self._fail_unexpected(e)

        self.state_tracker.enter(RestoreState.DONE)
        self.logger.debug(self.state_tracker.get_summary())
        return self.result

    # Selection and lookups (no changes made)

    def _select_snapshot(self, snapshot_name: Optional[str]):
        self.state_tracker.enter(RestoreState.SNAPSHOT_SELECTION)
        if not snapshot_name:
            resolver = ResourceResolver(self.control_plane, self.prompter, self.logger)
            snapshot_name = resolver.choose_snapshot(self.vm.resource_group, self.vm.vm_name)
        self.result = RestoreResult(snapshot_name=snapshot_name)

    def _confirm(self):
        self.state_tracker.enter(RestoreState.CONFIRM)
        message = (f"About to restore snapshot {self.result.snapshot_name} to vm '{self.vm.vm_name}' "
                   f"in resource group '{self.vm.resource_group}' in location '{self.vm.location}'\n"
                   f"The VM will be shutdown and the current OS disk of the VM will be destroyed. "
                   f"The snapshot remains available.")
        if not self.prompter.confirm(message):
            self.state_tracker.enter(RestoreState.ABORTED)
            raise UserAbortError()

    def _fetch_snapshot_id(self):
        self.state_tracker.enter(RestoreState.FETCH_SNAPSHOT_ID)
        self.logger.info("Fetching snapshot ID")
        try:
            snapshot_id = self.control_plane.get_snapshot_id(
                self.vm.resource_group, self.result.snapshot_name
            )
        except ProviderCallError as e:
            self.state_tracker.enter(RestoreState.FAILED)
            raise QueryFailedError("Could not fetch snapshot ID", str(e))
        self.result.snapshot_id = snapshot_id
        self.logger.info(f"Snapshot ID: {snapshot_id}")

    def _fetch_current_disk_id(self):
        self.state_tracker.enter(RestoreState.FETCH_CURRENT_DISK_ID)
        self.logger.info("Fetching current OS disk ID")
        try:
            disk_id = self.control_plane.get_vm_os_disk_id(self.vm.vm_id)
        except ProviderCallError as e:
            self.state_tracker.enter(RestoreState.FAILED)
            raise QueryFailedError("Could not fetch current OS disk ID", str(e))
        self.result.old_disk_id = disk_id
        self.logger.info(f"Current disk ID: {disk_id}")

    def _log_plan(self):
        disk_name = self.disk_names.next_name(self.vm.vm_name, self.result.snapshot_name)
        self.logger.info("[DRY RUN] Would run these steps:")
        self.logger.info(f"  Create disk '{disk_name}' ({self.config.disk_sku}) "
                         f"from snapshot '{self.result.snapshot_id}'")
        self.logger.info(f"  Stop and deallocate VM '{self.vm.vm_id}'")
        self.logger.info("  Attach the new disk as OS disk")
        self.logger.info("  Start the VM")
        if self.config.delete_old_disk:
            self.logger.info(f"  Delete the old disk '{self.result.old_disk_id}'")

    # Mutating steps

    def _fail(self, state: RestoreState, operation, error: str):
        self.state_tracker.enter(RestoreState.FAILED)
        recovery = restore_recovery(
            state,
            self.control_plane,
            self.vm.vm_id,
            self.result.old_disk_id,
            self.result.new_disk_id
        )
        raise OperationFailedError(operation.name, error, recovery)

    def _fail_unexpected(self, error: BaseException):
        state = self.state_tracker.current
        self.logger.debug(f"Unexpected {type(error).__name__} in step '{state.value}'", exc_info=True)
        self.state_tracker.enter(RestoreState.FAILED)
        recovery = restore_recovery(
            state,
            self.control_plane,
            self.vm.vm_id,
            self.result.old_disk_id,
            self.result.new_disk_id
        )
        reason = str(error) or type(error).__name__
        raise OperationFailedError(state.value, reason, recovery) from error

    def _run_step(self, state: RestoreState, operation, progress, announce: str, **kwargs):
        self.state_tracker.enter(state)
        progress.update_step(state.value)
        self.logger.info(announce)

        result = operation.execute(**kwargs)
        self.state_tracker.add_operation(state, result.success, result.message)
        if result.success:
            self.logger.info(f"  [OK] {result.message}")
            progress.advance()
        return result

    def _create_disk(self, progress):
        disk_name = self.disk_names.next_name(self.vm.vm_name, self.result.snapshot_name)
        self.result.new_disk_name = disk_name

        operation = CreateDiskOperation(self.control_plane, self.logger)
        result = self._run_step(
            RestoreState.CREATE_DISK_FROM_SNAPSHOT, operation, progress,
            f"Creating a new disk with name {disk_name} from snapshot",
            group=self.vm.resource_group,
            disk_name=disk_name,
            location=self.vm.location,
            sku=self.config.disk_sku,
            snapshot_id=self.result.snapshot_id
        )
        if not result.success:
            self._fail(RestoreState.CREATE_DISK_FROM_SNAPSHOT, operation, result.error)

        self.result.new_disk_id = result.resource_id
        self.logger.info(f"Created new disk with ID {result.resource_id}")

    def _stop_vm(self, progress):
        operation = StopVMOperation(self.control_plane, self.logger)
        result = self._run_step(RestoreState.STOP_VM, operation, progress,
                                "Stopping the VM", vm_id=self.vm.vm_id)
        if not result.success:
            self._fail(RestoreState.STOP_VM, operation, result.error)

    def _deallocate_vm(self, progress):
        operation = DeallocateVMOperation(self.control_plane, self.logger)
        result = self._run_step(RestoreState.DEALLOCATE_VM, operation, progress,
                                "Deallocating the VM", vm_id=self.vm.vm_id)
        if not result.success:
            self._fail(RestoreState.DEALLOCATE_VM, operation, result.error)

    def _attach_new_disk(self, progress):
        operation = SwapOSDiskOperation(self.control_plane, self.logger)
        result = self._run_step(RestoreState.ATTACH_NEW_DISK, operation, progress,
                                "Updating the VM to use the new disk",
                                vm_id=self.vm.vm_id, disk_id=self.result.new_disk_id)
        if not result.success:
            self._fail(RestoreState.ATTACH_NEW_DISK, operation, result.error)

    def _start_vm(self, progress):
        operation = StartVMOperation(self.control_plane, self.logger)
        result = self._run_step(RestoreState.START_VM, operation, progress,
                                "Starting the VM", vm_id=self.vm.vm_id)
        if not result.success:
            # The old disk is kept so the operator can still go back to it
            self.state_tracker.enter(RestoreState.FAILED)
            raise VMStartError(
                result.error,
                vm_id=self.vm.vm_id,
                old_disk_id=self.result.old_disk_id,
                commands=start_failure_commands(
                    self.control_plane, self.vm.vm_id, self.result.old_disk_id
                )
            )

    def _delete_old_disk(self, progress):
        if not self.state_tracker.has_succeeded(RestoreState.ATTACH_NEW_DISK, RestoreState.START_VM):
            raise OperationFailedError(
                "Delete Old Disk",
                "the new disk is not confirmed attached and running",
                f"The old disk was kept: {self.result.old_disk_id}"
            )

        operation = DeleteDiskOperation(self.control_plane, self.logger)
        result = self._run_step(RestoreState.DELETE_OLD_DISK, operation, progress,
                                f"Deleting the old disk with id {self.result.old_disk_id}",
                                disk_id=self.result.old_disk_id)
        if result.success:
            self.result.old_disk_deleted = True
        else:
            self.logger.warning(f"Failed to delete the old disk: {result.error}")
            self.logger.warning(
                f"You can delete it manually later: "
                f"'{self.control_plane.delete_disk_command(self.result.old_disk_id)}'"
            )
            progress.advance()
