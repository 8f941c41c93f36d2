"""
Azure Snapshot - Stop VM and Deallocate VM Operations

A VM must be stopped and deallocated before its OS disk can be swapped.
"""

import time

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.operations.base import BaseOperation, OperationResult


class StopVMOperation(BaseOperation):
    """
    Powers off a VM.

    Example:
        operation = StopVMOperation(control_plane, logger)
        result = operation.execute(vm_id=vm_id)
    """

    @property
    def name(self) -> str:
        return "Stop VM"

    def execute(self, vm_id: str) -> OperationResult:
        """
        Stop the VM.

        Args:
            vm_id: ID of the VM to stop

        Returns:
            OperationResult with success status
        """

        self._log_debug(f"Executing {self.name} for {vm_id}")

        start_time = time.time()
        try:
            self.control_plane.stop_vm(vm_id)
        except ProviderCallError as e:
            return self._failed("Could not stop the VM", e)

        duration = time.time() - start_time
        self._log_debug(f"VM stopped in {duration:.2f}s")
        return self._succeeded(f"VM stopped ({duration:.0f}s)")


class DeallocateVMOperation(BaseOperation):
    """
    Releases the compute resources of a stopped VM.

    After this the VM keeps its configuration (including the OS disk
    reference) but no longer runs on a host.
    """

    @property
    def name(self) -> str:
        return "Deallocate VM"

    def execute(self, vm_id: str) -> OperationResult:
        """
        Deallocate the VM.

        Args:
            vm_id: ID of the VM to deallocate

        Returns:
            OperationResult with success status
        """

        self._log_debug(f"Executing {self.name} for {vm_id}")

        start_time = time.time()
        try:
            self.control_plane.deallocate_vm(vm_id)
        except ProviderCallError as e:
            return self._failed("Could not deallocate the VM", e)

        duration = time.time() - start_time
        self._log_debug(f"VM deallocated in {duration:.2f}s")
        return self._succeeded(f"VM deallocated ({duration:.0f}s)")
