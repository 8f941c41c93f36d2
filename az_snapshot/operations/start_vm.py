"""
Azure Snapshot - Start VM Operation

Starts a VM instance.
"""

import time

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.operations.base import BaseOperation, OperationResult


class StartVMOperation(BaseOperation):
    """
    Starts a VM.

    Starting a deallocated VM can fail when the region has no capacity
    left for the VM size; the orchestrator decides what to tell the
    operator in that case.
    """

    @property
    def name(self) -> str:
        return "Start VM"

    def execute(self, vm_id: str) -> OperationResult:
        """
        Start the VM.

        Args:
            vm_id: ID of the VM to start

        Returns:
            OperationResult with success status
        """

        self._log_debug(f"Executing {self.name} for {vm_id}")

        start_time = time.time()
        try:
            self.control_plane.start_vm(vm_id)
        except ProviderCallError as e:
            return self._failed("Could not start the VM", e)

        duration = time.time() - start_time
        self._log_debug(f"VM started in {duration:.2f}s")
        return self._succeeded(f"VM started ({duration:.0f}s)")
