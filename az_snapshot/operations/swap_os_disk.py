"""
Azure Snapshot - Swap OS Disk Operation

Points a deallocated VM's OS disk reference at a different managed disk.
"""

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.operations.base import BaseOperation, OperationResult


class SwapOSDiskOperation(BaseOperation):
    """
    Attaches a new OS disk to a deallocated VM.

    The previous OS disk is detached but not deleted.
    """

    @property
    def name(self) -> str:
        return "Attach New Disk"

    def execute(self, vm_id: str, disk_id: str) -> OperationResult:
        """
        Update the VM to use another OS disk.

        Args:
            vm_id: ID of the (deallocated) VM
            disk_id: ID of the disk to boot from

        Returns:
            OperationResult with success status
        """

        self._log_debug(f"Executing {self.name}: {disk_id} -> {vm_id}")

        try:
            self.control_plane.set_os_disk(vm_id, disk_id)
        except ProviderCallError as e:
            return self._failed("Could not update the VM", e)

        return self._succeeded("VM updated", resource_id=disk_id)
