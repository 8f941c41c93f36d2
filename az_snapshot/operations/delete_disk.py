"""
Azure Snapshot - Delete Disk Operation

Deletes a managed disk. This cannot be undone.
"""

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.operations.base import BaseOperation, OperationResult


class DeleteDiskOperation(BaseOperation):
    """
    Deletes a disk.

    WARNING: the disk is permanently gone afterwards!
    Only use this operation at the very end, after the VM runs on its new disk.
    """

    @property
    def name(self) -> str:
        return "Delete Old Disk"

    def execute(self, disk_id: str) -> OperationResult:
        """
        Delete a disk.

        Args:
            disk_id: ID of the disk to delete

        Returns:
            OperationResult with success status
        """

        self._log_debug(f"Executing {self.name}: {disk_id}")

        try:
            self.control_plane.delete_disk(disk_id)
        except ProviderCallError as e:
            return self._failed("Could not delete the old disk", e)

        self._log_debug(f"Disk {disk_id} deleted")
        return self._succeeded("Deleted the old disk", resource_id=disk_id)
