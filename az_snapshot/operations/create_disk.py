"""
Azure Snapshot - Create Disk Operation

Creates a new managed disk from a snapshot.
"""

import time

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.operations.base import BaseOperation, OperationResult


class CreateDiskOperation(BaseOperation):
    """
    Creates a new managed disk with a snapshot as its source.
    """

    @property
    def name(self) -> str:
        return "Create Disk"

    def execute(self, group: str, disk_name: str, location: str, sku: str,
                snapshot_id: str) -> OperationResult:
        """
        Create a new disk.

        Args:
            group: Resource group for the disk
            disk_name: Name for the new disk
            location: Azure region
            sku: Storage redundancy tier (e.g., 'Standard_LRS')
            snapshot_id: ID of the source snapshot

        Returns:
            OperationResult with the disk ID in resource_id
        """

        self._log_debug(f"Executing {self.name}: {disk_name}")
        self._log_debug(f"  SKU: {sku}, Location: {location}")
        self._log_debug(f"  Source snapshot: {snapshot_id}")

        start_time = time.time()
        try:
            disk_id = self.control_plane.create_disk(group, disk_name, location, sku, snapshot_id)
        except ProviderCallError as e:
            return self._failed("Could not create a new disk from snapshot", e)

        duration = time.time() - start_time
        self._log_debug(f"Disk created in {duration:.2f}s")

        return self._succeeded(f"Disk created ({duration:.0f}s)", resource_id=disk_id)
