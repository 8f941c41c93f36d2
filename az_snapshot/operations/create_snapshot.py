"""
Azure Snapshot - Create Snapshot Operation

Creates a snapshot of a (possibly running) VM's OS disk.
"""

import time

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.operations.base import BaseOperation, OperationResult


class CreateSnapshotOperation(BaseOperation):
    """
    Creates a snapshot of a managed disk.

    The snapshot lives independently of the disk it was taken from.

    Example:
        operation = CreateSnapshotOperation(control_plane, logger)
        result = operation.execute(
            group='rg1',
            snapshot_name='before-upgrade',
            location='westeurope',
            source_disk_id=disk_id
        )
        print(result.resource_id)
    """

    @property
    def name(self) -> str:
        return "Create Snapshot"

    def execute(self, group: str, snapshot_name: str, location: str,
                source_disk_id: str) -> OperationResult:
        """
        Create the snapshot.

        Args:
            group: Resource group the snapshot is created in
            snapshot_name: Name for the new snapshot
            location: Azure region (same as the disk)
            source_disk_id: ID of the disk to snapshot

        Returns:
            OperationResult with the snapshot ID in resource_id
        """

        self._log_debug(f"Executing {self.name}: {snapshot_name}")
        self._log_debug(f"  Source disk: {source_disk_id}")

        start_time = time.time()
        try:
            snapshot_id = self.control_plane.create_snapshot(
                group, snapshot_name, location, source_disk_id
            )
        except ProviderCallError as e:
            return self._failed("Error creating snapshot", e)

        duration = time.time() - start_time
        self._log_debug(f"Snapshot created in {duration:.2f}s")

        return self._succeeded(f"Snapshot created ({duration:.0f}s)", resource_id=snapshot_id)
