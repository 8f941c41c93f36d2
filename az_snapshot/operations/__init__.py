"""
Azure Snapshot - Operations Module

One class per mutating provider call. Each operation does ONE thing and
returns an OperationResult instead of raising.

Usage:
    from az_snapshot.operations import StopVMOperation

    operation = StopVMOperation(control_plane, logger)
    result = operation.execute(vm_id=vm_id)

    if result.success:
        print(f"[OK] {result.message}")
    else:
        print(f"[X] {result.message}: {result.error}")
"""

from az_snapshot.operations.base import BaseOperation, OperationResult
from az_snapshot.operations.create_snapshot import CreateSnapshotOperation
from az_snapshot.operations.create_disk import CreateDiskOperation
from az_snapshot.operations.stop_vm import StopVMOperation, DeallocateVMOperation
from az_snapshot.operations.swap_os_disk import SwapOSDiskOperation
from az_snapshot.operations.start_vm import StartVMOperation
from az_snapshot.operations.delete_disk import DeleteDiskOperation

__all__ = [
    # Base classes
    'BaseOperation',
    'OperationResult',

    # Operations
    'CreateSnapshotOperation',
    'CreateDiskOperation',
    'StopVMOperation',
    'DeallocateVMOperation',
    'SwapOSDiskOperation',
    'StartVMOperation',
    'DeleteDiskOperation',
]
