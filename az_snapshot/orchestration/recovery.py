"""
Azure Snapshot - Recovery Instructions

A failed restore is never rolled back automatically. Instead the
operator is told which state the VM is in and what to run to finish
the job by hand.
"""

from typing import List, Optional, Tuple

from az_snapshot.core.provider import CloudControlPlane
from az_snapshot.orchestration.state import POINT_OF_NO_RETURN, RestoreState

_RESTORE_ORDER = list(RestoreState)

SAFE_TO_RERUN = "No changes were made to the VM. It is safe to run the restore again."


def is_past_point_of_no_return(state: RestoreState) -> bool:
    """True once the workflow has started changing the VM itself."""
    return _RESTORE_ORDER.index(state) >= _RESTORE_ORDER.index(POINT_OF_NO_RETURN)


def start_failure_commands(control_plane: CloudControlPlane, vm_id: str,
                           old_disk_id: str) -> List[Tuple[str, str]]:
    """The two manual steps left when the VM won't start on its new disk."""
    return [
        ("Start the VM", control_plane.start_vm_command(vm_id)),
        ("Delete the old disk", control_plane.delete_disk_command(old_disk_id)),
    ]


def restore_recovery(state: RestoreState, control_plane: CloudControlPlane, vm_id: str,
                     old_disk_id: str, new_disk_id: Optional[str] = None) -> str:
    """
    Describe the resource state after a restore step failed.

    Args:
        state: The step that failed
        control_plane: Used to render the manual commands
        vm_id: ID of the VM being restored
        old_disk_id: ID of the OS disk the VM had before the restore
        new_disk_id: ID of the disk created from the snapshot, if any

    Returns:
        Text for the operator
    """
    if not is_past_point_of_no_return(state):
        text = SAFE_TO_RERUN
        if new_disk_id:
            text += (f"\nThe disk created from the snapshot is not in use and can be deleted:"
                     f"\n  {control_plane.delete_disk_command(new_disk_id)}")
        return text

    finish = [
        control_plane.set_os_disk_command(vm_id, new_disk_id),
        control_plane.start_vm_command(vm_id),
        control_plane.delete_disk_command(old_disk_id),
    ]

    if state == RestoreState.STOP_VM:
        text = ("The VM may be partially stopped. It still uses the old disk, which is intact."
                "\nThe new disk is created but not attached. To finish manually run:")
        steps = [control_plane.deallocate_vm_command(vm_id)] + finish
    elif state == RestoreState.DEALLOCATE_VM:
        text = ("VM stopped, but not deallocated. It still references the old disk, which is intact."
                "\nTo finish manually run:")
        steps = [control_plane.deallocate_vm_command(vm_id)] + finish
    elif state == RestoreState.ATTACH_NEW_DISK:
        text = ("VM deallocated, old disk intact and still attached."
                "\nTo finish manually run:")
        steps = finish
    elif state == RestoreState.START_VM:
        text = ("New disk attached, but the VM may not be running. The old disk is intact."
                "\nTo finish manually run:")
        steps = finish[1:]
    elif state == RestoreState.DELETE_OLD_DISK:
        text = ("The VM runs on the new disk. The old disk may not have been deleted."
                "\nTo delete it manually run:")
        steps = finish[2:]
    else:
        raise ValueError(f"No recovery steps for state '{state.value}'")

    for command in steps:
        text += f"\n  {command}"
    return text
