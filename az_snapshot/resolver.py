"""
Azure Snapshot - Resource Resolver

Turns the resource group and VM name given on the command line (or
picked from a menu) into the identifiers the workflows need.
"""

from dataclasses import dataclass
from typing import Optional

from az_snapshot.core.exceptions import ProviderCallError, QueryFailedError
from az_snapshot.core.provider import CloudControlPlane
from az_snapshot.utils.logger import get_logger
from az_snapshot.utils.prompt import Prompter


@dataclass(frozen=True)
class ResolvedVM:
    """Everything we need to know about the target VM."""
    resource_group: str
    vm_name: str
    vm_id: str
    os_disk_id: str
    location: str


class ResourceResolver:
    """
    Resolves resource group, VM and OS disk.

    Missing names are chosen interactively from what the provider lists.
    Any failing query aborts with QueryFailedError; nothing is cached.

    Example:
        resolver = ResourceResolver(control_plane, Prompter(), logger)
        vm = resolver.resolve(group='rg1', vm_name=None, purpose='restore')
    """

    def __init__(self, control_plane: CloudControlPlane, prompter: Prompter = None, logger=None):
        self.control_plane = control_plane
        self.prompter = prompter or Prompter()
        self.logger = logger or get_logger()

    def choose_resource_group(self) -> str:
        self.logger.info("Fetching available resource groups in your subscription")
        try:
            groups = self.control_plane.list_resource_groups()
        except ProviderCallError as e:
            raise QueryFailedError("Could not fetch resource groups", str(e))

        if not groups:
            raise QueryFailedError("No resource groups found in your subscription")
        return self.prompter.choose(groups, "Choose resource group:")

    def choose_vm(self, group: str, purpose: str) -> str:
        self.logger.info(f"Fetching vm names in resource group '{group}'")
        try:
            names = self.control_plane.list_vm_names(group)
        except ProviderCallError as e:
            raise QueryFailedError(f"Could not fetch vm names in resource group '{group}'", str(e))

        if not names:
            raise QueryFailedError(f"No VMs found in resource group '{group}'")
        return self.prompter.choose(names, f"Choose vm name for which to {purpose} a snapshot:")

    def choose_snapshot(self, group: str, vm_name: str) -> str:
        """Pick one of the snapshots in the group (restore only)."""
        self.logger.info(f"Fetching available snapshots in group '{group}'")
        try:
            names = self.control_plane.list_snapshot_names(group)
        except ProviderCallError as e:
            raise QueryFailedError(f"Could not fetch snapshots in group '{group}'", str(e))

        if not names:
            raise QueryFailedError(f"No snapshots found in group '{group}'")
        return self.prompter.choose(names, f"Choose snapshot to restore to vm {vm_name}:")

    def resolve(self, group: Optional[str] = None, vm_name: Optional[str] = None,
                purpose: str = 'create') -> ResolvedVM:
        """
        Resolve the target VM.

        Args:
            group: Resource group, or None to choose one
            vm_name: VM name, or None to choose one
            purpose: 'create' or 'restore' (used in the menu title)

        Returns:
            ResolvedVM

        Raises:
            QueryFailedError: If any provider query fails
        """
        if not group:
            group = self.choose_resource_group()
        if not vm_name:
            vm_name = self.choose_vm(group, purpose)

        self.logger.info(f"Selected VM '{vm_name}' in resource group '{group}'")

        self.logger.info("Getting VM ID")
        try:
            vm_id = self.control_plane.get_vm_id(group, vm_name)
        except ProviderCallError as e:
            raise QueryFailedError(f"Could not find VM '{vm_name}' in resource group '{group}'", str(e))
        self.logger.info(f"VM ID: {vm_id}")

        try:
            os_disk_id, location = self.control_plane.get_vm_os_disk_and_location(vm_id)
        except ProviderCallError as e:
            raise QueryFailedError("Could not get ID of the OS disk", str(e))
        self.logger.debug(f"OS disk: {os_disk_id}, location: {location}")

        return ResolvedVM(
            resource_group=group,
            vm_name=vm_name,
            vm_id=vm_id,
            os_disk_id=os_disk_id,
            location=location
        )
