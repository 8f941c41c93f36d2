"""
Azure Snapshot - Cloud Control Plane

This module is the only place that talks to Azure. Everything else goes
through the CloudControlPlane interface, so a test double can stand in
for the real 'az' command.

AzureCLI runs 'az' as a subprocess. A call succeeds when the process
exits with status 0; query output is read in tsv format.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from az_snapshot.core.exceptions import DependencyMissingError, ProviderCallError
from az_snapshot.utils.logger import log_az_call, log_az_response

AZ_INSTALL_FIX = "pip install azure-cli (after install run 'az login')"


class CloudControlPlane(ABC):
    """
    Query and mutation interface to the cloud provider.

    Every method blocks until the provider answers. Failures raise
    ProviderCallError; callers decide whether that is fatal.
    """

    #: Command shown to the operator in manual remediation steps
    executable = 'az'

    # Queries

    @abstractmethod
    def list_resource_groups(self) -> List[str]:
        """Names of all resource groups in the active subscription."""

    @abstractmethod
    def list_vm_names(self, group: str) -> List[str]:
        """Names of all VMs in a resource group."""

    @abstractmethod
    def list_snapshot_names(self, group: str) -> List[str]:
        """Names of all snapshots in a resource group."""

    @abstractmethod
    def get_vm_id(self, group: str, vm_name: str) -> str:
        """Resource ID of a VM."""

    @abstractmethod
    def get_vm_os_disk_and_location(self, vm_id: str) -> Tuple[str, str]:
        """OS disk ID and location of a VM, fetched in one call."""

    @abstractmethod
    def get_vm_os_disk_id(self, vm_id: str) -> str:
        """OS disk ID currently attached to a VM."""

    @abstractmethod
    def get_snapshot_id(self, group: str, snapshot_name: str) -> str:
        """Resource ID of a snapshot."""

    # Mutations

    @abstractmethod
    def create_snapshot(self, group: str, snapshot_name: str, location: str,
                        source_disk_id: str) -> str:
        """Snapshot a disk. Returns the snapshot ID."""

    @abstractmethod
    def create_disk(self, group: str, disk_name: str, location: str, sku: str,
                    source_snapshot_id: str) -> str:
        """Create a managed disk from a snapshot. Returns the disk ID."""

    @abstractmethod
    def stop_vm(self, vm_id: str) -> None:
        """Power off a VM."""

    @abstractmethod
    def deallocate_vm(self, vm_id: str) -> None:
        """Release the compute resources of a stopped VM."""

    @abstractmethod
    def set_os_disk(self, vm_id: str, disk_id: str) -> None:
        """Point the VM's OS disk reference at another managed disk."""

    @abstractmethod
    def start_vm(self, vm_id: str) -> None:
        """Start a VM."""

    @abstractmethod
    def delete_disk(self, disk_id: str) -> None:
        """Delete a managed disk."""

    # Remediation commands

    def start_vm_command(self, vm_id: str) -> str:
        """Command line an operator can run to start the VM by hand."""
        return f"{self.executable} vm start --ids {vm_id}"

    def delete_disk_command(self, disk_id: str) -> str:
        """Command line an operator can run to delete a disk by hand."""
        return f"{self.executable} disk delete --ids {disk_id}"

    def set_os_disk_command(self, vm_id: str, disk_id: str) -> str:
        """Command line an operator can run to swap the OS disk by hand."""
        return f"{self.executable} vm update --ids {vm_id} --os-disk {disk_id}"

    def deallocate_vm_command(self, vm_id: str) -> str:
        """Command line an operator can run to deallocate the VM by hand."""
        return f"{self.executable} vm deallocate --ids {vm_id}"


def find_az_command(name: str = 'az') -> str:
    """
    Locate the 'az' executable on PATH.

    Args:
        name: Command name to look for

    Returns:
        Absolute path of the executable

    Raises:
        DependencyMissingError: If it is not installed
    """
    path = shutil.which(name)
    if not path:
        raise DependencyMissingError(name, fix=AZ_INSTALL_FIX)
    return path


class AzureCLI(CloudControlPlane):
    """
    CloudControlPlane backed by the Azure CLI.

    Usage:
        az = AzureCLI()
        groups = az.list_resource_groups()
    """

    def __init__(self, executable: Optional[str] = None, logger=None):
        """
        Args:
            executable: Path to 'az'. Looked up on PATH if not given.
            logger: Optional logger for debug output
        """
        self.executable = executable or find_az_command()
        self.logger = logger or logging.getLogger('az_snapshot')

    def _run(self, args: List[str], output: str = 'tsv') -> str:
        """
        Run one 'az' command and return its stripped stdout.

        Raises:
            ProviderCallError: On a non-zero exit status
        """
        command = [self.executable] + args + ['-o', output]
        log_az_call(self.logger, command)

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise ProviderCallError(command, -1, str(e))

        if result.returncode != 0:
            raise ProviderCallError(command, result.returncode, result.stderr)

        stdout = result.stdout.strip()
        log_az_response(self.logger, stdout)
        return stdout

    def _run_list(self, args: List[str]) -> List[str]:
        """Run a query that yields one value per line."""
        return [line.strip() for line in self._run(args).splitlines() if line.strip()]

    # Queries

    def list_resource_groups(self) -> List[str]:
        return self._run_list(['group', 'list', '--query', '[].name'])

    def list_vm_names(self, group: str) -> List[str]:
        return self._run_list(['vm', 'list', '-g', group, '--query', '[].name'])

    def list_snapshot_names(self, group: str) -> List[str]:
        return self._run_list(['snapshot', 'list', '-g', group, '--query', '[].name'])

    def get_vm_id(self, group: str, vm_name: str) -> str:
        return self._run(['vm', 'show', '-g', group, '-n', vm_name, '--query', 'id'])

    def get_vm_os_disk_and_location(self, vm_id: str) -> Tuple[str, str]:
        out = self._run([
            'vm', 'show', '--ids', vm_id,
            '--query', "[storageProfile.osDisk.managedDisk.id, location] | join(',', @)"
        ])
        disk_id, _, location = out.partition(',')
        return disk_id, location

    def get_vm_os_disk_id(self, vm_id: str) -> str:
        return self._run(['vm', 'show', '--ids', vm_id,
                          '--query', 'storageProfile.osDisk.managedDisk.id'])

    def get_snapshot_id(self, group: str, snapshot_name: str) -> str:
        return self._run(['snapshot', 'show', '-n', snapshot_name, '-g', group, '--query', 'id'])

    # Mutations

    def create_snapshot(self, group: str, snapshot_name: str, location: str,
                        source_disk_id: str) -> str:
        return self._run(['snapshot', 'create', '-g', group, '-n', snapshot_name,
                          '-l', location, '--source', source_disk_id, '--query', 'id'])

    def create_disk(self, group: str, disk_name: str, location: str, sku: str,
                    source_snapshot_id: str) -> str:
        return self._run(['disk', 'create', '-n', disk_name, '-g', group,
                          '--location', location, '--sku', sku,
                          '--source', source_snapshot_id, '--query', 'id'])

    def stop_vm(self, vm_id: str) -> None:
        self._run(['vm', 'stop', '--ids', vm_id], output='none')

    def deallocate_vm(self, vm_id: str) -> None:
        self._run(['vm', 'deallocate', '--ids', vm_id], output='none')

    def set_os_disk(self, vm_id: str, disk_id: str) -> None:
        self._run(['vm', 'update', '--ids', vm_id, '--os-disk', disk_id], output='none')

    def start_vm(self, vm_id: str) -> None:
        self._run(['vm', 'start', '--ids', vm_id], output='none')

    def delete_disk(self, disk_id: str) -> None:
        self._run(['disk', 'delete', '--ids', disk_id, '--yes'], output='none')
