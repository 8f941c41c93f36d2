import io

import pytest

from az_snapshot.core.exceptions import ProviderCallError
from az_snapshot.core.provider import CloudControlPlane
from az_snapshot.resolver import ResolvedVM
from az_snapshot.utils.prompt import Prompter

SUB = '/subscriptions/0000/resourceGroups/rg1/providers/Microsoft.Compute'
VM_ID = f'{SUB}/virtualMachines/vm1'
OLD_DISK_ID = f'{SUB}/disks/vm1_OsDisk_1'
SNAPSHOT_ID = f'{SUB}/snapshots/snap1'

MUTATIONS = {'create_snapshot', 'create_disk', 'stop_vm', 'deallocate_vm',
             'set_os_disk', 'start_vm', 'delete_disk'}


class FakeControlPlane(CloudControlPlane):
    """Records every call. Methods named in `fail` raise ProviderCallError."""

    executable = '/usr/bin/az'

    def __init__(self, fail=(), groups=None, vms=None, snapshots=None):
        self.fail = set(fail)
        self.calls = []
        self.groups = ['rg1', 'rg2'] if groups is None else groups
        self.vms = ['vm1', 'vm2'] if vms is None else vms
        self.snapshots = ['snap1', 'snap2'] if snapshots is None else snapshots

    def _call(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.fail:
            raise ProviderCallError(['az', method], 1, f'{method} failed')

    @property
    def call_names(self):
        return [c[0] for c in self.calls]

    @property
    def mutation_calls(self):
        return [c for c in self.call_names if c in MUTATIONS]

    def list_resource_groups(self):
        self._call('list_resource_groups')
        return list(self.groups)

    def list_vm_names(self, group):
        self._call('list_vm_names', group)
        return list(self.vms)

    def list_snapshot_names(self, group):
        self._call('list_snapshot_names', group)
        return list(self.snapshots)

    def get_vm_id(self, group, vm_name):
        self._call('get_vm_id', group, vm_name)
        return f'{SUB}/virtualMachines/{vm_name}'

    def get_vm_os_disk_and_location(self, vm_id):
        self._call('get_vm_os_disk_and_location', vm_id)
        return OLD_DISK_ID, 'westeurope'

    def get_vm_os_disk_id(self, vm_id):
        self._call('get_vm_os_disk_id', vm_id)
        return OLD_DISK_ID

    def get_snapshot_id(self, group, snapshot_name):
        self._call('get_snapshot_id', group, snapshot_name)
        return f'{SUB}/snapshots/{snapshot_name}'

    def create_snapshot(self, group, snapshot_name, location, source_disk_id):
        self._call('create_snapshot', group, snapshot_name, location, source_disk_id)
        return f'{SUB}/snapshots/{snapshot_name}'

    def create_disk(self, group, disk_name, location, sku, source_snapshot_id):
        self._call('create_disk', group, disk_name, location, sku, source_snapshot_id)
        return f'{SUB}/disks/{disk_name}'

    def stop_vm(self, vm_id):
        self._call('stop_vm', vm_id)

    def deallocate_vm(self, vm_id):
        self._call('deallocate_vm', vm_id)

    def set_os_disk(self, vm_id, disk_id):
        self._call('set_os_disk', vm_id, disk_id)

    def start_vm(self, vm_id):
        self._call('start_vm', vm_id)

    def delete_disk(self, disk_id):
        self._call('delete_disk', disk_id)


def scripted_prompter(*answers):
    """Prompter that answers from a fixed script; running out means EOF."""
    remaining = list(answers)
    asked = []

    def fake_input(prompt):
        asked.append(prompt)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    prompter = Prompter(input_func=fake_input, output=io.StringIO())
    prompter.asked = asked
    return prompter


@pytest.fixture
def fake_cloud():
    return FakeControlPlane()


@pytest.fixture
def resolved_vm():
    return ResolvedVM(
        resource_group='rg1',
        vm_name='vm1',
        vm_id=VM_ID,
        os_disk_id=OLD_DISK_ID,
        location='westeurope'
    )
