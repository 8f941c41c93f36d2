import pytest

from az_snapshot.core.exceptions import QueryFailedError
from az_snapshot.resolver import ResourceResolver

from conftest import FakeControlPlane, OLD_DISK_ID, VM_ID, scripted_prompter


class TestResourceResolver:

    def test_names_given_skips_listing(self, fake_cloud):
        resolver = ResourceResolver(fake_cloud, scripted_prompter())

        vm = resolver.resolve('rg1', 'vm1')

        assert vm.resource_group == 'rg1'
        assert vm.vm_name == 'vm1'
        assert vm.vm_id == VM_ID
        assert vm.os_disk_id == OLD_DISK_ID
        assert vm.location == 'westeurope'
        assert fake_cloud.call_names == ['get_vm_id', 'get_vm_os_disk_and_location']

    def test_group_and_vm_chosen_from_lists(self, fake_cloud):
        prompter = scripted_prompter('2', 'vm1')
        resolver = ResourceResolver(fake_cloud, prompter)

        vm = resolver.resolve(purpose='restore')

        assert vm.resource_group == 'rg2'
        assert vm.vm_name == 'vm1'
        assert ('list_vm_names', 'rg2') in fake_cloud.calls
        assert 'Choose vm name for which to restore a snapshot:' in prompter.output.getvalue()

    def test_group_list_failure(self):
        cloud = FakeControlPlane(fail={'list_resource_groups'})
        resolver = ResourceResolver(cloud, scripted_prompter())

        with pytest.raises(QueryFailedError, match='Could not fetch resource groups'):
            resolver.resolve(vm_name='vm1')

    def test_vm_list_failure(self):
        cloud = FakeControlPlane(fail={'list_vm_names'})
        resolver = ResourceResolver(cloud, scripted_prompter())

        with pytest.raises(QueryFailedError, match="Could not fetch vm names in resource group 'rg1'"):
            resolver.resolve('rg1')

    def test_empty_vm_list(self):
        cloud = FakeControlPlane(vms=[])
        resolver = ResourceResolver(cloud, scripted_prompter())

        with pytest.raises(QueryFailedError, match="No VMs found"):
            resolver.resolve('rg1')

    def test_unknown_vm(self):
        cloud = FakeControlPlane(fail={'get_vm_id'})
        resolver = ResourceResolver(cloud, scripted_prompter())

        with pytest.raises(QueryFailedError, match="Could not find VM 'vmx' in resource group 'rg1'"):
            resolver.resolve('rg1', 'vmx')
        assert 'get_vm_os_disk_and_location' not in cloud.call_names

    def test_os_disk_lookup_failure(self):
        cloud = FakeControlPlane(fail={'get_vm_os_disk_and_location'})
        resolver = ResourceResolver(cloud, scripted_prompter())

        with pytest.raises(QueryFailedError, match='OS disk'):
            resolver.resolve('rg1', 'vm1')

    def test_choose_snapshot(self, fake_cloud):
        prompter = scripted_prompter('snap2')
        resolver = ResourceResolver(fake_cloud, prompter)

        assert resolver.choose_snapshot('rg1', 'vm1') == 'snap2'
        assert 'Choose snapshot to restore to vm vm1:' in prompter.output.getvalue()
