import subprocess
from unittest.mock import Mock, patch

import pytest

from az_snapshot.core.exceptions import DependencyMissingError, ProviderCallError
from az_snapshot.core.provider import AzureCLI, find_az_command


def completed(stdout='', returncode=0, stderr=''):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestFindAzCommand:

    @patch('az_snapshot.core.provider.shutil.which')
    def test_found(self, mock_which):
        mock_which.return_value = '/usr/bin/az'
        assert find_az_command() == '/usr/bin/az'
        mock_which.assert_called_with('az')

    @patch('az_snapshot.core.provider.shutil.which')
    def test_missing(self, mock_which):
        mock_which.return_value = None
        with pytest.raises(DependencyMissingError, match="Could not find the 'az' command"):
            find_az_command()

    @patch('az_snapshot.core.provider.shutil.which')
    def test_cli_looks_up_executable_when_not_given(self, mock_which):
        mock_which.return_value = None
        with pytest.raises(DependencyMissingError):
            AzureCLI()


class TestAzureCLI:

    def setup_method(self):
        self.az = AzureCLI(executable='/usr/bin/az', logger=Mock())

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_list_resource_groups(self, mock_run):
        mock_run.return_value = completed('rg1\nrg2\n\n')

        assert self.az.list_resource_groups() == ['rg1', 'rg2']
        mock_run.assert_called_once_with(
            ['/usr/bin/az', 'group', 'list', '--query', '[].name', '-o', 'tsv'],
            capture_output=True, text=True
        )

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_list_vm_names_in_group(self, mock_run):
        mock_run.return_value = completed('vm1\n')

        assert self.az.list_vm_names('rg1') == ['vm1']
        command = mock_run.call_args[0][0]
        assert command[1:5] == ['vm', 'list', '-g', 'rg1']

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_os_disk_and_location_in_one_call(self, mock_run):
        mock_run.return_value = completed('/subs/x/disks/d1,westeurope\n')

        disk_id, location = self.az.get_vm_os_disk_and_location('/subs/x/vm1')

        assert disk_id == '/subs/x/disks/d1'
        assert location == 'westeurope'
        assert mock_run.call_count == 1
        command = mock_run.call_args[0][0]
        assert "[storageProfile.osDisk.managedDisk.id, location] | join(',', @)" in command

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_non_zero_exit_raises(self, mock_run):
        mock_run.return_value = completed(returncode=3, stderr='ResourceNotFound\n')

        with pytest.raises(ProviderCallError) as exc_info:
            self.az.get_vm_id('rg1', 'nope')

        assert exc_info.value.returncode == 3
        assert exc_info.value.stderr == 'ResourceNotFound'
        assert 'ResourceNotFound' in str(exc_info.value)

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_os_error_becomes_provider_error(self, mock_run):
        mock_run.side_effect = FileNotFoundError('az')

        with pytest.raises(ProviderCallError):
            self.az.list_resource_groups()

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_create_disk_arguments(self, mock_run):
        mock_run.return_value = completed('/subs/x/disks/new\n')

        disk_id = self.az.create_disk('rg1', 'vm1__snap1__2026-10-18_1', 'westeurope',
                                      'Standard_LRS', '/subs/x/snapshots/snap1')

        assert disk_id == '/subs/x/disks/new'
        command = mock_run.call_args[0][0]
        assert command == [
            '/usr/bin/az', 'disk', 'create', '-n', 'vm1__snap1__2026-10-18_1', '-g', 'rg1',
            '--location', 'westeurope', '--sku', 'Standard_LRS',
            '--source', '/subs/x/snapshots/snap1', '--query', 'id', '-o', 'tsv'
        ]

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_mutations_discard_output(self, mock_run):
        mock_run.return_value = completed()

        self.az.set_os_disk('/subs/x/vm1', '/subs/x/disks/new')

        command = mock_run.call_args[0][0]
        assert command == ['/usr/bin/az', 'vm', 'update', '--ids', '/subs/x/vm1',
                           '--os-disk', '/subs/x/disks/new', '-o', 'none']

    @patch('az_snapshot.core.provider.subprocess.run')
    def test_delete_disk_does_not_prompt(self, mock_run):
        mock_run.return_value = completed()

        self.az.delete_disk('/subs/x/disks/old')

        assert '--yes' in mock_run.call_args[0][0]

    def test_remediation_commands_use_executable(self):
        assert self.az.start_vm_command('/subs/x/vm1') == '/usr/bin/az vm start --ids /subs/x/vm1'
        assert self.az.delete_disk_command('/subs/x/d') == '/usr/bin/az disk delete --ids /subs/x/d'
