import pytest

from az_snapshot.core.config import CreateConfig
from az_snapshot.core.exceptions import OperationFailedError, UserAbortError
from az_snapshot.orchestration import CreateOrchestrator, CreateState

from conftest import FakeControlPlane, OLD_DISK_ID, SUB, scripted_prompter


def make_orchestrator(cloud, vm, *answers, **config):
    return CreateOrchestrator(
        control_plane=cloud,
        vm=vm,
        prompter=scripted_prompter(*answers),
        config=CreateConfig(**config)
    )


class TestCreateOrchestrator:

    def test_creates_snapshot_of_os_disk(self, fake_cloud, resolved_vm):
        orchestrator = make_orchestrator(fake_cloud, resolved_vm, 'y')

        snapshot_id = orchestrator.execute('nightly')

        assert snapshot_id == f'{SUB}/snapshots/nightly'
        assert fake_cloud.calls == [
            ('create_snapshot', 'rg1', 'nightly', 'westeurope', OLD_DISK_ID)
        ]
        assert orchestrator.state_tracker.history == [
            CreateState.NAME_COLLECTION,
            CreateState.CONFIRM,
            CreateState.SNAPSHOT_CREATE,
            CreateState.DONE,
        ]

    def test_prompts_until_name_given(self, fake_cloud, resolved_vm):
        orchestrator = make_orchestrator(fake_cloud, resolved_vm, '', '', 'nightly', 'y')

        orchestrator.execute()

        assert orchestrator.snapshot_name == 'nightly'
        assert fake_cloud.calls[0][2] == 'nightly'
        assert fake_cloud.call_names.count('create_snapshot') == 1

    @pytest.mark.parametrize('answer', ['n', '', 'q'])
    def test_decline_creates_nothing(self, fake_cloud, resolved_vm, answer):
        orchestrator = make_orchestrator(fake_cloud, resolved_vm, answer)

        with pytest.raises(UserAbortError):
            orchestrator.execute('nightly')

        assert fake_cloud.calls == []
        assert orchestrator.state_tracker.current == CreateState.ABORTED

    def test_provider_failure(self, resolved_vm):
        cloud = FakeControlPlane(fail={'create_snapshot'})
        orchestrator = make_orchestrator(cloud, resolved_vm, 'y')

        with pytest.raises(OperationFailedError, match="Create Snapshot"):
            orchestrator.execute('nightly')

        assert orchestrator.state_tracker.current == CreateState.FAILED

    def test_dry_run(self, fake_cloud, resolved_vm):
        orchestrator = make_orchestrator(fake_cloud, resolved_vm, 'y', dry_run=True)

        assert orchestrator.execute('nightly') is None
        assert fake_cloud.calls == []
