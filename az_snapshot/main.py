"""
Azure Snapshot - Main Entry Point

Simple entry points for the create and restore operations.

Usage:
    from az_snapshot.main import create_snapshot, restore_snapshot

    # Snapshot the OS disk of a VM
    result = create_snapshot('rg1', 'vm1', 'before-upgrade')

    # Put the VM back on that snapshot
    result = restore_snapshot('rg1', 'vm1', 'before-upgrade')

Both return a result record (dict) on success and None on failure.
"""

from typing import Optional

from az_snapshot.core.config import CreateConfig, RestoreConfig
from az_snapshot.core.exceptions import (
    SnapshotToolError,
    UserAbortError,
    VMStartError
)
from az_snapshot.core.provider import AzureCLI, CloudControlPlane
from az_snapshot.orchestration import CreateOrchestrator, RestoreOrchestrator
from az_snapshot.resolver import ResourceResolver
from az_snapshot.utils.logger import print_header, setup_logging
from az_snapshot.utils.prompt import Prompter
from az_snapshot.validators import AzureCLIValidator, ValidationRunner


def connect(logger) -> Optional[CloudControlPlane]:
    """
    Run the pre-flight checks and build the Azure CLI control plane.

    Returns:
        AzureCLI, or None if 'az' is not installed
    """
    runner = ValidationRunner()
    runner.add(AzureCLIValidator())
    results = runner.run_all(logger)

    if not results.all_passed():
        for failure in results.get_failures():
            logger.error(failure.message)
        return None

    path = results.get(AzureCLIValidator().name).details['path']
    logger.info(f"Using '{path}'")
    return AzureCLI(executable=path, logger=logger)


def _report_failure(logger, error: SnapshotToolError):
    """Log an error the way the operator needs to see it."""
    if isinstance(error, UserAbortError):
        logger.warning(str(error))
    elif isinstance(error, VMStartError):
        logger.critical(str(error))
    else:
        logger.error(str(error))


def create_snapshot(group: str = None, vm_name: str = None, snapshot_name: str = None,
                    config: CreateConfig = None, control_plane: CloudControlPlane = None,
                    prompter: Prompter = None) -> Optional[dict]:
    """
    Create a snapshot of a VM's OS disk.

    This will:
    1. Check that 'az' is installed
    2. Resolve resource group and VM (asking if not given)
    3. Ask for a snapshot name (if not given) and confirmation
    4. Snapshot the current OS disk

    Args:
        group: Resource group of the VM (optional, chosen from a list)
        vm_name: Name of the VM (optional, chosen from a list)
        snapshot_name: Name of the snapshot (optional, asked for)
        config: Optional CreateConfig
        control_plane: Provider interface (default: AzureCLI)
        prompter: Prompt implementation (default: terminal)

    Returns:
        Result record on success, None on failure or abort
    """
    config = config or CreateConfig()
    debug = config.log_level.upper() == 'DEBUG'
    logger = setup_logging(level=config.log_level, log_file=config.log_file, debug=debug)
    prompter = prompter or Prompter()

    print_header(logger, "Azure Snapshot - Create")

    try:
        if control_plane is None:
            control_plane = connect(logger)
            if control_plane is None:
                return None

        vm = ResourceResolver(control_plane, prompter, logger).resolve(group, vm_name, 'create')

        orchestrator = CreateOrchestrator(
            control_plane=control_plane,
            vm=vm,
            prompter=prompter,
            config=config,
            logger=logger
        )
        snapshot_id = orchestrator.execute(snapshot_name)

    except SnapshotToolError as e:
        _report_failure(logger, e)
        return None
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        if debug:
            logger.exception("Full traceback:")
        return None

    logger.info("Done!")
    logger.info("")

    return {
        'operation': 'create',
        'resourceGroup': vm.resource_group,
        'vmName': vm.vm_name,
        'location': vm.location,
        'snapshotName': orchestrator.snapshot_name,
        'snapshotId': snapshot_id,
        'dryRun': config.dry_run,
    }


def restore_snapshot(group: str = None, vm_name: str = None, snapshot_name: str = None,
                     config: RestoreConfig = None, control_plane: CloudControlPlane = None,
                     prompter: Prompter = None) -> Optional[dict]:
    """
    Restore a VM's OS disk from a snapshot.

    This will:
    1. Check that 'az' is installed
    2. Resolve resource group, VM and snapshot (asking if not given)
    3. Ask for confirmation
    4. Create a new disk from the snapshot
    5. Stop and deallocate the VM, swap the OS disk, start the VM
    6. Delete the old disk

    Nothing is rolled back on failure; the log says how to continue.

    Args:
        group: Resource group of the VM (optional, chosen from a list)
        vm_name: Name of the VM (optional, chosen from a list)
        snapshot_name: Snapshot to restore (optional, chosen from a list)
        config: Optional RestoreConfig
        control_plane: Provider interface (default: AzureCLI)
        prompter: Prompt implementation (default: terminal)

    Returns:
        Result record on success, None on failure or abort
    """
    config = config or RestoreConfig()
    debug = config.log_level.upper() == 'DEBUG'
    logger = setup_logging(level=config.log_level, log_file=config.log_file, debug=debug)
    prompter = prompter or Prompter()

    print_header(logger, "Azure Snapshot - Restore")

    try:
        if control_plane is None:
            control_plane = connect(logger)
            if control_plane is None:
                return None

        vm = ResourceResolver(control_plane, prompter, logger).resolve(group, vm_name, 'restore')

        orchestrator = RestoreOrchestrator(
            control_plane=control_plane,
            vm=vm,
            prompter=prompter,
            config=config,
            logger=logger
        )
        result = orchestrator.execute(snapshot_name)

    except SnapshotToolError as e:
        _report_failure(logger, e)
        return None
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        if debug:
            logger.exception("Full traceback:")
        return None

    logger.info("Done!")
    logger.info("")

    return {
        'operation': 'restore',
        'resourceGroup': vm.resource_group,
        'vmName': vm.vm_name,
        'location': vm.location,
        'snapshotName': result.snapshot_name,
        'newDiskName': result.new_disk_name,
        'newDiskId': result.new_disk_id,
        'oldDiskId': result.old_disk_id,
        'oldDiskDeleted': result.old_disk_deleted,
        'dryRun': result.dry_run,
    }
