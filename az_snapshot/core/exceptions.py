"""
Azure Snapshot - Custom Exception Classes

This module defines all custom exceptions used by the snapshot tool.
Each exception carries enough context for the operator to know which
step failed and what state the VM was left in.
"""


class SnapshotToolError(Exception):
    """
    Base exception for all snapshot tool errors.

    All custom exceptions inherit from this, making it easy to catch
    any tool-specific error with a single except clause.
    """
    pass


class UsageError(SnapshotToolError):
    """
    Raised when the command line is malformed.

    Examples:
    - Unknown option
    - Option given without its value
    - Unrecognized command
    """
    pass


class DependencyMissingError(SnapshotToolError):
    """
    Raised when the 'az' command cannot be found.
    """

    def __init__(self, executable: str, fix: str = None):
        """
        Args:
            executable: Name of the command we looked for
            fix: Suggested fix (e.g., "pip install azure-cli")
        """
        self.executable = executable
        self.fix = fix

        message = (f"Could not find the '{executable}' command in the current path. "
                   f"Make sure azure-cli is installed and in the current path.")
        if fix:
            message += f"\n\nFix: {fix}"
        super().__init__(message)


class ProviderCallError(SnapshotToolError):
    """
    Raised when an 'az' invocation exits with a non-zero status.
    """

    def __init__(self, command: list, returncode: int, stderr: str = ''):
        """
        Args:
            command: Full argument list that was executed
            returncode: Exit status of the process
            stderr: Captured standard error
        """
        self.command = command
        self.returncode = returncode
        self.stderr = (stderr or '').strip()

        message = f"'{' '.join(command)}' exited with status {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class QueryFailedError(SnapshotToolError):
    """
    Raised when a read-only provider call fails.

    Nothing has been mutated yet, so the run is safe to repeat.
    """

    def __init__(self, message: str, reason: str = None):
        """
        Args:
            message: What we were trying to fetch
            reason: Underlying provider error, if any
        """
        self.reason = reason

        full_message = message
        if reason:
            full_message += f"\n  Reason: {reason}"
        super().__init__(full_message)


class OperationFailedError(SnapshotToolError):
    """
    Raised when a mutating provider call fails.

    The recovery text describes the state the resources were left in,
    so the operator can continue by hand.
    """

    def __init__(self, operation_name: str, reason: str, recovery: str = None):
        """
        Args:
            operation_name: Name of the failing step (e.g., 'Stop VM')
            reason: Why it failed
            recovery: State of the resources and how to continue
        """
        self.operation_name = operation_name
        self.reason = reason
        self.recovery = recovery

        message = f"Operation '{operation_name}' failed: {reason}"
        if recovery:
            message += f"\n\n{recovery}"
        super().__init__(message)


class VMStartError(OperationFailedError):
    """
    Raised when the VM does not start on its new OS disk.

    The old disk is kept. The operator must start the VM and delete the
    old disk manually, using the commands listed in `commands`.
    """

    def __init__(self, reason: str, vm_id: str, old_disk_id: str, commands: list):
        """
        Args:
            reason: Why the start failed
            vm_id: ID of the VM
            old_disk_id: ID of the disk that was replaced
            commands: Remediation commands, in the order to run them
        """
        self.vm_id = vm_id
        self.old_disk_id = old_disk_id
        self.commands = commands

        recovery = "Starting the VM failed. You need to manually:"
        for description, command in commands:
            recovery += f"\n- {description}: '{command}'"
        recovery += ("\n(Because the VM was deallocated, starting sometimes fails when Azure does not have"
                     "\n enough VMs of the required type available)")

        super().__init__("Start VM", reason, recovery)


class UserAbortError(SnapshotToolError):
    """
    Raised when the operator declines a confirmation prompt.

    Not an error as such, but it still ends the run with a non-zero status.
    """

    def __init__(self, message: str = "Aborted"):
        super().__init__(message)
