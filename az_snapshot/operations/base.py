"""
Azure Snapshot - Base Operation

This module provides the base class for all mutating operations.
Each operation does ONE provider call and reports what happened.

Operations never undo themselves. When a later step fails, the
orchestrator reports the state the VM is in and how to continue by hand.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from az_snapshot.core.provider import CloudControlPlane


@dataclass
class OperationResult:
    """
    Result from an operation.

    Attributes:
        operation_name: Name of the operation (for display)
        success: True if operation succeeded, False if failed
        message: Human-readable message about the result
        resource_id: ID of the resource the operation produced, if any
        error: Optional error details
    """
    operation_name: str
    success: bool
    message: str
    resource_id: Optional[str] = None
    error: Optional[str] = None


class BaseOperation(ABC):
    """
    Base class for all operations.

    Every operation must:
    1. Inherit from this class
    2. Implement the execute() method
    3. Implement the name property

    Example usage:
        operation = StopVMOperation(control_plane, logger)
        result = operation.execute(vm_id=vm_id)

        if result.success:
            print("VM stopped!")
        else:
            print(f"Failed: {result.error}")
    """

    def __init__(self, control_plane: CloudControlPlane, logger=None):
        """
        Initialize operation.

        Args:
            control_plane: Provider interface used for the call
            logger: Optional logger for debug output
        """
        self.control_plane = control_plane
        self.logger = logger
        self.result: Optional[OperationResult] = None

    @abstractmethod
    def execute(self, **kwargs) -> OperationResult:
        """
        Execute the operation.

        Returns:
            OperationResult with success status
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this operation."""
        pass

    def _succeeded(self, message: str, resource_id: str = None) -> OperationResult:
        self.result = OperationResult(
            operation_name=self.name,
            success=True,
            message=message,
            resource_id=resource_id
        )
        return self.result

    def _failed(self, message: str, error: Exception) -> OperationResult:
        self._log_debug(f"{message}: {error}")
        self.result = OperationResult(
            operation_name=self.name,
            success=False,
            message=message,
            error=str(error)
        )
        return self.result

    def _log_debug(self, message: str):
        """Log debug message if logger available."""
        if self.logger:
            self.logger.debug(message)
