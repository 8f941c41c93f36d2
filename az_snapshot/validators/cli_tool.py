"""
Azure Snapshot - Azure CLI Validator

Validates that the 'az' command is installed and on PATH.
"""

from az_snapshot.core.exceptions import DependencyMissingError
from az_snapshot.core.provider import find_az_command
from az_snapshot.validators.base import BaseValidator, ValidationResult


class AzureCLIValidator(BaseValidator):
    """
    Validates that the Azure CLI can be found.

    On success the resolved path is returned in details['path'].

    Example:
        result = AzureCLIValidator().validate()
        if result.passed:
            az = AzureCLI(executable=result.details['path'])
    """

    def __init__(self, executable: str = 'az'):
        """
        Args:
            executable: Command name to look for
        """
        self.executable = executable

    @property
    def name(self) -> str:
        return "Azure CLI"

    def validate(self) -> ValidationResult:
        try:
            path = find_az_command(self.executable)
        except DependencyMissingError as e:
            return ValidationResult(
                validator_name=self.name,
                passed=False,
                message=str(e),
                details={'fix': e.fix}
            )

        return ValidationResult(
            validator_name=self.name,
            passed=True,
            message=f"Using '{path}'",
            details={'path': path}
        )
