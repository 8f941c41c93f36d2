"""
Azure Snapshot - Validators Module

Pre-flight checks that run before any workflow logic.

Usage:
    from az_snapshot.validators import ValidationRunner, AzureCLIValidator

    runner = ValidationRunner()
    runner.add(AzureCLIValidator())
    results = runner.run_all(logger)
"""

from az_snapshot.validators.base import (
    BaseValidator,
    ValidationResult,
    ValidationResults,
    ValidationRunner
)
from az_snapshot.validators.cli_tool import AzureCLIValidator

__all__ = [
    # Base classes
    'BaseValidator',
    'ValidationResult',
    'ValidationResults',
    'ValidationRunner',

    # Validators
    'AzureCLIValidator',
]
