"""
Azure Snapshot - Base Validator

This module provides the base class for all pre-flight validators.
Each validator checks one thing and returns pass/fail.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ValidationResult:
    """
    Result from a single validation check.

    Attributes:
        validator_name: Name of the validator (for display)
        passed: True if validation passed, False if failed
        message: Human-readable message about the result
        details: Optional dict with extra info (e.g., 'fix', 'path')
    """
    validator_name: str
    passed: bool
    message: str
    details: Optional[dict] = None


class ValidationResults:
    """
    Collection of validation results.
    """

    def __init__(self):
        self.results: List[ValidationResult] = []

    def add(self, result: ValidationResult):
        """Add a validation result."""
        self.results.append(result)

    def all_passed(self) -> bool:
        """Check if all validations passed."""
        return all(r.passed for r in self.results)

    def get_failures(self) -> List[ValidationResult]:
        """Get only failed validations."""
        return [r for r in self.results if not r.passed]

    def get(self, validator_name: str) -> Optional[ValidationResult]:
        """Get the result of one validator by name."""
        for result in self.results:
            if result.validator_name == validator_name:
                return result
        return None


class BaseValidator(ABC):
    """
    Base class for all validators.

    To create a new validator:
    1. Inherit from this class
    2. Implement the validate() method
    3. Implement the name property
    """

    @abstractmethod
    def validate(self) -> ValidationResult:
        """
        Run the validation check.

        Returns:
            ValidationResult with pass/fail and message
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this validator."""
        pass


class ValidationRunner:
    """
    Runs multiple validators and collects results.

    Example:
        runner = ValidationRunner()
        runner.add(AzureCLIValidator())

        results = runner.run_all(logger)
        if not results.all_passed():
            ...
    """

    def __init__(self):
        self.validators: List[BaseValidator] = []

    def add(self, validator: BaseValidator):
        """Add a validator to the chain."""
        self.validators.append(validator)

    def run_all(self, logger=None) -> ValidationResults:
        """
        Run all validators and collect results.

        Args:
            logger: Optional logger for output

        Returns:
            ValidationResults with all results
        """
        results = ValidationResults()

        for validator in self.validators:
            if logger:
                logger.debug(f"Running validator: {validator.name}")

            result = validator.validate()

            if logger:
                status = "PASS" if result.passed else "FAIL"
                logger.debug(f"  {status}: {result.message}")

            results.add(result)

        return results
