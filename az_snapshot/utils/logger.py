"""
Azure Snapshot - Logging Setup

This module sets up logging for create and restore runs.

Logging Strategy:
- INFO (default): Step-by-step progress for the operator
- DEBUG (--verbosity=debug): Every 'az' command line and its output
- WARNING: Recoverable issues (e.g., old disk could not be deleted)
- ERROR: Problems that stop the run
- CRITICAL: The VM needs manual intervention
"""

import logging
import sys
from pathlib import Path
from typing import List

LOGGER_NAME = 'az_snapshot'


class CleanFormatter(logging.Formatter):
    """
    Custom formatter for clean user-facing logs.

    - INFO: Just the message (clean)
    - WARNING/ERROR/CRITICAL: Show level with emphasis
    """

    def format(self, record):
        """Format log record based on level."""

        if record.levelno == logging.INFO:
            return record.getMessage()

        elif record.levelno == logging.WARNING:
            return f"[!]  WARNING: {record.getMessage()}"

        elif record.levelno == logging.ERROR:
            return f"[X] ERROR: {record.getMessage()}"

        elif record.levelno == logging.CRITICAL:
            return f"[!!] CRITICAL: {record.getMessage()}"

        else:
            return f"[DEBUG] {record.getMessage()}"


def setup_logging(level='INFO', log_file=None, debug=False):
    """
    Setup logging for the snapshot tool.

    Configures logging to:
    1. Output to console (stdout)
    2. Optionally write to log file
    3. Use a detailed format in debug mode

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only logs to console.
        debug: If True, use DEBUG level and detailed format

    Returns:
        logging.Logger: Configured logger instance

    Example:
        logger = setup_logging('INFO')
        logger.info("Fetching available resource groups in your subscription")
    """

    if debug:
        level = 'DEBUG'

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers (in case setup_logging called multiple times)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if debug:
        # Format: [2026-10-18 10:30:45] DEBUG [_run:142]: az call: az vm show ...
        console_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(funcName)s:%(lineno)d]: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        console_format = CleanFormatter('%(message)s')

    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)

        # File format includes more details
        file_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_file}")

    return logger


def get_logger():
    """
    Get the snapshot tool logger instance.

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(LOGGER_NAME)


# Debug logging helpers

def log_az_call(logger, command: List[str]):
    """
    Log an 'az' invocation (DEBUG level).

    Example:
        log_az_call(logger, ['az', 'vm', 'show', '--ids', vm_id])
        # Output: az call: az vm show --ids /subscriptions/...
    """
    logger.debug(f"az call: {' '.join(command)}")


def log_az_response(logger, output: str, truncate: int = 200):
    """
    Log the output of an 'az' invocation (DEBUG level).

    Args:
        logger: Logger instance
        output: Captured stdout
        truncate: Max characters to log (default: 200)
    """
    if len(output) > truncate:
        output = output[:truncate] + '...'
    logger.debug(f"az response: {output}")


def print_header(logger, title: str, char='=', length=60):
    """
    Print a formatted header (INFO level).

    Example:
        print_header(logger, 'Azure Snapshot - Restore')
        # Output:
        # ============================================================
        # Azure Snapshot - Restore
        # ============================================================
    """
    logger.info(char * length)
    logger.info(title)
    logger.info(char * length)
