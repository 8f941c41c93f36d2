"""
Azure Snapshot - Configuration Management

This module manages configuration options for create and restore runs.
"""

from dataclasses import dataclass
from typing import Optional

VERSION = '1.0.0'

# Redundancy tier for disks created from a snapshot
DEFAULT_DISK_SKU = 'Standard_LRS'


@dataclass
class CreateConfig:
    """
    Configuration for snapshot creation.

    Example:
        config = CreateConfig(dry_run=True)
    """

    # Logging settings
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    # Behavior settings
    dry_run: bool = False  # Show what would happen without doing it
    show_progress: bool = True


@dataclass
class RestoreConfig:
    """
    Configuration for snapshot restore.

    Example:
        config = RestoreConfig(
            delete_old_disk=False
        )
    """

    # Disk settings
    disk_sku: str = DEFAULT_DISK_SKU
    delete_old_disk: bool = True

    # Logging settings
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    # Behavior settings
    dry_run: bool = False
    show_progress: bool = True
