"""Azure Snapshot - create and restore snapshots of the OS disk of Azure VMs.

Core functionality:
- Create: snapshot the OS disk of a (running) VM
- Restore: replace the OS disk of a VM with a new disk made from a snapshot

Example usage:
    >>> from az_snapshot import create_snapshot, restore_snapshot
    >>> create_snapshot('rg1', 'vm1', 'before-upgrade')
    >>> restore_snapshot('rg1', 'vm1', 'before-upgrade')
"""

from az_snapshot.core.config import VERSION
from az_snapshot.main import create_snapshot, restore_snapshot

__version__ = VERSION

__all__ = ['create_snapshot', 'restore_snapshot', '__version__']
