"""
Azure Snapshot - Command Line Interface

Usage:
    az-snapshot <create | restore> [--group <resource group>] [--name <vm name>] [snapshot name]

If resource group, vm name or snapshot name are not specified, you will
be asked to select them from a list.
"""

import argparse
import json
import sys
from typing import Any, Dict

import yaml

from az_snapshot.core.config import VERSION, CreateConfig, RestoreConfig
from az_snapshot.core.exceptions import UsageError
from az_snapshot.main import create_snapshot, restore_snapshot

PROG = 'az-snapshot'

DESCRIPTION = """\
This tool allows you to:
- Create a snapshot of the OS disk of a (running) Azure VM
- Restore the OS disk of an Azure VM from a snapshot

This tool requires the 'az' command. This can be installed by running e.g.
'pip install azure-cli' (after install run 'az login').
"""

EPILOG = """\
EXAMPLES
    To snapshot a VM, choosing resource group and VM from a list:
        $ az-snapshot create

    To snapshot vm1 in rg1 under the name before-upgrade:
        $ az-snapshot create -g rg1 -n vm1 before-upgrade

    To restore vm1 from that snapshot:
        $ az-snapshot restore -g rg1 -n vm1 before-upgrade

NOTES
    Restoring shuts the VM down and destroys its current OS disk.
    The snapshot remains available.
"""


class OutputFormatter:
    """
    Format the result record of a run.

    Supports: json, yaml, table, csv
    """

    @staticmethod
    def format_output(data: Dict[str, Any], format_type: str = 'table') -> str:
        """Format output based on format type."""
        if format_type == 'json':
            return json.dumps(data, indent=2)
        elif format_type == 'yaml':
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        elif format_type == 'table':
            return OutputFormatter._format_table(data)
        elif format_type == 'csv':
            return OutputFormatter._format_csv(data)
        else:
            return str(data)

    @staticmethod
    def _format_table(data: Dict[str, Any]) -> str:
        """Format as a two column table."""
        key_width = max(len(str(k)) for k in data)
        value_width = max(len(str(v)) for v in data.values())
        border = "-" * (key_width + value_width + 5)

        lines = ["+" + border + "+"]
        for key, value in data.items():
            lines.append(f"| {key:{key_width}} | {str(value):{value_width}} |")
        lines.append("+" + border + "+")
        return "\n".join(lines)

    @staticmethod
    def _format_csv(data: Dict[str, Any]) -> str:
        """Format as CSV."""
        keys = ",".join(data.keys())
        values = ",".join(str(v) for v in data.values())
        return f"{keys}\n{values}"


class SnapshotArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser.

    Returns:
        Configured ArgumentParser
    """

    parser = SnapshotArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{PROG} v{VERSION}'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        metavar='<create | restore>',
        help='Command to execute'
    )

    # CREATE COMMAND
    create_parser_ = subparsers.add_parser(
        'create',
        help='Create a snapshot of the OS disk of a VM',
        description='Create a snapshot of the OS disk of a (running) Azure VM.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    _add_common_args(create_parser_)

    # RESTORE COMMAND
    restore_parser = subparsers.add_parser(
        'restore',
        help='Restore the OS disk of a VM from a snapshot',
        description='Restore the OS disk of an Azure VM from a snapshot. '
                    'The VM is stopped, its OS disk replaced by a new disk created '
                    'from the snapshot, and the old disk deleted once the VM runs again.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    _add_common_args(restore_parser)
    _add_restore_args(restore_parser)

    return parser


def _add_common_args(parser: argparse.ArgumentParser):
    """Add arguments common to all commands."""

    parser.add_argument(
        'snapshot_name',
        nargs='?',
        metavar='SNAPSHOT_NAME',
        help='Name of the snapshot. Asked for (create) or chosen from a list (restore) if omitted.'
    )

    target = parser.add_argument_group('TARGET FLAGS')
    target.add_argument(
        '-g', '--group',
        metavar='GROUP',
        help='Resource group of the VM. Chosen from a list if omitted.'
    )
    target.add_argument(
        '-n', '--name',
        metavar='VM_NAME',
        help='Virtual machine name. Chosen from a list if omitted.'
    )

    output = parser.add_argument_group('OUTPUT FLAGS')
    output.add_argument(
        '--format',
        metavar='FORMAT',
        choices=['json', 'yaml', 'table', 'csv', 'disable'],
        default='table',
        help='Format of the result summary. One of: json, yaml, table, csv, disable. Default: table'
    )
    output.add_argument(
        '--verbosity',
        metavar='VERBOSITY',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        default='info',
        help='Logging verbosity. One of: debug, info, warning, error, critical. Default: info'
    )
    output.add_argument(
        '--log-file',
        metavar='LOG_FILE',
        help='Write logs to this file.'
    )
    output.add_argument(
        '--no-progress',
        action='store_true',
        help='Do not show a progress bar.'
    )

    other = parser.add_argument_group('OTHER FLAGS')
    other.add_argument(
        '--dry-run',
        action='store_true',
        help='Print what would be done without changing anything.'
    )


def _add_restore_args(parser: argparse.ArgumentParser):
    """Add restore-specific arguments."""

    restore_group = parser.add_argument_group('RESTORE FLAGS')
    restore_group.add_argument(
        '--keep-old-disk',
        action='store_true',
        help='Keep the old OS disk after the VM runs on the restored disk.'
    )


def validate_args(args: argparse.Namespace):
    """
    Validate arguments that argparse accepts but we don't.

    Raises:
        UsageError: On an invalid value
    """
    for flag, value in (('--group', args.group), ('--name', args.name)):
        if value is not None and not value.strip():
            raise UsageError(f"'{flag}' option requires an argument")


VERBOSITY_MAP = {
    'debug': 'DEBUG',
    'info': 'INFO',
    'warning': 'WARNING',
    'error': 'ERROR',
    'critical': 'CRITICAL'
}


def args_to_create_config(args: argparse.Namespace) -> CreateConfig:
    """Convert arguments to CreateConfig."""
    return CreateConfig(
        log_level=VERBOSITY_MAP.get(args.verbosity, 'INFO'),
        log_file=args.log_file,
        dry_run=args.dry_run,
        show_progress=not args.no_progress
    )


def args_to_restore_config(args: argparse.Namespace) -> RestoreConfig:
    """Convert arguments to RestoreConfig."""
    return RestoreConfig(
        delete_old_disk=not args.keep_old_disk,
        log_level=VERBOSITY_MAP.get(args.verbosity, 'INFO'),
        log_file=args.log_file,
        dry_run=args.dry_run,
        show_progress=not args.no_progress
    )


def _print_result(result: Dict[str, Any], format_type: str):
    if format_type != 'disable':
        print(OutputFormatter.format_output(result, format_type))


def handle_create(args: argparse.Namespace) -> int:
    """Handle create command."""
    result = create_snapshot(
        group=args.group,
        vm_name=args.name,
        snapshot_name=args.snapshot_name,
        config=args_to_create_config(args)
    )
    if result is None:
        return 1
    _print_result(result, args.format)
    return 0


def handle_restore(args: argparse.Namespace) -> int:
    """Handle restore command."""
    result = restore_snapshot(
        group=args.group,
        vm_name=args.name,
        snapshot_name=args.snapshot_name,
        config=args_to_restore_config(args)
    )
    if result is None:
        return 1
    _print_result(result, args.format)
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""

    parser = create_parser()

    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help()
        return 1

    try:
        args = parser.parse_args(argv)
        if args.command is None:
            raise UsageError("Missing command. Allowed commands: 'create' and 'restore'")
        validate_args(args)

        if args.command == 'create':
            return handle_create(args)
        elif args.command == 'restore':
            return handle_restore(args)
        else:
            raise UsageError(f"Don't know how to handle command {args.command}")

    except UsageError as e:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        print(f"ERROR: ({PROG}) {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
