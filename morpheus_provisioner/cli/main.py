"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing to the provisioning orchestrator
"""
import argparse
import json
import os
import sys
import traceback
from typing import Any, Dict

from morpheus_provisioner.cli.formatters import format_output
from morpheus_provisioner.domain.core.exceptions import DomainException
from morpheus_provisioner.domain.instance.spec import InstanceSpec
from morpheus_provisioner.infrastructure.exceptions import InfrastructureError
from morpheus_provisioner.infrastructure.logging.logger import get_logger

OUTPUT_FORMATS = ['json', 'yaml', 'table']


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments with resource-action structure."""
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]),
        description="Morpheus instance provisioner - resolve names and provision instances",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s instances create --data @web01.json   # Create an instance from a file
  %(prog)s instances get 42                      # Show an instance by id
  %(prog)s instances get --name web01            # Show an instance by name
  %(prog)s instances delete 42 --force           # Force delete an instance
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set logging level')
    parser.add_argument('--format', choices=OUTPUT_FORMATS, default='json', help='Output format')
    parser.add_argument('--output', help='Output file (default: stdout)')
    parser.add_argument('--quiet', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='resource', help='Available resources')

    instances_parser = subparsers.add_parser('instances', help='Manage instances')
    instances_subparsers = instances_parser.add_subparsers(dest='action', help='Instance actions')

    instances_create = instances_subparsers.add_parser('create', help='Provision a new instance')
    instances_create.add_argument('--data', required=True,
                                  help='Instance configuration as JSON, or @path to a JSON file')

    instances_get = instances_subparsers.add_parser('get', help='Show an instance')
    instances_get.add_argument('instance_id', nargs='?', help='Instance ID to show')
    instances_get.add_argument('--name', help='Look the instance up by name')

    instances_update = instances_subparsers.add_parser('update', help='Update an instance')
    instances_update.add_argument('instance_id', help='Instance ID to update')
    instances_update.add_argument('--data', required=True,
                                  help='Instance configuration as JSON, or @path to a JSON file')

    instances_delete = instances_subparsers.add_parser('delete', help='Delete an instance')
    instances_delete.add_argument('instance_id', help='Instance ID to delete')
    instances_delete.add_argument('--force', action='store_true', default=None,
                                  help='Force delete even if the instance is busy')

    return parser.parse_args(argv)


def load_data(value: str) -> Dict[str, Any]:
    """Load an instance configuration from a JSON string or an @file reference."""
    if value.startswith('@'):
        with open(value[1:], 'r') as f:
            text = f.read()
    else:
        text = value
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in --data: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("--data must be a JSON object")
    return data


def execute_command(args: argparse.Namespace, app) -> Any:
    """Route the parsed command to the orchestrator."""
    orchestrator = app.orchestrator

    if args.resource != 'instances':
        raise ValueError(f"Unknown resource: {args.resource}")

    if args.action == 'create':
        spec = InstanceSpec.from_dict(load_data(args.data))
        return orchestrator.create(spec).to_dict()

    elif args.action == 'get':
        if not args.instance_id and not args.name:
            raise ValueError("Either an instance id or --name is required")
        state = orchestrator.read(instance_id=args.instance_id, name=args.name)
        if state is None:
            return {"instances": []}
        return state.to_dict()

    elif args.action == 'update':
        spec = InstanceSpec.from_dict(load_data(args.data))
        return orchestrator.update(args.instance_id, spec).to_dict()

    elif args.action == 'delete':
        orchestrator.delete(args.instance_id, force=args.force)
        return {"id": args.instance_id, "deleted": True}

    raise ValueError(f"Unknown action: {args.action}")


def main(argv=None) -> None:
    """Main CLI entry point."""
    try:
        args = parse_args(argv)
        logger = get_logger(__name__)

        if not args.resource:
            print("Error: No resource specified. Use --help for usage information.")
            sys.exit(1)

        if not args.action:
            print(f"Error: No action specified for {args.resource}. Use --help for usage information.")
            sys.exit(1)

        from morpheus_provisioner.bootstrap import create_application

        try:
            app = create_application(args.config, log_level=args.log_level)
        except (DomainException, InfrastructureError) as e:
            print(f"Error: {e}")
            sys.exit(1)

        try:
            result = execute_command(args, app)
            formatted_output = format_output(result, args.format)

            if args.output:
                with open(args.output, 'w') as f:
                    f.write(formatted_output)
                if not args.quiet:
                    print(f"Output written to {args.output}")
            else:
                print(formatted_output)

        except (DomainException, InfrastructureError, ValueError, OSError) as e:
            logger.error("Command failed", error=str(e))
            if args.verbose:
                traceback.print_exc()
            if not args.quiet:
                print(f"Error: {e}")
            sys.exit(1)
        finally:
            app.close()

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
