"""
CLI Module

Architectural Intent:
- Command-line interface for the jumphost tool
- Entry point for all user interactions
- Delegates to application use cases via composition root
- The only place that turns a JumphostError into a process exit code
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import logging
import sys
import traceback

from jumphost import composition_root
from jumphost.application.dtos.update_dtos import UpdateJumphostRequest
from jumphost.domain.errors import (
    CloudApiError,
    ConfigurationError,
    JumphostError,
    LookupFailedError,
    NetworkError,
    ValidationError,
)
from jumphost.infrastructure.config import load_config
from jumphost.infrastructure.logging import configure_logging, level_from_name

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_LOOKUP = 3
EXIT_NETWORK = 4
EXIT_CLOUD = 5

UPDATE_DESCRIPTION = """\
Update an existing jumphost AWS Security Group for emergency SSH access to a cluster's VMs.

This command updates the IP allow list of a running jumphost. The jumphost
must already exist. It requires valid AWS credentials and the id of the
public subnet the jumphost runs in.

When the cluster's API server is accessible, prefer "oc debug node".
"""

UPDATE_EPILOG = """\
examples:
  jumphost update --subnet-id subnet-0123456789abcdef0 --set-self-ip
  jumphost update --subnet-id subnet-0123456789abcdef0 --set-ip 1.2.3.4
"""


def exit_code_for(error: JumphostError) -> int:
    if isinstance(error, (ConfigurationError, ValidationError)):
        return EXIT_USAGE
    if isinstance(error, LookupFailedError):
        return EXIT_LOOKUP
    if isinstance(error, NetworkError):
        return EXIT_NETWORK
    if isinstance(error, CloudApiError):
        return EXIT_CLOUD
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jumphost",
        description="Manage the emergency SSH jumphost for a cluster",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output, AWS SDK retries and tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs as JSON lines"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to config file (default: jumphost.json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    update_parser = subparsers.add_parser(
        "update",
        help="Update an existing jumphost AWS Security Group",
        description=UPDATE_DESCRIPTION,
        epilog=UPDATE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    update_parser.add_argument(
        "--subnet-id", required=True, help="Public subnet ID the jumphost runs in"
    )
    ip_source = update_parser.add_mutually_exclusive_group(required=True)
    ip_source.add_argument(
        "--set-ip", help="Update AWS Security Group to allow specified IP"
    )
    ip_source.add_argument(
        "--set-self-ip",
        action="store_true",
        help="Update AWS Security Group to allow your auto-discovered egress IP",
    )

    return parser


async def run_update(args: argparse.Namespace, verbose: bool) -> int:
    try:
        config = load_config(args.config)
        if not (args.verbose or args.debug):
            configure_logging(level=level_from_name(config.log_level), json_format=args.json_logs)
        container = composition_root.create_container(config, subnet_id=args.subnet_id)
        request = UpdateJumphostRequest.for_session(
            container.session,
            set_ip=args.set_ip,
            set_self_ip=args.set_self_ip,
        )

        source = request.set_ip or "self-discovered IP"
        print(f"[*] Updating jumphost security group in {request.subnet_id} for {source}...")
        response = await container.update_jumphost.execute(request)
    except JumphostError as e:
        print(f"[-] Update Failed: {e}")
        if verbose:
            traceback.print_exc()
        return exit_code_for(e)

    print(f"[+] {response.message}")
    return EXIT_OK


async def async_main():
    parser = build_parser()
    args = parser.parse_args()

    # Configure logging based on flags
    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=args.json_logs)
    elif args.verbose:
        configure_logging(level=logging.INFO, json_format=args.json_logs)
    else:
        configure_logging(level=logging.WARNING, json_format=args.json_logs)

    if args.command == "update":
        code = await run_update(args, verbose=args.debug)
        if code != EXIT_OK:
            sys.exit(code)
        return

    parser.print_help()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
