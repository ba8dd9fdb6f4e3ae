"""
Main entry point for the Parcel Tracker application.

Command-line front-end over the service layer: it initializes the store once,
dispatches one command, and prints the result as JSON.

Usage Examples:
    python -m src.main health
    python -m src.main packages create --destinatario "Ana" --direccion "Calle 1"
    python -m src.main packages status 1 delivered
    python -m src.main packages list --in-transit
    python -m src.main couriers create --name "Luis" --phone "555-0101" --email luis@example.com
    python -m src.main login --email luis@example.com --password secret1
"""

import argparse
import json
import logging
import sys
from typing import Any, Callable, List, Optional

from src.services import (
    auth_service,
    delivery_person_service,
    health_service,
    package_service,
)
from src.services.database import close_connections, initialize_app_database
from src.services.exceptions import AuthenticationError, ServiceError
from src.utils.config import get_config
from src.utils.constants import PACKAGE_STATUSES

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_AUTH_FAILED = 2


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from PARCEL_TRACKER_LOG_LEVEL (or an explicit level)."""
    level_name = (level or get_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ============================================================================
# Command handlers
# ============================================================================


def _cmd_health(args) -> Any:
    return health_service.get_health_status()


def _cmd_packages_list(args) -> Any:
    if args.in_transit:
        return package_service.list_in_transit_packages()
    return package_service.list_packages()


def _cmd_packages_get(args) -> Any:
    return package_service.get_package(args.id)


def _cmd_packages_create(args) -> Any:
    return package_service.create_package(
        args.destinatario, args.direccion, args.delivery_person_id
    )


def _cmd_packages_status(args) -> Any:
    return package_service.set_package_status(
        args.id, args.status, strict=True if args.strict else None
    )


def _cmd_packages_update(args) -> Any:
    return package_service.update_package(
        args.id,
        args.destinatario,
        args.direccion,
        args.delivery_person_id,
        args.status,
        strict=True if args.strict else None,
    )


def _cmd_packages_delete(args) -> Any:
    package_service.delete_package(args.id)
    return {"deleted": args.id}


def _cmd_couriers_list(args) -> Any:
    return delivery_person_service.list_delivery_persons()


def _cmd_couriers_create(args) -> Any:
    return delivery_person_service.create_delivery_person(
        args.name, args.phone, args.email, password=args.password
    )


def _cmd_login(args) -> Any:
    return {"success": True, "user": auth_service.login(args.email, args.password)}


# ============================================================================
# Parser
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="parcel-tracker",
        description="Parcel Tracker - package lifecycle and delivery directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", help="Override PARCEL_TRACKER_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    health = subparsers.add_parser("health", help="Report store connectivity")
    health.set_defaults(handler=_cmd_health)

    # packages
    packages = subparsers.add_parser("packages", help="Manage packages")
    package_cmds = packages.add_subparsers(dest="package_command", required=True)

    list_parser = package_cmds.add_parser("list", help="List packages, newest first")
    list_parser.add_argument(
        "--in-transit", action="store_true", help="Only packages currently in transit"
    )
    list_parser.set_defaults(handler=_cmd_packages_list)

    get_parser = package_cmds.add_parser("get", help="Show one package")
    get_parser.add_argument("id", type=int)
    get_parser.set_defaults(handler=_cmd_packages_get)

    create_parser = package_cmds.add_parser("create", help="Register a package")
    create_parser.add_argument("--destinatario", required=True)
    create_parser.add_argument("--direccion", required=True)
    create_parser.add_argument("--delivery-person-id", type=int, default=None)
    create_parser.set_defaults(handler=_cmd_packages_create)

    status_parser = package_cmds.add_parser("status", help="Change a package's status")
    status_parser.add_argument("id", type=int)
    status_parser.add_argument("status", help=f"One of: {', '.join(PACKAGE_STATUSES)}")
    status_parser.add_argument(
        "--strict", action="store_true", help="Enforce the transition table"
    )
    status_parser.set_defaults(handler=_cmd_packages_status)

    update_parser = package_cmds.add_parser("update", help="Overwrite a package")
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("--destinatario", required=True)
    update_parser.add_argument("--direccion", required=True)
    update_parser.add_argument("--delivery-person-id", type=int, default=None)
    update_parser.add_argument("--status", required=True)
    update_parser.add_argument("--strict", action="store_true")
    update_parser.set_defaults(handler=_cmd_packages_update)

    delete_parser = package_cmds.add_parser("delete", help="Delete a package")
    delete_parser.add_argument("id", type=int)
    delete_parser.set_defaults(handler=_cmd_packages_delete)

    # couriers
    couriers = subparsers.add_parser("couriers", help="Delivery person directory")
    courier_cmds = couriers.add_subparsers(dest="courier_command", required=True)

    couriers_list = courier_cmds.add_parser("list", help="List delivery people")
    couriers_list.set_defaults(handler=_cmd_couriers_list)

    couriers_create = courier_cmds.add_parser("create", help="Create a delivery account")
    couriers_create.add_argument("--name", required=True)
    couriers_create.add_argument("--phone", default=None)
    couriers_create.add_argument("--email", required=True)
    couriers_create.add_argument("--password", default=None)
    couriers_create.set_defaults(handler=_cmd_couriers_create)

    # login
    login = subparsers.add_parser("login", help="Check credentials")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)
    login.set_defaults(handler=_cmd_login)

    return parser


def _print_json(payload: Any, stream=None) -> None:
    print(json.dumps(payload, indent=2, default=str), file=stream or sys.stdout)


def run_command(args: argparse.Namespace) -> int:
    """
    Run a parsed command and print its result.

    Returns:
        Process exit code
    """
    handler: Callable[[argparse.Namespace], Any] = args.handler
    try:
        result = handler(args)
    except AuthenticationError as e:
        _print_json({"success": False, **e.to_dict()}, stream=sys.stderr)
        return EXIT_AUTH_FAILED
    except ServiceError as e:
        _print_json(e.to_dict(), stream=sys.stderr)
        return EXIT_ERROR

    _print_json(result)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application entry point.

    Initializes the database and runs one command.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger = logging.getLogger(__name__)

    config = get_config()
    logger.info(f"Starting {config.app_name} v{config.app_version} ({config.environment})")

    initialize_app_database()
    try:
        return run_command(args)
    finally:
        close_connections()


if __name__ == "__main__":
    sys.exit(main())
