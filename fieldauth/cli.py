"""
Administrative command line for coordinator bindings.

Usage:
    fieldauth-admin list
    fieldauth-admin list-members [--coordinator +15550001111]
    fieldauth-admin register +15550001111 "Forest%20Survey"
    fieldauth-admin unregister +15550001111
"""

import argparse
import logging
import sys
from typing import List, Optional

from .services import create_services, ServiceContext


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage coordinator bindings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List registered coordinators")

    list_members = commands.add_parser("list-members", help="List delegated members")
    list_members.add_argument("--coordinator", "-c", help="Only members of this coordinator phone")

    register = commands.add_parser("register", help="Register a coordinator for a project")
    register.add_argument("phone", help="Coordinator phone number")
    register.add_argument("project", help="URL-encoded project name")

    unregister = commands.add_parser("unregister", help="Remove a coordinator binding")
    unregister.add_argument("phone", help="Coordinator phone number")

    return parser


def main(argv: Optional[List[str]] = None, context: Optional[ServiceContext] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    context, registration, _, _ = create_services(context)
    store = context.store

    try:
        if args.command == "list":
            coordinators = store.list_coordinators()
            if not coordinators:
                print("No coordinators registered.")
            for c in coordinators:
                status = "logged in" if c.token else "not logged in"
                print(f"{c.phone_number}\t{c.project_name}\t{status}\t{c.created_at}")
            return 0

        if args.command == "list-members":
            members = store.list_members(coordinator_phone=args.coordinator)
            if not members:
                print("No members registered.")
            for m in members:
                print(f"{m.phone_number}\t{m.project_name}\t{m.coordinator_phone}\t{m.created_at}")
            return 0

        if args.command == "register":
            result = registration.register(args.phone, args.project)
            if not result.success:
                print(f"❌ {result.message}")
                return 1
            print("✅ Coordinator registered!")
            print(f"   Phone: {result.value.phone_number}")
            print(f"   Project: {result.value.project_name}")
            return 0

        if args.command == "unregister":
            result = registration.unregister(args.phone)
            if not result.success:
                print(f"❌ {result.message}")
                return 1
            print(f"✅ {result.value.message}")
            return 0
    finally:
        context.close()

    return 1


if __name__ == "__main__":
    sys.exit(main())
