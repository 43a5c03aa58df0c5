"""Command line client for the CRM API.

Log in once with 'crm-client login' and pass the printed token with --token or
the CRM_TOKEN environment variable to the other commands.
"""
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from .api_client import ActivitiesGateway
from .api_client import AuthGateway
from .api_client import ContactsGateway
from .base.application import GATEWAY_ERRORS
from .base.domain import Activity
from .base.domain import ActivityAction
from .base.domain import ActivityFilter
from .base.domain import ActivityRepository
from .base.domain import BadRequest
from .base.domain import ContactFilter
from .base.domain import ContactRepository
from .base.domain import ContactStatus
from .base.domain import require_session
from .base.domain import Session
from .config import ClientConfig
from .presentation import ActivityLog
from .presentation import CollectionView
from .presentation import ContactsDashboard
from .presentation import LoginForm

logger = logging.getLogger(__name__)

STATUSES = [x.value for x in ContactStatus]
ACTIONS = [x.value for x in ActivityAction]


def get_parser():
    """Return argument parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        default=False,
        help="Verbose output",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("CRM_TOKEN"),
        help="Access token (default: $CRM_TOKEN)",
    )
    subparsers = parser.add_subparsers(dest="command")

    login = subparsers.add_parser("login", help="Log in and print the access token")
    login.add_argument("email")
    login.add_argument("password")

    contacts = subparsers.add_parser("contacts", help="List contacts")
    contacts.add_argument("-s", "--search", default="")
    contacts.add_argument("--status", default="", choices=["", *STATUSES])
    contacts.add_argument(
        "-a", "--all", action="store_true", help="Load all pages instead of one"
    )

    activities = subparsers.add_parser("activities", help="List the activity log")
    activities.add_argument("--action", default="", choices=["", *ACTIONS])
    activities.add_argument(
        "-a", "--all", action="store_true", help="Load all pages instead of one"
    )

    export = subparsers.add_parser("export", help="Export all contacts as CSV")
    export.add_argument(
        "-o", "--output", type=Path, default=Path("contacts.csv"), metavar="FILE"
    )
    return parser


async def login(config: ClientConfig, email: str, password: str) -> int:
    try:
        form = LoginForm.create(email=email, password=password)
    except BadRequest as e:
        for field, msg in e.field_errors().items():
            print(f"{field}: {msg}", file=sys.stderr)
        return 1
    session = await AuthGateway(config.provider()).login(form.email, form.password)
    print(session.access_token)
    return 0


async def show(view: CollectionView, load_all: bool, noun: str) -> int:
    await view.open()
    while load_all and view.controller.has_more:
        await view.on_load_more()
        if view.controller.load_state.is_error:
            break
    snapshot = view.snapshot
    if snapshot.load_state.is_error:
        logger.error(snapshot.load_state.message)
        return 1
    for item in snapshot.items:
        print(format_item(item))
    print(f"Showing {len(snapshot.items)} of {snapshot.total} {noun}")
    return 0


def format_item(item) -> str:
    if isinstance(item, Activity):
        user = item.user.username if item.user and item.user.username else "-"
        return (
            f"{item.action_name.upper():<7} {item.resource_type or ''} "
            f"{item.resource_name or ''} by {user}"
        )
    email = f" <{item.email}>" if item.email else ""
    return f"{item.name}{email} [{item.status.value}]"


async def run(options, config: ClientConfig) -> int:
    if options.command == "login":
        return await login(config, options.email, options.password)

    session = require_session(
        Session(access_token=options.token) if options.token else None
    )
    provider = config.provider(session)
    if options.command == "contacts":
        dashboard = ContactsDashboard(
            ContactRepository(ContactsGateway(provider)),
            page_size=config.contacts_page_size,
            initial_filter=ContactFilter(search=options.search, status=options.status),
        )
        try:
            return await show(dashboard, options.all, "contacts")
        finally:
            dashboard.close()
    elif options.command == "activities":
        log = ActivityLog(
            ActivityRepository(ActivitiesGateway(provider)),
            page_size=config.activities_page_size,
            initial_filter=ActivityFilter(action=options.action),
        )
        try:
            return await show(log, options.all, "activities")
        finally:
            log.close()
    elif options.command == "export":
        dashboard = ContactsDashboard(ContactRepository(ContactsGateway(provider)))
        payload = await dashboard.on_export()
        dashboard.close()
        if payload is None:
            logger.error(dashboard.snapshot.load_state.message)
            return 1
        options.output.write_text(payload)
        logger.info("exported contacts to %s", options.output)
        return 0
    raise ValueError(f"unknown command '{options.command}'")


def main(argv=None):  # pragma: no cover
    """Call main command with args from parser.

    This method is called when you run 'bin/crm-client', this is configured in
    'pyproject.toml'.

    """
    parser = get_parser()
    options = parser.parse_args(argv)
    if options.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")
    if options.command is None:
        parser.print_help()
        return 1

    try:
        return asyncio.run(run(options, ClientConfig.from_env()))
    except GATEWAY_ERRORS as e:
        logger.error(str(e))
        return 1
