"""
hchk - healthchecks command line client
========================================

Usage:
    hchk ls [-l] [-u] [-d] [query]     # List checks (filter by name/id)
    hchk add <name> <schedule> [grace-hours] [tz] [tags]
    hchk pause <id>                    # Pause check
    hchk resume <id>                   # Resume paused check
    hchk ping <id>                     # Send a heartbeat
    hchk del <id>                      # Delete check
    hchk setkey [key]                  # Store API key in ~/.hchk

The API key is read from $HCHK_API_KEY, then from the key file.
"""

import argparse
import getpass
import sys
from typing import List, Optional

from colorama import just_fix_windows_console

from hchk.settings import settings
from hchk import __version__
from hchk.api.check import Check
from hchk.api.client import ApiClient
from hchk.api.credentials import resolve_api_key, save_api_key
from hchk.api.errors import HchkError
from hchk.display import render_checks
from hchk.utils.safe_logging import configure_logging, get_safe_logger

logger = get_safe_logger(__name__)


def make_client() -> ApiClient:
    """Client for the configured service using the resolved API key"""
    return ApiClient(resolve_api_key())


def resolve_check(client: ApiClient, fragment: str) -> Optional[Check]:
    """
    Look a check up by id/name fragment.

    Prints a notice and returns None when nothing matches; request
    failures propagate.
    """
    lookup = client.locate(fragment)
    if lookup.is_failed:
        raise lookup.error
    if not lookup.is_found:
        print(f"{fragment}: no such check", file=sys.stderr)
    return lookup.check


# ============================================================
# COMMANDS
# ============================================================

def cmd_list_checks(args) -> int:
    client = make_client()
    checks = sorted(client.get(args.query), key=lambda c: c.name)

    if args.up or args.down:
        checks = [c for c in checks if (args.up and c.is_up) or (args.down and c.is_down)]

    for line in render_checks(checks, long=args.long, tty=sys.stdout.isatty()):
        print(line)
    return 0


def cmd_add_check(args) -> int:
    client = make_client()
    check = client.add(args.name, args.schedule, args.grace, tz=args.tz, tags=args.tags)
    print(f"{check.name} {check.id} {check.ping_url}")
    return 0


def cmd_pause_check(args) -> int:
    client = make_client()
    check = resolve_check(client, args.id)
    if check is None:
        return 1

    if check.is_paused:
        print(f"{check.name}: check is already paused")
        return 0

    client.pause(check)
    return 0


def cmd_resume_check(args) -> int:
    client = make_client()
    check = resolve_check(client, args.id)
    if check is None:
        return 1

    if not check.is_paused:
        print(f"{check.name}: check is not paused")
        return 0

    client.resume(check)
    return 0


def cmd_ping_check(args) -> int:
    client = make_client()
    check = resolve_check(client, args.id)
    if check is None:
        return 1

    client.ping(check)
    return 0


def cmd_delete_check(args) -> int:
    client = make_client()
    check = resolve_check(client, args.id)
    if check is None:
        return 1

    deleted = client.delete(check)
    print(f"{deleted.name} deleted")
    return 0


def cmd_set_key(args) -> int:
    key = args.key
    if not key:
        key = getpass.getpass("API key: ")

    path = save_api_key(key)
    print(f"API key saved to {path}")
    return 0


# ============================================================
# ARGUMENT PARSING
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='hchk', description='healthchecks command line client')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', dest='verbose', action='count', default=0, help='be verbose')

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')
    subparsers.required = True

    ls = subparsers.add_parser('ls', help='List checks')
    ls.add_argument('-l', dest='long', action='store_true', help='long listing')
    ls.add_argument('-u', dest='up', action='store_true', help="list 'up' only checks")
    ls.add_argument('-d', dest='down', action='store_true', help="list 'down' only checks")
    ls.add_argument('query', nargs='?', help='filter by name/id')
    ls.set_defaults(func=cmd_list_checks)

    add = subparsers.add_parser('add', help='Add check')
    add.add_argument('name', help='name')
    add.add_argument('schedule', help='schedule in cron format')
    add.add_argument('grace', nargs='?', type=int, default=1, help='grace in hours (default: 1)')
    add.add_argument('tz', nargs='?', help='timezone (default: UTC)')
    add.add_argument('tags', nargs='?', help='tags')
    add.set_defaults(func=cmd_add_check)

    for name, help_text, func in (
        ('pause', 'Pause check', cmd_pause_check),
        ('resume', 'Resume paused check', cmd_resume_check),
        ('ping', 'Ping check', cmd_ping_check),
        ('del', 'Delete check', cmd_delete_check),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('id', help=f"check's ID to {name if name != 'del' else 'delete'}")
        sub.set_defaults(func=func)

    setkey = subparsers.add_parser('setkey', help='Store API key')
    setkey.add_argument('key', nargs='?', help='API key (prompted for when omitted)')
    setkey.set_defaults(func=cmd_set_key)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, settings.LOG_LEVEL)
    just_fix_windows_console()

    try:
        return args.func(args)
    except HchkError as e:
        logger.debug("Command failed", command=args.command, error=repr(e))
        print(f"error: {e.kind}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
