"""
Terminal rendering for checks.

Row layout (ls):
    status  short id  name                                      last ping
    up      abc123    nightly-backup                            3 minutes ago
"""

import json
from typing import Iterable, List

from colorama import Fore, Style

from hchk.api.check import Check

STATUS_COLORS = {
    "up": Fore.GREEN,
    "down": Fore.RED,
    "grace": Fore.CYAN,
    "paused": Fore.YELLOW,
}

STATUS_WIDTH = 6
ID_WIDTH = 9
NAME_WIDTH = 40
LAST_PING_WIDTH = 30


def colored_status(status: str, color: bool = True, width: int = 0) -> str:
    """Status padded to width, wrapped in its color when color is on"""
    text = f"{status:<{width}}"
    if not color:
        return text
    return f"{STATUS_COLORS.get(status, Fore.WHITE)}{text}{Style.RESET_ALL}"


def format_row(check: Check, color: bool = True) -> str:
    status = colored_status(check.status, color=color, width=STATUS_WIDTH)
    return (
        f"{status} "
        f"{check.short_id:<{ID_WIDTH}} "
        f"{check.name:<{NAME_WIDTH}} "
        f"{check.humanized_last_ping_at():<{LAST_PING_WIDTH}}"
    ).rstrip()


def format_long(check: Check) -> str:
    return json.dumps(check.to_payload(), indent=2)


def render_checks(checks: Iterable[Check], long: bool = False, tty: bool = False) -> List[str]:
    """
    Lines for an `ls` listing.

    On a terminal the listing starts with a "total N" line and statuses
    are colored.
    """
    checks = list(checks)
    lines = []
    if tty:
        lines.append(f"total {len(checks)}")
    for check in checks:
        lines.append(format_long(check) if long else format_row(check, color=tty))
    return lines
