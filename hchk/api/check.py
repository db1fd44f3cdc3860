"""
Check Entity
============
One monitor as the service reports it.

The service payload may or may not carry an explicit identifier. When it
doesn't, the identifier is the last path segment of the ping URL:

    https://hc-ping.com/abc123-def456  ->  id "abc123-def456", short id "abc123"

Short ids are the part of the id before the first hyphen (the whole id
when it has none).
"""

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from functools import cached_property
from typing import Any, Dict, Optional

import humanize


# Anything earlier than this is treated as "never pinged"
NEVER_BEFORE_YEAR = 1950

STATUS_UP = "up"
STATUS_DOWN = "down"
STATUS_GRACE = "grace"
STATUS_PAUSED = "paused"


def _local_tz():
    return datetime.now().astimezone().tzinfo


def sentinel_timestamp() -> datetime:
    """Jan 1 1901, 00:00 local time: the stand-in for a missing timestamp."""
    return datetime(1901, 1, 1, 0, 0, tzinfo=_local_tz())


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parse a service ISO-8601 timestamp into local time.

    Returns the sentinel for None or anything unparsable.
    """
    if not value:
        return sentinel_timestamp()
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (ValueError, TypeError, AttributeError):
        return sentinel_timestamp()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(_local_tz())


def humanize_timestamp(moment: datetime) -> str:
    """Relative phrase for moment, or "never" for the sentinel range."""
    if moment.year < NEVER_BEFORE_YEAR:
        return "never"
    now = datetime.now(tz=moment.tzinfo)
    return humanize.naturaltime(now - moment)


@dataclass(frozen=True)
class Check:
    """A scheduled heartbeat monitor"""
    name: str = ""
    ping_url: str = ""
    uuid: Optional[str] = None
    short_uuid: Optional[str] = None
    slug: Optional[str] = None
    pause_url: str = ""
    update_url: str = ""
    status: str = ""
    last_ping: Optional[str] = None
    next_ping: Optional[str] = None
    grace: Optional[int] = None
    n_pings: int = 0
    tags: str = ""
    timeout: Optional[int] = None
    tz: Optional[str] = None
    schedule: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'Check':
        """
        Build a Check from one decoded service object.

        Unknown keys are ignored; an explicit "id" is accepted as an
        alias for "uuid" and "short_id" as an alias for "short_uuid".

        Raises:
            TypeError: payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise TypeError(f"expected a check object, got {type(payload).__name__}")

        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in payload.items() if k in known}
        if not values.get('uuid') and payload.get('id'):
            values['uuid'] = str(payload['id'])
        if not values.get('short_uuid') and payload.get('short_id'):
            values['short_uuid'] = str(payload['short_id'])
        for text_field in ('name', 'ping_url', 'pause_url', 'update_url', 'status', 'tags'):
            if values.get(text_field) is None:
                values.pop(text_field, None)
        return cls(**values)

    @cached_property
    def id(self) -> str:
        if self.uuid:
            return self.uuid
        return self.ping_url.rsplit('/', 1)[-1]

    @cached_property
    def short_id(self) -> str:
        if self.short_uuid:
            return self.short_uuid
        return self.id.split('-', 1)[0]

    @property
    def is_up(self) -> bool:
        return self.status == STATUS_UP

    @property
    def is_down(self) -> bool:
        return self.status == STATUS_DOWN

    @property
    def is_paused(self) -> bool:
        return self.status == STATUS_PAUSED

    def last_ping_at(self) -> datetime:
        return parse_timestamp(self.last_ping)

    def next_ping_at(self) -> datetime:
        return parse_timestamp(self.next_ping)

    def humanized_last_ping_at(self) -> str:
        """e.g. "3 minutes ago", or "never" when the check was never pinged"""
        return humanize_timestamp(self.last_ping_at())

    def humanized_next_ping_at(self) -> str:
        return humanize_timestamp(self.next_ping_at())

    def to_payload(self) -> Dict[str, Any]:
        """Service field set plus the resolved id and short_id, for JSON output"""
        payload = {f.name: getattr(self, f.name) for f in fields(self) if f.name != 'short_uuid'}
        payload['id'] = self.id
        payload['short_id'] = self.short_id
        return payload

    def __str__(self):
        return f"{self.short_id} {self.name} ({self.status or 'unknown'})"
