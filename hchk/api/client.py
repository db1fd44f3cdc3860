"""
Healthchecks API Client
Handles all interactions with the checks management API

Usage:
    from hchk.api.client import ApiClient

    client = ApiClient(api_key)
    for check in client.get("backup"):
        print(check.short_id, check.name, check.status)

    check = client.find("abc123")
    if check:
        client.pause(check)
"""

import requests
from typing import Any, Dict, List, Optional

from hchk.settings import settings
from hchk.api.check import Check
from hchk.api.errors import (
    HchkError,
    ValidationError,
    TransportError,
    ApiStatusError,
    DecodeError,
)
from hchk.utils.safe_logging import KeyMasker, get_safe_logger

logger = get_safe_logger(__name__)

API_KEY_HEADER = 'X-Api-Key'

MIN_GRACE_HOURS = 1
MAX_GRACE_HOURS = 24 * 365
SECONDS_PER_HOUR = 3600


class Lookup:
    """
    Outcome of resolving an id/name fragment to a check.

    Exactly one of three states: found (check is set), not found, or
    failed (error is set).
    """

    def __init__(self, check: Optional[Check] = None, error: Optional[HchkError] = None):
        self.check = check
        self.error = error

    @classmethod
    def found(cls, check: Check) -> 'Lookup':
        return cls(check=check)

    @classmethod
    def not_found(cls) -> 'Lookup':
        return cls()

    @classmethod
    def failed(cls, error: HchkError) -> 'Lookup':
        return cls(error=error)

    @property
    def is_found(self) -> bool:
        return self.check is not None

    @property
    def is_failed(self) -> bool:
        return self.error is not None

    def __repr__(self):
        if self.is_found:
            return f"Lookup.found({self.check.id!r})"
        if self.is_failed:
            return f"Lookup.failed({self.error!r})"
        return "Lookup.not_found()"


class ApiClient:
    """Client for the checks management API"""

    def __init__(self, api_key: str, base_url: Optional[str] = None, timeout: Optional[float] = None):
        if not api_key:
            raise ValidationError("API key not configured")

        self.api_key = api_key
        self.base_url = base_url or settings.HCHK_API_URL
        if not self.base_url.endswith('/'):
            self.base_url += '/'
        self.timeout = timeout if timeout is not None else settings.HCHK_TIMEOUT

        self.headers = {
            API_KEY_HEADER: self.api_key,
            'Accept': 'application/json',
        }
        KeyMasker.register(api_key)

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _send(self, method: str, url: str, *, body: Any = None, authenticated: bool = True) -> requests.Response:
        """
        Send one request and return the 2xx response.

        Raises:
            TransportError: no HTTP response was received
            ApiStatusError: response status outside 2xx
        """
        headers = dict(self.headers) if authenticated else {}
        logger.debug("Sending request", method=method, url=url)

        try:
            response = requests.request(
                method, url, headers=headers, json=body, timeout=self.timeout
            )
        except requests.Timeout as e:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s", cause=e)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", cause=e)

        logger.debug("Received response", method=method, url=url, status=response.status_code)

        if not 200 <= response.status_code < 300:
            try:
                text = response.text
            except (UnicodeDecodeError, AttributeError):
                text = ""
            raise ApiStatusError(response.status_code, body=text, url=url)

        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"response is not valid JSON: {e}", cause=e)

    def _decode_check(self, response: requests.Response) -> Check:
        data = self._json(response)
        try:
            return Check.from_payload(data)
        except TypeError as e:
            raise DecodeError(f"unexpected check payload: {e}", cause=e)

    def _decode_checks(self, response: requests.Response) -> List[Check]:
        data = self._json(response)
        if not isinstance(data, dict) or not isinstance(data.get('checks'), list):
            raise DecodeError("unexpected listing payload: missing 'checks' list")
        try:
            return [Check.from_payload(item) for item in data['checks']]
        except TypeError as e:
            raise DecodeError(f"unexpected check payload: {e}", cause=e)

    def _check_url(self, check: Check, action: str = "") -> str:
        if not check.id:
            raise ValidationError("check has no id")
        url = f"{self.base_url}{check.id}"
        return f"{url}/{action}" if action else url

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def add(
        self,
        name: str,
        schedule: str,
        grace_hours: int = 1,
        tz: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> Check:
        """
        Create a check, or update the one that already has this name

        Args:
            name: Check name (the de-duplication key on the service)
            schedule: Cron expression
            grace_hours: Grace period in hours (1-8760)
            tz: IANA timezone, defaults to UTC
            tags: Space or comma delimited tags

        Returns:
            Check: the created (or updated) check
        """
        if not name or not name.strip():
            raise ValidationError("name cannot be empty")
        if isinstance(grace_hours, bool) or not isinstance(grace_hours, int):
            raise ValidationError(f"grace period must be a whole number of hours: {grace_hours!r}")
        if not MIN_GRACE_HOURS <= grace_hours <= MAX_GRACE_HOURS:
            raise ValidationError(
                f"grace period out of range ({MIN_GRACE_HOURS}-{MAX_GRACE_HOURS} hours): {grace_hours}"
            )

        payload: Dict[str, Any] = {
            'name': name,
            'schedule': schedule,
            'grace': grace_hours * SECONDS_PER_HOUR,
            'tags': tags or "",
            'tz': tz or "UTC",
            'unique': ['name'],
        }

        response = self._send('POST', self.base_url, body=payload)
        check = self._decode_check(response)
        logger.info("Check added", check=check.id, name=check.name)
        return check

    def get(self, query: Optional[str] = None) -> List[Check]:
        """
        List checks, optionally keeping only those whose name or id
        contains query (plain, case-sensitive substring)

        Returns:
            list: Checks in service order
        """
        response = self._send('GET', self.base_url)
        checks = self._decode_checks(response)

        if query:
            checks = [c for c in checks if query in c.name or query in c.id]

        # Resolve derived identifiers before handing checks out
        for check in checks:
            _ = check.short_id

        logger.debug("Listed checks", query=query, count=len(checks))
        return checks

    def locate(self, fragment: str) -> Lookup:
        """Resolve an id/name fragment to the first matching check"""
        try:
            checks = self.get(fragment)
        except HchkError as e:
            return Lookup.failed(e)

        if not checks:
            return Lookup.not_found()
        return Lookup.found(checks[0])

    def find(self, fragment: str) -> Optional[Check]:
        """
        Resolve an id/name fragment to the first matching check.

        Request failures are logged and reported as None; use locate()
        to tell them apart from a missing check.
        """
        lookup = self.locate(fragment)
        if lookup.is_failed:
            logger.warning("Check lookup failed", query=fragment, error=str(lookup.error))
        return lookup.check

    def pause(self, check: Check) -> Check:
        """Pause monitoring; the returned check's status is 'paused'"""
        response = self._send('POST', self._check_url(check, 'pause'))
        paused = self._decode_check(response)
        logger.info("Check paused", check=paused.id)
        return paused

    def resume(self, check: Check) -> Check:
        """Resume a paused check"""
        response = self._send('POST', self._check_url(check, 'resume'))
        resumed = self._decode_check(response)
        logger.info("Check resumed", check=resumed.id)
        return resumed

    def ping(self, check: Check):
        """
        Send a heartbeat to the check's ping URL.

        The ping endpoint authenticates by the token in its URL, so the
        API key header is not sent.
        """
        if not check.ping_url:
            raise ValidationError("check has no ping URL")
        self._send('GET', check.ping_url, authenticated=False)
        logger.info("Check pinged", check=check.id)

    def delete(self, check: Check) -> Check:
        """Delete a check; returns its last known state"""
        response = self._send('DELETE', self._check_url(check))
        deleted = self._decode_check(response)
        logger.info("Check deleted", check=deleted.id)
        return deleted
