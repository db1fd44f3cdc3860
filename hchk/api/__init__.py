"""
Checks API
Client, entity and error types for the checks management API.

Usage:
    from hchk.api import ApiClient, Check, HchkError

    client = ApiClient(api_key)
    check = client.find("backup")
"""

from hchk.api.check import Check
from hchk.api.client import ApiClient, Lookup
from hchk.api.errors import (
    HchkError,
    ValidationError,
    CredentialError,
    TransportError,
    ApiStatusError,
    DecodeError,
)

__all__ = [
    'ApiClient',
    'Check',
    'Lookup',
    'HchkError',
    'ValidationError',
    'CredentialError',
    'TransportError',
    'ApiStatusError',
    'DecodeError',
]
