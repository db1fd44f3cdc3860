"""
hchk - healthchecks command line client

Usage:
    from hchk.api.client import ApiClient
    from hchk.api.credentials import resolve_api_key

    client = ApiClient(resolve_api_key())
    checks = client.get()
"""

__version__ = "0.2.0"
