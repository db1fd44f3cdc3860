"""
hchk Test Suite

Test Categories:
- Check: identifier derivation, timestamps, rendering helpers
- API client: requests, validation, decoding, error classification
- Credentials: provider order, key file
- CLI: commands end-to-end with HTTP mocked

Run with: pytest
"""
