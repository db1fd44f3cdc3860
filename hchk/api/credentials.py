"""
API Key Resolution
==================
The key comes from the first provider that yields a non-empty value:

    1. HCHK_API_KEY environment variable (name configurable via HCHK_API_KEY_ENV)
    2. Key file written by `hchk setkey` (HCHK_KEY_FILE, default ~/.hchk)

The client never reads either source itself; callers resolve the key and
pass it to ApiClient.
"""

import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from hchk.settings import settings
from hchk.api.errors import CredentialError, ValidationError
from hchk.utils.safe_logging import get_safe_logger

logger = get_safe_logger(__name__)

KeyProvider = Callable[[], Optional[str]]


def env_provider(var_name: Optional[str] = None) -> KeyProvider:
    """Provider reading the key from an environment variable"""
    name = var_name or settings.HCHK_API_KEY_ENV

    def provide() -> Optional[str]:
        value = os.getenv(name, '').strip()
        if value:
            logger.debug("API key resolved from environment", variable=name)
        return value or None

    return provide


def file_provider(path: Optional[str] = None) -> KeyProvider:
    """Provider reading the key from a local file"""
    key_file = Path(path or settings.HCHK_KEY_FILE).expanduser()

    def provide() -> Optional[str]:
        try:
            value = key_file.read_text(encoding='utf-8').strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read key file", path=str(key_file), error=str(e))
            return None
        if value:
            logger.debug("API key resolved from file", path=str(key_file))
        return value or None

    return provide


def default_providers() -> list:
    return [env_provider(), file_provider()]


def resolve_api_key(providers: Optional[Iterable[KeyProvider]] = None) -> str:
    """
    Return the first API key any provider yields.

    Raises:
        CredentialError: no provider had a key
    """
    for provider in (default_providers() if providers is None else providers):
        key = provider()
        if key:
            return key

    raise CredentialError(
        f"please set {settings.HCHK_API_KEY_ENV} environment variable or run `hchk setkey`"
    )


def save_api_key(key: str, path: Optional[str] = None) -> Path:
    """
    Store the API key in the key file, readable by the owner only.

    Returns:
        Path: where the key was written
    """
    key = (key or '').strip()
    if not key:
        raise ValidationError("API key cannot be empty")

    key_file = Path(path or settings.HCHK_KEY_FILE).expanduser()
    key_file.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(str(key_file), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, 'w', encoding='utf-8') as f:
        f.write(key + '\n')
    os.chmod(key_file, 0o600)

    logger.info("API key saved", path=str(key_file))
    return key_file
