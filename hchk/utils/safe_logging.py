"""
Safe Logging System with Credential Protection
===============================================

Ensures the API key (or anything that looks like one) never reaches
logs or terminal output. All hchk logging goes through this module.

Usage:
    from hchk.utils.safe_logging import get_safe_logger

    logger = get_safe_logger(__name__)
    logger.debug("Sending request", method="GET", api_key=api_key)
    # Output: "Sending request | method=GET | api_key=****************Ab12"
"""

import logging
from typing import Any, Dict, Optional, Set


LOG_FORMAT = '%(levelname)s: %(message)s'
VERBOSE_LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'


class KeyMasker:
    """Masks credentials in log messages and structured fields"""

    # Field names whose values are always masked
    SENSITIVE_FIELDS = {
        'api_key', 'key', 'token', 'secret', 'password', 'credential',
        'x-api-key', 'authorization',
    }

    # Secrets registered at runtime (the resolved API key)
    _registered: Set[str] = set()

    @classmethod
    def register(cls, secret: str):
        """Remember a secret so it is masked wherever it shows up"""
        if secret:
            cls._registered.add(secret)

    @staticmethod
    def mask_string(value: str, visible_chars: int = 4) -> str:
        """
        Mask a string, showing only last few characters

        Args:
            value: String to mask
            visible_chars: Number of characters to show at end

        Returns:
            Masked string like "****5678"
        """
        if not value or len(value) <= visible_chars:
            return "****"
        return "*" * (len(value) - visible_chars) + value[-visible_chars:]

    @classmethod
    def mask_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Recursively mask sensitive fields in a dictionary

        Args:
            data: Dictionary to mask

        Returns:
            Dictionary with sensitive values masked
        """
        if not isinstance(data, dict):
            return data

        masked = {}
        for key, value in data.items():
            key_lower = str(key).lower()

            if any(field in key_lower for field in cls.SENSITIVE_FIELDS):
                masked[key] = cls.mask_string(value) if isinstance(value, str) else "***"
            elif isinstance(value, dict):
                masked[key] = cls.mask_dict(value)
            elif isinstance(value, str):
                masked[key] = cls.sanitize_message(value)
            else:
                masked[key] = value

        return masked

    @classmethod
    def sanitize_message(cls, message: str) -> str:
        """
        Remove registered secrets from a log message

        Args:
            message: Message to sanitize

        Returns:
            Sanitized message
        """
        for secret in cls._registered:
            if secret in message:
                message = message.replace(secret, cls.mask_string(secret))
        return message


class SafeLogger:
    """
    Logger with automatic credential masking

    Usage:
        logger = SafeLogger(__name__)
        logger.info("Check paused", check="abc123", api_key="secret")
        # Output: "Check paused | check=abc123 | api_key=**cret"
    """

    def __init__(self, name: str):
        """
        Initialize safe logger

        Args:
            name: Logger name (usually __name__)
        """
        self.logger = logging.getLogger(name)

    def _format_safe_message(self, message: str, **kwargs) -> str:
        """Format message with sanitized kwargs"""
        safe_message = KeyMasker.sanitize_message(message)

        if kwargs:
            safe_kwargs = KeyMasker.mask_dict(kwargs)
            kwargs_str = " | ".join(f"{k}={v}" for k, v in safe_kwargs.items())
            return f"{safe_message} | {kwargs_str}"

        return safe_message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_safe_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_safe_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_safe_message(message, **kwargs))

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_safe_message(message, **kwargs))


def get_safe_logger(name: str) -> SafeLogger:
    """
    Get a safe logger instance

    Args:
        name: Logger name (use __name__)

    Returns:
        SafeLogger instance
    """
    return SafeLogger(name)


def configure_logging(verbosity: int = 0, level: Optional[str] = None):
    """
    Attach a single stderr handler to the hchk logger tree.

    Args:
        verbosity: Count of -v flags (1 = INFO, 2+ = DEBUG)
        level: Fallback level name when no -v was given (LOG_LEVEL)
    """
    if verbosity >= 2:
        resolved = logging.DEBUG
    elif verbosity == 1:
        resolved = logging.INFO
    else:
        resolved = getattr(logging, (level or 'WARNING').upper(), logging.WARNING)

    root = logging.getLogger('hchk')
    root.setLevel(resolved)

    if not root.handlers:
        handler = logging.StreamHandler()
        root.addHandler(handler)
    for handler in root.handlers:
        handler.setFormatter(logging.Formatter(
            VERBOSE_LOG_FORMAT if verbosity >= 2 else LOG_FORMAT
        ))

    return root
