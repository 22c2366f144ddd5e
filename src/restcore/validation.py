r"""Parameter validation utilities for the client configuration."""

from __future__ import annotations

__all__ = ["validate_host", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from restcore.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_host(name: str, host: str) -> None:
    """Validate a hostname.

    The hostname is combined with a fixed ``https`` scheme, so it must
    not carry a scheme or a path.

    Args:
        name: The name of the configuration field, used in error messages.
        host: The hostname to validate.

    Raises:
        ValueError: If the hostname is empty, or contains a scheme or
            a path.

    Example:
        ```pycon
        >>> from restcore.validation import validate_host
        >>> validate_host("api_host", "api.nexmo.com")
        >>> validate_host("api_host", "https://api.nexmo.com")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: api_host must be a bare hostname, got 'https://api.nexmo.com'

        ```
    """
    if not host:
        msg = f"{name} must not be empty"
        raise ValueError(msg)
    if "://" in host or "/" in host:
        msg = f"{name} must be a bare hostname, got {host!r}"
        raise ValueError(msg)
