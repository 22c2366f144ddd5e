r"""Build the identifying User-Agent header of the client."""

from __future__ import annotations

__all__ = ["user_agent"]

import platform
from importlib.metadata import PackageNotFoundError, version


def user_agent(app_name: str | None = None, app_version: str | None = None) -> str:
    """Return the User-Agent string sent with every request.

    Args:
        app_name: Optional name of the calling application.
        app_version: Optional version of the calling application. The
            application is only identified if both values are set.

    Returns:
        The User-Agent string.

    Example:
        ```pycon
        >>> from restcore.user_agent import user_agent
        >>> user_agent("demo", "1.2.0").endswith(" demo/1.2.0")
        True

        ```
    """
    identifiers = [f"restcore-python/{_package_version()}", f"python/{platform.python_version()}"]
    if app_name and app_version:
        identifiers.append(f"{app_name}/{app_version}")
    return " ".join(identifiers)


def _package_version() -> str:
    try:
        return version("restcore")
    except PackageNotFoundError:  # pragma: no cover
        return "0.0.0"
