"""Application identity read from the environment."""

from __future__ import annotations

import os
import socket

USER_NAME = "FLOGO_APP_USERNAME"
HOST_NAME = "FLOGO_HOST_NAME"
APP_NAME = "FLOGO_APP_NAME"
APP_VERSION = "FLOGO_APP_VERSION"

DEFAULT_USER_NAME = "flogo"

_cache: dict[str, str] = {}


def _lookup(variable: str) -> str:
    value = _cache.get(variable, "")
    if value:
        return value
    value = os.environ.get(variable, "")
    _cache[variable] = value
    return value


def _clear_cache() -> None:
    _cache.clear()


def get_user_name() -> str:
    """Return the application user name, or ``"flogo"`` when none is set."""
    return _lookup(USER_NAME) or DEFAULT_USER_NAME


def get_host_id() -> str:
    """Return the configured host name, or the machine's host name."""
    return _lookup(HOST_NAME) or socket.gethostname()


def get_app_name() -> str:
    """Return the configured application name, or an empty string."""
    return _lookup(APP_NAME)


def get_app_version() -> str:
    """Return the configured application version, or an empty string."""
    return _lookup(APP_VERSION)