"""Deep copies of flow data."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def deep_copy(data: Any) -> Any:
    """Return a deep copy of ``data``."""
    return copy.deepcopy(data)


def deep_copy_map(data: Any) -> dict[str, Any] | None:
    """Return a deep copy of a mapping as a dict, or None if ``data`` is not one."""
    if not isinstance(data, Mapping):
        return None
    return dict(copy.deepcopy(data))