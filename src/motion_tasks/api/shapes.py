# src/motion_tasks/api/shapes.py

from __future__ import annotations

"""
List-response normalization.

Motion does not guarantee that list endpoints return a bare JSON array; some
responses wrap the list under a conventional key. We model this as an ordered
list of shape strategies, evaluated first-match-wins:

1. direct list             -> returned as is
2. wrapped under known key -> the wrapped list
3. fallback                -> [response]  (degraded, forward-compatibility only)
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

logger = logging.getLogger(__name__)

TASK_LIST_KEYS: tuple[str, ...] = ("tasks", "items", "data", "results")
PROJECT_LIST_KEYS: tuple[str, ...] = ("projects", "items", "data", "results")

# A strategy returns the extracted list, or None when the shape does not match.
ShapeStrategy = Callable[[Any], list[Any] | None]


def direct_list(data: Any) -> list[Any] | None:
    if isinstance(data, list):
        return data
    return None


def wrapped_under(keys: Sequence[str]) -> ShapeStrategy:
    def _match(data: Any) -> list[Any] | None:
        if not isinstance(data, dict):
            return None
        for key in keys:
            value = data.get(key)
            if isinstance(value, list):
                return value
        return None

    return _match


def single_wrap(data: Any) -> list[Any] | None:
    logger.warning("Unrecognized list response shape, returning raw object: %r", data)
    return [data]


def list_strategies(keys: Sequence[str]) -> list[ShapeStrategy]:
    return [direct_list, wrapped_under(keys), single_wrap]


def normalize_list(data: Any, strategies: Sequence[ShapeStrategy]) -> list[Any]:
    """Apply `strategies` in order and return the first match."""
    if data is None:
        return []
    for strategy in strategies:
        out = strategy(data)
        if out is not None:
            return out
    return []
