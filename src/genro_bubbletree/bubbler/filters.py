# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Subscription filters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..exceptions import InvalidConfigurationError, InvalidFilterError


@dataclass(frozen=True)
class Filter:
    """Restricts a subscription to some node types and/or event names.

    Each constraint is either None (no constraint), a single name, or a list
    of names. An empty list is no constraint either, and so is an empty
    string for names.

    Example:
        >>> Filter(types=['user', 'admin'], names='post-update')
    """

    types: Any = None
    names: Any = None


def normalize_filters(filters: Any) -> tuple[Filter, ...]:
    """Coerce a filter option into a tuple of Filter objects.

    Accepts None, a Filter, a mapping with 'types'/'names' keys, or a
    list/tuple of those.

    Raises:
        InvalidConfigurationError: On anything else.
    """
    if filters is None or filters is False:
        return ()
    if isinstance(filters, (Filter, Mapping)):
        filters = [filters]
    if not isinstance(filters, (list, tuple)):
        raise InvalidConfigurationError(
            f"filters must be a Filter, a mapping or a list of them, "
            f"not {type(filters).__name__}"
        )

    result = []
    for item in filters:
        if isinstance(item, Filter):
            result.append(item)
        elif isinstance(item, Mapping):
            unknown = set(item) - {'types', 'names'}
            if unknown:
                raise InvalidConfigurationError(
                    f"Unknown filter keys: {', '.join(sorted(unknown))}"
                )
            result.append(Filter(types=item.get('types'), names=item.get('names')))
        else:
            raise InvalidConfigurationError(f"Invalid filter: {item!r}")
    return tuple(result)


def _constraint_matches(
    constraint: Any, value: str | None, label: str, allow_empty: bool = False
) -> bool:
    if constraint is None:
        return True
    if isinstance(constraint, str):
        if allow_empty and not constraint:
            return True
        return constraint == value
    if isinstance(constraint, (list, tuple, set, frozenset)):
        if not all(isinstance(item, str) for item in constraint):
            raise InvalidFilterError(
                f"Invalid {label} provided, must be a string or a list of strings: "
                f"{constraint!r}"
            )
        return not constraint or value in constraint
    raise InvalidFilterError(
        f"Invalid {label} provided, must be a string or a list of strings: "
        f"{constraint!r}"
    )


def match_filter(
    event_name: str, type: str | None, filters: tuple[Filter, ...] | list[Filter]
) -> bool:
    """Return True if the event satisfies every filter.

    Args:
        event_name: Name of the dispatched event.
        type: Type name of the node the event refers to (may be None).
        filters: Filters to check; an empty collection always matches.

    Raises:
        InvalidFilterError: If a filter's types or names is neither a
            string nor a list of strings.
    """
    for flt in filters:
        if not _constraint_matches(flt.types, type, 'types'):
            return False
        if not _constraint_matches(flt.names, event_name, 'names', allow_empty=True):
            return False
    return True
