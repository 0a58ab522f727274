# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Assemblers - per-type serialization used by the BubbleTree facade.

An assembler converts values on their way into the store (``serialize``)
and back out (``deserialize``). Assemblers are registered by type name;
the ``_`` entry is the default used for untyped nodes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import structlog

from .exceptions import InvalidConfigurationError

logger = structlog.get_logger()

DEFAULT_ASSEMBLER = '_'


@runtime_checkable
class Assembler(Protocol):
    """Interface every assembler must provide."""

    name: str

    def serialize(self, value: Any) -> Any: ...

    def deserialize(self, value: Any) -> Any: ...


class PassthroughAssembler:
    """Assembler storing and returning values unchanged."""

    name = 'passthrough'

    def serialize(self, value: Any) -> Any:
        return value

    def deserialize(self, value: Any) -> Any:
        return value


def _is_assembler(candidate: Any) -> bool:
    return (
        bool(getattr(candidate, 'name', None))
        and callable(getattr(candidate, 'serialize', None))
        and callable(getattr(candidate, 'deserialize', None))
    )


def validate_assemblers(
    assemblers: Mapping[str, Any] | None, warn_missing_default: bool = True
) -> dict[str, Any]:
    """Check an assembler configuration and return it as a dict.

    Args:
        assemblers: Mapping of type name to assembler, or None for the
            passthrough default.
        warn_missing_default: Log a warning if no '_' entry is given.

    Returns:
        Dict of type name to assembler.

    Raises:
        InvalidConfigurationError: If assemblers is not a mapping or an entry
            lacks a name, serialize() or deserialize().
    """
    if assemblers is None:
        logger.debug("defaulting to passthrough assembler")
        return {DEFAULT_ASSEMBLER: PassthroughAssembler()}

    if not isinstance(assemblers, Mapping):
        raise InvalidConfigurationError(
            "assemblers must be a mapping of type names to assemblers, "
            f"not {type(assemblers).__name__}"
        )

    result: dict[str, Any] = {}
    for type_name, assembler in assemblers.items():
        if not _is_assembler(assembler):
            raise InvalidConfigurationError(
                f"Invalid assembler for type '{type_name}': assemblers must have "
                "a name, and 'serialize' and 'deserialize' functions defined"
            )
        result[type_name] = assembler

    if DEFAULT_ASSEMBLER not in result and warn_missing_default:
        logger.warning(
            "no default assembler provided; every object needs an explicit type",
            types=sorted(result),
        )
    return result
