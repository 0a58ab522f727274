# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Subscription records, options and event descriptors."""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError, field_validator

from ..exceptions import InvalidConfigurationError
from .filters import Filter, match_filter, normalize_filters

Listener = Callable[..., Any]

_ids = itertools.count(1)


@dataclass(frozen=True)
class Event:
    """Structured event: a name plus the triggered flag.

    Plain string events are untriggered; structured ones default to
    triggered.
    """

    name: str
    triggered: bool = True


@dataclass(frozen=True)
class EventSource:
    """State of the object an event refers to, captured at emission time.

    Attributes:
        path: Path the event was emitted on (the origin, even when bubbled).
        triggered: Whether the event was a structured, triggered event.
        obj: Leaf entries of the node at path, or the deleted object.
        type: Type name of the node at path, or of the deleted object.
    """

    path: str
    triggered: bool = False
    obj: Any = None
    type: str | None = None


class SubscribeOptions(BaseModel):
    """Validated subscription options.

    Attributes:
        bubble: Also receive events emitted below the subscribed path.
        filters: Filters that must all match for the callback to run.
        triggered: Also receive triggered (structured) events.
    """

    model_config = ConfigDict(extra='forbid', frozen=True, arbitrary_types_allowed=True)

    bubble: StrictBool = True
    filters: tuple[Filter, ...] = ()
    triggered: StrictBool = True

    @field_validator('filters', mode='before')
    @classmethod
    def _coerce_filters(cls, value: Any) -> tuple[Filter, ...]:
        return normalize_filters(value)

    @classmethod
    def build(
        cls, options: SubscribeOptions | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> SubscribeOptions:
        """Merge options and keyword overrides into a SubscribeOptions.

        Raises:
            InvalidConfigurationError: If the options do not validate.
        """
        if isinstance(options, SubscribeOptions):
            if not kwargs:
                return options
            options = options.model_dump()
        elif options is None:
            options = {}
        elif not isinstance(options, Mapping):
            raise InvalidConfigurationError(
                f"options must be a mapping, not {type(options).__name__}"
            )
        try:
            return cls(**{**options, **kwargs})
        except ValidationError as exc:
            raise InvalidConfigurationError(str(exc)) from exc


class Subscription:
    """Handle returned by Bubbler.subscribe.

    Identifies one registration of a callback at a path. Pass it to
    Bubbler.unsubscribe to remove exactly this registration.
    """

    __slots__ = ('id', 'path', 'callback', 'options', 'active')

    def __init__(self, path: str, callback: Listener, options: SubscribeOptions) -> None:
        self.id = next(_ids)
        self.path = path
        self.callback = callback
        self.options = options
        self.active = True

    def __repr__(self) -> str:
        name = getattr(self.callback, '__qualname__', repr(self.callback))
        return f"Subscription(#{self.id}, {self.path!r}, {name}, bubble={self.bubble})"

    @property
    def bubble(self) -> bool:
        return self.options.bubble

    @property
    def filters(self) -> tuple[Filter, ...]:
        return self.options.filters

    @property
    def triggered(self) -> bool:
        return self.options.triggered

    def accepts(self, event_name: str, source: EventSource) -> bool:
        """Return True if this subscription wants the event."""
        if self.filters and not match_filter(event_name, source.type, self.filters):
            return False
        return self.triggered or source.triggered is False

    def __call__(self, event_name: str, source: EventSource, *extra: Any) -> None:
        if self.active and self.accepts(event_name, source):
            self.callback(event_name, source, *extra)
