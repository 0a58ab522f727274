# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Bubbler - path-keyed event dispatch with upward propagation.

The Bubbler keeps two registries of subscriptions, both keyed by path:

- the *direct* bus, holding every subscription, fired for events emitted
  exactly at its path;
- the *bubble* bus, holding subscriptions made with ``bubble=True``, fired
  for events emitted anywhere below its path.

``emit('/a/b/c', 'post-update')`` dispatches on the direct bus at
``/a/b/c``, then on the bubble bus at ``/a/b``, ``/a`` and ``/``.

Example:
    >>> bubbler = Bubbler()
    >>> sub = bubbler.subscribe('/a', lambda evt, src, *extra: print(evt, src.path))
    >>> bubbler.emit('/a/b', 'ping')
    ping /a/b
    >>> bubbler.unsubscribe(sub)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

import structlog

from ..exceptions import InvalidConfigurationError, NotFoundError
from ..paths import DEFAULT_SEPARATOR, ancestors, clean_path
from .subscription import Event, EventSource, Listener, SubscribeOptions, Subscription

if TYPE_CHECKING:
    from ..store import Store

logger = structlog.get_logger()


class Bubbler:
    """Dual-bus event dispatcher for a Store.

    Attributes:
        store: The Store used to look up the object and type at the event
            path. Not owned; may be None.
        separator: The path separator.
    """

    __slots__ = ('store', 'separator', '_direct', '_bubble')

    def __init__(self, store: Store | None = None, separator: str = DEFAULT_SEPARATOR) -> None:
        self.store = store
        self.separator = separator
        self._direct: dict[str, list[Subscription]] = {}
        self._bubble: dict[str, list[Subscription]] = {}

    def __repr__(self) -> str:
        return f"Bubbler(paths={sorted(self._direct)})"

    def set_store(self, store: Store | None) -> None:
        """Bind the Store used to describe event sources."""
        self.store = store

    # ==================== Subscriptions ====================

    def subscribe(
        self,
        path: str,
        callback: Listener,
        options: SubscribeOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Subscription:
        """Register callback for events at path.

        The callback is invoked as ``callback(event_name, source, *extra)``.

        Args:
            path: Absolute path to listen on.
            callback: Callable receiving the events.
            options: SubscribeOptions or a mapping with 'bubble', 'filters'
                and 'triggered'.
            **kwargs: Option overrides.

        Returns:
            The Subscription handle to pass to unsubscribe().

        Raises:
            InvalidConfigurationError: If callback is not callable or the
                options are malformed.
        """
        if not callable(callback):
            raise InvalidConfigurationError(f"callback must be callable, not {callback!r}")
        opts = SubscribeOptions.build(options, **kwargs)
        path = clean_path(path, self.separator)

        subscription = Subscription(path, callback, opts)
        self._direct.setdefault(path, []).append(subscription)
        if opts.bubble:
            self._bubble.setdefault(path, []).append(subscription)

        logger.debug("subscribe", path=path, id=subscription.id, bubble=opts.bubble)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove subscription from both buses.

        Returns:
            True if it was registered, False if already removed.
        """
        if not subscription.active:
            return False
        subscription.active = False
        self._discard(self._direct, subscription)
        self._discard(self._bubble, subscription)
        logger.debug("unsubscribe", path=subscription.path, id=subscription.id)
        return True

    def unsubscribe_callback(self, path: str, callback: Listener) -> int:
        """Remove every subscription of callback made at exactly path.

        Returns:
            The number of subscriptions removed.
        """
        path = clean_path(path, self.separator)
        matching = [s for s in self._direct.get(path, []) if s.callback == callback]
        for subscription in matching:
            self.unsubscribe(subscription)
        return len(matching)

    def clear_subscriptions(self, path: str) -> None:
        """Remove every subscription registered at exactly path."""
        path = clean_path(path, self.separator)
        removed = self._direct.pop(path, [])
        self._bubble.pop(path, None)
        for subscription in removed:
            subscription.active = False
        logger.debug("clear_subscriptions", path=path, removed=len(removed))

    def listeners(self, path: str, bubble: bool = False) -> list[Subscription]:
        """Return the subscriptions on the direct (or bubble) bus at path."""
        bus = self._bubble if bubble else self._direct
        return list(bus.get(clean_path(path, self.separator), []))

    def _discard(self, bus: dict[str, list[Subscription]], subscription: Subscription) -> None:
        entries = bus.get(subscription.path)
        if not entries:
            return
        bus[subscription.path] = [s for s in entries if s is not subscription]
        if not bus[subscription.path]:
            del bus[subscription.path]

    # ==================== Emission ====================

    def emit(self, path: str, event: str | Event | Mapping[str, Any], *extra: Any) -> None:
        """Dispatch event at path, then bubble it up to the root.

        Args:
            path: Absolute path the event refers to. It need not exist.
            event: Event name, Event, or mapping with 'name' and 'triggered'.
            *extra: Extra positional values passed to every callback. For a
                'delete' event with exactly two extras, they are taken as
                (type, obj) of the deleted object.
        """
        path = clean_path(path, self.separator)
        name, triggered = self._normalize_event(event)
        source = self._describe(path, name, triggered, extra)

        logger.debug("emit", path=path, event_name=name, type=source.type)

        self._dispatch(self._direct, path, name, source, extra)
        for ancestor in ancestors(path, self.separator):
            self._dispatch(self._bubble, ancestor, name, source, extra)

    def _dispatch(
        self,
        bus: dict[str, list[Subscription]],
        path: str,
        name: str,
        source: EventSource,
        extra: tuple[Any, ...],
    ) -> None:
        # Snapshot: callbacks may subscribe or unsubscribe while we iterate.
        for subscription in tuple(bus.get(path, ())):
            subscription(name, source, *extra)

    def _normalize_event(self, event: str | Event | Mapping[str, Any]) -> tuple[str, bool]:
        if isinstance(event, str):
            return event, False
        if isinstance(event, Event):
            return event.name, event.triggered
        if isinstance(event, Mapping) and 'name' in event:
            return event['name'], bool(event.get('triggered', True))
        raise InvalidConfigurationError(f"Invalid event: {event!r}")

    def _describe(
        self, path: str, name: str, triggered: bool, extra: tuple[Any, ...]
    ) -> EventSource:
        if self.store is None:
            return EventSource(path, triggered)
        if name == 'delete' and len(extra) == 2:
            return EventSource(path, triggered, obj=extra[1], type=extra[0])
        try:
            obj = self.store.get(path)
            type_name = self.store.get_type(path)
        except NotFoundError:
            # Emitting on a path that does not exist is legal; it still bubbles.
            logger.info("emit on missing path", path=path, event_name=name)
            obj = None
            type_name = None
        return EventSource(path, triggered, obj=obj, type=type_name)
