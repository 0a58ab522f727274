# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BubbleTree - the public facade over Store and Bubbler.

BubbleTree wires a Store to its Bubbler and adds per-type assemblers on
the way in and out of the store.

Example:
    >>> tree = BubbleTree()
    >>> events = []
    >>> tree.subscribe('/users', lambda evt, src, *extra: events.append((evt, src.path)))
    >>> tree.save('/users/alice', 'age', 30, type='user')
    >>> events[-1]
    ('post-update', '/users/alice')
    >>> tree.get('/users/alice', 'age')
    30
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .assemblers import DEFAULT_ASSEMBLER, validate_assemblers
from .bubbler import Bubbler, Event, SubscribeOptions, Subscription
from .bubbler.subscription import Listener
from .config import Settings
from .exceptions import InvalidConfigurationError
from .store import Store


class BubbleTree:
    """In-memory hierarchical namespace with bubbling events.

    Attributes:
        settings: The Settings in use.
        assemblers: Mapping of type name to assembler.
        store: The underlying Store.
        bubbler: The underlying Bubbler.
    """

    def __init__(
        self,
        assemblers: Mapping[str, Any] | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize a BubbleTree.

        Args:
            assemblers: Mapping of type name to assembler. Key '_' is the
                default. If None, a passthrough assembler is the default.
            settings: Settings; read from the environment if None.

        Raises:
            InvalidConfigurationError: If assemblers is malformed.
        """
        self.settings = settings if settings is not None else Settings()
        self.assemblers = validate_assemblers(
            assemblers,
            warn_missing_default=self.settings.warn_missing_default_assembler,
        )
        self.bubbler = Bubbler(separator=self.settings.separator)
        self.store = Store(self.bubbler, separator=self.settings.separator)

    def __repr__(self) -> str:
        return f"BubbleTree({self.store!r})"

    def _assembler_for(self, path: str, type: str | None = None) -> Any:
        if type is None and self.store.exists(path):
            type = self.store.get_type(path)
        if type is not None and type in self.assemblers:
            return self.assemblers[type]
        if DEFAULT_ASSEMBLER in self.assemblers:
            return self.assemblers[DEFAULT_ASSEMBLER]
        raise InvalidConfigurationError(
            f"No assembler for type {type!r} at '{path}' and no default assembler"
        )

    # ==================== Data ====================

    def save(self, path: str, key: str, value: Any, type: str | None = None) -> None:
        """Serialize value and store it under key at path.

        Args:
            path: Absolute path of the node; missing nodes are created.
            key: Leaf key within the node.
            value: Value to store.
            type: Optional type name for the node. It selects the assembler
                and is visible to subscription type filters.
        """
        assembler = self._assembler_for(path, type)
        self.store.save(path, key, assembler.serialize(value), type=type)

    def get(
        self,
        path: str,
        key: str | None = None,
        *,
        recursive: bool = False,
        assembler: Any = None,
        type: str | None = None,
        callback: Listener | None = None,
    ) -> Any:
        """Read from path, deserializing with the node's assembler.

        Args:
            path: Absolute path of the node.
            key: Leaf key to read. If None, the node's leaves are returned
                (or the whole subtree when recursive).
            recursive: Return child subtrees too; also makes callback
                receive bubbled events.
            assembler: Assembler to use instead of the type's one.
            type: Deserialize as if the node had this type.
            callback: If given, subscribed at path with bubble=recursive.

        Raises:
            NotFoundError: If path does not resolve.
        """
        obj = self.store.get(path, key, recursive=recursive)
        if assembler is None:
            assembler = self._assembler_for(path, type)
        if obj is not None:
            obj = assembler.deserialize(obj)
        if callback is not None:
            self.bubbler.subscribe(path, callback, bubble=recursive)
        return obj

    def get_type(self, path: str) -> str | None:
        """Return the type name of the node at path."""
        return self.store.get_type(path)

    def delete(self, path: str, key: str | None = None) -> bool:
        """Delete key at path, or the whole subtree when key is None."""
        return self.store.delete(path, key)

    def exists(self, path: str, key: str | None = None) -> bool:
        """Return True if path (and key, when given) exists."""
        return self.store.exists(path, key)

    # ==================== Events ====================

    def subscribe(
        self,
        path: str,
        callback: Listener,
        options: SubscribeOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Subscription:
        """Subscribe callback at path; see Bubbler.subscribe."""
        return self.bubbler.subscribe(path, callback, options, **kwargs)

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription returned by subscribe()."""
        return self.bubbler.unsubscribe(subscription)

    def unsubscribe_callback(self, path: str, callback: Listener) -> int:
        """Remove every subscription of callback at exactly path."""
        return self.bubbler.unsubscribe_callback(path, callback)

    def clear_subscriptions(self, path: str) -> None:
        """Remove every subscription at exactly path."""
        self.bubbler.clear_subscriptions(path)

    def emit(self, path: str, event: str | Event | Mapping[str, Any], *extra: Any) -> None:
        """Emit event at path and bubble it to the root."""
        self.bubbler.emit(path, event, *extra)
