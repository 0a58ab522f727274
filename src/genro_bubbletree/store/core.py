# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store - the hierarchical data container.

The Store keeps a tree of Nodes rooted at ``/``. Writes auto-vivify every
missing ancestor; reads and deletes on a path that does not exist raise
NotFoundError, while ``exists`` answers False.

Lifecycle events are emitted through the Bubbler around each mutation:

    save    -> [pre-create] pre-update <write> [post-create] post-update
    delete  -> pre-delete <remove> post-delete

The create events fire only when the path or the key did not exist before
the write.

Example:
    >>> store = Store()
    >>> store.save('/users/alice', 'age', 30, type='user')
    >>> store.get('/users/alice')
    {'age': 30}
    >>> store.get_type('/users/alice')
    'user'
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..exceptions import InvalidConfigurationError, NotFoundError
from ..node import Node
from ..paths import DEFAULT_SEPARATOR, clean_path, resolve, ResolvedLocation

if TYPE_CHECKING:
    from ..bubbler import Bubbler


class Store:
    """A hierarchical, path-addressed data container.

    Attributes:
        separator: The path separator, also used as child-key prefix.
        bubbler: The Bubbler receiving lifecycle events.
    """

    __slots__ = ('_root', 'separator', 'bubbler')

    def __init__(
        self,
        bubbler: Bubbler | None = None,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialize a Store.

        Args:
            bubbler: Bubbler to notify. If None, a new Bubbler bound to
                this store is created.
            separator: Path separator character.
        """
        self._root = Node()
        self.separator = separator
        if bubbler is None:
            from ..bubbler import Bubbler
            bubbler = Bubbler(self, separator=separator)
        elif bubbler.store is None:
            bubbler.set_store(self)
        self.bubbler = bubbler

    def __repr__(self) -> str:
        return f"Store({list(self._root.children(self.separator))})"

    @property
    def root(self) -> Node:
        """The root Node."""
        return self._root

    def _resolve(self, path: str, create: bool = False) -> ResolvedLocation:
        return resolve(path, self._root, create=create, separator=self.separator)

    def _emit(self, path: str, event: str) -> None:
        self.bubbler.emit(path, event)

    # ==================== Core API ====================

    def save(self, path: str, key: str, value: Any, type: str | None = None) -> None:
        """Store value under key at path, creating missing nodes.

        Args:
            path: Absolute path of the node.
            key: Leaf key within the node.
            value: Value to store.
            type: Optional type name assigned to the node before any event
                fires.

        Raises:
            InvalidConfigurationError: If key uses the child-key prefix.
        """
        self._check_key(key)
        path = clean_path(path, self.separator)
        location = self._resolve(path, create=True)
        node = location.current
        create_mode = location.created or key not in node

        if type is not None:
            node.type = type

        if create_mode:
            self._emit(path, 'pre-create')
        self._emit(path, 'pre-update')

        node[key] = value

        if create_mode:
            self._emit(path, 'post-create')
        self._emit(path, 'post-update')

    def get(
        self,
        path: str,
        key: str | None = None,
        *,
        recursive: bool = False,
        default: Any = None,
    ) -> Any:
        """Read from the node at path.

        Args:
            path: Absolute path of the node.
            key: Leaf key to read. If None, the node itself is returned.
            recursive: Without key, return the whole Node (child subtrees
                included) instead of a dict of its leaf entries.
            default: Returned when key is given but absent.

        Returns:
            The value, the node's leaves, or the Node itself.

        Raises:
            NotFoundError: If path does not resolve.
            InvalidConfigurationError: If key uses the child-key prefix.
        """
        if key is not None:
            self._check_key(key)
        node = self._resolve(path).current
        if key is None:
            if recursive:
                return node
            return node.leaves(self.separator)
        return node.get(key, default)

    def delete(self, path: str, key: str | None = None) -> bool:
        """Delete a key, or the whole subtree at path when key is None.

        Deleting the root without a key empties it; the root itself always
        exists.

        Returns:
            True if something was deleted, False if key was absent (in which
            case no event is emitted).

        Raises:
            NotFoundError: If path does not resolve.
            InvalidConfigurationError: If key uses the child-key prefix.
        """
        if key is not None:
            self._check_key(key)
        path = clean_path(path, self.separator)
        location = self._resolve(path)

        if key is None:
            self._emit(path, 'pre-delete')
            if location.parent is None:
                location.current.clear()
                location.current.type = None
            else:
                location.parent.pop(location.name, None)
        else:
            if key not in location.current:
                return False
            self._emit(path, 'pre-delete')
            del location.current[key]

        self._emit(path, 'post-delete')
        return True

    def exists(self, path: str, key: str | None = None) -> bool:
        """Return True if path resolves and, when given, key is present.

        Raises:
            InvalidConfigurationError: If key uses the child-key prefix.
        """
        if key is not None:
            self._check_key(key)
        try:
            node = self._resolve(path).current
        except NotFoundError:
            return False
        if key is None:
            return True
        return key in node

    # ==================== Types ====================

    def get_type(self, path: str) -> str | None:
        """Return the type name of the node at path (None if untyped).

        Raises:
            NotFoundError: If path does not resolve.
        """
        return self._resolve(path).current.type

    def set_type(self, path: str, type: str | None) -> None:
        """Assign a type name to the node at path, creating missing nodes.

        No lifecycle event is emitted.
        """
        self._resolve(path, create=True).current.type = type

    def _check_key(self, key: str) -> None:
        if not isinstance(key, str):
            raise InvalidConfigurationError(
                f"key must be a string, not {type(key).__name__}"
            )
        if key.startswith(self.separator):
            raise InvalidConfigurationError(
                f"key '{key}' must not start with '{self.separator}'"
            )
