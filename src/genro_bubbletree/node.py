# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BubbleTree node class."""

from __future__ import annotations

from typing import Any


class Node(dict):
    """A node in a BubbleTree hierarchy.

    A Node is a plain mapping: keys starting with the path separator hold
    child Nodes, every other key holds a leaf value. Callers must not use
    the separator prefix for their own keys.

    Attributes:
        type: Optional type name, used by subscription filters and
            assemblers.

    Example:
        >>> node = Node(name='Alice')
        >>> node['/address'] = Node(city='Rome')
        >>> node.leaves()
        {'name': 'Alice'}
    """

    __slots__ = ('type',)

    def __init__(self, *args: Any, type: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.type = type

    def __repr__(self) -> str:
        return f"Node({dict.__repr__(self)}, type={self.type!r})"

    def leaves(self, separator: str = '/') -> dict[str, Any]:
        """Return the leaf entries, excluding child subtrees."""
        return {k: v for k, v in self.items() if not k.startswith(separator)}

    def children(self, separator: str = '/') -> dict[str, Node]:
        """Return child subtrees keyed by their bare segment name."""
        return {
            k[len(separator):]: v
            for k, v in self.items()
            if k.startswith(separator)
        }
