# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path utilities and node resolution.

Paths are absolute, separator-delimited strings such as ``/users/alice``.
Trailing separators are stripped and an empty result denotes the root,
which is always spelled as a lone separator (``/``).

Inside a Node, a child subtree is stored under its segment name prefixed
with the separator (``'/alice'``) so it never collides with a leaf key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .exceptions import InvalidPathError, NotFoundError
from .node import Node

DEFAULT_SEPARATOR = '/'


@dataclass(frozen=True)
class ResolvedLocation:
    """Outcome of resolving a path against a Node tree.

    Attributes:
        parent: The Node holding the final segment, or None for the root.
        current: The Node addressed by the path.
        name: The child key of the final segment ('' for the root).
        created: True if any node was created during resolution.
    """

    parent: Node | None
    current: Node
    name: str
    created: bool = False


def clean_path(path: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Strip trailing separators, returning the canonical form of path.

    Args:
        path: Absolute path string.
        separator: The path separator.

    Returns:
        The canonical path; the root is returned as the separator itself.

    Raises:
        InvalidPathError: If path is not a string starting with the separator
            or holds an empty inner segment.
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"Path must be a string, not {type(path).__name__}")
    if not path.startswith(separator):
        raise InvalidPathError(f"Path '{path}' must start with '{separator}'")
    stripped = path.rstrip(separator)
    if not stripped:
        return separator
    if separator * 2 in stripped:
        raise InvalidPathError(f"Path '{path}' contains an empty segment")
    return stripped


def split_path(path: str, separator: str = DEFAULT_SEPARATOR) -> tuple[str, ...]:
    """Split path into its segments; the root yields an empty tuple.

    Example:
        >>> split_path('/a/b/')
        ('a', 'b')
    """
    cleaned = clean_path(path, separator)
    if cleaned == separator:
        return ()
    return tuple(cleaned.split(separator)[1:])


def join_path(segments: tuple[str, ...] | list[str], separator: str = DEFAULT_SEPARATOR) -> str:
    """Build the canonical path for the given segments."""
    return separator + separator.join(segments)


def child_key(segment: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return the in-node key under which a child subtree is stored."""
    return separator + segment


def parent_path(path: str, separator: str = DEFAULT_SEPARATOR) -> str | None:
    """Return the parent of path, or None if path is the root."""
    segments = split_path(path, separator)
    if not segments:
        return None
    return join_path(segments[:-1], separator)


def ancestors(path: str, separator: str = DEFAULT_SEPARATOR) -> Iterator[str]:
    """Yield every strict ancestor of path, nearest first, ending at the root.

    Example:
        >>> list(ancestors('/a/b/c'))
        ['/a/b', '/a', '/']
    """
    segments = split_path(path, separator)
    for depth in range(len(segments) - 1, -1, -1):
        yield join_path(segments[:depth], separator)


def resolve(
    path: str,
    root: Node,
    create: bool = False,
    separator: str = DEFAULT_SEPARATOR,
) -> ResolvedLocation:
    """Walk path from root, optionally creating missing nodes.

    Args:
        path: Absolute path string.
        root: The root Node of the tree.
        create: If True, missing nodes are created as empty Nodes.
        separator: The path separator.

    Returns:
        The ResolvedLocation for the final segment.

    Raises:
        NotFoundError: If a segment is missing and create is False.
    """
    parent: Node | None = None
    current: Node = root
    name = ''
    created = False

    for segment in split_path(path, separator):
        name = child_key(segment, separator)
        child: Any = current.get(name)
        if child is None:
            if not create:
                raise NotFoundError(clean_path(path, separator))
            child = Node()
            current[name] = child
            created = True
        parent = current
        current = child

    return ResolvedLocation(parent, current, name, created)
