# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BubbleTree exceptions."""

from __future__ import annotations


class BubbleTreeError(Exception):
    """Base exception for BubbleTree errors."""

    pass


class NotFoundError(BubbleTreeError, KeyError):
    """Raised when a path does not resolve and creation is not allowed."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Path '{path}' not found")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidPathError(BubbleTreeError, ValueError):
    """Raised when a path string is malformed."""

    pass


class InvalidFilterError(BubbleTreeError, ValueError):
    """Raised when a filter's types or names is not a string or list of strings."""

    pass


class InvalidConfigurationError(BubbleTreeError, ValueError):
    """Raised on malformed subscription options or assembler configuration."""

    pass
