# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-BubbleTree - In-memory hierarchical namespace with bubbling events.

A path-addressed tree store paired with a publish/subscribe bus in which
events emitted at a path propagate up through every ancestor path, like
DOM event bubbling.
"""

__version__ = "0.1.0"

from .assemblers import Assembler, PassthroughAssembler
from .bubbler import (
    Bubbler,
    Event,
    EventSource,
    Filter,
    SubscribeOptions,
    Subscription,
    match_filter,
)
from .bubbletree import BubbleTree
from .config import Settings
from .exceptions import (
    BubbleTreeError,
    InvalidConfigurationError,
    InvalidFilterError,
    InvalidPathError,
    NotFoundError,
)
from .logging import configure_logging
from .node import Node
from .paths import ResolvedLocation, resolve
from .store import Store

__all__ = [
    # Core classes
    "BubbleTree",
    "Store",
    "Bubbler",
    "Node",
    # Events and subscriptions
    "Event",
    "EventSource",
    "Filter",
    "SubscribeOptions",
    "Subscription",
    "match_filter",
    # Paths
    "ResolvedLocation",
    "resolve",
    # Assemblers
    "Assembler",
    "PassthroughAssembler",
    # Configuration
    "Settings",
    "configure_logging",
    # Exceptions
    "BubbleTreeError",
    "NotFoundError",
    "InvalidPathError",
    "InvalidFilterError",
    "InvalidConfigurationError",
]
