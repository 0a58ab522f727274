# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Bubbler package - Event subscription and upward propagation.

The package is organized into:
- core: The Bubbler dispatcher with its direct and bubble buses
- subscription: Subscription handles, options and event descriptors
- filters: Type/name filters and their matching rule
"""

from .core import Bubbler
from .filters import Filter, match_filter
from .subscription import Event, EventSource, SubscribeOptions, Subscription

__all__ = [
    "Bubbler",
    "Event",
    "EventSource",
    "Filter",
    "SubscribeOptions",
    "Subscription",
    "match_filter",
]
