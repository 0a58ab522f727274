# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - In-memory hierarchical storage.

The Store owns a tree of Nodes addressed by absolute paths and notifies a
Bubbler of lifecycle events around every mutation.

Example:
    >>> from genro_bubbletree import Store
    >>> store = Store()
    >>> store.save('/config/db', 'host', 'localhost')
    >>> store.get('/config/db', 'host')
    'localhost'
"""

from .core import Store

__all__ = ["Store"]
