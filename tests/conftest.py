# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for BubbleTree tests."""

import pytest

from genro_bubbletree import BubbleTree, Settings, Store


class Recorder:
    """Callable collecting (event, source, extra) for every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, event, source, *extra):
        self.calls.append((event, source, extra))

    @property
    def events(self):
        return [call[0] for call in self.calls]

    @property
    def paths(self):
        return [call[1].path for call in self.calls]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def bubbler(store):
    return store.bubbler


@pytest.fixture
def tree():
    return BubbleTree(settings=Settings())
