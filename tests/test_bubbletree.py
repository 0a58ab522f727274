# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the BubbleTree facade, assemblers, settings and logging."""

import json
import logging

import pytest
import structlog

from genro_bubbletree import (
    BubbleTree,
    InvalidConfigurationError,
    NotFoundError,
    PassthroughAssembler,
    Settings,
    configure_logging,
)
from genro_bubbletree.assemblers import validate_assemblers


class JsonAssembler:
    """Stores values as JSON strings."""

    name = 'json'

    def serialize(self, value):
        return json.dumps(value)

    def deserialize(self, value):
        return json.loads(value)


class TestBubbleTreeData:
    """Tests for save/get/delete/exists through the facade."""

    def test_save_get(self, tree):
        tree.save('/a/b', 'x', 1)
        assert tree.get('/a/b', 'x') == 1
        assert tree.get('/a/b') == {'x': 1}

    def test_get_recursive(self, tree):
        tree.save('/a', 'x', 1)
        tree.save('/a/b', 'y', 2)
        assert tree.get('/a', recursive=True) == {'x': 1, '/b': {'y': 2}}

    def test_get_missing_path_raises(self, tree):
        with pytest.raises(NotFoundError):
            tree.get('/missing')

    def test_delete_and_exists(self, tree):
        tree.save('/a/b', 'x', 1)
        assert tree.exists('/a/b', 'x')
        assert tree.delete('/a/b', 'missing') is False
        assert tree.delete('/a/b') is True
        assert tree.exists('/a/b') is False
        assert tree.exists('/missing') is False

    def test_save_with_type(self, tree):
        tree.save('/u/alice', 'age', 30, type='user')
        assert tree.get_type('/u/alice') == 'user'

    def test_repr(self, tree):
        tree.save('/a', 'x', 1)
        assert 'a' in repr(tree)


class TestBubbleTreeEvents:
    """Tests for subscribe/emit through the facade."""

    def test_subscribe_and_unsubscribe(self, tree, recorder):
        sub = tree.subscribe('/a', recorder)
        tree.save('/a/b', 'x', 1)
        assert recorder.events == ['pre-create', 'pre-update', 'post-create', 'post-update']
        assert tree.unsubscribe(sub) is True
        tree.save('/a/b', 'x', 2)
        assert len(recorder.calls) == 4

    def test_unsubscribe_callback(self, tree, recorder):
        tree.subscribe('/a', recorder)
        assert tree.unsubscribe_callback('/a', recorder) == 1
        tree.emit('/a', 'ping')
        assert recorder.calls == []

    def test_clear_subscriptions(self, tree, recorder):
        tree.subscribe('/a', recorder)
        tree.clear_subscriptions('/a')
        tree.emit('/a', 'ping')
        assert recorder.calls == []

    def test_emit_with_extras(self, tree, recorder):
        tree.subscribe('/', recorder)
        tree.emit('/x/y', 'custom', 'payload')
        assert recorder.calls[0][0] == 'custom'
        assert recorder.calls[0][2] == ('payload',)

    def test_get_with_callback_recursive(self, tree, recorder):
        """Test get(callback=...) subscribes with bubble=recursive."""
        tree.save('/a', 'x', 1)
        tree.get('/a', recursive=True, callback=recorder)
        tree.emit('/a/b', 'ping')
        assert recorder.events == ['ping']

    def test_get_with_callback_not_recursive(self, tree, recorder):
        tree.save('/a', 'x', 1)
        tree.get('/a', callback=recorder)
        tree.emit('/a/b', 'ping')
        assert recorder.calls == []
        tree.emit('/a', 'ping')
        assert recorder.events == ['ping']


class TestAssemblers:
    """Tests for assembler configuration and use."""

    def test_default_is_passthrough(self, tree):
        assert isinstance(tree.assemblers['_'], PassthroughAssembler)

    def test_typed_assembler(self):
        tree = BubbleTree({'_': PassthroughAssembler(), 'doc': JsonAssembler()})
        tree.save('/d', 'body', {'k': [1, 2]}, type='doc')
        assert tree.store.get('/d', 'body') == '{"k": [1, 2]}'
        assert tree.get('/d', 'body') == {'k': [1, 2]}

    def test_node_type_selects_assembler(self):
        """Test later untyped saves reuse the node's assembler."""
        tree = BubbleTree({'_': PassthroughAssembler(), 'doc': JsonAssembler()})
        tree.save('/d', 'a', 1, type='doc')
        tree.save('/d', 'b', 2)
        assert tree.store.get('/d', 'b') == '2'

    def test_assembler_override_on_get(self):
        tree = BubbleTree({'_': PassthroughAssembler(), 'doc': JsonAssembler()})
        tree.save('/d', 'body', [1], type='doc')
        assert tree.get('/d', 'body', assembler=PassthroughAssembler()) == '[1]'
        tree.save('/p', 'raw', '[2]')
        assert tree.get('/p', 'raw', type='doc') == [2]

    def test_missing_default_raises_on_untyped(self):
        tree = BubbleTree({'doc': JsonAssembler()})
        with pytest.raises(InvalidConfigurationError, match="no default"):
            tree.save('/p', 'x', 1)

    def test_invalid_assembler(self):
        with pytest.raises(InvalidConfigurationError, match="serialize"):
            BubbleTree({'_': object()})

    def test_assemblers_must_be_mapping(self):
        with pytest.raises(InvalidConfigurationError):
            validate_assemblers([PassthroughAssembler()])


class TestSettings:
    """Tests for Settings and logging configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv('BUBBLETREE_SEPARATOR', raising=False)
        settings = Settings()
        assert settings.separator == '/'
        assert settings.debug is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv('BUBBLETREE_SEPARATOR', '.')
        tree = BubbleTree(settings=Settings())
        tree.save('.a.b', 'x', 1)
        assert tree.get('.a.b', 'x') == 1
        assert tree.exists('.a')

    def test_invalid_separator(self):
        with pytest.raises(ValueError):
            Settings(separator='ab')

    def test_configure_logging(self, capsys):
        configure_logging(debug=True)
        try:
            tree = BubbleTree()
            tree.emit('/nowhere', 'ping')
            err = capsys.readouterr().err
            assert '"event": "emit on missing path"' in err
        finally:
            structlog.reset_defaults()

    def test_configure_logging_reads_settings(self, monkeypatch):
        """Test debug=None takes the level from BUBBLETREE_DEBUG."""
        monkeypatch.setenv('BUBBLETREE_DEBUG', 'true')
        configure_logging()
        try:
            assert structlog.get_config()['wrapper_class'] is structlog.make_filtering_bound_logger(logging.DEBUG)
        finally:
            structlog.reset_defaults()

    def test_configure_logging_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv('BUBBLETREE_DEBUG', raising=False)
        configure_logging()
        try:
            assert structlog.get_config()['wrapper_class'] is structlog.make_filtering_bound_logger(logging.INFO)
        finally:
            structlog.reset_defaults()
