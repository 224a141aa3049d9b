"""
Tests for the small services — context builders, guard, messager, marker.
"""

import logging
import re

import pytest

import archetype as archetype_package
from archetype import archetype
from archetype.adapters.mock import InMemoryResolver
from archetype.core.data import builtin_templates
from archetype.core.models.diagnostic import Severity
from archetype.core.services.context import (
    DeclarationContextBuilder,
    EmptyContextBuilder,
    get_context_builder,
)
from archetype.core.services.guard import IdempotencyGuard
from archetype.core.services.messager import Messager
from archetype.marker import template_of


class TestContextBuilders:
    def test_empty(self, widget):
        assert EmptyContextBuilder().build(widget) == {}

    def test_fresh_mapping_each_call(self, widget):
        builder = EmptyContextBuilder()
        first = builder.build(widget)
        first["x"] = 1
        assert builder.build(widget) == {}

    def test_declaration_keys(self, widget):
        ctx = DeclarationContextBuilder().build(widget)
        assert ctx == {
            "name": "Widget",
            "namespace": "com.example",
            "qualified_name": "com.example.Widget",
            "module": "com.example.widget",
            "kind": "class",
            "template": "widget.j2",
            "test_name": "WidgetTest",
        }

    def test_lookup(self):
        assert isinstance(get_context_builder("minimal"), EmptyContextBuilder)
        assert isinstance(get_context_builder("declaration"), DeclarationContextBuilder)
        with pytest.raises(ValueError, match="Unknown context builder"):
            get_context_builder("rich")


class TestIdempotencyGuard:
    def test_skip_only_when_target_exists(self):
        resolver = InMemoryResolver(outputs={"p/FooTest.py": "old"})
        guard = IdempotencyGuard(resolver)
        assert guard.should_skip("p", "FooTest.py") is True
        assert guard.should_skip("p", "BarTest.py") is False
        # probing never creates anything
        assert list(resolver.outputs) == ["p/FooTest.py"]


class TestMessager:
    def test_collects_and_logs(self, widget, caplog):
        messager = Messager()
        with caplog.at_level(logging.INFO, logger="archetype.core.services.messager"):
            messager.error(widget, "Only classes can be decorated with @%s", "archetype")
            messager.note(widget, "skip")

        kinds = [d.severity for d in messager.diagnostics]
        assert kinds == [Severity.ERROR, Severity.NOTE]
        assert messager.diagnostics[0].message == "Only classes can be decorated with @archetype"
        assert "com.example.Widget: error:" in caplog.text

    def test_message_with_percent_and_no_args(self):
        messager = Messager()
        messager.note(None, "100% done")
        assert messager.diagnostics[0].message == "100% done"

    def test_clear(self):
        messager = Messager()
        messager.note(None, "x")
        messager.clear()
        assert messager.diagnostics == []


class TestMarker:
    def test_returns_object_unchanged(self):
        @archetype(template="a.j2")
        class Foo:
            pass

        assert Foo.__name__ == "Foo"
        assert template_of(Foo) == "a.j2"

    def test_positional(self):
        @archetype("b.j2")
        class Bar:
            pass

        assert template_of(Bar) == "b.j2"

    def test_unmarked(self):
        assert template_of(object()) is None

    def test_requires_template(self):
        with pytest.raises(TypeError):
            archetype(template="")

    def test_package_usage_names_builtin_template(self):
        used = re.findall(r'template="([^"]+)"', archetype_package.__doc__)
        assert used
        assert set(used) <= set(builtin_templates())
