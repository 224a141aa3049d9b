"""
Tests for the Jinja2 engine adapter and the built-in templates.
"""

import ast
import io
from pathlib import Path

import pytest

from archetype.adapters.filesystem import FileSystemResolver
from archetype.adapters.templating import Jinja2Engine
from archetype.core.data import builtin_templates
from archetype.core.engine.processor import ArchetypeProcessor
from archetype.core.errors import RenderError
from archetype.core.models.declaration import AnnotatedDeclaration, ElementKind
from archetype.core.services.context import get_context_builder


@pytest.fixture
def engine() -> Jinja2Engine:
    return Jinja2Engine()


class TestJinja2Engine:
    def test_execute_into_sink(self, engine: Jinja2Engine):
        compiled = engine.compile("class {{ name }}Test:\n    pass\n", "t.j2")
        sink = io.StringIO()
        compiled.execute(sink, {"name": "Foo"})
        assert sink.getvalue() == "class FooTest:\n    pass\n"

    def test_trailing_newline_preserved(self, engine: Jinja2Engine):
        sink = io.StringIO()
        engine.compile("x\n\n", "t.j2").execute(sink, {})
        assert sink.getvalue() == "x\n\n"

    def test_no_autoescape(self, engine: Jinja2Engine):
        sink = io.StringIO()
        engine.compile("{{ v }}", "t.j2").execute(sink, {"v": "<a & b>"})
        assert sink.getvalue() == "<a & b>"

    def test_compiled_template_is_reusable(self, engine: Jinja2Engine):
        compiled = engine.compile("{{ n }}", "t.j2")
        outputs = []
        for n in (1, 2):
            sink = io.StringIO()
            compiled.execute(sink, {"n": n})
            outputs.append(sink.getvalue())
        assert outputs == ["1", "2"]
        assert compiled.name == "t.j2"

    def test_syntax_error_is_render_error(self, engine: Jinja2Engine):
        with pytest.raises(RenderError, match="Failed to compile broken.j2"):
            engine.compile("{% if %}", "broken.j2")

    def test_missing_key_is_render_error(self, engine: Jinja2Engine):
        compiled = engine.compile("{{ name }}", "needs-name.j2")
        with pytest.raises(RenderError, match="needs-name.j2") as exc:
            compiled.execute(io.StringIO(), {})
        assert exc.value.__cause__ is not None

    def test_runtime_exception_is_render_error(self, engine: Jinja2Engine):
        compiled = engine.compile("{{ 1 // 0 }}", "div.j2")
        with pytest.raises(RenderError, match="Failed to render div.j2") as exc:
            compiled.execute(io.StringIO(), {})
        assert isinstance(exc.value.__cause__, ZeroDivisionError)

    def test_failing_filter_is_render_error(self, engine: Jinja2Engine):
        compiled = engine.compile("{{ n | round }}", "round.j2")
        with pytest.raises(RenderError):
            compiled.execute(io.StringIO(), {"n": "not a number"})

    def test_sink_oserror_passes_through(self, engine: Jinja2Engine):
        class FullDisk(io.StringIO):
            def write(self, s):
                raise OSError(28, "No space left on device")

            def writelines(self, lines):
                for line in lines:
                    self.write(line)

        with pytest.raises(OSError):
            engine.compile("text", "t.j2").execute(FullDisk(), {})


class TestBuiltinTemplates:
    @pytest.mark.parametrize("context", ["minimal", "declaration"])
    @pytest.mark.parametrize("identifier", builtin_templates())
    def test_renders_under_every_context(self, tmp_path: Path, identifier: str, context: str):
        widget = AnnotatedDeclaration(
            kind=ElementKind.CLASS,
            namespace="com.example",
            simple_name="Widget",
            module="com.example.widget",
            template=identifier,
        )
        processor = ArchetypeProcessor(
            FileSystemResolver([], tmp_path),
            context_builder=get_context_builder(context),
        )
        report = processor.process([widget])
        assert [r.status for r in report.receipts] == ["generated"]

        text = (tmp_path / "com" / "example" / "WidgetTest.py").read_text()
        ast.parse(text)
        assert text.endswith("\n") and not text.endswith("\n\n")

    def test_pytest_class_is_collectable(self, tmp_path: Path):
        widget = AnnotatedDeclaration(
            kind=ElementKind.CLASS, namespace="p", simple_name="Foo", template="pytest_class.py.j2",
        )
        ArchetypeProcessor(
            FileSystemResolver([], tmp_path),
            context_builder=get_context_builder("declaration"),
        ).process([widget])
        text = (tmp_path / "p" / "FooTest.py").read_text()
        assert "class TestFoo:" in text
        assert "from p import Foo" in text

    def test_pytest_class_without_declaration_context(self, tmp_path: Path):
        widget = AnnotatedDeclaration(
            kind=ElementKind.CLASS, namespace="p", simple_name="Foo", template="pytest_class.py.j2",
        )
        ArchetypeProcessor(FileSystemResolver([], tmp_path)).process([widget])
        text = (tmp_path / "p" / "FooTest.py").read_text()
        assert "class TestGenerated:" in text
        assert "{{" not in text
