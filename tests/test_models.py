"""
Tests for domain models — naming convention, receipts, reports.
"""

import pytest
from pydantic import ValidationError

from archetype.core.models import (
    AnnotatedDeclaration,
    ArchetypeConfig,
    Diagnostic,
    ElementKind,
    GenerationReceipt,
    GenerationTarget,
    RoundReport,
    Severity,
)


class TestAnnotatedDeclaration:
    def test_qualified_name(self, widget: AnnotatedDeclaration):
        assert widget.qualified_name == "com.example.Widget"

    def test_qualified_name_without_namespace(self):
        d = AnnotatedDeclaration(kind=ElementKind.CLASS, simple_name="Foo", template="t")
        assert d.qualified_name == "Foo"

    def test_target_naming_convention(self, widget: AnnotatedDeclaration):
        """Target keeps the namespace and appends the fixed suffix."""
        target = widget.target()
        assert target.namespace == "com.example"
        assert target.name == "WidgetTest.py"
        assert target.relative_path == "com/example/WidgetTest.py"

    def test_target_at_root(self):
        d = AnnotatedDeclaration(kind=ElementKind.CLASS, simple_name="Foo", template="t")
        assert d.target().relative_path == "FooTest.py"

    def test_frozen(self, widget: AnnotatedDeclaration):
        with pytest.raises(ValidationError):
            widget.simple_name = "Other"

    def test_location_prefers_source(self):
        d = AnnotatedDeclaration(
            kind=ElementKind.CLASS, simple_name="Foo", template="t",
            source_path="src/p/foo.py", lineno=4,
        )
        assert d.location == "src/p/foo.py:4"

    def test_only_class_is_class_like(self):
        assert ElementKind.CLASS.is_class_like
        assert not ElementKind.FUNCTION.is_class_like
        assert not ElementKind.METHOD.is_class_like


class TestGenerationTarget:
    def test_single_segment_namespace(self):
        assert GenerationTarget(namespace="p", name="FooTest.py").relative_path == "p/FooTest.py"


class TestRoundReport:
    def test_counts_and_errors(self, widget: AnnotatedDeclaration):
        report = RoundReport(
            receipts=[
                GenerationReceipt(declaration=widget, status="generated", target="a"),
                GenerationReceipt(declaration=widget, status="skipped", target="b"),
            ],
            diagnostics=[Diagnostic(severity=Severity.NOTE, message="skip", declaration=widget)],
        )
        assert len(report.generated) == 1
        assert len(report.skipped) == 1
        assert report.invalid == []
        assert report.has_errors is False

    def test_to_dict(self, widget: AnnotatedDeclaration):
        report = RoundReport(
            receipts=[GenerationReceipt(declaration=widget, status="invalid")],
            diagnostics=[Diagnostic(severity=Severity.ERROR, message="bad", declaration=widget)],
            halted=True,
        )
        data = report.to_dict()
        assert data["halted"] is True
        assert data["invalid"] == 1
        assert data["receipts"][0]["declaration"] == "com.example.Widget"
        assert data["diagnostics"][0]["severity"] == "error"
        assert report.has_errors is True


class TestDiagnostic:
    def test_format_with_declaration(self, widget: AnnotatedDeclaration):
        d = Diagnostic(severity=Severity.NOTE, message="hello", declaration=widget)
        assert d.format() == "com.example.Widget: note: hello"

    def test_format_without_declaration(self):
        assert Diagnostic(severity=Severity.ERROR, message="x").format() == "error: x"


class TestArchetypeConfig:
    def test_defaults(self, tmp_path):
        c = ArchetypeConfig(root=tmp_path)
        assert c.source_roots == ["src"]
        assert c.context == "minimal"
        assert c.stop_after_first is False
        assert c.output_path == (tmp_path / "build" / "generated-sources").resolve()

    def test_absolute_paths_kept(self, tmp_path):
        out = tmp_path / "elsewhere"
        c = ArchetypeConfig(root=tmp_path / "proj", output_dir=str(out))
        assert c.output_path == out

    def test_marker_must_be_identifier(self):
        with pytest.raises(ValidationError):
            ArchetypeConfig(marker="not-valid")

    def test_unknown_context_rejected(self):
        with pytest.raises(ValidationError):
            ArchetypeConfig(context="rich")
