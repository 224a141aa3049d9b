"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from archetype.adapters.mock import InMemoryResolver
from archetype.core.models.declaration import AnnotatedDeclaration, ElementKind

WIDGET_TEMPLATE = textwrap.dedent("""\
    import unittest


    class WidgetTest(unittest.TestCase):
        pass
""")


@pytest.fixture
def widget() -> AnnotatedDeclaration:
    """``com.example.Widget`` decorated with ``widget.j2``."""
    return AnnotatedDeclaration(
        kind=ElementKind.CLASS,
        namespace="com.example",
        simple_name="Widget",
        template="widget.j2",
        module="com.example.widget",
    )


@pytest.fixture
def memory_resolver() -> InMemoryResolver:
    """In-memory namespaces holding a single context-free template."""
    return InMemoryResolver(templates={"widget.j2": WIDGET_TEMPLATE})


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small project: config, one decorated class, one template."""
    (tmp_path / "archetype.yml").write_text(textwrap.dedent("""\
        source_roots: [src]
        template_paths: [templates]
        output_dir: build/generated-sources
    """))

    pkg = tmp_path / "src" / "com" / "example"
    pkg.mkdir(parents=True)
    (pkg / "widget.py").write_text(textwrap.dedent("""\
        from archetype import archetype


        @archetype(template="widget.j2")
        class Widget:
            pass
    """))

    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "widget.j2").write_text(WIDGET_TEMPLATE)
    return tmp_path


@pytest.fixture
def widget_template() -> str:
    return WIDGET_TEMPLATE
