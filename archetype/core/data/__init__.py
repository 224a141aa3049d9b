"""
Static data shipped with the package.

``templates/`` holds the built-in templates.  They sit last on the
template search path, so a project template with the same identifier
always wins.

Both built-ins render under either context builder:

    unittest_stub.py.j2   a ``unittest.TestCase`` placeholder
    pytest_class.py.j2    a ``Test<Name>`` class importing the decorated
                          class when the declaration context is on, a
                          generic ``TestGenerated`` class otherwise

Generated files are named ``<Name>Test.py``, which pytest does not
collect by default; add ``python_files = ["test_*.py", "*Test.py"]`` to
the consuming project's pytest configuration.
"""

from __future__ import annotations

from pathlib import Path

_DATA_DIR = Path(__file__).parent

BUILTIN_TEMPLATE_DIR = _DATA_DIR / "templates"


def builtin_templates() -> list[str]:
    """Identifiers of all built-in templates, sorted."""
    if not BUILTIN_TEMPLATE_DIR.is_dir():
        return []
    return sorted(
        p.relative_to(BUILTIN_TEMPLATE_DIR).as_posix()
        for p in BUILTIN_TEMPLATE_DIR.rglob("*")
        if p.is_file()
    )
