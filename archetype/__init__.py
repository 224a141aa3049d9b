"""
archetype — generate companion source files from decorated declarations.

    from archetype import archetype

    @archetype(template="unittest_stub.py.j2")
    class Widget:
        ...

Running ``archetype generate`` then writes ``WidgetTest.py`` into the
generated-sources directory.
"""

from archetype.marker import archetype

__version__ = "0.1.0"

__all__ = ["__version__", "archetype"]
