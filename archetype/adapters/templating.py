"""
Template engine adapter — compile once, execute into a sink.

The processor depends only on the two-step contract below; any engine
that can compile text and stream output into a writable sink fits.  The
shipped backend is Jinja2 with strict undefined handling, so a template
that references a key the context does not provide fails loudly instead
of rendering an empty string.

Any exception raised while a template compiles or runs (a failing filter,
a bad expression) surfaces as ``RenderError``.  ``OSError`` from the sink
is left alone so the resolver can report it as an I/O failure.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, TextIO

import jinja2

from archetype.core.errors import RenderError

logger = logging.getLogger(__name__)


class CompiledTemplate(ABC):
    """A template ready to be executed any number of times."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the template was compiled under (used in errors)."""

    @abstractmethod
    def execute(self, sink: TextIO, context: dict[str, Any]) -> None:
        """Render against ``context``, writing straight into ``sink``.

        Raises:
            RenderError: If rendering fails.
        """


class TemplateEngine(ABC):
    """Factory for compiled templates."""

    @abstractmethod
    def compile(self, text: str, name: str) -> CompiledTemplate:
        """Compile template text.

        Raises:
            RenderError: If the text is not a valid template.
        """


class Jinja2Template(CompiledTemplate):
    def __init__(self, template: jinja2.Template, name: str):
        self._template = template
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def execute(self, sink: TextIO, context: dict[str, Any]) -> None:
        try:
            self._template.stream(context).dump(sink)
        except OSError:
            # sink failures belong to the resolver that opened the sink
            raise
        except Exception as e:
            raise RenderError(f"Failed to render {self._name}: {e}") from e


class Jinja2Engine(TemplateEngine):
    """Jinja2 backend.

    ``keep_trailing_newline`` is on so the artifact ends exactly like the
    template does; autoescaping is off because output is source code.
    """

    def __init__(self, environment: jinja2.Environment | None = None):
        self._env = environment or jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    @property
    def environment(self) -> jinja2.Environment:
        return self._env

    def compile(self, text: str, name: str) -> CompiledTemplate:
        try:
            template = self._env.from_string(text)
        except Exception as e:
            raise RenderError(f"Failed to compile {name}: {e}") from e
        logger.debug("Compiled template %s", name)
        return Jinja2Template(template, name)
