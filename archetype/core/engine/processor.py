"""
Generation processor — one build round, start to finish.

The processor is the control loop of the generator.  It takes the
declarations discovered for a round and, for each one, validates it,
checks the idempotency guard, resolves its template, builds the render
context and writes the rendered artifact.

Flow per declaration:
    validate → guard → resolve template → build context → render → write

Failure policy:
    - a decorated non-class, or one whose namespace cannot be a path, is
      reported as an ERROR diagnostic and halts the round;
    - an existing target is reported as a NOTE and skipped;
    - template lookup, I/O and rendering failures propagate to the caller.
      Nothing is retried and a partially written target is left as is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from archetype.adapters.base import ResourceResolver
from archetype.adapters.templating import Jinja2Engine, TemplateEngine
from archetype.core.errors import ValidationError
from archetype.core.models.declaration import AnnotatedDeclaration, GenerationTarget
from archetype.core.models.diagnostic import GenerationReceipt, RoundReport
from archetype.core.services.context import ContextBuilder, EmptyContextBuilder
from archetype.core.services.guard import IdempotencyGuard
from archetype.core.services.messager import Messager

logger = logging.getLogger(__name__)

ALREADY_EXISTS_NOTE = "The target file already exists, skip generation."


class ArchetypeProcessor:
    """Drive one generation round over a set of declarations.

    Args:
        resolver:         Template and generated-sources namespaces.
        engine:           Template backend (Jinja2 by default).
        context_builder:  Render context factory (empty context by default).
        messager:         Diagnostic sink; a fresh one if omitted.
        stop_after_first: Return after the first handled declaration
                          instead of processing the whole round.
        marker:           Decorator name, used in diagnostics.
    """

    def __init__(
        self,
        resolver: ResourceResolver,
        engine: TemplateEngine | None = None,
        context_builder: ContextBuilder | None = None,
        messager: Messager | None = None,
        stop_after_first: bool = False,
        marker: str = "archetype",
    ):
        self._resolver = resolver
        self._engine = engine or Jinja2Engine()
        self._context_builder = context_builder or EmptyContextBuilder()
        self._messager = messager or Messager()
        self._guard = IdempotencyGuard(resolver)
        self._stop_after_first = stop_after_first
        self._marker = marker

    @property
    def messager(self) -> Messager:
        return self._messager

    def process(self, declarations: Iterable[AnnotatedDeclaration]) -> RoundReport:
        """Run one round.

        ``halted`` on the returned report is set when the round stopped at
        a declaration instead of running to the end of the feed.

        Raises:
            TemplateNotFoundError, GenerationIOError, RenderError:
                Fatal for the round; propagated unchanged.
        """
        report = RoundReport()
        first_diagnostic = len(self._messager.diagnostics)

        try:
            for declaration in declarations:
                receipt = self._process_one(declaration)
                report.receipts.append(receipt)

                if receipt.status == "invalid" or self._stop_after_first:
                    report.halted = True
                    break
        finally:
            report.diagnostics = self._messager.diagnostics[first_diagnostic:]

        logger.info(
            "Round done: %d generated, %d skipped, %d invalid%s",
            len(report.generated),
            len(report.skipped),
            len(report.invalid),
            " (halted)" if report.halted else "",
        )
        return report

    def _process_one(self, declaration: AnnotatedDeclaration) -> GenerationReceipt:
        target = declaration.target()

        try:
            self._validate(declaration)
            location = self._resolver.output_location(target.namespace, target.name)
        except ValidationError as e:
            self._messager.error(declaration, str(e))
            return GenerationReceipt(declaration=declaration, status="invalid")

        if self._guard.should_skip(target.namespace, target.name):
            self._messager.note(declaration, ALREADY_EXISTS_NOTE)
            return GenerationReceipt(declaration=declaration, status="skipped", target=location)

        self._generate(declaration, target)
        logger.info("Generated %s from %s", location, declaration.template)
        return GenerationReceipt(declaration=declaration, status="generated", target=location)

    def _validate(self, declaration: AnnotatedDeclaration) -> None:
        if not declaration.kind.is_class_like:
            raise ValidationError(f"Only classes can be decorated with @{self._marker}")

    def _generate(self, declaration: AnnotatedDeclaration, target: GenerationTarget) -> None:
        location = self._resolver.resolve_template(declaration.template)
        context = self._context_builder.build(declaration)

        with self._resolver.open_template(location) as reader:
            text = reader.read()
        compiled = self._engine.compile(text, declaration.template)

        with self._resolver.open_output(target.namespace, target.name, origin=declaration) as sink:
            compiled.execute(sink, context)
