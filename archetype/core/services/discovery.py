"""
Discovery — find declarations carrying the marker decorator.

Source files are parsed with ``ast``, never imported, so scanning has no
side effects and works on code whose dependencies are not installed.

Recognized decorator forms (``archetype`` being the configured marker):

    @archetype(template="x.py.j2")
    @archetype("x.py.j2")
    @some.module.archetype(template="x.py.j2")

Scanned declarations: top-level classes and functions, and methods of
top-level classes.  The namespace of a declaration is the directory of its
file relative to the source root, dotted.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from archetype.core.errors import DiscoveryError
from archetype.core.models.declaration import AnnotatedDeclaration, ElementKind

logger = logging.getLogger(__name__)

_SKIP_DIRS = {"__pycache__", "node_modules", "venv"}


def scan_sources(
    roots: Iterable[Path],
    marker: str = "archetype",
    exclude: Iterable[Path] = (),
    encoding: str = "utf-8",
) -> Iterator[AnnotatedDeclaration]:
    """Yield decorated declarations from every ``*.py`` file under ``roots``.

    Files are visited in sorted path order so a round is reproducible.

    Args:
        roots: Source root directories.
        marker: Decorator name to look for.
        exclude: Directories to leave out (e.g. the output directory).
        encoding: Source file encoding.

    Raises:
        DiscoveryError: On unreadable or unparseable files, or a marker
            without a literal template.
    """
    excluded = [p.resolve() for p in exclude]

    for root in roots:
        root = root.resolve()
        if not root.is_dir():
            logger.warning("Source root does not exist: %s", root)
            continue

        for path in sorted(root.rglob("*.py")):
            if _is_excluded(path, root, excluded):
                continue
            yield from scan_file(path, root, marker=marker, encoding=encoding)


def _is_excluded(path: Path, root: Path, excluded: list[Path]) -> bool:
    resolved = path.resolve()
    if any(resolved.is_relative_to(e) for e in excluded):
        return True
    dirs = path.relative_to(root).parts[:-1]
    for part in dirs:
        if part.startswith(".") or part in _SKIP_DIRS:
            return True
        if not part.isidentifier():
            logger.debug("Skipping %s: %r is not a package name", path, part)
            return True
    return False


def scan_file(
    path: Path,
    root: Path,
    marker: str = "archetype",
    encoding: str = "utf-8",
) -> list[AnnotatedDeclaration]:
    """Scan a single file; namespace is derived from its place under ``root``."""
    relative = path.relative_to(root)
    namespace = ".".join(relative.parts[:-1])
    stem = relative.stem
    module = namespace if stem == "__init__" else ".".join(p for p in (namespace, stem) if p)

    try:
        source = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise DiscoveryError(f"Cannot read {path}: {e}") from e

    return parse_source(
        source,
        namespace=namespace,
        module=module,
        source_path=str(path),
        marker=marker,
    )


def parse_source(
    source: str,
    namespace: str = "",
    module: str = "",
    source_path: str = "<string>",
    marker: str = "archetype",
) -> list[AnnotatedDeclaration]:
    """Extract decorated declarations from source text."""
    if marker not in source:
        return []

    try:
        tree = ast.parse(source, filename=source_path)
    except SyntaxError as e:
        raise DiscoveryError(f"Cannot parse {source_path}: {e}") from e

    found: list[AnnotatedDeclaration] = []

    def visit(node: ast.AST, kind: ElementKind) -> None:
        template = _marker_template(node, marker, source_path)
        if template is None:
            return
        found.append(
            AnnotatedDeclaration(
                kind=kind,
                namespace=namespace,
                simple_name=node.name,
                template=template,
                module=module,
                source_path=source_path,
                lineno=node.lineno,
            )
        )

    for node in tree.body:
        if isinstance(node, ast.ClassDef):
            visit(node, ElementKind.CLASS)
            for member in node.body:
                if isinstance(member, (ast.FunctionDef, ast.AsyncFunctionDef)):
                    visit(member, ElementKind.METHOD)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            visit(node, ElementKind.FUNCTION)

    logger.debug("Found %d marked declaration(s) in %s", len(found), source_path)
    return found


def _decorator_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _marker_template(node: ast.AST, marker: str, source_path: str) -> str | None:
    """Return the marker's template payload, or None if the node is unmarked."""
    for decorator in getattr(node, "decorator_list", []):
        call = decorator if isinstance(decorator, ast.Call) else None
        name = _decorator_name(call.func if call else decorator)
        if name != marker:
            continue

        where = f"{source_path}:{decorator.lineno}"
        if call is None:
            raise DiscoveryError(f"{where}: @{marker} requires a 'template' argument")

        value: ast.expr | None = None
        for keyword in call.keywords:
            if keyword.arg == "template":
                value = keyword.value
        if value is None and call.args:
            value = call.args[0]

        if not (isinstance(value, ast.Constant) and isinstance(value.value, str) and value.value):
            raise DiscoveryError(f"{where}: @{marker} 'template' must be a non-empty string literal")
        return value.value

    return None
