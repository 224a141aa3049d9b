"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from archetype.core.models import AnnotatedDeclaration, Diagnostic, RoundReport
"""

from archetype.core.models.config import ArchetypeConfig
from archetype.core.models.declaration import (
    SOURCE_EXTENSION,
    TARGET_SUFFIX,
    AnnotatedDeclaration,
    ElementKind,
    GenerationTarget,
)
from archetype.core.models.diagnostic import (
    Diagnostic,
    GenerationReceipt,
    RoundReport,
    Severity,
)

__all__ = [
    # declaration.py
    "AnnotatedDeclaration",
    # config.py
    "ArchetypeConfig",
    # diagnostic.py
    "Diagnostic",
    "ElementKind",
    "GenerationReceipt",
    "GenerationTarget",
    "RoundReport",
    "SOURCE_EXTENSION",
    "Severity",
    "TARGET_SUFFIX",
]
