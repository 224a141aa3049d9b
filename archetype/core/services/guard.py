"""
Idempotency guard — never generate over an existing artifact.
"""

from __future__ import annotations

from archetype.adapters.base import ResourceResolver


class IdempotencyGuard:
    """Skip generation when the target already exists.

    Holds no state of its own; the generated-sources namespace is the
    record, so the guarantee spans separate build invocations as long as
    that namespace persists.
    """

    def __init__(self, resolver: ResourceResolver):
        self._resolver = resolver

    def should_skip(self, namespace: str, name: str) -> bool:
        return self._resolver.exists_output(namespace, name)
