"""Artifact emitters: test scaffold, implementation, documentation."""

from skillwright.emitters.docs import emit_docs
from skillwright.emitters.implementation import emit_implementation, make_implementer
from skillwright.emitters.scaffold import default_assertions, emit_scaffold

__all__ = [
    "default_assertions",
    "emit_docs",
    "emit_implementation",
    "emit_scaffold",
    "make_implementer",
]
