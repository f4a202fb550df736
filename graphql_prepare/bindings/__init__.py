"""
Binding generators for graphql-binding and prisma-binding clients.
"""

from __future__ import annotations

from .generator import GENERATORS, BindingGenerationError, BindingGenerator, generate_code

__all__ = [
    "GENERATORS",
    "BindingGenerationError",
    "BindingGenerator",
    "generate_code",
]
