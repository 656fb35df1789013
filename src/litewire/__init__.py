"""Minimal dependency injection container.

This package binds string identifiers to factories and, for identifiers without a
binding, builds instances by autowiring class constructors from their type hints.

Exports:
- `Container`: Binds identifiers to factories and resolves them, autowiring
  unbound classes recursively.
- `ContainerProtocol`: The `get`/`has` surface factories can depend on.
- `ResolverPolicy`: Configures which annotated types count as primitives.
- `ContainerError` and its `ResolutionError` family: `NotInstantiableError`,
  `MissingTypeHintError`, `UnsupportedTypeError`, `CyclicDependencyError`.
"""

from ._container import Container, ContainerProtocol
from ._errors import (
    ContainerError,
    CyclicDependencyError,
    MissingTypeHintError,
    NotInstantiableError,
    ResolutionError,
    UnsupportedTypeError,
)
from ._registry import Registry
from ._types import ResolverPolicy


__all__ = [
    "Container",
    "ContainerError",
    "ContainerProtocol",
    "CyclicDependencyError",
    "MissingTypeHintError",
    "NotInstantiableError",
    "Registry",
    "ResolutionError",
    "ResolverPolicy",
    "UnsupportedTypeError",
]
