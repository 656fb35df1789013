from __future__ import annotations

from typing import Any


class ContainerError(RuntimeError):
    """Base class for every failure raised by the container."""


class ResolutionError(ContainerError):
    """An identifier could not be turned into a value.

    `identifier` names the class or binding being resolved when the failure was
    detected, and `parameter` the constructor parameter involved, if any.
    """

    def __init__(self, msg: str, *, identifier: str, parameter: str | None = None) -> None:
        super().__init__(msg)
        self.identifier = identifier
        self.parameter = parameter


class NotInstantiableError(ResolutionError):
    """The identifier does not name a concrete, directly constructible class."""


class MissingTypeHintError(ResolutionError):
    """A constructor parameter has no annotation to resolve it by."""


class UnsupportedTypeError(ResolutionError):
    """A constructor parameter is annotated with a union, a non-class typing construct or a primitive."""

    def __init__(self, msg: str, *, identifier: str, parameter: str | None = None, annotation: Any = None) -> None:
        super().__init__(msg, identifier=identifier, parameter=parameter)
        self.annotation = annotation


class CyclicDependencyError(ResolutionError):
    """An identifier was requested again while it was still being resolved."""

    def __init__(self, msg: str, *, path: tuple[str, ...]) -> None:
        super().__init__(msg, identifier=path[-1])
        self.path = path
