from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, overload, runtime_checkable

from ._registry import Registry
from ._resolver import Resolver
from ._types import ResolverPolicy, identifier_of


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    T = TypeVar("T")

    Token = type[T] | str


@runtime_checkable
class ContainerProtocol(Protocol):
    """What factories and callers may rely on: lookup by identifier and containment."""

    def get(self, identifier: str) -> Any: ...

    def has(self, identifier: str) -> bool: ...


class Container:
    """Minimal DI container.

    - bind identifiers to factories that receive the container
    - resolve unbound classes by autowiring their constructors
    - no caching: every `get` calls the factory or constructs again.

    Example:
      container.bind("Logger", lambda c: Logger("app"))
      service = container.get("myapp.services.Service")

    """

    def __init__(self, *, policy: ResolverPolicy | None = None) -> None:
        self._registry = Registry()
        self._resolver = Resolver(self, policy)

    @property
    def registry(self) -> Registry:
        return self._registry

    def bind(self, identifier: Token[Any], factory: Callable[[Container], Any]) -> None:
        """Bind `identifier` to `factory`, replacing any previous binding."""
        self._registry.bind(identifier, factory)

    def has(self, identifier: Token[Any]) -> bool:
        """Whether an explicit binding exists; autowirable classes don't count."""
        return self._registry.has(identifier)

    @overload
    def get(self, identifier: type[T]) -> T: ...

    @overload
    def get(self, identifier: str) -> Any: ...

    def get(self, identifier: Token[T]) -> Any:
        """Return the value for `identifier`.

        A bound factory is called with this container and its result returned
        as-is. Otherwise the identifier is treated as a class and autowired.
        """
        factory = self._registry.lookup(identifier)
        if factory is None:
            return self._resolver.resolve(identifier)

        key = identifier_of(identifier)
        logger.debug("Resolving %s from its binding", key)
        with self._resolver.tracking(key, via_factory=True):
            return factory(self)

    @overload
    def resolve(self, identifier: type[T]) -> T: ...

    @overload
    def resolve(self, identifier: str) -> Any: ...

    def resolve(self, identifier: Token[T]) -> Any:
        """Autowire `identifier` as a class, ignoring any binding for the identifier itself.

        Constructor dependencies still go through `get`, so their bindings apply.

        Raises:
          NotInstantiableError: the class does not exist or cannot be constructed.
          MissingTypeHintError: a constructor parameter is not annotated.
          UnsupportedTypeError: a constructor parameter is a union, primitive or other unsupported type.
          CyclicDependencyError: the class depends on itself.

        """
        return self._resolver.resolve(identifier)
