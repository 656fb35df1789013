from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ._types import candidate_keys, identifier_of


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    Factory = Callable[[Any], Any]


class Registry:
    """Identifier to factory bindings.

    Entries keep registration order and live as long as the registry. Binding an
    identifier again replaces the previous factory.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Factory] = {}
        self._lock = threading.RLock()

    def bind(self, identifier: str | type[Any], factory: Factory) -> None:
        if not callable(factory):
            msg = f"Factory for {identifier!r} must be callable, got {type(factory).__name__}"
            raise TypeError(msg)

        key = identifier_of(identifier)
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = factory

        if replaced:
            logger.debug("Replaced binding for %s", key)
        else:
            logger.debug("Bound %s", key)

    def has(self, identifier: str | type[Any]) -> bool:
        return self.lookup(identifier) is not None

    def lookup(self, identifier: str | type[Any]) -> Factory | None:
        """Return the factory bound for `identifier`, or None."""
        keys = candidate_keys(identifier)
        with self._lock:
            for key in keys:
                factory = self._entries.get(key)
                if factory is not None:
                    return factory
        return None

    def identifiers(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, (str, type)):
            return False
        return self.has(identifier)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.identifiers())
