from __future__ import annotations

import inspect
import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin, get_type_hints

from ._errors import CyclicDependencyError, MissingTypeHintError, NotInstantiableError, UnsupportedTypeError
from ._types import (
    HintKind,
    ResolverPolicy,
    classify,
    describe,
    forward_ref_name,
    identifier_of,
    locate,
    not_instantiable_reason,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._container import Container


class Resolver:
    """Builds instances of unbound classes by autowiring their constructors.

    Every parameter is resolved through `Container.get`, so a dependency may be
    satisfied by a binding or by further autowiring. Nothing is cached.
    """

    def __init__(self, container: Container, policy: ResolverPolicy | None = None) -> None:
        self._container = container
        self._policy = policy or ResolverPolicy()
        self._local = threading.local()

    def resolve(self, identifier: str | type[Any]) -> Any:
        cls = self._reflect(identifier)
        key = identifier_of(cls)

        with self.tracking(key, via_factory=False):
            args, kwargs = self._collect_arguments(cls, key)
            logger.debug("Constructing %s with %d dependencies", key, len(args) + len(kwargs))
            return cls(*args, **kwargs)

    @contextmanager
    def tracking(self, key: str, *, via_factory: bool) -> Iterator[None]:
        """Mark `key` as being resolved for the duration of the block.

        Raises CyclicDependencyError when the same key is already being resolved
        the same way higher up in this thread's chain.
        """
        chain: list[tuple[str, bool]] = self._chain()
        frame = (key, via_factory)
        if frame in chain:
            start = chain.index(frame)
            path = tuple(k for k, _ in chain[start:]) + (key,)
            msg = f"Cyclic dependency detected: {' -> '.join(path)}"
            raise CyclicDependencyError(msg, path=path)

        chain.append(frame)
        try:
            yield
        finally:
            chain.pop()

    def _chain(self) -> list[tuple[str, bool]]:
        chain = getattr(self._local, "chain", None)
        if chain is None:
            chain = self._local.chain = []
        return chain

    def _reflect(self, identifier: str | type[Any]) -> type[Any]:
        key = identifier_of(identifier)
        candidate: Any = identifier
        if isinstance(identifier, str):
            try:
                candidate = locate(identifier)
            except LookupError as exc:
                msg = f"class {key} does not exist"
                raise NotInstantiableError(msg, identifier=key) from exc

        reason = not_instantiable_reason(candidate, self._policy)
        if reason is not None:
            msg = f"class {key} is not instantiable: it {reason}"
            raise NotInstantiableError(msg, identifier=key)
        return candidate

    def _collect_arguments(self, cls: type[Any], key: str) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for param, annotation in self._parameters(cls, key):
            value = self._resolve_parameter(key, param.name, annotation)
            if param.kind is param.KEYWORD_ONLY:
                kwargs[param.name] = value
            else:
                args.append(value)

        return args, kwargs

    def _parameters(self, cls: type[Any], key: str) -> list[tuple[inspect.Parameter, Any]]:
        """Constructor parameters in declaration order, paired with their annotations."""
        if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
            return []

        try:
            sig = inspect.signature(cls)
        except (TypeError, ValueError) as exc:
            msg = f"class {key} is not instantiable: its constructor signature cannot be inspected"
            raise NotInstantiableError(msg, identifier=key) from exc

        hints = _get_init_type_hints(cls)
        return [
            (p, self._declared_hint(p, hints.get(p.name, p.annotation)))
            for p in sig.parameters.values()
            # *args/**kwargs are always satisfiable by an empty call
            if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        ]

    def _declared_hint(self, param: inspect.Parameter, hint: Any) -> Any:
        """Undo the `Optional[...]` that `get_type_hints` adds on 3.10 for a `None` default."""
        if param.default is not None or get_origin(hint) is not Union:
            return hint
        if param.annotation is param.empty or classify(param.annotation, self._policy) is HintKind.UNION:
            return hint
        members = [arg for arg in get_args(hint) if arg is not type(None)]
        return members[0] if len(members) == 1 else hint

    def _resolve_parameter(self, key: str, name: str, annotation: Any) -> Any:
        if annotation is inspect.Parameter.empty:
            msg = f"Failed to resolve class {key} because parameter {name} has no type hint"
            raise MissingTypeHintError(msg, identifier=key, parameter=name)

        kind = classify(annotation, self._policy)
        if kind is HintKind.NAMED:
            return self._container.get(annotation)
        if kind is HintKind.FORWARD_REF:
            return self._container.get(forward_ref_name(annotation))

        msg = (
            f"Failed to resolve class {key} because parameter {name} "
            f"has {kind.value} type {describe(annotation)}, which is not allowed"
        )
        raise UnsupportedTypeError(msg, identifier=key, parameter=name, annotation=annotation)


def _get_init_type_hints(cls: type[Any]) -> dict[str, Any]:
    try:
        init = inspect.getattr_static(cls, "__init__")
        hints = get_type_hints(init)
    except TypeError:
        hints = {}
    except NameError as exc:
        # Raw annotations are used instead; unevaluated strings are treated as identifiers.
        logger.warning("'%s' name error retrieving %s (%s) type hints", exc.name, cls.__name__, cls.__qualname__)
        hints = {}

    return {name: hint for name, hint in hints.items() if name != "return"}
