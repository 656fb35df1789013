from __future__ import annotations

import array
import builtins
import collections
import datetime
import decimal
import importlib
import inspect
import pathlib
import types
import typing
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, ForwardRef, TypeGuard, Union, get_origin


_UNION_PREFIXES = ("Union[", "Optional[", "typing.Union[", "typing.Optional[")


class HintKind(Enum):
    NAMED = "named"
    FORWARD_REF = "forward reference"
    PRIMITIVE = "primitive"
    UNION = "union"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ResolverPolicy:
    """Which annotated types the resolver refuses to construct.

    Everything defined in `builtins` is always primitive. `primitive_types` adds
    standard-library value and collection types that are data, not services.
    """

    primitive_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
        Enum,
        array.array,
        collections.deque,
    )

    def is_primitive(self, tp: type[Any]) -> bool:
        return tp.__module__ == "builtins" or issubclass(tp, self.primitive_types)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


if hasattr(typing, "is_protocol"):

    def is_protocol(tp: type[Any]) -> bool:
        return typing.is_protocol(tp)

else:

    def is_protocol(tp: type[Any]) -> bool:
        # Only classes declared as protocols carry a true `_is_protocol`; their implementations don't.
        return bool(getattr(tp, "_is_protocol", False)) and tp is not typing.Protocol


def identifier_of(token: object) -> str:
    """Normalise a string or class token to the identifier it is stored and looked up under."""
    if isinstance(token, str):
        return token
    if is_runtime_class(token):
        return f"{token.__module__}.{token.__qualname__}"
    msg = f"Identifiers must be strings or classes, got {token!r}"
    raise TypeError(msg)


def candidate_keys(token: object) -> tuple[str, ...]:
    """Registry keys tried for `token`, most specific first.

    A class also answers to its bare name, so a binding for "Logger" satisfies
    a parameter annotated with any class called `Logger`.
    """
    key = identifier_of(token)
    if is_runtime_class(token) and token.__name__ != key:
        return key, token.__name__
    return (key,)


def locate(identifier: str) -> Any:
    """Import the object named by `identifier`.

    Accepted forms are "package.module.Name", "package.module:Outer.Inner" and
    a bare builtin name such as "int". Raises LookupError when nothing
    importable matches.
    """
    if ":" in identifier:
        module_name, _, qualname = identifier.partition(":")
        return _walk(_import(module_name, identifier), qualname.split("."), identifier)

    parts = identifier.split(".")
    if len(parts) == 1:
        if hasattr(builtins, identifier):
            return getattr(builtins, identifier)
        msg = f"{identifier} is not defined"
        raise LookupError(msg)

    # Longest importable module prefix wins; the remainder is an attribute path.
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            module = _import(module_name, identifier)
        except LookupError:
            continue
        return _walk(module, parts[split:], identifier)

    msg = f"no module found for {identifier}"
    raise LookupError(msg)


def _import(module_name: str, identifier: str) -> types.ModuleType:
    if not all(module_name.split(".")):
        msg = f"{identifier} has an empty or relative module name"
        raise LookupError(msg)

    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        # Missing dependencies inside an existing module are real errors, not a missing identifier.
        if exc.name is None or not (module_name == exc.name or module_name.startswith(f"{exc.name}.")):
            raise
        msg = f"module {module_name} for {identifier} not found"
        raise LookupError(msg) from exc


def _walk(target: Any, attrs: list[str], identifier: str) -> Any:
    for attr in attrs:
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            msg = f"{identifier} has no attribute {attr}"
            raise LookupError(msg) from exc
    return target


def not_instantiable_reason(candidate: object, policy: ResolverPolicy) -> str | None:
    """Return why `candidate` cannot be autowired, or None when it can."""
    if not is_runtime_class(candidate):
        return "is not a class"
    if candidate.__module__ == "builtins":
        return "is a builtin type"
    if policy.is_primitive(candidate):
        return "is a primitive value type"
    if is_protocol(candidate):
        return "is a protocol"
    if inspect.isabstract(candidate):
        return "is abstract"
    return None


def classify(annotation: Any, policy: ResolverPolicy) -> HintKind:
    if isinstance(annotation, ForwardRef):
        annotation = annotation.__forward_arg__
    if isinstance(annotation, str):
        return _classify_string(annotation)

    if get_origin(annotation) in (Union, types.UnionType):
        return HintKind.UNION
    # `Any` is a class on 3.11+ but cannot be instantiated
    if annotation is Any or not is_runtime_class(annotation):
        return HintKind.UNSUPPORTED
    if policy.is_primitive(annotation):
        return HintKind.PRIMITIVE
    return HintKind.NAMED


def forward_ref_name(annotation: str | ForwardRef) -> str:
    if isinstance(annotation, ForwardRef):
        return annotation.__forward_arg__.strip()
    return annotation.strip()


def _classify_string(annotation: str) -> HintKind:
    text = annotation.strip()
    if "|" in text or text.startswith(_UNION_PREFIXES):
        return HintKind.UNION
    if "[" in text:
        return HintKind.UNSUPPORTED
    if isinstance(getattr(builtins, text, None), type):
        return HintKind.PRIMITIVE
    return HintKind.FORWARD_REF


def describe(annotation: Any) -> str:
    if isinstance(annotation, str):
        return annotation
    if is_runtime_class(annotation):
        return annotation.__qualname__
    return repr(annotation)
