"""Signature introspection.

The rule engine only sees ``SignatureProvider``; each host language ships
its own implementation (Python here, SQL in ``docs_standards.sql``).
"""

from __future__ import annotations

import collections.abc
import inspect
import logging
import types
import typing
from abc import ABC, abstractmethod
from typing import Any

from .models import EMPTY_ARRAY, NO_DEFAULT, CallableTarget, ParameterSignature

log = logging.getLogger(__name__)

# Classes that never constrain a parameter to a concrete type
_UNCONSTRAINED_MODULES = frozenset({"builtins", "typing"})
_ANONYMOUS_OBJECT_TYPES = (types.SimpleNamespace,)

_SIGILS = {
    inspect.Parameter.VAR_POSITIONAL: "*",
    inspect.Parameter.VAR_KEYWORD: "**",
}


class SignatureProvider(ABC):
    """Produces the ordered formal parameters of a callable target."""

    @abstractmethod
    def parameters(self, target: CallableTarget) -> list[ParameterSignature]:
        """Return the target's parameters in declaration order."""
        ...


def unwrap(obj: Any) -> Any:
    """Return the function behind a staticmethod or classmethod."""
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def _union_members(annotation: Any) -> tuple[Any, ...]:
    """Split a union annotation, dropping ``None``."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return tuple(a for a in typing.get_args(annotation) if a is not type(None))
    return (annotation,)


def _is_list(annotation: Any) -> bool:
    return annotation is list or typing.get_origin(annotation) is list


def _is_callable(annotation: Any) -> bool:
    return (
        annotation is collections.abc.Callable
        or typing.get_origin(annotation) is collections.abc.Callable
    )


def _constrained_class(members: tuple[Any, ...]) -> str | None:
    """Name of the single concrete class a parameter is constrained to."""
    if len(members) != 1:
        return None
    ann = members[0]
    if typing.get_origin(ann) is not None or not inspect.isclass(ann) or _is_callable(ann):
        return None
    if ann.__module__ in _UNCONSTRAINED_MODULES or issubclass(ann, _ANONYMOUS_OBJECT_TYPES):
        return None
    return ann.__name__


def _default(param: inspect.Parameter) -> Any:
    if param.default is inspect.Parameter.empty:
        return NO_DEFAULT
    if isinstance(param.default, (list, tuple)) and not param.default:
        return EMPTY_ARRAY
    return param.default


def _signature(func: Any, name: str) -> inspect.Signature | None:
    """Signature with string annotations evaluated where possible."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        log.warning("No signature available for %s", name)
        return None

    try:
        return inspect.signature(func, eval_str=True)
    except Exception as e:
        # Unresolvable string annotation; string annotations stay unconstrained
        log.debug("Cannot evaluate annotations of %s: %s: %s", name, e.__class__.__name__, e)
        return sig


class PythonSignatureProvider(SignatureProvider):
    """Reads Python parameters through ``inspect``."""

    def parameters(self, target: CallableTarget) -> list[ParameterSignature]:
        func = unwrap(target.obj)
        sig = _signature(func, target.name)
        if sig is None:
            return []

        params = list(sig.parameters.values())

        # Drop the implicit receiver of instance methods and classmethods
        binds_receiver = target.owner is not None and not isinstance(target.obj, staticmethod)
        if (
            binds_receiver
            and params
            and params[0].kind
            in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        ):
            params = params[1:]

        result = []
        for position, p in enumerate(params):
            members: tuple[Any, ...] = ()
            if p.annotation is not inspect.Parameter.empty and not isinstance(p.annotation, str):
                members = _union_members(p.annotation)

            variadic = p.kind in _SIGILS
            default = _default(p)
            result.append(
                ParameterSignature(
                    name=p.name,
                    position=position,
                    sigil=_SIGILS.get(p.kind, ""),
                    accepts_array=any(_is_list(m) for m in members),
                    accepts_callable=any(_is_callable(m) for m in members),
                    constrained_class=_constrained_class(members),
                    optional=variadic or default is not NO_DEFAULT,
                    default=default,
                )
            )
        return result
