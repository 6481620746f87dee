"""Resolve function and class names into callable targets."""

from __future__ import annotations

import inspect
import logging
import pkgutil
from typing import Any, Iterable

from .config import Config
from .errors import TargetNotFound
from .models import CallableTarget
from .signatures import unwrap
from .sql import SqlSource

log = logging.getLogger(__name__)


def _lookup(name: str) -> Any:
    """Import ``pkg.mod.attr`` or ``pkg.mod:attr``; None if it does not exist."""
    try:
        return pkgutil.resolve_name(name)
    except (ImportError, AttributeError, ValueError) as e:
        log.debug("Cannot resolve %s: %s: %s", name, e.__class__.__name__, e)
        return None


def _display_name(name: str) -> str:
    return name.replace(":", ".")


def _is_declared_method(cls: type, attr: Any) -> bool:
    """True for functions written in the class body itself."""
    func = unwrap(attr)
    if not inspect.isfunction(func):
        return False
    # Borrowed functions carry another qualname; generated ones (dataclass
    # __init__, __eq__ ...) are compiled from "<string>", possibly under a
    # functools.wraps wrapper such as reprlib.recursive_repr
    return func.__qualname__ == f"{cls.__qualname__}.{func.__name__}" and not (
        inspect.unwrap(func).__code__.co_filename.startswith("<")
    )


def _is_method(func: Any) -> bool:
    """True for a routine reached through its class (``pkg.mod.Cls.meth``)."""
    qualname = getattr(func, "__qualname__", "")
    return "." in qualname and "<locals>" not in qualname


def _is_skipped(method_name: str, skip_private: bool) -> bool:
    return skip_private and method_name.startswith("_") and method_name != "__init__"


def class_methods(cls: type, skip_private: bool | None = None) -> list[tuple[str, Any]]:
    """Methods declared by a class, in declaration order."""
    if skip_private is None:
        skip_private = Config.SKIP_PRIVATE
    return [
        (attr_name, attr)
        for attr_name, attr in vars(cls).items()
        if _is_declared_method(cls, attr) and not _is_skipped(attr_name, skip_private)
    ]


def resolve_targets(
    function_names: Iterable[str] = (),
    class_names: Iterable[str] = (),
    skip_private: bool | None = None,
) -> list[CallableTarget]:
    """Resolve every named function and every method of every named class.

    Args:
        function_names: Dotted paths of functions (``pkg.mod.func`` or ``pkg.mod:func``)
        class_names: Dotted paths of classes whose declared methods are checked
        skip_private: Skip ``_private`` methods (default from Config.SKIP_PRIVATE)

    Returns:
        Targets for the functions in the given order, then each class's methods

    Raises:
        TargetNotFound: If a name does not resolve to a function or class.
    """
    targets: list[CallableTarget] = []

    for name in function_names:
        func = _lookup(name)
        if func is None or not inspect.isroutine(func) or _is_method(func):
            raise TargetNotFound(name, "function")
        targets.append(CallableTarget(name=f"{_display_name(name)}()", obj=func))

    for name in class_names:
        cls = _lookup(name)
        if not inspect.isclass(cls):
            raise TargetNotFound(name, "class")
        for method_name, method in class_methods(cls, skip_private):
            targets.append(
                CallableTarget(
                    name=f"{_display_name(name)}.{method_name}()",
                    obj=method,
                    owner=cls,
                )
            )

    log.debug("Resolved %d targets", len(targets))
    return targets


def resolve_sql_targets(
    source: SqlSource, function_names: Iterable[str] | None = None
) -> list[CallableTarget]:
    """Resolve SQL functions (all overloads of each name) in a SqlSource.

    Every public function is returned when no names are given.

    Raises:
        TargetNotFound: If a named function is not declared in the source.
    """
    if function_names is None:
        functions = source.public()
    else:
        functions = []
        for name in function_names:
            found = source.named(name)
            if not found:
                raise TargetNotFound(name, "sql function")
            functions.extend(found)

    return [CallableTarget(name=f"{f.name}()", obj=f, language="sql") for f in functions]
