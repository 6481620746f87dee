"""Data models for docblock validation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class _Sentinel:
    """Named marker value with a readable repr."""

    def __init__(self, label: str) -> None:
        self._label = label

    def __repr__(self) -> str:
        return self._label


# Parameter has no statically known default
NO_DEFAULT: Any = _Sentinel("NO_DEFAULT")

# Parameter defaults to an empty array ([], (), '{}', ARRAY[])
EMPTY_ARRAY: Any = _Sentinel("[]")


class FailureKind(enum.Enum):
    """One kind per validation rule, in evaluation order."""

    DOCBLOCK_MISSING = "DocblockMissing"
    DOCBLOCK_DESCRIPTION_EMPTY = "DocblockDescriptionEmpty"
    PARAM_COUNT_MISMATCH = "ParamCountMismatch"
    PARAM_DESCRIPTION_EMPTY = "ParamDescriptionEmpty"
    PARAM_NAME_INCORRECT = "ParamNameIncorrect"
    PARAM_TYPE_HINT_ACCEPT_ARRAY = "ParamTypeHintAcceptArray"
    PARAM_TYPE_HINT_ACCEPT_OBJECT = "ParamTypeHintAcceptObject"
    PARAM_TYPE_HINT_DISALLOW_CALLBACK = "ParamTypeHintDisallowCallback"
    PARAM_TYPE_HINT_ACCEPT_CALLABLE = "ParamTypeHintAcceptCallable"
    PARAM_OPTIONAL_NOT_STATED = "ParamOptionalNotStated"
    PARAM_OPTIONAL_WRONGLY_STATED = "ParamOptionalWronglyStated"
    PARAM_DEFAULT_NOT_STATED = "ParamDefaultNotStated"
    PARAM_DEFAULT_WRONGLY_STATED = "ParamDefaultWronglyStated"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CallableTarget:
    """A resolved function or (class, method) pair to validate."""

    name: str  # "pkg.mod.func()" | "pkg.mod.Class.method()" | "schema.fn()"
    obj: Any = field(compare=False, repr=False)  # function, raw class attribute or SqlFunction
    owner: type | None = field(default=None, compare=False, repr=False)
    language: str = "python"  # "python" | "sql"


@dataclass(frozen=True)
class ParameterSignature:
    """One formal parameter as seen by introspection."""

    name: str
    position: int
    sigil: str = ""  # "*" | "**" for Python variadics
    accepts_array: bool = False
    accepts_callable: bool = False
    constrained_class: str | None = None
    optional: bool = False
    default: Any = NO_DEFAULT

    @property
    def documented_name(self) -> str:
        return f"{self.sigil}{self.name}"

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class ParamTag:
    """One documented parameter."""

    type_hint: str
    name: str  # Includes the sigil
    description: str = ""


@dataclass(frozen=True)
class DocBlock:
    """Parsed documentation comment."""

    description: str = ""  # Short description
    params: tuple[ParamTag, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one rule for one callable or parameter."""

    kind: FailureKind
    passed: bool
    message: str
    parameter: str | None = None

    @property
    def failed(self) -> bool:
        return not self.passed
