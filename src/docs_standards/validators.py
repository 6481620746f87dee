"""Docblock validation rules.

Each rule yields a ``ValidationResult`` whether it passes or fails, and every
rule runs: one callable reports all of its documentation defects at once.
Documented parameters are matched to real ones by position.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .docblocks import DocCommentParser, PythonDocCommentParser, normalize_description
from .messages import render
from .models import (
    EMPTY_ARRAY,
    CallableTarget,
    DocBlock,
    FailureKind,
    ParameterSignature,
    ParamTag,
    ValidationResult,
)
from .signatures import PythonSignatureProvider, SignatureProvider
from .sql import SqlDocCommentParser, SqlSignatureProvider

log = logging.getLogger(__name__)

# Type hint vocabulary
ARRAY_MARKERS = ("list", "array", "[]")
CALLABLE_MARKERS = ("callable", "Callable")
LEGACY_CALLABLE = "callback"

# Description vocabulary
OPTIONAL_MARKER = "Optional."
DEFAULT_MARKER = "Default "


def _contains_any(text: str, markers: Iterable[str]) -> bool:
    return any(marker in text for marker in markers)


class Validator:
    """Cross-checks a callable's signature against its documentation."""

    def __init__(self, signatures: SignatureProvider, comments: DocCommentParser) -> None:
        self.signatures = signatures
        self.comments = comments

    def validate(self, target: CallableTarget) -> list[ValidationResult]:
        """Run every rule against one target.

        Args:
            target: The resolved callable to check

        Returns:
            One result per whole-block rule, then one per rule per parameter
        """
        comment, docblock = self.comments.parse(target)
        docblock = docblock or DocBlock()
        params = self.signatures.parameters(target)
        name = target.name

        results = [
            ValidationResult(
                FailureKind.DOCBLOCK_MISSING,
                comment is not None,
                render(FailureKind.DOCBLOCK_MISSING, callable=name),
            ),
            ValidationResult(
                FailureKind.DOCBLOCK_DESCRIPTION_EMPTY,
                bool(docblock.description),
                render(FailureKind.DOCBLOCK_DESCRIPTION_EMPTY, callable=name),
            ),
            ValidationResult(
                FailureKind.PARAM_COUNT_MISMATCH,
                len(params) == len(docblock.params),
                render(FailureKind.PARAM_COUNT_MISMATCH, callable=name),
            ),
        ]

        # Parameters missing on either side are reported by the count rule only
        for sig, tag in zip(params, docblock.params):
            results.extend(self._check_param(name, sig, tag))

        log.debug(
            "%s: %d/%d rules passed",
            name,
            sum(1 for r in results if r.passed),
            len(results),
        )
        return results

    def _check_param(
        self, name: str, sig: ParameterSignature, tag: ParamTag
    ) -> list[ValidationResult]:
        desc = normalize_description(tag.description)
        type_hint = tag.type_hint
        documented = tag.name
        results = []

        def check(kind: FailureKind, passed: bool, param: str = documented, **extra: str) -> None:
            message = render(kind, param=param, callable=name, **extra)
            results.append(ValidationResult(kind, passed, message, parameter=param))

        check(FailureKind.PARAM_DESCRIPTION_EMPTY, bool(desc))

        check(
            FailureKind.PARAM_NAME_INCORRECT,
            documented == sig.documented_name,
            param=sig.documented_name,
        )

        if sig.accepts_array:
            check(FailureKind.PARAM_TYPE_HINT_ACCEPT_ARRAY, _contains_any(type_hint, ARRAY_MARKERS))

        if sig.constrained_class is not None:
            check(
                FailureKind.PARAM_TYPE_HINT_ACCEPT_OBJECT,
                sig.constrained_class in type_hint,
                cls=sig.constrained_class,
            )

        check(FailureKind.PARAM_TYPE_HINT_DISALLOW_CALLBACK, LEGACY_CALLABLE not in type_hint)

        if sig.accepts_callable:
            check(
                FailureKind.PARAM_TYPE_HINT_ACCEPT_CALLABLE,
                _contains_any(type_hint, CALLABLE_MARKERS),
            )

        if sig.optional:
            check(FailureKind.PARAM_OPTIONAL_NOT_STATED, OPTIONAL_MARKER in desc)
        else:
            check(FailureKind.PARAM_OPTIONAL_WRONGLY_STATED, OPTIONAL_MARKER not in desc)

        # An empty array default has nothing worth narrating
        if sig.has_default and sig.default is not EMPTY_ARRAY:
            check(FailureKind.PARAM_DEFAULT_NOT_STATED, DEFAULT_MARKER in desc)
        else:
            check(FailureKind.PARAM_DEFAULT_WRONGLY_STATED, DEFAULT_MARKER not in desc)

        return results


_VALIDATORS = {
    "python": Validator(PythonSignatureProvider(), PythonDocCommentParser()),
    "sql": Validator(SqlSignatureProvider(), SqlDocCommentParser()),
}


def validate(target: CallableTarget) -> list[ValidationResult]:
    """Validate a target with the providers for its language."""
    return _VALIDATORS[target.language].validate(target)


def failures(results: Iterable[ValidationResult]) -> list[ValidationResult]:
    """Only the failed results."""
    return [r for r in results if r.failed]
