"""Message catalog: one template per failure kind.

Templates use ``str.format`` fields:

    {callable}  display name of the callable, e.g. ``pkg.mod.func()``
    {param}     parameter name including its sigil
    {cls}       name of the class a parameter is constrained to
"""

from __future__ import annotations

from types import MappingProxyType

from .models import FailureKind

MESSAGES = MappingProxyType(
    {
        FailureKind.DOCBLOCK_MISSING: "The docblock for `{callable}` should not be missing.",
        FailureKind.DOCBLOCK_DESCRIPTION_EMPTY: (
            "The docblock description for `{callable}` should not be empty."
        ),
        FailureKind.PARAM_COUNT_MISMATCH: (
            "The number of @param docs for `{callable}` should match its number of parameters."
        ),
        FailureKind.PARAM_DESCRIPTION_EMPTY: (
            "The @param description for the `{param}` parameter of `{callable}` should not be empty."
        ),
        FailureKind.PARAM_NAME_INCORRECT: (
            "The @param name for the `{param}` parameter of `{callable}` is incorrect."
        ),
        FailureKind.PARAM_TYPE_HINT_ACCEPT_ARRAY: (
            "The @param type hint for the `{param}` parameter of `{callable}` "
            "should state that it accepts an array."
        ),
        FailureKind.PARAM_TYPE_HINT_ACCEPT_OBJECT: (
            "The @param type hint for the `{param}` parameter of `{callable}` "
            "should state that it accepts an object of type `{cls}`."
        ),
        FailureKind.PARAM_TYPE_HINT_DISALLOW_CALLBACK: (
            "`callback` is not a valid type in the @param type hint for the `{param}` "
            "parameter of `{callable}`. `callable` should be used instead."
        ),
        FailureKind.PARAM_TYPE_HINT_ACCEPT_CALLABLE: (
            "The @param type hint for the `{param}` parameter of `{callable}` "
            "should state that it accepts a callable."
        ),
        FailureKind.PARAM_OPTIONAL_NOT_STATED: (
            "The @param description for the optional `{param}` parameter of `{callable}` "
            "should state that it is optional."
        ),
        FailureKind.PARAM_OPTIONAL_WRONGLY_STATED: (
            "The @param description for the required `{param}` parameter of `{callable}` "
            "should not state that it is optional."
        ),
        FailureKind.PARAM_DEFAULT_NOT_STATED: (
            "The @param description for the `{param}` parameter of `{callable}` "
            "should state its default value."
        ),
        FailureKind.PARAM_DEFAULT_WRONGLY_STATED: (
            "The @param description for the `{param}` parameter of `{callable}` "
            "should not state a default value."
        ),
    }
)


def render(kind: FailureKind, **fields: str) -> str:
    """Render the message template for a failure kind."""
    return MESSAGES[kind].format(**fields)
