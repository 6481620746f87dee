"""docs_standards - Check that docblocks describe their callable's parameters."""

from docs_standards.errors import DocsStandardsError, SqlSourceError, TargetNotFound
from docs_standards.messages import MESSAGES
from docs_standards.models import (
    EMPTY_ARRAY,
    NO_DEFAULT,
    CallableTarget,
    DocBlock,
    FailureKind,
    ParameterSignature,
    ParamTag,
    ValidationResult,
)
from docs_standards.signatures import PythonSignatureProvider, SignatureProvider
from docs_standards.sql import SqlSource
from docs_standards.targets import resolve_sql_targets, resolve_targets
from docs_standards.validators import Validator, failures, validate

__all__ = [
    "CallableTarget",
    "DocBlock",
    "DocsStandardsError",
    "EMPTY_ARRAY",
    "FailureKind",
    "MESSAGES",
    "NO_DEFAULT",
    "ParamTag",
    "ParameterSignature",
    "PythonSignatureProvider",
    "SignatureProvider",
    "SqlSource",
    "SqlSourceError",
    "TargetNotFound",
    "ValidationResult",
    "Validator",
    "failures",
    "resolve_sql_targets",
    "resolve_targets",
    "validate",
]
