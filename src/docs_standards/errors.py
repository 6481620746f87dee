"""Exceptions raised while setting up a docblock check.

Documentation defects are never raised: they are reported as
``ValidationResult`` values. Everything here means the check itself is
misconfigured and the run should stop.
"""

from __future__ import annotations


class DocsStandardsError(Exception):
    """Base exception for docs_standards setup failures."""


class TargetNotFound(DocsStandardsError):
    """Raised when a named function or class does not exist."""

    _templates = {
        "function": "Function `{name}` does not exist.",
        "class": "Class `{name}` does not exist.",
        "sql function": "SQL function `{name}` does not exist.",
    }

    def __init__(self, name: str, kind: str = "function"):
        super().__init__(self._templates[kind].format(name=name))
        self.name = name
        self.kind = kind


class SqlSourceError(DocsStandardsError):
    """Raised when a SQL file cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
