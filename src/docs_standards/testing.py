"""pytest integration.

Subclass ``DocsStandardsTestCase`` in a test module and list what to check::

    class TestDocs(DocsStandardsTestCase):
        functions = ["mypkg.utils.slugify"]
        classes = ["mypkg.client.Client"]

Each callable becomes its own test case, named after the callable. A name
that does not resolve fails collection, so nothing is checked against a
misconfigured list.
"""

from __future__ import annotations

import pytest

from .models import CallableTarget
from .sql import SqlSource
from .targets import resolve_sql_targets, resolve_targets
from .validators import failures, validate


def assert_documented(target: CallableTarget) -> None:
    """Fail the current test with every docblock defect of a target."""
    failed = failures(validate(target))
    if failed:
        pytest.fail("\n".join(r.message for r in failed), pytrace=False)


class DocsStandardsTestCase:
    """Base class generating one docblock test per function or method."""

    functions: list[str] = []
    classes: list[str] = []
    sql_sources: list[str] = []  # .sql files or directories
    sql_functions: list[str] | None = None  # None checks every public function

    @classmethod
    def targets(cls) -> list[CallableTarget]:
        targets = resolve_targets(cls.functions, cls.classes)
        if cls.sql_sources:
            source = SqlSource.combine(SqlSource.from_path(path) for path in cls.sql_sources)
            targets.extend(resolve_sql_targets(source, cls.sql_functions))
        return targets

    def pytest_generate_tests(self, metafunc):
        if "target" in metafunc.fixturenames:
            targets = self.targets()
            metafunc.parametrize("target", targets, ids=[t.name for t in targets])

    def test_function(self, target):
        assert_documented(target)
