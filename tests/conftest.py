"""Shared pytest configuration for docs_standards tests."""

from pathlib import Path

import pytest

from docs_standards import SqlSource

FIXTURES = Path(__file__).parent / "fixtures"
SQL_FIXTURE = FIXTURES / "functions.sql"

# Dotted prefix of the sample callables
DOCUMENTED = "tests.fixtures.documented"


@pytest.fixture(scope="session")
def sql_source():
    """Functions parsed from tests/fixtures/functions.sql."""
    return SqlSource.from_path(SQL_FIXTURE)
