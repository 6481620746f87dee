"""Environment-derived settings."""

import os


def _flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true")


class Config:
    LOG_LEVEL = os.environ.get("DOCS_STANDARDS_LOG_LEVEL", "WARNING").upper()

    # Skip methods whose name starts with "_" (``__init__`` is always checked)
    SKIP_PRIVATE = _flag("DOCS_STANDARDS_SKIP_PRIVATE")
