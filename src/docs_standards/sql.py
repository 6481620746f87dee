"""SQL function support using the pglast parser.

SQL functions are documented with an ``@function`` comment block anywhere in
the same file::

    -- @function authz.check
    -- @brief Check whether a subject holds a permission.
    -- @param text p_subject Subject identifier.
    -- @param text[] p_scopes Scopes to search. Optional. Default '{}'.
    CREATE FUNCTION authz.check(p_subject text, p_scopes text[] DEFAULT '{}') ...
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import pglast
from pglast import ast
from pglast.enums import FunctionParameterMode
from pglast.stream import RawStream

from .docblocks import DocCommentParser
from .errors import SqlSourceError
from .models import EMPTY_ARRAY, NO_DEFAULT, CallableTarget, ParameterSignature
from .signatures import SignatureProvider

log = logging.getLogger(__name__)

_DOC_BLOCK_RE = re.compile(
    r"^--[ \t]*@function[ \t]+(\S+)[ \t]*\n((?:[ \t]*--(?![ \t]*@function)[^\n]*\n?)*)",
    re.MULTILINE,
)
_COMMENT_PREFIX_RE = re.compile(r"^\s*--\s?")

# Result columns, not parameters
_OUTPUT_MODES = (FunctionParameterMode.FUNC_PARAM_OUT, FunctionParameterMode.FUNC_PARAM_TABLE)


@dataclass(frozen=True)
class SqlFunction:
    """A CREATE FUNCTION / CREATE PROCEDURE statement and its doc block."""

    name: str  # "authz.check"
    source_file: str
    line_number: int
    parameters: tuple[Any, ...] = field(default=(), compare=False, repr=False)  # pglast FunctionParameter
    doc_comment: str | None = None


def _extract_doc_blocks(content: str) -> dict[str, str]:
    """Extract @function doc blocks as plain text, keyed by function name."""
    blocks = {}
    for match in _DOC_BLOCK_RE.finditer(content):
        lines = [_COMMENT_PREFIX_RE.sub("", line) for line in match.group(2).split("\n")]
        blocks[match.group(1).strip()] = "\n".join(lines).strip()
    return blocks


def _parse_file(path: Path) -> list[SqlFunction]:
    try:
        content = path.read_text()
    except OSError as e:
        raise SqlSourceError(f"Unable to read {path}: {e}", str(path)) from e

    try:
        stmts = pglast.parse_sql(content)
    except pglast.Error as e:
        raise SqlSourceError(f"Failed to parse {path.name}: {e}", str(path)) from e

    doc_blocks = _extract_doc_blocks(content)
    used: set[str] = set()
    functions = []

    for stmt in stmts:
        if not isinstance(stmt.stmt, ast.CreateFunctionStmt):
            continue

        func = stmt.stmt
        name = ".".join(n.sval for n in func.funcname)
        params = tuple(p for p in func.parameters or () if p.mode not in _OUTPUT_MODES)

        if name in doc_blocks:
            used.add(name)

        functions.append(
            SqlFunction(
                name=name,
                source_file=str(path),
                line_number=content[: stmt.stmt_location].count("\n") + 1,
                parameters=params,
                doc_comment=doc_blocks.get(name),
            )
        )

    for name in sorted(set(doc_blocks) - used):
        log.warning("@function %s has no matching CREATE FUNCTION in %s", name, path.name)

    return functions


class SqlSource:
    """The SQL functions declared in one file or a directory of files."""

    def __init__(self, functions: list[SqlFunction]) -> None:
        self.functions = functions

    @classmethod
    def from_path(cls, path: str | Path) -> SqlSource:
        """Load a .sql file, or every .sql file of a directory.

        Files in a directory that fail to parse are skipped with a warning;
        a single file that fails to parse raises SqlSourceError.
        """
        path = Path(path)
        if path.is_dir():
            functions: list[SqlFunction] = []
            for sql_file in sorted(path.glob("*.sql")):
                try:
                    functions.extend(_parse_file(sql_file))
                except SqlSourceError as e:
                    log.warning("Skipping %s: %s", sql_file, e)
            return cls(functions)
        if not path.exists():
            raise SqlSourceError(f"SQL source {path} does not exist", str(path))
        return cls(_parse_file(path))

    @classmethod
    def combine(cls, sources: Iterable[SqlSource]) -> SqlSource:
        return cls([f for source in sources for f in source.functions])

    def named(self, name: str) -> list[SqlFunction]:
        """All overloads of a function."""
        return [f for f in self.functions if f.name == name]

    def public(self) -> list[SqlFunction]:
        """Functions outside internal ``_``-prefixed names."""
        return [f for f in self.functions if "._" not in f.name and not f.name.startswith("_")]


def _is_empty_array(expr: Any) -> bool:
    """True for '{}' and ARRAY[] default expressions, with or without casts."""
    while isinstance(expr, ast.TypeCast):
        expr = expr.arg
    if isinstance(expr, ast.A_ArrayExpr):
        return not expr.elements
    return (
        isinstance(expr, ast.A_Const)
        and isinstance(expr.val, ast.String)
        and expr.val.sval == "{}"
    )


class SqlSignatureProvider(SignatureProvider):
    """Reads SQL input parameters from the pglast parse tree."""

    def parameters(self, target: CallableTarget) -> list[ParameterSignature]:
        result = []
        for position, p in enumerate(target.obj.parameters):
            variadic = p.mode == FunctionParameterMode.FUNC_PARAM_VARIADIC

            default = NO_DEFAULT
            if p.defexpr is not None:
                default = EMPTY_ARRAY if _is_empty_array(p.defexpr) else RawStream()(p.defexpr)

            result.append(
                ParameterSignature(
                    name=p.name or "",
                    position=position,
                    accepts_array=variadic or bool(p.argType.arrayBounds),
                    optional=variadic or default is not NO_DEFAULT,
                    default=default,
                )
            )
        return result


class SqlDocCommentParser(DocCommentParser):
    """Uses the ``@function`` block naming the SQL function."""

    def comment(self, target: CallableTarget) -> str | None:
        return target.obj.doc_comment
