"""Documentation comment parsing.

Parsing is purely syntactic: a comment is split into a short description
and a sequence of tags. Two tag spellings are understood::

    @param list[str] names Names to look up. Optional. Default ().
    :param list[str] names: Names to look up. Optional. Default ().

A parameter documenting a nested structure wraps its description in braces,
with the summary sentence on the line below the opening brace::

    @param dict options {
        Optional. Lookup options.

        @type bool strict Fail on unknown names.
    }
"""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod

from .models import CallableTarget, DocBlock, ParamTag
from .signatures import unwrap

_AT_TAG_RE = re.compile(r"^(@)(\w+)(.*)$")
# ":param str name: ..." is a field; ":class:`Widget`" is an inline role
_FIELD_TAG_RE = re.compile(r"^(:)(\w+)([^:]*:(?!`).*)$")

PARAM_TAG = "param"
BRIEF_TAG = "brief"


class DocCommentParser(ABC):
    """Reads and parses the comment attached to a callable target."""

    @abstractmethod
    def comment(self, target: CallableTarget) -> str | None:
        """Return the raw attached comment, or None if there is none."""
        ...

    def parse(self, target: CallableTarget) -> tuple[str | None, DocBlock | None]:
        """Return the raw comment and its parsed form (None, None if absent)."""
        comment = self.comment(target)
        if comment is None:
            return None, None
        return comment, parse_doc_comment(comment)


class PythonDocCommentParser(DocCommentParser):
    """Uses the callable's own docstring (never an inherited one)."""

    def comment(self, target: CallableTarget) -> str | None:
        doc = getattr(unwrap(target.obj), "__doc__", None)
        if doc is None:
            return None
        return inspect.cleandoc(doc)


def _match_tag(line: str) -> tuple[str, str, str] | None:
    """(marker, tag, rest) for an ``@tag`` line or a ``:field ...:`` line."""
    match = _AT_TAG_RE.match(line) or _FIELD_TAG_RE.match(line)
    if match is None:
        return None
    return match.group(1), match.group(2), match.group(3)


def _split_blocks(lines: list[str]) -> tuple[list[str], list[tuple[str, str, list[str]]]]:
    """Split stripped lines into leading text and (marker, tag, lines) blocks."""
    lead: list[str] = []
    blocks: list[tuple[str, str, list[str]]] = []
    depth = 0

    for line in lines:
        tag = _match_tag(line) if depth <= 0 else None
        if tag is not None:
            marker, name, rest = tag
            blocks.append((marker, name, [rest.strip()]))
            # Only a tag line ending in "{" opens a structured block
            depth = 1 if rest.rstrip().endswith("{") else 0
        elif blocks:
            blocks[-1][2].append(line)
            if depth > 0:
                if line.startswith("}"):
                    depth -= 1
                if line.endswith("{"):
                    depth += 1
        else:
            lead.append(line)

    return lead, blocks


def _first_paragraph(lines: list[str]) -> str:
    paragraph: list[str] = []
    for line in lines:
        if line:
            paragraph.append(line)
        elif paragraph:
            break
    return " ".join(paragraph)


def _param_tag(marker: str, lines: list[str]) -> ParamTag:
    """Build a ParamTag from the lines of one param tag."""
    head, continuation = lines[0], lines[1:]

    if marker == ":":
        # :param <type> <name>: <description>
        content, _, first = head.partition(":")
        tokens = content.split()
        name = tokens[-1] if tokens else ""
        type_hint = " ".join(tokens[:-1])
    else:
        # @param <type> <name> <description>
        tokens = head.split(None, 2)
        type_hint = tokens[0] if tokens else ""
        name = tokens[1] if len(tokens) > 1 else ""
        first = tokens[2] if len(tokens) > 2 else ""

    description = "\n".join([first.strip(), *continuation]).strip()
    return ParamTag(type_hint=type_hint, name=name, description=description)


def parse_doc_comment(text: str) -> DocBlock:
    """Parse a cleaned comment into its short description and param tags.

    Args:
        text: Comment text without comment delimiters or common indentation

    Returns:
        DocBlock with the short description and the param tags in written order
    """
    lines = [line.strip() for line in text.strip().split("\n")]
    lead, blocks = _split_blocks(lines)

    description = _first_paragraph(lead)
    params: list[ParamTag] = []
    for marker, tag, block_lines in blocks:
        if tag == PARAM_TAG:
            params.append(_param_tag(marker, block_lines))
        elif tag == BRIEF_TAG and marker == "@":
            description = " ".join(line for line in block_lines if line)

    return DocBlock(description=description, params=tuple(params))


def is_hash_description(text: str) -> bool:
    """True when the whole description is a brace-delimited block."""
    return text.startswith("{") and text.endswith("}")


def normalize_description(text: str) -> str:
    """Effective description used by the emptiness and phrasing rules.

    For a brace-delimited description this is the line right after the
    opening brace; anything else is returned unchanged.
    """
    if not is_hash_description(text):
        return text
    lines = text.split("\n")
    return lines[1].strip() if len(lines) > 1 else ""
