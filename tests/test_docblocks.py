"""Tests for docblock parsing and description normalization."""

from docs_standards.docblocks import (
    PythonDocCommentParser,
    is_hash_description,
    normalize_description,
    parse_doc_comment,
)
from docs_standards.models import CallableTarget, ParamTag
from tests.fixtures import documented


def test_brief():
    result = parse_doc_comment("Short description.")
    assert result.description == "Short description."
    assert result.params == ()


def test_multiline_brief():
    doc = """
    First line of description
    continues here.

    Longer explanation that is not part of the short description.

    @param int x A parameter.
    """
    result = parse_doc_comment(doc)
    assert result.description == "First line of description continues here."


def test_brief_tag():
    doc = "@brief Grant a permission.\n@param text p_name Permission name."
    result = parse_doc_comment(doc)
    assert result.description == "Grant a permission."
    assert result.params == (ParamTag("text", "p_name", "Permission name."),)


def test_params_in_written_order():
    doc = """
    Do something.

    @param str name The name.
    @param int value The value to set.
    """
    result = parse_doc_comment(doc)
    assert [p.name for p in result.params] == ["name", "value"]
    assert result.params[0] == ParamTag("str", "name", "The name.")


def test_param_with_sigil():
    result = parse_doc_comment("Collect.\n\n@param str *names Optional. Names.")
    assert result.params[0].name == "*names"
    assert result.params[0].type_hint == "str"


def test_multiline_param_description():
    doc = """
    Do something.

    @param int limit Maximum number of rows
        to return. Optional. Default 10.
    @returns The rows.
    """
    result = parse_doc_comment(doc)
    assert len(result.params) == 1
    assert result.params[0].description == "Maximum number of rows\nto return. Optional. Default 10."


def test_other_tags_end_param_description():
    doc = "Do something.\n\n@param int x The value.\n@returns Something.\n:raises ValueError: Never."
    result = parse_doc_comment(doc)
    assert result.params == (ParamTag("int", "x", "The value."),)


def test_param_without_description():
    result = parse_doc_comment("Do something.\n\n@param int x")
    assert result.params == (ParamTag("int", "x", ""),)


def test_param_with_single_token_is_type_only():
    result = parse_doc_comment("Do something.\n\n@param x")
    assert result.params == (ParamTag("x", "", ""),)


def test_rest_field_params():
    doc = """
    Resize a widget.

    :param str name: Widget name.
    :param dict[str, int] sizes: Optional. Sizes by edge.
        Default None.
    :returns: Nothing.
    """
    result = parse_doc_comment(doc)
    assert result.description == "Resize a widget."
    assert result.params == (
        ParamTag("str", "name", "Widget name."),
        ParamTag("dict[str, int]", "sizes", "Optional. Sizes by edge.\nDefault None."),
    )


def test_rest_field_without_type():
    result = parse_doc_comment("Do something.\n\n:param x: The value.")
    assert result.params == (ParamTag("", "x", "The value."),)


def test_hash_description_keeps_nested_tags():
    doc = """
    Configure.

    @param dict options {
        Optional. Configuration options.

        @type bool strict Whether to fail on unknown keys.
        @type int retries {
            Retry settings.
        }
    }
    @param int level Log level.
    """
    result = parse_doc_comment(doc)
    assert [p.name for p in result.params] == ["options", "level"]
    options = result.params[0].description
    assert options.startswith("{\nOptional. Configuration options.\n")
    assert options.endswith("}")
    assert "@type bool strict" in options


def test_tags_only_has_empty_description():
    result = parse_doc_comment("@param int x The value.")
    assert result.description == ""
    assert len(result.params) == 1


def test_empty_comment():
    result = parse_doc_comment("")
    assert result.description == ""
    assert result.params == ()


class TestNormalizeDescription:
    """Structured/hash parameter descriptions."""

    def test_hash_uses_second_line(self):
        assert normalize_description("{\nDoes a thing.\n}") == "Does a thing."

    def test_hash_second_line_is_stripped(self):
        assert normalize_description("{\n    Optional. Options.\n\n    @type int x X.\n}") == (
            "Optional. Options."
        )

    def test_single_line_hash_is_empty(self):
        assert normalize_description("{}") == ""

    def test_plain_description_unchanged(self):
        assert normalize_description("A list.\nOptional.") == "A list.\nOptional."

    def test_brace_only_at_start_is_not_hash(self):
        assert not is_hash_description("{ starts here but never closes")
        assert normalize_description("{ starts here") == "{ starts here"

    def test_empty_description(self):
        assert normalize_description("") == ""


class TestPythonDocCommentParser:
    """Reading docstrings from Python callables."""

    def test_missing_docstring(self):
        target = CallableTarget(name="undocumented()", obj=documented.undocumented)
        assert PythonDocCommentParser().parse(target) == (None, None)

    def test_docstring_is_cleaned(self):
        target = CallableTarget(name="does_x()", obj=documented.does_x)
        comment, docblock = PythonDocCommentParser().parse(target)
        assert comment == "Does X.\n\n@param int x Optional."
        assert docblock.description == "Does X."
        assert docblock.params == (ParamTag("int", "x", "Optional."),)

    def test_staticmethod_is_unwrapped(self):
        raw = vars(documented.Collection)["build"]
        target = CallableTarget(name="Collection.build()", obj=raw, owner=documented.Collection)
        _, docblock = PythonDocCommentParser().parse(target)
        assert docblock.description == "Build a collection."

    def test_docstring_is_not_inherited(self):
        class Base:
            def run(self):
                """Run."""

        class Derived(Base):
            def run(self):
                pass

        target = CallableTarget(name="Derived.run()", obj=vars(Derived)["run"], owner=Derived)
        assert PythonDocCommentParser().comment(target) is None


def test_unbalanced_brace_in_plain_description():
    doc = "Do something.\n\n@param str open Opening token, e.g. '{'.\n@param str close Closing token."
    result = parse_doc_comment(doc)
    assert [p.name for p in result.params] == ["open", "close"]


def test_quoted_brace_in_hash_description():
    doc = "Do something.\n\n@param dict options {\n    Options, quoted like '{'.\n}\n@param int level Level."
    result = parse_doc_comment(doc)
    assert [p.name for p in result.params] == ["options", "level"]
    assert normalize_description(result.params[0].description) == "Options, quoted like '{'."


def test_role_in_param_continuation():
    doc = "Do something.\n\n@param Widget w The widget, see\n    :class:`Widget`. Optional."
    result = parse_doc_comment(doc)
    assert result.params == (ParamTag("Widget", "w", "The widget, see\n:class:`Widget`. Optional."),)


def test_role_at_start_of_description():
    result = parse_doc_comment(":func:`render` wrapper.\n\n:param str name: Name.")
    assert result.description == ":func:`render` wrapper."
    assert result.params == (ParamTag("str", "name", "Name."),)
