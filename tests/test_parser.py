"""Tests for Go parsing, callee names and literal resolution."""

from collections.abc import Callable
from pathlib import Path

import pytest

from goxgettext.parser.base import SourceFile, SourceParseError, _find_nodes, parse_file
from goxgettext.parser.go import (
    FORMAT_HINT_C,
    NodeKind,
    ResolutionError,
    call_arguments,
    callee_name,
    format_hint,
    node_kind,
    normalize_text,
    resolve_literal,
)

ParseGo = Callable[..., SourceFile]

# More terms than Python's default recursion limit
LONG_CHAIN = 1200


def _calls(source: SourceFile) -> list:
    return _find_nodes(source.root, {"call_expression"})


def _argument(parse_go: ParseGo, expr: str):
    """Parse ``f(<expr>)`` and return the argument node."""
    source = parse_go(f"package main\n\nfunc main() {{\n\tf({expr})\n}}\n")
    call = _calls(source)[0]
    return call_arguments(call)[0]


class TestParseSource:
    """Tests for parsing and the comment inventory."""

    def test_collects_comments_with_lines(self, parse_go: ParseGo) -> None:
        """Line and block comments are recorded with 1-based lines."""
        source = parse_go(
            "package main\n"
            "\n"
            "// one\n"
            "/* two\n"
            "   lines */\n"
            "func main() {}\n"
        )

        assert [(c.text, c.start_line, c.end_line) for c in source.comments] == [
            ("// one", 3, 3),
            ("/* two\n   lines */", 4, 5),
        ]

    def test_syntax_error_raises(self, parse_go: ParseGo) -> None:
        """Sources with syntax errors are rejected."""
        with pytest.raises(SourceParseError, match="broken.go"):
            parse_go("package main\n\nfunc main() {\n\tx := \n", filename="broken.go")

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Unreadable files are rejected."""
        with pytest.raises(SourceParseError, match="Cannot read"):
            parse_file(tmp_path / "nope.go")

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        """Go sources must be UTF-8."""
        path = tmp_path / "latin1.go"
        path.write_bytes(b'package main\n\nvar s = "caf\xe9"\n')

        with pytest.raises(SourceParseError, match="UTF-8"):
            parse_file(path)

    def test_filename_kept_as_given(self, write_go: Callable[[str, str], Path]) -> None:
        """The recorded filename is the path exactly as passed in."""
        path = write_go("pkg/a.go", "package pkg\n")

        assert parse_file(path).filename == str(path)


class TestCalleeName:
    """Tests for rebuilding dotted callee names."""

    def test_plain_and_selector_names(self, parse_go: ParseGo) -> None:
        """Identifiers and selector chains resolve to dotted names."""
        source = parse_go(
            "package main\n\n"
            "func main() {\n"
            '\tGettext("a")\n'
            '\tgettext.Gettext("b")\n'
            '\tapp.i18n.G("c")\n'
            "}\n"
        )
        names = [callee_name(c.child_by_field_name("function")) for c in _calls(source)]

        assert names == ["Gettext", "gettext.Gettext", "app.i18n.G"]

    def test_other_shapes_have_no_name(self, parse_go: ParseGo) -> None:
        """Calls through index expressions or call results are never named."""
        source = parse_go(
            "package main\n\n"
            "func main() {\n"
            '\tfuncs[0]("a")\n'
            '\tmake_fn()("b")\n'
            "}\n"
        )
        names = [callee_name(c.child_by_field_name("function")) for c in _calls(source)]

        # make_fn() itself is a plain call
        assert names == ["", "", "make_fn"]


class TestResolveLiteral:
    """Tests for literal and concatenation resolution."""

    def test_plain_literal_keeps_quotes(self, parse_go: ParseGo) -> None:
        assert resolve_literal(_argument(parse_go, '"Hello"')) == '"Hello"'

    def test_raw_literal_keeps_backquotes(self, parse_go: ParseGo) -> None:
        assert resolve_literal(_argument(parse_go, "`Hello`")) == "`Hello`"

    def test_concatenation(self, parse_go: ParseGo) -> None:
        """Two literals join into one quoted value."""
        assert resolve_literal(_argument(parse_go, '"foo" + "bar"')) == '"foobar"'

    def test_chained_concatenation(self, parse_go: ParseGo) -> None:
        """Chains are resolved left to right."""
        assert resolve_literal(_argument(parse_go, '"a" + "b" + "c"')) == '"abc"'

    def test_mixed_quotes_use_left_quote(self, parse_go: ParseGo) -> None:
        """The left operand's quote character encloses the result."""
        assert resolve_literal(_argument(parse_go, '`foo` + "bar"')) == "`foobar`"

    def test_raw_right_operand_is_escaped(self, parse_go: ParseGo) -> None:
        """Raw text joined to an interpreted string gets interpreted escapes."""
        value = resolve_literal(_argument(parse_go, '"a" + `b\nsay "c"`'))

        assert value == '"ab\\nsay \\"c\\""'
        assert "\n" not in normalize_text(value)

    def test_long_chain(self, parse_go: ParseGo) -> None:
        """Chains deeper than the recursion limit still resolve."""
        expr = " + ".join(f'"p{i} "' for i in range(LONG_CHAIN))

        value = resolve_literal(_argument(parse_go, expr))

        assert value == '"' + "".join(f"p{i} " for i in range(LONG_CHAIN)) + '"'

    def test_non_literal_operand_fails(self, parse_go: ParseGo) -> None:
        """Any non-literal operand fails the whole expression."""
        with pytest.raises(ResolutionError):
            resolve_literal(_argument(parse_go, '"foo" + name'))

    def test_other_operator_fails(self, parse_go: ParseGo) -> None:
        with pytest.raises(ResolutionError, match="operator"):
            resolve_literal(_argument(parse_go, '"a" - "b"'))

    @pytest.mark.parametrize("expr", ["name", 'fmt.Sprintf("x")', '("x")', "nil"])
    def test_non_literals_fail(self, parse_go: ParseGo, expr: str) -> None:
        with pytest.raises(ResolutionError):
            resolve_literal(_argument(parse_go, expr))

    def test_node_kinds(self, parse_go: ParseGo) -> None:
        assert node_kind(_argument(parse_go, '"x"')) is NodeKind.LITERAL
        assert node_kind(_argument(parse_go, '"x" + "y"')) is NodeKind.BINARY
        assert node_kind(_argument(parse_go, "x")) is NodeKind.IDENTIFIER
        assert node_kind(_argument(parse_go, "a.b")) is NodeKind.SELECTOR
        assert node_kind(_argument(parse_go, "g()")) is NodeKind.CALL
        assert node_kind(_argument(parse_go, "x[0]")) is NodeKind.OTHER


class TestCallArguments:
    """Tests for argument extraction."""

    def test_skips_comments(self, parse_go: ParseGo) -> None:
        """Comments inside the argument list are not arguments."""
        source = parse_go('package main\n\nfunc main() {\n\tf(/* note */ "a", "b")\n}\n')
        args = call_arguments(_calls(source)[0])

        assert [a.text.decode() for a in args] == ['"a"', '"b"']


class TestNormalizeText:
    """Tests for turning resolved literals into catalog text."""

    def test_strips_quotes(self) -> None:
        assert normalize_text('"Hello"') == "Hello"

    def test_empty_is_absent(self) -> None:
        assert normalize_text("") == ""

    def test_interpreted_escapes_untouched(self) -> None:
        assert normalize_text(r'"say \"hi\"\n"') == r"say \"hi\"\n"

    def test_raw_string_escapes_quotes_and_newlines(self) -> None:
        assert normalize_text('`say "hi"\nbye`') == r"say \"hi\"\nbye"

    def test_raw_string_drops_carriage_returns(self) -> None:
        assert normalize_text("`a\r\nb`") == r"a\nb"


class TestFormatHint:
    """Tests for the printf-style placeholder heuristic."""

    def test_percent_sets_hint(self) -> None:
        assert format_hint('"%d items"', "") == FORMAT_HINT_C

    def test_plural_percent_sets_hint(self) -> None:
        assert format_hint('"one item"', '"%d items"') == FORMAT_HINT_C

    def test_escaped_percent_still_sets_hint(self) -> None:
        assert format_hint('"100%% sure"') == FORMAT_HINT_C

    def test_no_percent_no_hint(self) -> None:
        assert format_hint('"Hello"', "") == ""
