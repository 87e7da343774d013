"""Go-specific expression handling.

Classifies tree-sitter Go nodes into the handful of shapes the extractor
cares about, rebuilds dotted callee names and resolves literal arguments
(including ``"a" + "b"`` chains) to their quoted source text.
"""

from enum import Enum

from tree_sitter import Node

from goxgettext.parser.base import _get_child_by_field, _line_of, _node_text


class ResolutionError(Exception):
    """Raised when an argument is not a literal or a literal concatenation."""


class NodeKind(Enum):
    CALL = "call"
    BINARY = "binary"
    IDENTIFIER = "identifier"
    SELECTOR = "selector"
    LITERAL = "literal"
    OTHER = "other"


_KIND_BY_TYPE: dict[str, NodeKind] = {
    "call_expression": NodeKind.CALL,
    "binary_expression": NodeKind.BINARY,
    "identifier": NodeKind.IDENTIFIER,
    "field_identifier": NodeKind.IDENTIFIER,
    "package_identifier": NodeKind.IDENTIFIER,
    "selector_expression": NodeKind.SELECTOR,
    "interpreted_string_literal": NodeKind.LITERAL,
    "raw_string_literal": NodeKind.LITERAL,
    "rune_literal": NodeKind.LITERAL,
    "int_literal": NodeKind.LITERAL,
    "float_literal": NodeKind.LITERAL,
    "imaginary_literal": NodeKind.LITERAL,
}

RAW_QUOTE = "`"
FORMAT_HINT_C = "c-format"


def node_kind(node: Node) -> NodeKind:
    return _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)


def callee_name(node: Node) -> str:
    """Rebuild the dotted name of a call's function expression.

    ``Gettext`` -> ``"Gettext"``, ``gettext.Gettext`` -> ``"gettext.Gettext"``,
    ``a.b.C`` -> ``"a.b.C"``. Any other shape (index expressions, calls,
    parenthesised expressions) gives ``""``.
    """
    parts: list[str] = []
    current: Node | None = node
    while current is not None:
        kind = node_kind(current)
        if kind is NodeKind.IDENTIFIER:
            parts.append(_node_text(current))
            return ".".join(reversed(parts))
        if kind is not NodeKind.SELECTOR:
            return ""
        field = _get_child_by_field(current, "field")
        if field is None:
            return ""
        parts.append(_node_text(field))
        current = _get_child_by_field(current, "operand")
    return ""


def call_arguments(call: Node) -> list[Node]:
    """Argument expressions of a call, without punctuation or comments."""
    arguments = _get_child_by_field(call, "arguments")
    if arguments is None:
        return []
    return [child for child in arguments.named_children if child.type != "comment"]


def _escape_raw(text: str) -> str:
    """Rewrite raw string content with interpreted-string escapes."""
    text = text.replace("\r", "")
    text = text.replace('"', '\\"')
    return text.replace("\n", "\\n")


def _literal_text(node: Node) -> str:
    if node_kind(node) is not NodeKind.LITERAL:
        raise ResolutionError(f"unknown type: {node.type}")
    return _node_text(node)


def _concat(left: str, right: str) -> str:
    inner = right[1:-1]
    if right[0] == RAW_QUOTE and left[0] != RAW_QUOTE:
        # The result keeps the left quote, so raw text must be escaped now
        inner = _escape_raw(inner)
    return left[:-1] + inner + left[0]


def resolve_literal(node: Node) -> str:
    """Resolve an argument to its literal source text, quotes included.

    Concatenation keeps a single pair of quotes: ``"foo" + "bar"`` resolves
    to ``"foobar"``. The closing quote is taken from the left operand, and a
    raw right operand joined to an interpreted string is escaped on the way.

    ``a + b + c`` parses as ``(a + b) + c``, so the left spine is walked in a
    loop and chains of any length resolve without recursion.

    Raises:
        ResolutionError: If the expression is anything but a literal or a
            ``+`` chain of literals.
    """
    operands: list[Node] = []
    current = node
    while node_kind(current) is NodeKind.BINARY:
        operator = _get_child_by_field(current, "operator")
        if operator is None or operator.type != "+":
            op = operator.type if operator is not None else "?"
            raise ResolutionError(f"unsupported operator {op!r}")
        left_node = _get_child_by_field(current, "left")
        right_node = _get_child_by_field(current, "right")
        if left_node is None or right_node is None:
            raise ResolutionError("incomplete binary expression")
        operands.append(right_node)
        current = left_node

    value = _literal_text(current)
    for right_node in reversed(operands):
        value = _concat(value, resolve_literal(right_node))
    return value


def normalize_text(value: str) -> str:
    """Turn resolved literal text into catalog text.

    Raw (backquoted) strings get their double quotes escaped and their
    newlines turned into ``\\n`` escapes. The enclosing quotes are removed.
    Empty input stays empty.
    """
    if not value:
        return ""
    if value[0] == RAW_QUOTE:
        value = _escape_raw(value)
    return value[1:-1]


def format_hint(*texts: str) -> str:
    """Return the c-format hint if any text contains a ``%``.

    ``%%`` is not told apart from a real placeholder.
    """
    if any("%" in text for text in texts):
        return FORMAT_HINT_C
    return ""


def position(node: Node) -> tuple[int, int]:
    """1-based (line, column) of a node."""
    return _line_of(node), node.start_point[1] + 1
