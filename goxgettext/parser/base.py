"""Go source parsing with tree-sitter.

Turns a file on disk into a ``SourceFile``: the syntax tree plus the
inventory of comments the extractor needs for translator notes.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from tree_sitter import Language, Node, Parser, Tree

from goxgettext.logging import logger


class SourceParseError(Exception):
    """Raised when a source file cannot be read or parsed."""


@dataclass(frozen=True)
class CommentInfo:
    """A single comment token (``// ...`` or ``/* ... */``)."""

    text: str
    start_line: int  # 1-based
    end_line: int  # 1-based, equal to start_line for // comments


@dataclass
class SourceFile:
    """A parsed Go file ready for extraction."""

    filename: str  # As given by the caller; used verbatim in locations
    tree: Tree
    comments: list[CommentInfo] = field(default_factory=list)

    @property
    def root(self) -> Node:
        return self.tree.root_node


# Lazily created, one per process
_LANGUAGE: Language | None = None
_PARSER: Parser | None = None


def _get_language() -> Language:
    """Lazily load the tree-sitter Go grammar."""
    global _LANGUAGE
    if _LANGUAGE is None:
        import tree_sitter_go as ts_go

        _LANGUAGE = Language(ts_go.language())
    return _LANGUAGE


def _get_parser() -> Parser:
    global _PARSER
    if _PARSER is None:
        _PARSER = Parser(_get_language())
    return _PARSER


# =============================================================================
# Tree-sitter Helper Functions
# =============================================================================


def _iter_nodes(node: Node) -> Iterator[Node]:
    """Pre-order traversal with an explicit stack.

    Long ``"a" + "b" + ...`` chains nest deeper than Python's recursion
    limit, so the walk never recurses.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _find_nodes(node: Node, types: set[str]) -> list[Node]:
    """Find all nodes of given types, in source order."""
    return [n for n in _iter_nodes(node) if n.type in types]


def _get_child_by_field(node: Node, field_name: str) -> Node | None:
    """Get child by field name."""
    return node.child_by_field_name(field_name)


def _node_text(node: Node) -> str:
    return node.text.decode()


def _line_of(node: Node) -> int:
    """1-based line of a node's first character."""
    return node.start_point[0] + 1


def _first_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node in the tree, if any."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        # Only subtrees flagged by tree-sitter can hold an error
        stack.extend(child for child in reversed(current.children) if child.has_error)
    return None


def _collect_comments(root: Node) -> list[CommentInfo]:
    comments = []
    for node in _find_nodes(root, {"comment"}):
        comments.append(
            CommentInfo(
                text=_node_text(node),
                start_line=node.start_point[0] + 1,
                end_line=node.end_point[0] + 1,
            )
        )
    return comments


def parse_source(source: bytes, filename: str) -> SourceFile:
    """Parse Go source bytes.

    Args:
        source: File contents.
        filename: Name recorded in occurrence locations.

    Returns:
        SourceFile with tree and comments.

    Raises:
        SourceParseError: If the source is not valid UTF-8 or has syntax errors.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceParseError(f"{filename}: not valid UTF-8: {e}") from e

    tree = _get_parser().parse(source)
    error = _first_error(tree.root_node)
    if error is not None:
        row, column = error.start_point[0] + 1, error.start_point[1] + 1
        raise SourceParseError(f"{filename}:{row}:{column}: syntax error")

    return SourceFile(
        filename=filename,
        tree=tree,
        comments=_collect_comments(tree.root_node),
    )


def parse_file(path: Path | str) -> SourceFile:
    """Read and parse a Go file.

    The path is recorded exactly as given so that catalog locations match
    the command line.

    Raises:
        SourceParseError: If the file cannot be read or parsed.
    """
    filename = str(path)
    try:
        source = Path(path).read_bytes()
    except OSError as e:
        raise SourceParseError(f"Cannot read {filename}: {e}") from e

    logger.debug("Parsing %s (%d bytes)", filename, len(source))
    return parse_source(source, filename)
