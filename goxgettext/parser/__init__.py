"""Go source parsing using tree-sitter.

Re-exports the parsing entry points and the expression helpers used by
the extractor.
"""

from goxgettext.parser.base import (
    CommentInfo,
    SourceFile,
    SourceParseError,
    parse_file,
    parse_source,
)
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

__all__ = [
    "CommentInfo",
    "SourceFile",
    "SourceParseError",
    "parse_file",
    "parse_source",
    "FORMAT_HINT_C",
    "NodeKind",
    "ResolutionError",
    "call_arguments",
    "callee_name",
    "format_hint",
    "node_kind",
    "normalize_text",
    "resolve_literal",
]
