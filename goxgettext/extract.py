"""Marker call extraction.

Walks a parsed Go file, recognises calls listed in the keyword table and
records one ``Occurrence`` per call whose text arguments resolve.

Files are processed in the order given. With several workers, files are
parsed in a process pool but their occurrences are merged back strictly in
input order, so the catalog is identical to a sequential run.
"""

import multiprocessing
from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

from tree_sitter import Node

from goxgettext.comments import find_comment_block
from goxgettext.logging import log_operation, logger, progress_bar
from goxgettext.models.catalog import Catalog, Occurrence
from goxgettext.models.keywords import (
    KIND_CONTEXTUAL,
    KIND_PLURAL,
    KIND_SINGULAR,
    KeywordRule,
    KeywordTable,
)
from goxgettext.parser.base import SourceFile, _iter_nodes, parse_file
from goxgettext.parser.go import (
    NodeKind,
    ResolutionError,
    call_arguments,
    callee_name,
    format_hint,
    node_kind,
    normalize_text,
    position,
    resolve_literal,
)

# Use 'spawn' context so workers never inherit parser state from the parent.
_MP_CONTEXT = multiprocessing.get_context("spawn")

# Below this many files a process pool costs more than it saves
PARALLEL_THRESHOLD = 8


def _argument(args: list[Node], index: int) -> str:
    if index >= len(args):
        raise ResolutionError(f"missing argument {index + 1}")
    return resolve_literal(args[index])


def _resolve_arguments(call: Node, rule: KeywordRule) -> tuple[str, str, str]:
    """Resolve (msgid, msgid_plural, msgctxt) raw texts for a marker call."""
    args = call_arguments(call)
    idx = rule.skip_args
    msgid = plural = context = ""
    if rule.type == KIND_SINGULAR:
        msgid = _argument(args, idx)
    elif rule.type == KIND_PLURAL:
        msgid = _argument(args, idx)
        plural = _argument(args, idx + 1)
    elif rule.type == KIND_CONTEXTUAL:
        context = _argument(args, idx)
        msgid = _argument(args, idx + 1)
    return msgid, plural, context


def _inspect_call(
    call: Node,
    source: SourceFile,
    keywords: KeywordTable,
    comments_tag: str,
) -> Occurrence | None:
    rule = keywords.lookup(callee_name(_function_of(call)))
    if rule is None:
        return None

    line, column = position(call)
    try:
        msgid, plural, context = _resolve_arguments(call, rule)
    except ResolutionError as e:
        logger.warning(
            "Unable to obtain value at %s:%d:%d: %s", source.filename, line, column, e
        )
        return None

    text = normalize_text(msgid)
    if not text:
        return None

    return Occurrence(
        msgid=text,
        filename=source.filename,
        line=line,
        msgid_plural=normalize_text(plural),
        msgctxt=normalize_text(context),
        format_hint=format_hint(msgid, plural),
        comment=find_comment_block(source.comments, line, comments_tag),
    )


def _function_of(call: Node) -> Node:
    function = call.child_by_field_name("function")
    return function if function is not None else call


def extract_occurrences(
    source: SourceFile,
    keywords: KeywordTable,
    comments_tag: str = "",
) -> list[Occurrence]:
    """Find every marker call in a parsed file, in source order.

    Args:
        source: Parsed Go file.
        keywords: Keyword table to match callee names against.
        comments_tag: Required leading tag for translator comments.

    Returns:
        Occurrences for all calls whose text arguments resolved.
    """
    occurrences = []
    for node in _iter_nodes(source.root):
        if node_kind(node) is not NodeKind.CALL:
            continue
        occurrence = _inspect_call(node, source, keywords, comments_tag)
        if occurrence is not None:
            occurrences.append(occurrence)
    return occurrences


def extract_source(
    source: SourceFile,
    keywords: KeywordTable,
    catalog: Catalog,
    comments_tag: str = "",
) -> int:
    """Extract a parsed file into ``catalog``. Returns occurrences added."""
    occurrences = extract_occurrences(source, keywords, comments_tag)
    catalog.extend(occurrences)
    return len(occurrences)


def extract_file(
    path: Path | str,
    keywords: KeywordTable,
    comments_tag: str = "",
) -> list[Occurrence]:
    """Parse a file and return its occurrences.

    Raises:
        SourceParseError: If the file cannot be read or parsed.
    """
    return extract_occurrences(parse_file(path), keywords, comments_tag)


def extract_files(
    paths: Sequence[Path | str],
    keywords: KeywordTable,
    comments_tag: str = "",
    workers: int = 1,
) -> Catalog:
    """Extract all files into a fresh catalog.

    Args:
        paths: Input files, processed in this order.
        keywords: Keyword table.
        comments_tag: Required leading tag for translator comments.
        workers: Number of worker processes. 1 disables parallel parsing.

    Returns:
        Catalog of all occurrences, in first-seen order.

    Raises:
        SourceParseError: On the first file that cannot be read or parsed.
    """
    catalog = Catalog()
    use_parallel = workers > 1 and len(paths) >= PARALLEL_THRESHOLD

    with log_operation("extract", {"files": len(paths), "workers": workers if use_parallel else 1}):
        if use_parallel:
            with ProcessPoolExecutor(max_workers=workers, mp_context=_MP_CONTEXT) as executor:
                # map() yields results in submission order
                results = executor.map(
                    extract_file,
                    paths,
                    [keywords] * len(paths),
                    [comments_tag] * len(paths),
                )
                for occurrences in progress_bar(results, desc="Extracting", total=len(paths), unit="files"):
                    catalog.extend(occurrences)
        else:
            for path in progress_bar(paths, desc="Extracting", total=len(paths), unit="files"):
                catalog.extend(extract_file(path, keywords, comments_tag))

    logger.debug("Extracted %d messages from %d files", len(catalog), len(paths))
    return catalog
