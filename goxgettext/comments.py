"""Translator comments: the comment block directly above a marker call."""

from collections.abc import Sequence

from goxgettext.parser.base import CommentInfo

COMMENT_PREFIX = "#. "


def format_comment(text: str) -> str:
    """Render raw Go comment text as ``#. `` lines.

    Comment markers and surrounding whitespace are stripped from every
    physical line; lines left blank are dropped.
    """
    out = []
    for raw_line in text.split("\n"):
        line = raw_line.removeprefix("//")
        line = line.removeprefix("/*")
        line = line.removesuffix("*/")
        line = line.strip()
        if line:
            out.append(f"{COMMENT_PREFIX}{line}\n")
    return "".join(out)


def collect_comment_block(comments: Sequence[CommentInfo], line: int) -> str:
    """Join the run of comments that ends on the line right above ``line``.

    Args:
        comments: All comments of the file, in source order.
        line: 1-based line of the call.

    Returns:
        Raw comment text, one comment per line, oldest first. Empty if the
        line above is not a comment.
    """
    block: list[str] = []
    target = line
    for comment in reversed(comments):
        if comment.end_line == target - 1:
            block.append(comment.text)
            target = comment.start_line
        elif comment.end_line < target - 1:
            break
    return "\n".join(reversed(block))


def find_comment_block(
    comments: Sequence[CommentInfo],
    line: int,
    tag: str = "",
) -> str:
    """Formatted translator comment for a call on ``line``.

    Args:
        comments: All comments of the file, in source order.
        line: 1-based line of the call.
        tag: Required leading tag. The block is dropped unless its first
            line starts with it. An empty tag keeps any block.

    Returns:
        ``#. `` lines ending in a newline, or an empty string.
    """
    formatted = format_comment(collect_comment_block(comments, line))
    if not formatted.startswith(f"{COMMENT_PREFIX}{tag}"):
        return ""
    return formatted
