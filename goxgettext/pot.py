"""Rendering a catalog as a gettext template (.pot)."""

from dataclasses import dataclass
from datetime import datetime
from typing import TextIO

from goxgettext.models.catalog import Catalog, Occurrence

DEFAULT_BUGS_ADDRESS = "EMAIL"

_HEADER = """\
# SOME DESCRIPTIVE TITLE.
# Copyright (C) YEAR THE PACKAGE'S COPYRIGHT HOLDER
# This file is distributed under the same license as the PACKAGE package.
# FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.
#
#, fuzzy
msgid ""
msgstr "Project-Id-Version: {package_name}\\n"
"Report-Msgid-Bugs-To: {bugs_address}\\n"
"POT-Creation-Date: {creation_date}\\n"
"PO-Revision-Date: YEAR-MO-DA HO:MI+ZONE\\n"
"Last-Translator: FULL NAME <EMAIL@ADDRESS>\\n"
"Language-Team: LANGUAGE <LL@li.org>\\n"
"Language: \\n"
"MIME-Version: 1.0\\n"
"Content-Type: text/plain; charset=CHARSET\\n"
"Content-Transfer-Encoding: 8bit\\n"

"""

# An escaped newline inside a value ends a continuation line
_ESCAPED_NEWLINE = "\\n"
_CONTINUATION = '\\n"\n"'


class CatalogWriteError(Exception):
    """Raised when the catalog cannot be written to its destination."""


@dataclass(frozen=True)
class WriterOptions:
    """Output settings for a .pot file."""

    package_name: str = ""
    bugs_address: str = DEFAULT_BUGS_ADDRESS
    sort_output: bool = False
    no_location: bool = False
    add_comments: bool = False
    add_comments_tag: str = ""

    @property
    def comments_enabled(self) -> bool:
        return self.add_comments or bool(self.add_comments_tag)


def format_time(now: datetime | None = None) -> str:
    """POT-Creation-Date value, e.g. ``2026-10-19 14:05+0200``."""
    if now is None:
        now = datetime.now().astimezone()
    return now.strftime("%Y-%m-%d %H:%M%z")


def format_value(value: str) -> str:
    """Split a value after each ``\\n`` escape into continuation lines.

    The result goes between the quotes of a ``msgid "..."`` line. A trailing
    escape does not produce an empty continuation line.
    """
    out = value.replace(_ESCAPED_NEWLINE, _CONTINUATION)
    return out.removesuffix('"\n"')


def render_header(options: WriterOptions, creation_date: str | None = None) -> str:
    return _HEADER.format(
        package_name=options.package_name,
        bugs_address=options.bugs_address,
        creation_date=creation_date if creation_date is not None else format_time(),
    )


def render_entry(msgid: str, occurrences: list[Occurrence], options: WriterOptions) -> str:
    """Render one message block, terminated by a blank line."""
    lines: list[str] = []

    if options.comments_enabled:
        for occurrence in occurrences:
            if occurrence.comment:
                lines.append(occurrence.comment.rstrip("\n"))

    if not options.no_location:
        locations = " ".join(o.location for o in occurrences)
        lines.append(f"#: {locations}")

    first = occurrences[0]
    if first.format_hint:
        lines.append(f"#, {first.format_hint}")
    if first.msgctxt:
        lines.append(f'msgctxt "{format_value(first.msgctxt)}"')
    lines.append(f'msgid "{format_value(msgid)}"')
    if first.msgid_plural:
        lines.append(f'msgid_plural "{format_value(first.msgid_plural)}"')
        lines.append('msgstr[0] ""')
        lines.append('msgstr[1] ""')
    else:
        lines.append('msgstr ""')

    return "\n".join(lines) + "\n\n"


def render_pot(
    catalog: Catalog,
    options: WriterOptions | None = None,
    creation_date: str | None = None,
) -> str:
    """Render the whole catalog, header first.

    Args:
        catalog: Aggregated occurrences.
        options: Output settings (defaults if None).
        creation_date: Fixed POT-Creation-Date; current time if None.

    Returns:
        The .pot file contents.
    """
    options = options or WriterOptions()
    parts = [render_header(options, creation_date)]
    for msgid, occurrences in catalog.items(sort=options.sort_output):
        parts.append(render_entry(msgid, occurrences, options))
    return "".join(parts)


def write_pot(
    catalog: Catalog,
    out: TextIO,
    options: WriterOptions | None = None,
    creation_date: str | None = None,
) -> None:
    """Write the rendered catalog to an open text stream.

    Raises:
        CatalogWriteError: If writing fails.
    """
    text = render_pot(catalog, options, creation_date)
    try:
        out.write(text)
        out.flush()
    except OSError as e:
        raise CatalogWriteError(f"Failed to write catalog: {e}") from e
