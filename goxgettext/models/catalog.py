"""Occurrences of translatable messages and the catalog that groups them."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Occurrence:
    """One recognised marker call in a source file."""

    msgid: str  # Normalised singular text, the aggregation key
    filename: str
    line: int
    msgid_plural: str = ""
    msgctxt: str = ""
    format_hint: str = ""  # "c-format" or empty
    comment: str = ""  # Formatted "#. ..." lines, newline terminated

    @property
    def location(self) -> str:
        return f"{self.filename}:{self.line}"


class Catalog:
    """Insertion-ordered mapping of message text to its occurrences.

    One catalog lives for exactly one extraction run. The first occurrence
    recorded for a message decides its plural form, context and format
    hint when the catalog is rendered.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[Occurrence]] = {}

    def add(self, occurrence: Occurrence) -> None:
        self._entries.setdefault(occurrence.msgid, []).append(occurrence)

    def extend(self, occurrences: Iterable[Occurrence]) -> None:
        for occurrence in occurrences:
            self.add(occurrence)

    def keys(self, sort: bool = False) -> list[str]:
        """Message keys in first-seen order, or lexicographic order if sort."""
        if sort:
            return sorted(self._entries)
        return list(self._entries)

    def occurrences(self, msgid: str) -> list[Occurrence]:
        return list(self._entries[msgid])

    def items(self, sort: bool = False) -> Iterator[tuple[str, list[Occurrence]]]:
        for key in self.keys(sort=sort):
            yield key, self._entries[key]

    def __contains__(self, msgid: object) -> bool:
        return msgid in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Catalog({len(self._entries)} messages)"
