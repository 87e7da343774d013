"""Keyword rules: which call names mark translatable text.

A keyword table maps a fully dotted call name (``gettext.Gettext``,
``i18n.G``) to the rule describing how to read its arguments.
"""

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

KIND_SINGULAR = "singular"
KIND_PLURAL = "plural"
KIND_CONTEXTUAL = "contextual"

DEFAULT_KEYWORD = "gettext.Gettext"
DEFAULT_KEYWORD_PLURAL = "gettext.NGettext"
DEFAULT_KEYWORD_CONTEXTUAL = "gettext.NCGettext"


class ConfigurationError(Exception):
    """Raised when keyword configuration cannot be loaded or validated."""


class KeywordRule(BaseModel):
    """One marker function and how to read its arguments."""

    type: Literal["singular", "plural", "contextual"] = Field(
        description="How the text arguments are laid out"
    )
    name: str = Field(min_length=1, description="Dotted call name, e.g. 'gettext.Gettext'")
    skip_args: int = Field(
        default=0,
        ge=0,
        alias="skipArgs",
        description="Leading call arguments to ignore before the text argument(s)",
    )

    model_config = {"populate_by_name": True, "frozen": True}


_RULE_LIST = TypeAdapter(list[KeywordRule])


class KeywordTable(Mapping[str, KeywordRule]):
    """Read-only lookup of keyword rules by call name."""

    def __init__(self, rules: Iterable[KeywordRule]) -> None:
        self._rules: dict[str, KeywordRule] = {}
        for rule in rules:
            # Later definitions win, matching a plain dict update.
            self._rules[rule.name] = rule

    @classmethod
    def from_rules(cls, rules: Iterable[KeywordRule]) -> "KeywordTable":
        return cls(rules)

    @classmethod
    def from_names(
        cls,
        singular: str = DEFAULT_KEYWORD,
        plural: str = DEFAULT_KEYWORD_PLURAL,
        contextual: str = DEFAULT_KEYWORD_CONTEXTUAL,
        skip_args: int = 0,
    ) -> "KeywordTable":
        """Build the table from the three keyword names sharing one skip count.

        Raises:
            ConfigurationError: If a name is empty or skip_args is negative.
        """
        try:
            rules = [
                KeywordRule(type=KIND_SINGULAR, name=singular, skip_args=skip_args),
                KeywordRule(type=KIND_PLURAL, name=plural, skip_args=skip_args),
                KeywordRule(type=KIND_CONTEXTUAL, name=contextual, skip_args=skip_args),
            ]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid keyword options: {e}") from e
        return cls(rules)

    def lookup(self, name: str) -> KeywordRule | None:
        """Return the rule for a call name, or None if it is not a marker call."""
        if not name:
            return None
        return self._rules.get(name)

    def __getitem__(self, name: str) -> KeywordRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"KeywordTable({sorted(self._rules)!r})"


def parse_keyword_config(data: str | bytes) -> KeywordTable:
    """Parse keyword definitions from JSON text.

    The JSON must be a list of objects with ``type``, ``name`` and
    ``skipArgs`` keys.

    Raises:
        ConfigurationError: If the JSON is malformed or a rule is invalid.
    """
    try:
        rules = _RULE_LIST.validate_json(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid keyword configuration: {e}") from e
    return KeywordTable.from_rules(rules)


def load_keyword_config(path: Path | str) -> KeywordTable:
    """Load keyword definitions from a JSON file.

    Args:
        path: Path to the JSON keyword configuration.

    Returns:
        KeywordTable built from the file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigurationError(f"Cannot read keyword configuration {path}: {e}") from e
    try:
        return parse_keyword_config(data)
    except ConfigurationError as e:
        raise ConfigurationError(f"{path}: {e}") from e
