"""Data models: keyword rules and the message catalog."""

from goxgettext.models.catalog import Catalog, Occurrence
from goxgettext.models.keywords import (
    DEFAULT_KEYWORD,
    DEFAULT_KEYWORD_CONTEXTUAL,
    DEFAULT_KEYWORD_PLURAL,
    KIND_CONTEXTUAL,
    KIND_PLURAL,
    KIND_SINGULAR,
    ConfigurationError,
    KeywordRule,
    KeywordTable,
    load_keyword_config,
    parse_keyword_config,
)

__all__ = [
    "Catalog",
    "Occurrence",
    "ConfigurationError",
    "KeywordRule",
    "KeywordTable",
    "load_keyword_config",
    "parse_keyword_config",
    "KIND_SINGULAR",
    "KIND_PLURAL",
    "KIND_CONTEXTUAL",
    "DEFAULT_KEYWORD",
    "DEFAULT_KEYWORD_PLURAL",
    "DEFAULT_KEYWORD_CONTEXTUAL",
]
