"""
Expression dictionary: named format strings loaded from INI files.

    greeting = "Hello, %s!"

    [date]
    short = "dd.MM.YYYY"

yields the entries "greeting" and "date.short". Names are case-insensitive.
"""

import configparser
import logging
from collections.abc import Mapping

from ..templating import to_text

logger = logging.getLogger(__name__)

# Entries above the first [section] header are collected under this name.
ROOT_SECTION = "\x00root"


def _unquote(value):
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


class ExpressionDictionary(Mapping):
    """Read-only mapping from lower-cased expression name to format string."""

    def __init__(self, entries=None):
        self._entries = {
            str(key).lower(): value for key, value in (entries or {}).items()
        }

    @classmethod
    def from_string(cls, text):
        parser = configparser.ConfigParser(
            interpolation=None,
            default_section=ROOT_SECTION + "default",
            strict=False,
        )
        parser.read_string(f"[{ROOT_SECTION}]\n" + text)

        entries = {}
        for section in parser.sections():
            for key, value in parser.items(section):
                if section != ROOT_SECTION:
                    key = f"{section}.{key}"
                entries[key] = _unquote(value)
        return cls(entries)

    @classmethod
    def from_file(cls, path):
        with open(path, encoding="utf-8") as f:
            dictionary = cls.from_string(f.read())
        logger.debug(f"Loaded {len(dictionary)} expressions from {path}")
        return dictionary

    def merged(self, other):
        """Return a new dictionary with the entries of *other* taking precedence."""
        return ExpressionDictionary({**self._entries, **dict(other)})

    def lookup(self, value):
        """Return the format string named by *value*, or *value* itself."""
        return self._entries.get(to_text(value).lower(), value)

    def __getitem__(self, key):
        return self._entries[key.lower()]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)
