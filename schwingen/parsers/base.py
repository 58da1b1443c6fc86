"""Abstract base class for record parsers."""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from schwingen.errors import ValidationError

# Trailing stars after the name mark prior titles, e.g. "Giger Samuel ***"
DECORATION_PATTERN = re.compile(r"\s*(\*+)$")


def parse_name(raw_name: str) -> tuple[str, str]:
    """Split a raw name into (name, decoration).

    >>> parse_name("Giger Samuel ***")
    ('Giger Samuel', '***')
    """
    raw_name = raw_name.strip()
    match = DECORATION_PATTERN.search(raw_name)
    if match is None:
        return raw_name, ""
    return raw_name[:match.start()].strip(), match.group(1)


def split_line(line: str, list_name: str) -> tuple[str, str]:
    """Split "<key>, <raw name>" at the first comma.

    The name itself may contain further commas.

    Raises:
        ValidationError: If the line has no comma or an empty part
    """
    key, sep, raw_name = line.partition(",")
    key, raw_name = key.strip(), raw_name.strip()
    if not sep or not key or not raw_name:
        raise ValidationError(f'Invalid format in {list_name}: "{line.strip()}"')
    return key, raw_name


def content_lines(text: str) -> Iterator[str]:
    """Yield the non-blank lines of pasted text."""
    for line in (text or "").splitlines():
        if line.strip():
            yield line


class RecordParser(ABC):
    """Abstract base class for parsing pasted lists into seed records.

    Each parser handles one list format. Parsers are registered via the
    @register_parser decorator in schwingen/parsers/__init__.py.
    """

    KIND: str = ""
    KEY_PATTERN: re.Pattern = re.compile(r"$^")

    def can_parse(self, text: str) -> bool:
        """Check if every line of ``text`` starts with this parser's key format."""
        keys = [line.partition(",")[0].strip() for line in content_lines(text)]
        return bool(keys) and all(self.KEY_PATTERN.match(key) for key in keys)

    @abstractmethod
    def parse(self, text: str) -> list[Any]:
        """Parse pasted text into records.

        Raises:
            ValidationError: Naming the offending line
        """
        pass
