"""Parser for the start list (Startliste)."""

import re

from schwingen.errors import DuplicateNameError, ValidationError
from schwingen.models import RosterEntry
from schwingen.parsers import register_parser
from schwingen.parsers.base import RecordParser, content_lines, parse_name, split_line


@register_parser
class RosterParser(RecordParser):
    """Parser for start lists.

    One competitor per line, start number first:

        1, Giger Samuel ***
        2, Orlik Armon *

    Start numbers and names must be unique, since standings refer to
    competitors by name.
    """

    KIND = "roster"
    KEY_PATTERN = re.compile(r"^\d+$")
    EXAMPLE_LINE = "1, Giger Samuel ***"

    def parse(self, text: str) -> list[RosterEntry]:
        entries = []
        seen: set[str] = set()
        numbers: set[str] = set()
        for line in content_lines(text):
            number, raw_name = split_line(line, "start list")
            name, decoration = parse_name(raw_name)
            if number in numbers:
                raise ValidationError(f'Duplicate start number in start list: "{line.strip()}"')
            if name in seen:
                raise DuplicateNameError(f"Duplicate name in start list: {name}")
            numbers.add(number)
            seen.add(name)
            entries.append(RosterEntry(id=number, name=name, decoration=decoration))
        return entries
