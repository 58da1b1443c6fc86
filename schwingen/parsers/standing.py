"""Parser for the standing after the previous round (Rangliste)."""

import math
import re

from schwingen.errors import DuplicateNameError, ValidationError
from schwingen.models import StandingEntry
from schwingen.parsers import register_parser
from schwingen.parsers.base import RecordParser, content_lines, parse_name, split_line


@register_parser
class StandingParser(RecordParser):
    """Parser for standings.

    One competitor per line, total first:

        48.75, Giger Samuel ***
        48.50, Orlik Armon *
    """

    KIND = "standing"
    KEY_PATTERN = re.compile(r"^\d+\.\d+$")
    EXAMPLE_LINE = "48.75, Giger Samuel ***"

    def parse(self, text: str) -> list[StandingEntry]:
        entries = []
        seen: set[str] = set()
        for line in content_lines(text):
            points, raw_name = split_line(line, "standing")
            name, decoration = parse_name(raw_name)
            try:
                total = float(points.replace(",", "."))
            except ValueError:
                raise ValidationError(f'Invalid total in standing: "{line.strip()}"') from None
            if not math.isfinite(total) or total < 0:
                raise ValidationError(f'Invalid total in standing: "{line.strip()}"')
            if name in seen:
                raise DuplicateNameError(f"Duplicate name in standing: {name}")
            seen.add(name)
            entries.append(StandingEntry(total=total, name=name, decoration=decoration))
        return entries
