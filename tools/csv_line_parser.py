"""
csv_line_parser.py

Quote-aware splitting of a single delimited line.

Handles:
- Fields wrapped in double quotes, so they can contain the delimiter
- Doubled double quotes inside a quoted field ("" -> ")

Does NOT handle newlines inside quoted fields: callers feed one physical
line at a time.
"""

from typing import List


QUOTE = '"'


def parse_csv_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Split one line into its fields.

    Example:

        parse_csv_line('"a,b",c')   -> ["a,b", "c"]
        parse_csv_line('"a""b",c')  -> ['a"b', "c"]
        parse_csv_line("a,")        -> ["a", ""]
    """
    fields: List[str] = []
    current = ""
    in_quotes = False

    i = 0
    while i < len(line):
        char = line[i]

        if char == QUOTE:
            if in_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                # Escaped quote
                current += QUOTE
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append(current)
            current = ""
        else:
            current += char

        i += 1

    # Last field is always emitted, even when empty
    fields.append(current)

    return fields
