"""
CSV Tokenizer for delivery exports.

A small quote-aware scanner instead of the csv module: exports from the
yard system are line oriented (no quoted line breaks), blank lines must be
dropped rather than returned as empty rows, and an unterminated quote just
runs to the end of its line.
"""

import re
from typing import List


def parse_line(line: str) -> List[str]:
    """
    Split one CSV line into trimmed fields.

    A doubled quote inside a quoted field is a literal quote. Commas inside
    quotes are content.
    """
    fields = []
    current = []
    in_quotes = False

    i = 0
    while i < len(line):
        char = line[i]

        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)

        i += 1

    fields.append(''.join(current).strip())
    return fields


def tokenize(text: str) -> List[List[str]]:
    """Tokenize CSV text into rows of fields, skipping blank lines."""
    normalized = re.sub(r'\r\n?', '\n', text or '')
    return [parse_line(line) for line in normalized.split('\n') if line.strip()]
