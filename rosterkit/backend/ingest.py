"""Turn pasted text, uploaded files and demo data into participant names."""

from __future__ import annotations

import re

DEMO_NAMES = (
    "Alice Johnson",
    "Bob Smith",
    "Charlie Brown",
    "Diana Prince",
    "Evan Wright",
    "Fiona Gallagher",
    "George Martin",
    "Hannah Lee",
    "Ian Malcolm",
    "Julia Child",
)

_LINE_BREAK = re.compile(r"\r\n|\n")


def parse_text(text: str) -> list[str]:
    """One name per line; surrounding whitespace and blank lines are dropped."""
    names = (line.strip() for line in text.split("\n"))
    return [name for name in names if name]


def parse_delimited(content: str, delimiter: str = ",") -> list[str]:
    """Take the first cell of every line and skip a ``name`` header row."""
    names: list[str] = []
    for line in _LINE_BREAK.split(content):
        name = line.split(delimiter)[0].strip()
        if not name or name.lower() == "name":
            continue
        names.append(name)
    return names


def demo_names(count: int = 20) -> list[str]:
    return list(DEMO_NAMES[: max(count, 0)])
