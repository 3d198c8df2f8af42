"""Text and CSV renderings of group results and draw history."""

from __future__ import annotations

from typing import Iterable

from .models import DrawHistoryEntry, Group

GROUPS_CSV_HEADER = ("Group Number", "Member Name")
HISTORY_CSV_HEADER = ("Timestamp", "Winner")


def quote_field(value: str, delimiter: str = ",") -> str:
    if delimiter in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def _csv(rows: Iterable[tuple[str, ...]], delimiter: str) -> str:
    return "".join(delimiter.join(quote_field(cell, delimiter) for cell in row) + "\n" for row in rows)


def groups_to_text(groups: Iterable[Group]) -> str:
    blocks = []
    for group in groups:
        lines = [f"Group {group.id}:"]
        lines.extend(f"- {member.name}" for member in group.members)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def groups_to_csv(groups: Iterable[Group], delimiter: str = ",") -> str:
    rows: list[tuple[str, ...]] = [GROUPS_CSV_HEADER]
    for group in groups:
        rows.extend((str(group.id), member.name) for member in group.members)
    return _csv(rows, delimiter)


def history_to_text(history: Iterable[DrawHistoryEntry]) -> str:
    return "\n".join(
        f"{index}. {entry.winner.name} ({entry.timestamp.isoformat()})"
        for index, entry in enumerate(history, start=1)
    )


def history_to_csv(history: Iterable[DrawHistoryEntry], delimiter: str = ",") -> str:
    rows: list[tuple[str, ...]] = [HISTORY_CSV_HEADER]
    rows.extend((entry.timestamp.isoformat(), entry.winner.name) for entry in history)
    return _csv(rows, delimiter)
