"""CSV loader — reads chat message exports."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from helpdesk.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_sender_role,
    parse_timestamp,
)
from helpdesk.domain.entities.message import Message

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "csv-import"

TEXT_COLUMNS = ("text", "message", "текст", "сообщение", "xabar", "matn")
CHANNEL_COLUMNS = ("channel", "channel_id", "chat", "chat_id", "group", "канал", "чат", "группа")
ROLE_COLUMNS = ("sender_role", "role", "роль", "rol")
SENDER_COLUMNS = ("sender", "sender_name", "author", "from", "отправитель", "автор")
SENDER_ID_COLUMNS = ("sender_id", "user_id", "from_id")
DATE_COLUMNS = ("created_at", "date", "timestamp", "дата", "время", "sana")


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) to support Excel RU exports."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    counts = {d: first_line.count(d) for d in (";", ",", "\t")}
    best_delim = max(counts, key=counts.get)
    if counts[best_delim] == 0:
        return csv.excel

    class DynamicDialect(csv.excel):
        delimiter = best_delim

    return DynamicDialect


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization."""
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict, columns: tuple[str, ...]) -> str | None:
    return next((row[c] for c in columns if row.get(c)), None)


def load_messages(file_path: Path, default_channel: str = DEFAULT_CHANNEL) -> list[Message]:
    """Load a message export into unsaved Message entities.

    Rows without text are skipped. Recognized columns (after normalization):
    text, channel, sender_role, sender, sender_id, created_at (plus their
    Russian / Uzbek names).
    """
    rows = _read_csv(file_path)
    messages: list[Message] = []
    skipped = 0
    for row in rows:
        text = _first(row, TEXT_COLUMNS)
        if not text:
            skipped += 1
            continue
        messages.append(
            Message(
                id=None,
                channel_id=_first(row, CHANNEL_COLUMNS) or default_channel,
                text=text,
                sender_role=parse_sender_role(_first(row, ROLE_COLUMNS)),
                sender_id=_first(row, SENDER_ID_COLUMNS),
                sender_name=_first(row, SENDER_COLUMNS),
                created_at=parse_timestamp(_first(row, DATE_COLUMNS)),
            )
        )
    logger.info("Parsed %d messages (%d rows without text skipped)", len(messages), skipped)
    return messages
