"""Classify a CSV message export offline.

Usage:
    python -m helpdesk.tools.classify_export data/messages.csv
    python -m helpdesk.tools.classify_export data/messages.csv --only-problems
    python -m helpdesk.tools.classify_export data/messages.csv --with-model --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from helpdesk.adapters.csv_loader.loader import load_messages
from helpdesk.adapters.llm.openai_adapter import OpenAIAdapter
from helpdesk.application.use_cases.bulk_analyze import analyze_batch
from helpdesk.application.use_cases.classify_message import ClassifyMessageUseCase
from helpdesk.config import settings
from helpdesk.domain.entities.message import Message
from helpdesk.domain.policies.language import detect_language

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def classify_export(
    messages: list[Message],
    with_model: bool = False,
    only_problems: bool = False,
) -> list[dict]:
    """Classify client messages; staff rows are skipped."""
    llm = OpenAIAdapter() if with_model else None
    classifier = ClassifyMessageUseCase(llm=llm, timeout_seconds=settings.openai_timeout_seconds)

    rows: list[dict] = []
    for message in messages:
        if not message.is_from_client:
            continue
        result = await classifier.execute(message.text)
        if only_problems and not result.is_problem:
            continue
        rows.append(
            {
                "channel_id": message.channel_id,
                "sender": message.sender_name,
                "language": detect_language(message.text).value,
                "text": message.text,
                **result.to_dict(),
            }
        )
    return rows


def _print_table(rows: list[dict]) -> None:
    for row in rows:
        flag = "!" if row["is_problem"] else " "
        print(
            f"{flag} [{row['language']:<11}] {row['category']:<15} {row['intent']:<15} "
            f"u={row['urgency']} {row['text'][:70]}"
        )


def _print_summary(messages: list[Message]) -> None:
    report = analyze_batch(m.text for m in messages if m.is_from_client)
    print(f"\n{'='*50}")
    print("SUMMARY")
    print(f"{'='*50}")
    print(f"Client messages: {report.total}")
    print(f"Problems:        {report.problems}")
    print(f"Questions:       {report.questions}")
    print(f"Resolved:        {report.resolved}")
    print(f"Languages:       {report.by_language}")
    print(f"Categories:      {report.by_category}")
    print(f"Detectors:       {report.detectors}")
    print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Classify support messages from a CSV export")
    parser.add_argument("csv_path", type=str, help="Path to the CSV export")
    parser.add_argument(
        "--with-model", action="store_true",
        help="Use the OpenAI classifier when OPENAI_API_KEY is configured",
    )
    parser.add_argument(
        "--only-problems", action="store_true",
        help="Print only messages classified as problems",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print results as JSON lines instead of a table",
    )
    args = parser.parse_args()

    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        logger.error("CSV file not found: %s", csv_path)
        sys.exit(1)

    messages = load_messages(csv_path)
    rows = asyncio.run(
        classify_export(messages, with_model=args.with_model, only_problems=args.only_problems)
    )

    if args.json:
        for row in rows:
            print(json.dumps(row, ensure_ascii=False))
    else:
        _print_table(rows)
        _print_summary(messages)


if __name__ == "__main__":
    main()
