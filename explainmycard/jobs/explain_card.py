"""
Explain a card from the command line.

Looks the card up on Scryfall (or reads a saved Scryfall JSON object with
--file) and prints the badge, the curated entry if there is one, and the
synthesized explanation and synergy report.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from explainmycard.config import settings
from explainmycard.models.card import CardFacts
from explainmycard.models.document import BULLET
from explainmycard.models.failure import KnownError
from explainmycard.services.card_lookup import fetch_card_by_exact_name
from explainmycard.services.card_report import (
    CardReport,
    DocumentModel,
    explain_card,
    report_summary,
)

logger = logging.getLogger(__name__)


def render_document(document: DocumentModel) -> str:
    blocks = []
    for section in document.sections:
        lines = [f"## {section.title}"]
        lines.extend(f"{BULLET} {b}" for b in section.bullets)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_report(report: CardReport) -> str:
    """Render a report as plain text for the terminal."""
    parts = [
        f"# {report.name}  {report.mana_cost}".rstrip(),
        report.type_line,
        f"[{report.badge.label}]  {report.best_format}",
        "",
        report.oracle_text or "(no rules text)",
    ]

    terms = sorted({s.term for s in report.oracle_segments if s.term})
    if terms:
        parts += ["", "Terms: " + ", ".join(terms)]

    if report.manual is not None:
        manual = report.manual
        parts += ["", f"## Beginner explanation: {manual.title}", manual.summary]
        parts += [f"{BULLET} {b}" for b in manual.why + manual.tips + manual.gotchas]
        for pairing in manual.pairings:
            parts.append(f"{BULLET} Pairs with {pairing.name}: {pairing.reason}")

    if report.ai_text:
        parts += ["", "## AI explanation", report.ai_text]

    if report.show_synthesized:
        parts += ["", render_document(report.explanation), "", render_document(report.synergies)]

    return "\n".join(parts)


async def run_explain(
    name: str | None,
    file: Path | None = None,
    prefer_manual: bool = False,
) -> str:
    """Load the card and build its rendered report."""
    if file is not None:
        card = CardFacts.from_scryfall(json.loads(file.read_text(encoding="utf-8")))
    else:
        card = await fetch_card_by_exact_name(name or "")

    report = await explain_card(card, prefer_manual=prefer_manual)
    logger.debug("Report: %s", report_summary(report))
    return render_report(report)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Explain a Magic card in plain language.")
    parser.add_argument("name", nargs="?", help="Exact card name")
    parser.add_argument("--file", type=Path, help="Read a Scryfall card JSON file instead")
    parser.add_argument(
        "--prefer-manual",
        action="store_true",
        default=settings.prefer_manual_explanations,
        help="Show only the curated explanation when one exists",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    if not args.name and args.file is None:
        parser.error("give a card name or --file")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        output = asyncio.run(run_explain(args.name, args.file, args.prefer_manual))
    except KnownError as e:
        logger.error("%s (%s)", e.message, e.detail)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
