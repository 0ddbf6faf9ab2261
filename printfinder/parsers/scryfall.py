"""
Scryfall bulk data loader.

Turns Scryfall's default-cards bulk JSON into PrintingRecords for the
catalog. One Scryfall card object is one printing.

Bulk data: https://scryfall.com/docs/api/bulk-data
"""

import json
from datetime import date
from pathlib import Path
from typing import Any

from printfinder.models.printing import KNOWN_FINISHES, PrintingRecord


def _parse_release_date(value: Any) -> date | None:
    """Parse Scryfall's "YYYY-MM-DD" release date. None if absent or malformed."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_finishes(card: dict[str, Any]) -> frozenset[str]:
    """
    Read available finishes.

    Older bulk files predate the "finishes" list and carry "foil"/"nonfoil"
    booleans instead.
    """
    finishes = card.get("finishes")
    if finishes is None:
        finishes = [name for name in ("nonfoil", "foil") if card.get(name)]
    return frozenset(str(f) for f in finishes) & KNOWN_FINISHES


def parse_printing(card: dict[str, Any]) -> PrintingRecord | None:
    """
    Convert one Scryfall card object to a PrintingRecord.

    Returns:
        None when name, set or collector number is missing.
    """
    name = card.get("name")
    set_code = card.get("set")
    collector_number = card.get("collector_number")
    if not name or not set_code or not collector_number:
        return None

    return PrintingRecord(
        name=str(name),
        set_code=str(set_code),
        set_name=str(card.get("set_name", "")),
        collector_number=str(collector_number),
        released_at=_parse_release_date(card.get("released_at")),
        finishes=_parse_finishes(card),
        scryfall_id=card.get("id"),
    )


def load_printings(bulk_data_path: Path) -> list[PrintingRecord]:
    """
    Load every printing from a bulk data file.

    Args:
        bulk_data_path: Path to downloaded Scryfall bulk JSON

    Returns:
        PrintingRecords in file order. Unusable entries are skipped.
    """
    with open(bulk_data_path, encoding="utf-8") as f:
        cards = json.load(f)

    printings: list[PrintingRecord] = []
    for card in cards:
        printing = parse_printing(card)
        if printing is not None:
            printings.append(printing)

    return printings
