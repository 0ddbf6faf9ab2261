"""
Catalog database operations.

Reads implement printing selection: which single printing a name resolves
to under a given sort order. Writes are used by the catalog import job.
"""

import logging
import re
from collections.abc import Iterable

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from printfinder.models.card_request import SortOrder
from printfinder.models.db import CardPrintingDB
from printfinder.models.printing import PrintingRecord

logger = logging.getLogger(__name__)

# Delimiters for the fallback search token: "Birgi, God of..." -> "Birgi"
SEARCH_TOKEN_DELIMITERS = re.compile(r"[\s,/]")

LEADING_DIGITS = re.compile(r"^\d+")

LIKE_ESCAPE = "\\"


def collector_sort_key(collector_number: str) -> int:
    """Numeric part of a collector number: "290a" -> 290, "U31" -> 0."""
    match = LEADING_DIGITS.match(collector_number)
    return int(match.group()) if match else 0


def first_search_token(name: str) -> str:
    """
    Token used for the substring fallback.

    The first run of characters before any whitespace, comma or slash.
    Falls back to the whole name if the name starts with a delimiter.
    """
    name = name.strip()
    return SEARCH_TOKEN_DELIMITERS.split(name, maxsplit=1)[0] or name


def _escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _printing_order(sort_order: SortOrder) -> list[ColumnElement[object]]:
    """
    ORDER BY for printing selection.

    Unknown release dates sort last in both directions.
    """
    unknown_date_last = CardPrintingDB.released_at.is_(None).asc()
    if sort_order == SortOrder.NEWEST:
        return [
            unknown_date_last,
            CardPrintingDB.released_at.desc(),
            CardPrintingDB.collector_sort.desc(),
            CardPrintingDB.collector_number.desc(),
        ]
    return [
        unknown_date_last,
        CardPrintingDB.released_at.asc(),
        CardPrintingDB.collector_sort.asc(),
        CardPrintingDB.collector_number.asc(),
    ]


async def _first_printing(
    session: AsyncSession,
    condition: ColumnElement[bool],
    sort_order: SortOrder,
) -> CardPrintingDB | None:
    result = await session.execute(
        select(CardPrintingDB).where(condition).order_by(*_printing_order(sort_order)).limit(1)
    )
    return result.scalar_one_or_none()


async def find_printing(
    session: AsyncSession,
    name: str,
    sort_order: SortOrder,
) -> CardPrintingDB | None:
    """
    Select the printing a card name resolves to.

    Tries a case-insensitive exact name match first. Only if that finds
    nothing, retries with a case-insensitive substring match on the first
    word of the name.

    Returns:
        The first printing under `sort_order`, or None if neither attempt
        matched anything.
    """
    name = name.strip()
    if not name:
        return None

    lowered_name = func.lower(CardPrintingDB.name)

    printing = await _first_printing(session, lowered_name == func.lower(name), sort_order)
    if printing is not None:
        return printing

    token = first_search_token(name)
    logger.debug("No exact match for %r, searching with %r", name, token)

    pattern = f"%{_escape_like(token)}%"
    return await _first_printing(
        session,
        lowered_name.like(func.lower(pattern), escape=LIKE_ESCAPE),
        sort_order,
    )


def printing_to_record(db_printing: CardPrintingDB) -> PrintingRecord:
    """Convert a database printing to a domain model."""
    return PrintingRecord(
        name=db_printing.name,
        set_code=db_printing.set_code,
        set_name=db_printing.set_name,
        collector_number=db_printing.collector_number,
        released_at=db_printing.released_at,
        finishes=frozenset(db_printing.finishes or ()),
        scryfall_id=db_printing.scryfall_id,
    )


def _natural_key(name: str, set_code: str, collector_number: str) -> tuple[str, str, str]:
    return (set_code.lower(), collector_number, name)


async def upsert_printings(session: AsyncSession, printings: Iterable[PrintingRecord]) -> int:
    """
    Insert or update printings.

    Rows are matched by Scryfall id when the record has one, otherwise by
    set code + collector number + name.

    Returns the number of records written.
    """
    result = await session.execute(select(CardPrintingDB))
    existing = list(result.scalars().all())
    by_id = {row.scryfall_id: row for row in existing if row.scryfall_id}
    by_key = {
        _natural_key(row.name, row.set_code, row.collector_number): row for row in existing
    }

    count = 0
    for printing in printings:
        key = _natural_key(printing.name, printing.set_code, printing.collector_number)
        row = by_id.get(printing.scryfall_id) if printing.scryfall_id else None
        if row is None:
            row = by_key.get(key)

        if row is None:
            row = CardPrintingDB(scryfall_id=printing.scryfall_id)
            session.add(row)
        elif printing.scryfall_id:
            row.scryfall_id = printing.scryfall_id

        row.name = printing.name
        row.set_code = printing.set_code
        row.set_name = printing.set_name
        row.collector_number = printing.collector_number
        row.collector_sort = collector_sort_key(printing.collector_number)
        row.released_at = printing.released_at
        row.finishes = sorted(printing.finishes)

        if row.scryfall_id:
            by_id[row.scryfall_id] = row
        by_key[key] = row
        count += 1

    await session.flush()
    return count


async def count_printings(session: AsyncSession) -> int:
    """Number of printings in the catalog."""
    result = await session.execute(select(func.count()).select_from(CardPrintingDB))
    return int(result.scalar_one())


async def clear_catalog(session: AsyncSession) -> int:
    """
    Delete every printing.

    Returns the number of deleted records.
    """
    result = await session.execute(delete(CardPrintingDB))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]
