"""
Import Scryfall printings into the catalog.

Run this job to seed or refresh the printing catalog that card lookups
resolve against. Without --file it downloads the latest bulk data first.

    python -m printfinder.jobs.import_catalog
    python -m printfinder.jobs.import_catalog --file data/default-cards.json
"""

import argparse
import asyncio
import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from printfinder.db.database import async_session_factory, init_db
from printfinder.db.operations import upsert_printings
from printfinder.parsers.scryfall import load_printings
from printfinder.services.catalog_download import download_bulk_data

logger = logging.getLogger(__name__)


async def import_file(
    path: Path,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> int:
    """
    Load a bulk data file and upsert every printing.

    Returns:
        Number of printings written
    """
    printings = load_printings(path)
    logger.info("Loaded %d printings from %s", len(printings), path)

    async with session_factory() as session:
        count = await upsert_printings(session, printings)
        await session.commit()

    logger.info("Imported %d printings", count)
    return count


async def run_import(path: Path | None = None) -> int:
    """Create tables, download bulk data if no file was given, then import it."""
    await init_db()

    if path is None:
        logger.info("Downloading Scryfall bulk data...")
        try:
            path = await download_bulk_data()
        except Exception as e:
            logger.error("Failed to download bulk data: %s", e)
            raise
        logger.info("Downloaded bulk data to %s", path)

    return await import_file(path)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Import Scryfall printings into the catalog")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Existing default-cards bulk JSON file (skips the download)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_import(args.file))


if __name__ == "__main__":
    main()
