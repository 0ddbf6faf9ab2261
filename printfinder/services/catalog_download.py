"""
Scryfall bulk data download.

Fetches the default-cards bulk file that seeds the printing catalog.
"""

from pathlib import Path

import httpx

from printfinder.config import settings

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_BULK_PATH = DATA_DIR / "default-cards.json"

BULK_DATA_TYPE = "default_cards"


async def get_bulk_data_url(client: httpx.AsyncClient) -> str:
    """
    Find the download URL for Scryfall's default-cards bulk data.

    Raises:
        ValueError: If the bulk data listing has no default_cards entry
        httpx.HTTPError: If the API request fails
    """
    response = await client.get(settings.scryfall_bulk_api)
    response.raise_for_status()
    data = response.json()

    for item in data.get("data", []):
        if item.get("type") == BULK_DATA_TYPE:
            return str(item["download_uri"])

    raise ValueError("Could not find default_cards bulk data URL")


async def download_bulk_data(output_path: Path | None = None) -> Path:
    """
    Download the latest default-cards bulk data.

    Args:
        output_path: Where to save the file. Defaults to data/default-cards.json

    Returns:
        Path to downloaded file.
    """
    if output_path is None:
        output_path = DEFAULT_BULK_PATH

    output_path.parent.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(
        headers={"User-Agent": settings.scryfall_user_agent},
        follow_redirects=True,
        timeout=30.0,
    ) as client:
        download_url = await get_bulk_data_url(client)

        # Stream download (file is ~100MB)
        async with client.stream("GET", download_url, timeout=300.0) as response:
            response.raise_for_status()
            with open(output_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)

    return output_path
