from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "PrintFinder"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./data/printfinder.db"

    scryfall_bulk_api: str = "https://api.scryfall.com/bulk-data"
    scryfall_user_agent: str = "PrintFinder/1.0"

    # Requests per round-trip to the lookup capability
    lookup_batch_size: int = 50

    default_sort_order: str = "oldest"

    # Upper bound on memoized (name, sort order) lookups held by the API
    lookup_cache_max_entries: int = 10_000


settings = Settings()
