from printfinder.db.database import async_session_factory, get_session, init_db
from printfinder.db.operations import (
    clear_catalog,
    collector_sort_key,
    count_printings,
    find_printing,
    first_search_token,
    printing_to_record,
    upsert_printings,
)

__all__ = [
    "async_session_factory",
    "clear_catalog",
    "collector_sort_key",
    "count_printings",
    "find_printing",
    "first_search_token",
    "get_session",
    "init_db",
    "printing_to_record",
    "upsert_printings",
]
