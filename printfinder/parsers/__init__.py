from printfinder.parsers.card_list import (
    extract_finish,
    extract_quantity,
    extract_tags,
    normalize_faces,
    parse_card_line,
    parse_card_list,
    strip_set_and_collector,
)
from printfinder.parsers.scryfall import load_printings, parse_printing

__all__ = [
    "extract_finish",
    "extract_quantity",
    "extract_tags",
    "load_printings",
    "normalize_faces",
    "parse_card_line",
    "parse_card_list",
    "parse_printing",
    "strip_set_and_collector",
]
