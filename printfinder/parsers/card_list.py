"""
Parser for free-form card lists.

Accepts anything from a bare name to a full Moxfield export line:
    Abrade
    1 Abrade
    1x Abrade
    1 Aetherflux Reservoir (KHM) 311 *F* #Combo #Engine
    Birgi, God of Storytelling / Harnfel, Horn of Bounty

Each line goes through a fixed sequence of small steps. Every step takes the
remaining text and returns it with one piece pulled off, so each can be
tested on its own. Parsing never raises: text a step does not recognise is
left for the next one, and whatever is left at the end is the card name.
"""

import re

from printfinder.models.card_request import Finish, ParsedRequest

TAG_DELIMITER = "#"

# "4 ", "4x ", "12X ", or a bare "4" with nothing after it
QUANTITY_PATTERN = re.compile(r"^(\d+)x?(?:\s+|$)", re.IGNORECASE)

# " *F*" or " *e* " at end of line
FINISH_PATTERN = re.compile(r"\s+\*([FE])\*\s*$", re.IGNORECASE)

# " (KHM) 311", " (PLST) 2XM-267", " (40K) 204★" at end of line
SET_AND_COLLECTOR_PATTERN = re.compile(r"\s+\([^)]+\)\s+\S+\s*$")

# "Fire / Ice" -> "Fire // Ice"; already-doubled slashes are left alone
FACE_SEPARATOR_PATTERN = re.compile(r"\s+/\s+")

# Section headers in Moxfield and Arena exports
SECTION_HEADERS = frozenset({"deck", "sideboard", "commander", "companion", "maybeboard"})

COMMENT_PREFIX = "//"


def extract_tags(line: str) -> tuple[str, str]:
    """
    Split a line into its body and its "#tag" suffix.

    Returns:
        (body, tags) where tags is every "#..." segment re-joined by single
        spaces, in original order. Empty string when there are none.
    """
    body, *tag_parts = line.split(TAG_DELIMITER)
    tags = " ".join(TAG_DELIMITER + part.strip() for part in tag_parts)
    return body.strip(), tags


def extract_quantity(body: str) -> tuple[str, int]:
    """Pull a leading "4 " or "4x " off the body. Defaults to 1."""
    match = QUANTITY_PATTERN.match(body)
    if not match:
        return body, 1

    # "0 Island" still means at least one Island
    quantity = max(int(match.group(1)), 1)
    return body[match.end() :].strip(), quantity


def extract_finish(body: str) -> tuple[str, Finish]:
    """Pull a trailing *F* or *E* marker off the body."""
    match = FINISH_PATTERN.search(body)
    if not match:
        return body, Finish.NONE

    return body[: match.start()].strip(), Finish(match.group(1).upper())


def strip_set_and_collector(body: str) -> str:
    """
    Drop a trailing "(SET) 123" group.

    Round-tripped output carries the printing it was resolved to; that
    printing is discarded so a fresh lookup always happens.
    """
    return SET_AND_COLLECTOR_PATTERN.sub("", body).strip()


def normalize_faces(body: str) -> str:
    """Rewrite single-slash face separators to the canonical " // "."""
    return FACE_SEPARATOR_PATTERN.sub(" // ", body)


def _is_ignorable(line: str) -> bool:
    return line.lower() in SECTION_HEADERS or line.startswith(COMMENT_PREFIX)


def parse_card_line(line: str) -> ParsedRequest | None:
    """
    Parse one line into a ParsedRequest.

    Returns:
        None for blank lines, section headers, comments, and lines that have
        no name left once quantity, finish, set and tags are removed.
    """
    line = line.strip()
    if not line or _is_ignorable(line):
        return None

    body, tags = extract_tags(line)
    body, quantity = extract_quantity(body)
    body, finish = extract_finish(body)
    body = strip_set_and_collector(body)
    name = normalize_faces(body).strip()

    if not name:
        return None

    return ParsedRequest(
        name=name,
        quantity=quantity,
        requested_finish=finish,
        tags=tags,
    )


def parse_card_list(text: str) -> list[ParsedRequest]:
    """
    Parse a multi-line card list.

    Args:
        text: Raw text from the textarea or an uploaded file

    Returns:
        One ParsedRequest per usable line, in input order.
        Empty list if input is empty/whitespace.
    """
    if not text or not text.strip():
        return []

    requests: list[ParsedRequest] = []

    for line in text.splitlines():
        request = parse_card_line(line)
        if request is not None:
            requests.append(request)

    return requests
