"""
Moxfield Line Formatter.

Renders a resolved card as one Moxfield import line:

    <quantity> <name> (<SET>) <collector_number>[ *<finish>*][ <tags>]

Example:
    1 Big Score (SNC) 102 *F* #Card Advantage

The user owns quantity, tags and any finish they asked for. The catalog
owns name, set and collector number. Neither side overwrites the other.
"""

from collections.abc import Iterable

from printfinder.models.card_request import Finish, ParsedRequest
from printfinder.models.printing import PrintingRecord
from printfinder.models.resolution import ResolutionOutcome


def effective_finish(request: ParsedRequest, printing: PrintingRecord) -> Finish:
    """Requested finish if the user gave one, otherwise the printing's default."""
    return printing.finish_for(request.requested_finish)


def format_card_line(
    request: ParsedRequest,
    printing: PrintingRecord,
    finish: Finish | None = None,
) -> str:
    """Format a single resolved card in Moxfield format."""
    if finish is None:
        finish = effective_finish(request, printing)
    finish_suffix = f" *{finish.value}*" if finish is not Finish.NONE else ""
    tags_suffix = f" {request.tags}" if request.tags else ""

    return (
        f"{request.quantity} {printing.name} ({printing.set_code.upper()}) "
        f"{printing.collector_number}{finish_suffix}{tags_suffix}"
    )


def format_outcome(request: ParsedRequest, outcome: ResolutionOutcome) -> str:
    """
    Format a matched outcome, using the finish already settled on it.

    Raises:
        ValueError: If the outcome has no printing
    """
    if outcome.printing is None:
        raise ValueError(f"Cannot format unmatched card '{request.name}'")
    return format_card_line(request, outcome.printing, outcome.effective_finish)


def format_card_list(lines: Iterable[str]) -> str:
    """Join formatted lines for copy or download."""
    return "\n".join(lines)
