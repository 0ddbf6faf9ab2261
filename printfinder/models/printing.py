from dataclasses import dataclass, field
from datetime import date

from printfinder.models.card_request import Finish

KNOWN_FINISHES = frozenset({"nonfoil", "foil", "etched"})


@dataclass(frozen=True, slots=True)
class PrintingRecord:
    """
    A single printing of a card, as stored in the catalog.

    Attributes:
        name: Canonical card name (e.g., "Fire // Ice")
        set_code: Set code as stored by Scryfall, usually lowercase
        set_name: Human-readable set name
        collector_number: Collector number within the set (may be "290a", "U31")
        released_at: Release date, None when unknown or unreleased
        finishes: Available finishes, subset of nonfoil/foil/etched
        scryfall_id: Scryfall's printing id, when known
    """

    name: str
    set_code: str
    set_name: str
    collector_number: str
    released_at: date | None = None
    finishes: frozenset[str] = field(default_factory=frozenset)
    scryfall_id: str | None = None

    @property
    def default_finish(self) -> Finish:
        """Finish to emit when the user did not ask for one. Foil beats etched."""
        if "foil" in self.finishes:
            return Finish.FOIL
        if "etched" in self.finishes:
            return Finish.ETCHED
        return Finish.NONE

    def finish_for(self, requested: Finish) -> Finish:
        """The finish to render: whatever was requested, else `default_finish`."""
        if requested is not Finish.NONE:
            return requested
        return self.default_finish
