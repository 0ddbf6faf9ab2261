from dataclasses import dataclass
from enum import Enum


class Finish(str, Enum):
    """Finish marker used by the Moxfield import format."""

    NONE = ""
    FOIL = "F"
    ETCHED = "E"


class SortOrder(str, Enum):
    """Which printing wins when a name has several."""

    OLDEST = "oldest"
    NEWEST = "newest"


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    """
    One card line as the user wrote it.

    Attributes:
        name: Card name; split and double-faced cards use " // " between faces
        quantity: Number of copies, at least 1
        requested_finish: Finish the user asked for, NONE means catalog default
        tags: Verbatim "#Tag" suffix, carried through to the output unchanged
    """

    name: str
    quantity: int = 1
    requested_finish: Finish = Finish.NONE
    tags: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Card request name cannot be empty")
        if self.quantity < 1:
            raise ValueError(f"Quantity for '{self.name}' must be positive")

    def cache_key(self, sort_order: SortOrder) -> tuple[str, SortOrder]:
        """Key under which a resolved printing for this name may be memoized."""
        return (self.name.lower(), sort_order)
