from datetime import date

import pytest

from printfinder.models.card_request import Finish, ParsedRequest
from printfinder.models.printing import PrintingRecord
from printfinder.models.resolution import LookupResult, ResolutionOutcome
from printfinder.services.moxfield_formatter import (
    effective_finish,
    format_card_line,
    format_card_list,
    format_outcome,
)


def _printing(finishes: set[str], name: str = "Big Score") -> PrintingRecord:
    return PrintingRecord(
        name=name,
        set_code="snc",
        set_name="Streets of New Capenna",
        collector_number="102",
        released_at=date(2022, 4, 29),
        finishes=frozenset(finishes),
    )


class TestEffectiveFinish:
    def test_requested_finish_wins(self) -> None:
        request = ParsedRequest(name="Big Score", requested_finish=Finish.ETCHED)

        assert effective_finish(request, _printing({"foil"})) == Finish.ETCHED

    @pytest.mark.parametrize(
        ("finishes", "expected"),
        [
            ({"nonfoil", "foil", "etched"}, Finish.FOIL),
            ({"nonfoil", "etched"}, Finish.ETCHED),
            ({"nonfoil"}, Finish.NONE),
            (set(), Finish.NONE),
        ],
    )
    def test_falls_back_to_catalog_default(self, finishes: set[str], expected: Finish) -> None:
        request = ParsedRequest(name="Big Score")

        assert effective_finish(request, _printing(finishes)) == expected


class TestFormatCardLine:
    def test_plain_line(self) -> None:
        line = format_card_line(ParsedRequest(name="big score"), _printing({"nonfoil"}))

        assert line == "1 Big Score (SNC) 102"

    def test_full_line(self) -> None:
        request = ParsedRequest(
            name="Big Score",
            quantity=1,
            requested_finish=Finish.FOIL,
            tags="#Card Advantage",
        )

        line = format_card_line(request, _printing({"nonfoil"}))

        assert line == "1 Big Score (SNC) 102 *F* #Card Advantage"

    def test_quantity_comes_from_request(self) -> None:
        line = format_card_line(ParsedRequest(name="Big Score", quantity=7), _printing(set()))

        assert line.startswith("7 Big Score ")

    def test_name_comes_from_catalog(self) -> None:
        """Typos and partial names are replaced by the canonical name."""
        line = format_card_line(ParsedRequest(name="Big"), _printing(set()))

        assert line == "1 Big Score (SNC) 102"

    def test_requested_foil_kept_when_catalog_has_no_foil(self) -> None:
        request = ParsedRequest(name="Big Score", requested_finish=Finish.FOIL)

        assert format_card_line(request, _printing({"nonfoil"})).endswith(" *F*")

    def test_requested_foil_kept_when_catalog_default_is_etched(self) -> None:
        request = ParsedRequest(name="Big Score", requested_finish=Finish.FOIL)

        assert format_card_line(request, _printing({"etched"})).endswith(" *F*")

    def test_catalog_finish_used_when_none_requested(self) -> None:
        line = format_card_line(ParsedRequest(name="Big Score"), _printing({"etched"}))

        assert line == "1 Big Score (SNC) 102 *E*"

    def test_tags_are_final_segment_verbatim(self) -> None:
        request = ParsedRequest(name="Big Score", tags="#Tag1 #Tag2")

        line = format_card_line(request, _printing({"foil"}))

        assert line == "1 Big Score (SNC) 102 *F* #Tag1 #Tag2"
        assert line.endswith(" #Tag1 #Tag2")


class TestFormatOutcome:
    def test_uses_finish_settled_on_outcome(self) -> None:
        request = ParsedRequest(name="Big Score", quantity=2, tags="#Draw")
        outcome = ResolutionOutcome.from_lookup(LookupResult.hit(request, _printing({"etched"})))

        assert format_outcome(request, outcome) == "2 Big Score (SNC) 102 *E* #Draw"

    def test_unmatched_outcome_rejected(self) -> None:
        request = ParsedRequest(name="Nope")
        outcome = ResolutionOutcome.from_lookup(LookupResult.miss(request))

        with pytest.raises(ValueError):
            format_outcome(request, outcome)

    def test_explicit_finish_overrides_derivation(self) -> None:
        line = format_card_line(ParsedRequest(name="Big Score"), _printing({"foil"}), Finish.NONE)

        assert line == "1 Big Score (SNC) 102"


class TestFormatCardList:
    def test_joins_with_newlines(self) -> None:
        assert format_card_list(["1 A (X) 1", "2 B (Y) 2"]) == "1 A (X) 1\n2 B (Y) 2"

    def test_empty(self) -> None:
        assert format_card_list([]) == ""
