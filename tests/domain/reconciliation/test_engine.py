from __future__ import annotations

import asyncio
from datetime import date

from feastcompare.domain.reconciliation import ReconciliationEngine
from feastcompare.domain.types import (
    AbsentStatus,
    ComparisonState,
    FoundElsewhereStatus,
    PresentStatus,
)
from tests.support.liturgy import FakeDayLookup, FakeSearch, day_of, match

TARGET = date(2025, 6, 25)


def _engine(
    lookup: FakeDayLookup,
    search: FakeSearch,
    *,
    search_concurrency: int = 1,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        day_lookup=lookup,
        search=search,
        search_concurrency=search_concurrency,
    )


def test_identical_descriptions_are_present_in_both_calendars_without_search() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Memorial")), "a")
    lookup.add(day_of("b", TARGET, ("Saint William", "Commemoration")), "b")
    search = FakeSearch()

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b"]))

    assert table.state is ComparisonState.READY
    assert [feast.canonical_name for feast in table.feasts] == ["Saint William"]
    feast = table.feasts[0]
    assert feast.base_calendar_id == "a"
    assert feast.per_calendar_status == {
        "a": PresentStatus(description="Saint William", rank="Memorial", color="white"),
        "b": PresentStatus(description="Saint William", rank="Commemoration", color="white"),
    }
    assert search.calls == []


def test_high_scoring_match_is_found_elsewhere_and_transferred() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Memorial")), "a")
    lookup.add(day_of("b", TARGET, None), "b")
    search = FakeSearch(results={("b", "Saint William"): [match("Saint William", 0.95)]})

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b"]))

    status = table.feasts[0].per_calendar_status["b"]
    assert isinstance(status, FoundElsewhereStatus)
    assert status.transferred is True
    assert status.score == 0.95
    assert search.calls == [("b", "Saint William")]


def test_low_scoring_match_leaves_calendar_absent() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Memorial")), "a")
    lookup.add(day_of("b", TARGET, None), "b")
    search = FakeSearch(results={("b", "Saint William"): [match("Saint Williams", 0.5)]})

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b"]))

    assert table.feasts[0].per_calendar_status["b"] == AbsentStatus()


def test_threshold_score_itself_is_rejected() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Memorial")), "a")
    search = FakeSearch(results={("b", "Saint William"): [match("Saint William", 0.9)]})

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b"]))

    assert isinstance(table.feasts[0].per_calendar_status["b"], AbsentStatus)


def test_saint_x_end_to_end() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("A", TARGET, ("Saint X", "Feast")), "A")
    lookup.add(day_of("B", TARGET, ("Saint Y", "Memorial")), "B")
    search = FakeSearch(
        results={
            ("B", "Saint X"): [
                match("Saint Xavier", 0.4, rank="Feast"),
                match("Saint X", 0.92, rank="Memorial", on="2025-06-24"),
                match("Saint X of Somewhere", 0.92, rank="Solemnity"),
            ],
        }
    )

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["A", "B"]))

    feast = next(feast for feast in table.feasts if feast.canonical_name == "Saint X")
    assert feast.base_calendar_id == "A"
    assert feast.per_calendar_status["A"] == PresentStatus(
        description="Saint X", rank="Feast", color="white"
    )
    assert feast.per_calendar_status["B"] == FoundElsewhereStatus(
        description="Saint X",
        rank="Memorial",
        color="white",
        date="2025-06-24",
        transferred=True,
        rank_changed=True,
        score=0.92,
    )


def test_principal_then_commemorations_and_calendar_order_decide_base() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("b", TARGET, ("Saint Prosper", "Memorial"), ("Saint William", "Comm")), "b")
    lookup.add(day_of("a", TARGET, ("Saint William", "Feast")), "a")

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, ["b", "a"]))

    bases = {feast.canonical_name: feast.base_calendar_id for feast in table.feasts}
    assert bases == {"Saint Prosper": "b", "Saint William": "b"}


def test_every_selected_calendar_has_a_status_in_selection_order() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("c", TARGET, ("Saint William", "Feast")), "c")

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, ["a", "b", "c"]))

    statuses = table.feasts[0].per_calendar_status
    assert list(statuses) == ["a", "b", "c"]
    assert isinstance(statuses["a"], AbsentStatus)
    assert isinstance(statuses["b"], AbsentStatus)
    assert isinstance(statuses["c"], PresentStatus)


def test_ferias_and_sunday_observances_are_not_compared() -> None:
    sunday = date(2025, 6, 29)
    lookup = FakeDayLookup()
    lookup.add(
        day_of(
            "a",
            sunday,
            ("13th Sunday in Ordinary Time", "Sunday"),
            ("BVM on Saturday", "Optional"),
            ("Saints Peter and Paul", "Solemnity"),
        ),
        "a",
    )
    search = FakeSearch()

    table = asyncio.run(_engine(lookup, search).reconcile(sunday, ["a", "b"]))

    assert [feast.canonical_name for feast in table.feasts] == ["Saints Peter and Paul"]
    assert search.calls == [("b", "Saints Peter and Paul")]


def test_failed_lookup_is_reported_and_run_continues() -> None:
    lookup = FakeDayLookup(failing={"b"})
    lookup.add(day_of("a", TARGET, ("Saint William", "Feast")), "a")
    search = FakeSearch(results={("b", "Saint William"): [match("Saint William", 0.99)]})

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b"]))

    assert table.unavailable_calendars == ("b",)
    assert isinstance(table.feasts[0].per_calendar_status["b"], FoundElsewhereStatus)


def test_failed_search_leaves_calendar_absent() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Feast")), "a")
    search = FakeSearch(failing={"b"})

    table = asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b"]))

    assert isinstance(table.feasts[0].per_calendar_status["b"], AbsentStatus)


def test_empty_selection_is_reported_without_lookups() -> None:
    lookup = FakeDayLookup()

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, []))

    assert table.state is ComparisonState.EMPTY_SELECTION
    assert table.feasts == ()
    assert lookup.calls == []


def test_no_worthy_observances_is_nothing_to_compare() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Wednesday of the 12th Week", "Feria")), "a")

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, ["a"]))

    assert table.state is ComparisonState.NOTHING_TO_COMPARE


def test_feasts_are_sorted_by_name() -> None:
    lookup = FakeDayLookup()
    lookup.add(
        day_of("a", TARGET, ("saint Zeno", "Feast"), ("Saint Anne", "Feast"), ("Saint Bede", "X")),
        "a",
    )

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, ["a"]))

    assert [feast.canonical_name for feast in table.feasts] == [
        "Saint Anne",
        "Saint Bede",
        "saint Zeno",
    ]


def test_accented_names_sort_with_their_base_letter() -> None:
    lookup = FakeDayLookup()
    lookup.add(
        day_of(
            "a",
            TARGET,
            ("Saint Zeno", "Feast"),
            ("Saint \N{LATIN CAPITAL LETTER E WITH ACUTE}tienne", "Feast"),
            ("Saint Anne", "Feast"),
        ),
        "a",
    )

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, ["a"]))

    assert [feast.canonical_name for feast in table.feasts] == [
        "Saint Anne",
        "Saint \N{LATIN CAPITAL LETTER E WITH ACUTE}tienne",
        "Saint Zeno",
    ]


def test_duplicate_calendar_ids_are_compared_once() -> None:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Feast")), "a")

    table = asyncio.run(_engine(lookup, FakeSearch()).reconcile(TARGET, ["a", "a"]))

    assert table.calendar_ids == ("a",)
    assert lookup.calls == [("a", TARGET)]


def _scenario() -> tuple[FakeDayLookup, FakeSearch]:
    lookup = FakeDayLookup()
    lookup.add(day_of("a", TARGET, ("Saint William", "Feast"), ("Saint Prosper", "Comm")), "a")
    lookup.add(day_of("b", TARGET, ("Saint Febronia", "Memorial")), "b")
    lookup.add(day_of("c", TARGET, ("Saint William", "Feast")), "c")
    search = FakeSearch(
        results={
            ("b", "Saint William"): [match("Saint William", 0.97, rank="Memorial")],
            ("c", "Saint Febronia"): [match("Saint Febronia", 0.91, on="06-24")],
            ("a", "Saint Febronia"): [match("Saint Febronia", 0.3)],
        },
        delays={("b", "Saint William"): 0.02, ("c", "Saint Febronia"): 0.01},
    )
    return lookup, search


def test_reconcile_is_idempotent() -> None:
    first = asyncio.run(_engine(*_scenario()).reconcile(TARGET, ["a", "b", "c"]))
    second = asyncio.run(_engine(*_scenario()).reconcile(TARGET, ["a", "b", "c"]))

    assert first == second
    assert [list(feast.per_calendar_status) for feast in first.feasts] == [
        ["a", "b", "c"] for _ in first.feasts
    ]


def test_sequential_search_runs_in_feast_then_calendar_order() -> None:
    lookup, search = _scenario()

    asyncio.run(_engine(lookup, search).reconcile(TARGET, ["a", "b", "c"]))

    assert search.calls == [
        ("b", "Saint William"),
        ("b", "Saint Prosper"),
        ("c", "Saint Prosper"),
        ("a", "Saint Febronia"),
        ("c", "Saint Febronia"),
    ]


def test_parallel_search_matches_sequential_result() -> None:
    sequential = asyncio.run(_engine(*_scenario()).reconcile(TARGET, ["a", "b", "c"]))
    parallel = asyncio.run(
        _engine(*_scenario(), search_concurrency=4).reconcile(TARGET, ["a", "b", "c"])
    )

    assert parallel == sequential
