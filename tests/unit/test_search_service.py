"""SearchService unit tests with fake collection adapters."""

from unittest.mock import AsyncMock

import pytest

from esgsearch.application.dtos.search import SearchRequest
from esgsearch.application.use_cases.recent_searches import RecentSearchLog
from esgsearch.application.use_cases.search import SearchService, parse_type_filter
from esgsearch.domain.enums import SearchKind, SearchTypeFilter
from esgsearch.domain.exceptions import SearchUnavailableException, ValidationException
from tests.conftest import TENANT, FakeAdapter, at, candidate


def _adapters(delays: dict[SearchKind, float] | None = None) -> list[FakeAdapter]:
    """One adapter per kind over a small fixed data set that matches 'water'."""
    delays = delays or {}
    data = {
        SearchKind.REPORT: [
            candidate(SearchKind.REPORT, "r1", at(3), title="Water", description=None),
            candidate(SearchKind.REPORT, "r2", at(2), title="Energy", description="water use"),
        ],
        SearchKind.DATA_ENTRY: [
            candidate(SearchKind.DATA_ENTRY, "d1", at(5), metric_name="Water Usage", notes=None),
            candidate(SearchKind.DATA_ENTRY, "d2", at(2), metric_name="Waste", notes="water"),
        ],
        SearchKind.DOCUMENT: [
            candidate(SearchKind.DOCUMENT, "f1", at(2), name="Energy", description="water use"),
        ],
        SearchKind.COMMENT: [
            candidate(SearchKind.COMMENT, "c1", at(2), content="water use"),
        ],
    }
    return [
        FakeAdapter(kind, items, delay=delays.get(kind, 0.0)) for kind, items in data.items()
    ]


def _request(term: str = "water", type_filter=SearchTypeFilter.ALL) -> SearchRequest:
    return SearchRequest(term=term, tenant_id=TENANT, type_filter=type_filter, user_id="u1")


def _ranking(results) -> list[tuple[str, int]]:
    return [(r.id, r.relevance) for r in results]


async def test_results_sorted_by_relevance_then_recency_then_kind(recent_log) -> None:
    svc = SearchService(_adapters(), recent_log)
    results = await svc.search(_request())

    # r1 exact title 200; d1 prefix 100; d2 exact notes 100 but older;
    # r2, f1, c1 all 'water use' prefix at weight 1 on the same day: kind order.
    assert _ranking(results) == [
        ("r1", 200),
        ("d1", 100),
        ("d2", 100),
        ("r2", 50),
        ("f1", 50),
        ("c1", 50),
    ]


async def test_search_is_deterministic(recent_log) -> None:
    svc = SearchService(_adapters(), recent_log)
    first = await svc.search(_request())
    second = await svc.search(_request())
    assert first == second


async def test_completion_order_does_not_change_ranking() -> None:
    """Adapters finishing in reversed kind order give the same output."""
    baseline = await SearchService(_adapters()).search(_request())
    reversed_delays = {
        SearchKind.REPORT: 0.04,
        SearchKind.DATA_ENTRY: 0.03,
        SearchKind.DOCUMENT: 0.02,
        SearchKind.COMMENT: 0.0,
    }
    delayed = await SearchService(_adapters(reversed_delays)).search(_request())
    assert _ranking(delayed) == _ranking(baseline)


async def test_annual_scenario_ranks_report_above_data_entry(recent_log) -> None:
    """Report title substring at weight 2 (50) beats data entry notes substring at weight 1 (25)."""
    adapters = [
        FakeAdapter(
            SearchKind.REPORT,
            [
                candidate(
                    SearchKind.REPORT,
                    "r1",
                    title="2024 Annual Sustainability Report",
                    description=None,
                )
            ],
        ),
        FakeAdapter(
            SearchKind.DATA_ENTRY,
            [
                candidate(
                    SearchKind.DATA_ENTRY,
                    "d1",
                    metric_name="Water Usage",
                    notes="Annual total for 2024",
                )
            ],
        ),
        FakeAdapter(SearchKind.DOCUMENT),
        FakeAdapter(SearchKind.COMMENT),
    ]
    results = await SearchService(adapters, recent_log).search_term("annual", "all", TENANT)
    assert _ranking(results) == [("r1", 50), ("d1", 25)]
    assert [r.kind for r in results] == [SearchKind.REPORT, SearchKind.DATA_ENTRY]


async def test_annual_prefix_title_scores_100(recent_log) -> None:
    adapters = [
        FakeAdapter(
            SearchKind.REPORT,
            [candidate(SearchKind.REPORT, "r1", title="Annual Sustainability Report 2024", description=None)],
        ),
        FakeAdapter(
            SearchKind.DATA_ENTRY,
            [candidate(SearchKind.DATA_ENTRY, "d1", metric_name="Water Usage", notes="Annual total for 2024")],
        ),
    ]
    results = await SearchService(adapters, recent_log).search_term("annual", "all", TENANT)
    assert _ranking(results) == [("r1", 100), ("d1", 25)]
    assert results[0].is_high_relevance
    assert not results[1].is_high_relevance


@pytest.mark.parametrize("term", ["", "   ", "\t\n"])
async def test_empty_term_is_a_no_op(term, recent_log) -> None:
    adapters = _adapters()
    recent_log.record = AsyncMock()
    results = await SearchService(adapters, recent_log).search(_request(term))
    assert results == []
    assert all(a.calls == [] for a in adapters)
    recent_log.record.assert_not_awaited()


async def test_term_is_trimmed_before_search_and_history(recent_log) -> None:
    adapters = _adapters()
    await SearchService(adapters, recent_log, limit_per_kind=7).search(_request("  water  "))
    assert adapters[0].calls == [("water", TENANT, 7)]
    assert await recent_log.list(f"{TENANT}/u1") == ["water"]


async def test_partial_failure_returns_remaining_results(recent_log) -> None:
    adapters = _adapters()
    adapters[2].error = ConnectionError("store unavailable")  # document
    results = await SearchService(adapters, recent_log).search(_request())

    assert results
    assert SearchKind.DOCUMENT not in {r.kind for r in results}
    assert _ranking(results) == [
        ("r1", 200),
        ("d1", 100),
        ("d2", 100),
        ("r2", 50),
        ("c1", 50),
    ]
    assert await recent_log.list(f"{TENANT}/u1") == ["water"]


async def test_adapter_timeout_degrades_like_failure(recent_log) -> None:
    adapters = _adapters({SearchKind.COMMENT: 1.0})
    svc = SearchService(adapters, recent_log, adapter_timeout_seconds=0.05)
    results = await svc.search(_request())
    assert "c1" not in {r.id for r in results}
    assert len(results) == 5


async def test_total_failure_raises_and_leaves_history_untouched(recent_log) -> None:
    adapters = _adapters()
    for adapter in adapters:
        adapter.error = RuntimeError("boom")
    adapters[3].error = None
    adapters[3].delay = 1.0
    svc = SearchService(adapters, recent_log, adapter_timeout_seconds=0.05)

    with pytest.raises(SearchUnavailableException) as exc_info:
        await svc.search(_request())

    exc = exc_info.value
    assert exc.message == "search is currently unavailable"
    assert exc.error_code == "SEARCH_UNAVAILABLE"
    reasons = {f["kind"]: f["reason"] for f in exc.details["failures"]}
    assert reasons["report"] == "boom"
    assert reasons["comment"].startswith("timed out")
    assert await recent_log.list(f"{TENANT}/u1") == []


async def test_single_kind_filter_queries_only_that_adapter(recent_log) -> None:
    adapters = _adapters()
    results = await SearchService(adapters, recent_log).search(
        _request(type_filter=SearchTypeFilter.DOCUMENT)
    )
    assert [r.id for r in results] == ["f1"]
    assert [bool(a.calls) for a in adapters] == [False, False, True, False]


async def test_single_kind_filter_failure_is_total_failure(recent_log) -> None:
    adapters = _adapters()
    adapters[0].error = RuntimeError("down")
    with pytest.raises(SearchUnavailableException):
        await SearchService(adapters, recent_log).search(
            _request(type_filter=SearchTypeFilter.REPORT)
        )


async def test_filter_without_registered_adapter_is_validation_error() -> None:
    svc = SearchService([FakeAdapter(SearchKind.REPORT)])
    with pytest.raises(ValidationException) as exc_info:
        await svc.search(_request(type_filter=SearchTypeFilter.COMMENT))
    assert exc_info.value.details == {"field": "type"}


async def test_history_write_failure_does_not_fail_search() -> None:
    log = AsyncMock(spec=RecentSearchLog)
    log.record.side_effect = RuntimeError("cache down")
    results = await SearchService(_adapters(), log).search(_request())
    assert len(results) == 6
    log.record.assert_awaited_once_with(f"{TENANT}/u1", "water")


async def test_no_matches_is_empty_list_and_still_recorded(recent_log) -> None:
    adapters = [FakeAdapter(kind) for kind in SearchKind]
    results = await SearchService(adapters, recent_log).search_term("zzz", "all", TENANT)
    assert results == []
    assert await recent_log.list(TENANT) == ["zzz"]


def test_parse_type_filter() -> None:
    assert parse_type_filter("all") is SearchTypeFilter.ALL
    assert parse_type_filter("data_entry") is SearchTypeFilter.DATA_ENTRY
    assert parse_type_filter(SearchTypeFilter.COMMENT) is SearchTypeFilter.COMMENT
    with pytest.raises(ValidationException):
        parse_type_filter("reports")
