"""
Unit tests for HistoricalCacheService.

Tests cover:
- Fresh entries suppress the network call
- Stale entries are refetched and kept as a placeholder on failure
- Compact/full coverage rules
- Daily/monthly compatibility
- Write-back only when strictly newer and only for real series
"""

import pytest

from orion.core.exceptions import ProviderError
from orion.domain.models import OutputSize, SeriesKind, StockHistoricalCacheEntry
from orion.services import HistoricalCacheService

from tests.conftest import (
    HOUR_MS,
    DeterministicStockProvider,
    InMemoryHistoricalCacheRepository,
    daily_payload,
    monthly_payload,
)


def _entry(data, outputsize=OutputSize.COMPACT, fetched_at=0) -> StockHistoricalCacheEntry:
    return StockHistoricalCacheEntry(data=data, outputsize=outputsize, fetched_at=fetched_at)


# =============================================================================
# LOOKUP TESTS
# =============================================================================


class TestLookup:
    """Tests for deciding whether a cache entry can seed a request."""

    def test_missing_entry_returns_none(self, cache_service: HistoricalCacheService):
        assert cache_service.lookup("AAPL", OutputSize.COMPACT) is None

    def test_fresh_entry_is_marked_fresh(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        """
        GIVEN an entry fetched 1 hour ago
        WHEN I look it up with a 24h TTL
        THEN the seed is fresh and no fetch is needed
        """
        cache_repo.put("AAPL", _entry(daily_payload({"2024-01-02": 100.0}), fetched_at=fixed_millis - HOUR_MS))

        seed = cache_service.lookup("AAPL", OutputSize.COMPACT)

        assert seed is not None
        assert seed.is_fresh
        assert not cache_service.needs_fetch(seed)

    def test_entry_at_exact_ttl_is_stale(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put("AAPL", _entry(daily_payload({"2024-01-02": 100.0}), fetched_at=fixed_millis - 24 * HOUR_MS))

        seed = cache_service.lookup("AAPL", OutputSize.COMPACT)

        assert seed is not None
        assert not seed.is_fresh
        assert cache_service.needs_fetch(seed)

    def test_symbol_lookup_is_case_insensitive(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put("AAPL", _entry(daily_payload({"2024-01-02": 100.0}), fetched_at=fixed_millis))

        assert cache_service.lookup("aapl", OutputSize.COMPACT) is not None

    @pytest.mark.parametrize("stored,requested,usable", [
        (OutputSize.COMPACT, OutputSize.COMPACT, True),
        (OutputSize.FULL, OutputSize.COMPACT, True),
        (OutputSize.FULL, OutputSize.FULL, True),
        (OutputSize.COMPACT, OutputSize.FULL, False),
    ])
    def test_output_size_coverage(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
        stored: OutputSize,
        requested: OutputSize,
        usable: bool,
    ):
        """
        GIVEN an entry stored with one output size
        WHEN a request for another size looks it up
        THEN compact requests accept anything and full requests need full
        """
        cache_repo.put("AAPL", _entry(daily_payload({"2024-01-02": 1.0}), outputsize=stored, fetched_at=fixed_millis))

        seed = cache_service.lookup("AAPL", requested)

        assert (seed is not None) is usable

    def test_monthly_entry_cannot_seed_daily_request(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put(
            "AAPL",
            _entry(monthly_payload({"2023-12-29": 95.0}), outputsize=OutputSize.FULL, fetched_at=fixed_millis),
        )

        assert cache_service.lookup("AAPL", OutputSize.FULL, SeriesKind.DAILY) is None
        assert cache_service.lookup("AAPL", OutputSize.FULL, SeriesKind.MONTHLY) is not None

    def test_daily_entry_can_seed_monthly_request(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put(
            "AAPL",
            _entry(daily_payload({"2024-01-02": 100.0}), outputsize=OutputSize.FULL, fetched_at=fixed_millis),
        )

        assert cache_service.lookup("AAPL", OutputSize.FULL, SeriesKind.MONTHLY) is not None

    def test_entry_without_series_is_ignored(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put("AAPL", _entry({"Note": "rate limited"}, fetched_at=fixed_millis))

        assert cache_service.lookup("AAPL", OutputSize.COMPACT) is None


# =============================================================================
# STORE TESTS
# =============================================================================


class TestStore:
    """Tests for write-back of fetched payloads."""

    def test_stores_new_payload(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        data = daily_payload({"2024-01-02": 100.0})

        stored = cache_service.store("aapl", data, OutputSize.COMPACT, fixed_millis)

        assert stored is True
        entry = cache_repo.get("AAPL")
        assert entry.data == data
        assert entry.fetched_at == fixed_millis
        assert entry.outputsize == OutputSize.COMPACT

    def test_does_not_overwrite_newer_or_equal_entry(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        """
        GIVEN an entry fetched at T
        WHEN a payload fetched at T or earlier is stored
        THEN the existing entry is kept
        """
        existing = daily_payload({"2024-01-02": 100.0})
        cache_repo.put("AAPL", _entry(existing, fetched_at=fixed_millis))

        assert cache_service.store("AAPL", daily_payload({"2024-01-02": 1.0}), OutputSize.FULL, fixed_millis) is False
        assert cache_service.store("AAPL", daily_payload({"2024-01-02": 1.0}), OutputSize.FULL, fixed_millis - 1) is False

        assert cache_repo.get("AAPL").data == existing

    def test_strictly_newer_payload_replaces_entry(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put("AAPL", _entry(daily_payload({"2024-01-02": 100.0}), fetched_at=fixed_millis - 1))
        newer = daily_payload({"2024-01-03": 105.0})

        assert cache_service.store("AAPL", newer, OutputSize.FULL, fixed_millis) is True
        assert cache_repo.get("AAPL").data == newer
        assert cache_repo.get("AAPL").outputsize == OutputSize.FULL

    def test_payload_without_series_is_not_cached(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        assert cache_service.store("AAPL", {"Note": "rate limited"}, OutputSize.COMPACT, fixed_millis) is False
        assert cache_repo.puts == []

    def test_compact_payload_does_not_replace_fresh_full_entry(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        """
        GIVEN a full monthly entry fetched 1 hour ago
        WHEN a newer compact daily payload is stored
        THEN the full entry is kept so the year view stays cached
        """
        full = monthly_payload({"2023-12-29": 95.0})
        cache_repo.put("AAPL", _entry(full, outputsize=OutputSize.FULL, fetched_at=fixed_millis - HOUR_MS))

        stored = cache_service.store("AAPL", daily_payload({"2024-01-04": 110.0}), OutputSize.COMPACT, fixed_millis)

        assert stored is False
        assert cache_repo.get("AAPL").data == full
        assert cache_repo.get("AAPL").outputsize == OutputSize.FULL

    def test_compact_payload_replaces_stale_full_entry(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put(
            "AAPL",
            _entry(monthly_payload({"2023-12-29": 95.0}), outputsize=OutputSize.FULL, fetched_at=fixed_millis - 48 * HOUR_MS),
        )
        compact = daily_payload({"2024-01-04": 110.0})

        assert cache_service.store("AAPL", compact, OutputSize.COMPACT, fixed_millis) is True
        assert cache_repo.get("AAPL").data == compact
        assert cache_repo.get("AAPL").outputsize == OutputSize.COMPACT


# =============================================================================
# LOAD TESTS
# =============================================================================


class TestLoadStockHistory:
    """Tests for the sequential lookup/fetch/write-back flow."""

    def test_cache_miss_fetches_and_stores(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        stock_provider: DeterministicStockProvider,
        fixed_millis: int,
    ):
        result = cache_service.load_stock_history("AAPL", OutputSize.COMPACT)

        assert not result.is_error
        assert not result.from_cache
        assert result.fetched_at == fixed_millis
        assert stock_provider.calls == [("AAPL", OutputSize.COMPACT, SeriesKind.DAILY)]
        assert cache_repo.get("AAPL") is not None

    def test_fresh_cache_skips_provider(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        stock_provider: DeterministicStockProvider,
        fixed_millis: int,
    ):
        """
        GIVEN a fresh cache entry
        WHEN history is loaded
        THEN the cached payload is returned without calling the provider
        """
        cached = daily_payload({"2024-01-02": 99.0})
        cache_repo.put("AAPL", _entry(cached, fetched_at=fixed_millis - HOUR_MS))

        result = cache_service.load_stock_history("AAPL", OutputSize.COMPACT)

        assert result.from_cache
        assert result.data == cached
        assert stock_provider.calls == []

    def test_stale_cache_is_returned_when_refetch_fails(
        self,
        cache_repo: InMemoryHistoricalCacheRepository,
        clock,
        fixed_millis: int,
    ):
        """
        GIVEN a stale cache entry and a provider that fails
        WHEN history is loaded
        THEN the stale payload is returned with the error set
        """
        stale = daily_payload({"2024-01-02": 99.0})
        cache_repo.put("AAPL", _entry(stale, fetched_at=fixed_millis - 48 * HOUR_MS))
        service = HistoricalCacheService(
            cache_repo=cache_repo,
            provider=DeterministicStockProvider(failing={"AAPL"}),
            clock=clock,
        )

        result = service.load_stock_history("AAPL", OutputSize.COMPACT)

        assert result.is_error
        assert "Network unavailable" in result.error
        assert result.data == stale
        assert result.from_cache
        assert cache_repo.puts == ["AAPL"]

    def test_stale_cache_is_returned_when_refetch_has_no_series(
        self,
        cache_repo: InMemoryHistoricalCacheRepository,
        clock,
        fixed_millis: int,
    ):
        """
        GIVEN a stale cache entry and a provider answering with a rate-limit note
        WHEN history is loaded
        THEN the stale payload is returned, flagged as an error, and kept in the cache
        """
        stale = daily_payload({"2024-01-01": 50.0})
        cache_repo.put("AAPL", _entry(stale, fetched_at=fixed_millis - 25 * HOUR_MS))
        service = HistoricalCacheService(
            cache_repo=cache_repo,
            provider=DeterministicStockProvider(raw={"AAPL": {"Note": "rate limited"}}),
            clock=clock,
        )

        result = service.load_stock_history("AAPL", OutputSize.COMPACT)

        assert result.is_error
        assert "no time series" in result.error
        assert result.data == stale
        assert result.from_cache
        assert cache_repo.get("AAPL").data == stale

    def test_provider_failure_is_raised_as_provider_error(self, cache_repo, clock):
        service = HistoricalCacheService(
            cache_repo=cache_repo,
            provider=DeterministicStockProvider(failing={"AAPL"}),
            clock=clock,
        )

        with pytest.raises(ProviderError) as exc_info:
            service.fetch("aapl", OutputSize.COMPACT)

        assert exc_info.value.symbol == "AAPL"
        assert exc_info.value.code == "PROVIDER_ERROR"
        assert "Network unavailable" in exc_info.value.message

    def test_failure_without_cache_returns_no_data(self, cache_repo, clock):
        service = HistoricalCacheService(
            cache_repo=cache_repo,
            provider=DeterministicStockProvider(failing={"AAPL"}),
            clock=clock,
        )

        result = service.load_stock_history("AAPL", OutputSize.COMPACT)

        assert result.is_error
        assert result.data is None

    def test_stale_cache_is_replaced_after_successful_refetch(
        self,
        cache_service: HistoricalCacheService,
        cache_repo: InMemoryHistoricalCacheRepository,
        fixed_millis: int,
    ):
        cache_repo.put("AAPL", _entry(daily_payload({"2023-12-01": 1.0}), fetched_at=fixed_millis - 48 * HOUR_MS))

        result = cache_service.load_stock_history("AAPL", OutputSize.COMPACT)

        assert not result.is_error
        assert cache_repo.get("AAPL").fetched_at == fixed_millis
        assert "2024-01-04" in result.data["Time Series (Daily)"]
