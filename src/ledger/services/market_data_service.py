"""Market data service: concurrent exchange-rate fetching with a TTL cache."""

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor, as_completed, TimeoutError as FuturesTimeoutError
from typing import Callable, Iterable, Optional

from ledger.providers.rate_provider import RateProvider

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_WORKERS = 8


class MarketDataService:
    """
    Fetches rates for pair ids through a provider.

    One provider call per pair runs on a thread pool owned by the service;
    results are joined with a timeout and cached per pair for the TTL. Pairs
    that fail or time out fall back to their last cached value, or are left
    out. Calls still queued at the timeout are cancelled, so a hung provider
    holds at most `max_workers` threads. Call `close()` on shutdown.
    """

    def __init__(
        self,
        provider: RateProvider,
        cache_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._ttl = cache_ttl_seconds
        self._fetch_timeout = fetch_timeout_seconds
        self._max_workers = max(1, max_workers)
        self._clock = clock
        # Cache: pair id -> (rate, cached_at)
        self._cache: dict[str, tuple[float, float]] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="rate-fetch",
        )

    def get_rates(self, pair_ids: Iterable[str]) -> dict[str, float]:
        """
        Return a mapping pair id -> rate for every pair that could be resolved.

        Uses cache when an entry is within TTL; otherwise fetches concurrently.
        """
        keys: list[str] = []
        for pair_id in pair_ids:
            key = (pair_id or "").strip().upper()
            if key and key not in keys:
                keys.append(key)
        if not keys:
            return {}

        now = self._clock()
        result: dict[str, float] = {}
        to_fetch = []
        for key in keys:
            cached = self._cache.get(key)
            if cached is not None and now - cached[1] <= self._ttl:
                result[key] = cached[0]
            else:
                to_fetch.append(key)

        if to_fetch:
            fetched = self._fetch_concurrently(to_fetch)
            fetched_at = self._clock()
            for key in to_fetch:
                if key in fetched:
                    result[key] = fetched[key]
                    self._cache[key] = (fetched[key], fetched_at)
                elif key in self._cache:
                    logger.info("Using stale cached rate for %s", key)
                    result[key] = self._cache[key][0]

        return result

    def get_rate(self, pair_id: str) -> Optional[float]:
        return self.get_rates([pair_id]).get((pair_id or "").strip().upper())

    def clear_cache(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        """Stop the worker pool; queued fetches are cancelled."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _fetch_concurrently(self, keys: list[str]) -> dict[str, float]:
        fetched: dict[str, float] = {}
        futures = {self._executor.submit(self._provider.get_rate, key): key for key in keys}
        try:
            for future in as_completed(futures, timeout=self._fetch_timeout):
                key = futures[future]
                try:
                    rate = future.result()
                except Exception as e:
                    logger.warning("Rate fetch failed for %s: %s", key, e)
                    continue
                if rate is None:
                    logger.debug("No rate available for %s", key)
                    continue
                if isinstance(rate, bool) or not isinstance(rate, (int, float)) or not math.isfinite(rate):
                    logger.warning("Discarding malformed rate for %s: %r", key, rate)
                    continue
                fetched[key] = float(rate)
        except FuturesTimeoutError:
            pending = [k for k in keys if k not in fetched]
            logger.warning(
                "Rate fetch timed out after %.1fs; missing %s",
                self._fetch_timeout,
                ", ".join(pending),
            )
        finally:
            for future in futures:
                future.cancel()
        return fetched
