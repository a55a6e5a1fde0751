"""Unit tests for BatchProcessor and batch strategies."""

import asyncio

import httpx
import pytest

from reszip.core.batch import (
    BatchProcessor,
    FetchFailure,
    FetchSuccess,
    ReservationRef,
    partition,
)
from reszip.core.errors import FetchError
from reszip.core.execution import DocumentFetcher
from reszip.core.retry_config import RetryConfig
from reszip.core.session import SessionManager


def refs(count: int, hotel: str = "H1"):
    return [ReservationRef(hotel, str(i)) for i in range(1, count + 1)]


class RecordingFetch:
    """Fake fetch that records calls, sleeps and peak concurrency."""

    def __init__(self, events, failing=()):
        self.events = events
        self.failing = set(failing)
        self.active = 0
        self.peak = 0

    async def __call__(self, ref: ReservationRef) -> bytes:
        self.events.append(("fetch", ref.reservation_id))
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0)
        self.active -= 1
        if ref.reservation_id in self.failing:
            raise FetchError(ref, 3, "HTTP 500: Internal Server Error")
        return b"%PDF-" + ref.label.encode()


class TestPartition:
    """Test group partitioning."""

    def test_partition_sizes(self):
        groups = partition(refs(45), 20)

        assert [len(g) for g in groups] == [20, 20, 5]
        assert groups[2][0].reservation_id == "41"

    def test_partition_empty(self):
        assert partition([], 20) == []

    def test_partition_rejects_zero(self):
        with pytest.raises(ValueError):
            partition(refs(3), 0)


class TestBatchProcessor:
    """Test batch orchestration."""

    @pytest.mark.asyncio
    async def test_groups_run_sequentially_with_delay(self):
        events = []
        fetch = RecordingFetch(events)

        async def sleep(delay):
            events.append(("sleep", delay))

        processor = BatchProcessor(fetch, batch_size=20, inter_batch_delay=0.2, sleep=sleep)
        result = await processor.run(refs(45))

        assert result.groups == 3
        assert result.total == 45
        sleeps = [i for i, e in enumerate(events) if e[0] == "sleep"]
        assert sleeps == [20, 41]
        assert events[20] == ("sleep", 0.2)
        assert len(events) == 47
        assert fetch.peak == 20

    @pytest.mark.asyncio
    async def test_no_delay_after_single_group(self):
        delays = []

        async def sleep(delay):
            delays.append(delay)

        processor = BatchProcessor(RecordingFetch([]), batch_size=20, sleep=sleep)
        await processor.run(refs(20))

        assert delays == []

    @pytest.mark.asyncio
    async def test_failures_become_outcomes(self):
        processor = BatchProcessor(RecordingFetch([], failing={"2", "4"}), batch_size=3, sleep=_no_sleep)

        result = await processor.run(refs(5))

        assert [o.ref.reservation_id for o in result.outcomes] == ["1", "2", "3", "4", "5"]
        assert result.successful == 3
        assert result.failed == 2
        assert result.status == "completed_with_errors"
        assert all(isinstance(o, FetchFailure) for o in result.failures)
        assert result.failures[0].reason == "Failed after 3 attempts: HTTP 500: Internal Server Error"
        assert result.successes[0].filename == "H1-1.pdf"

    @pytest.mark.asyncio
    async def test_all_failed_status(self):
        processor = BatchProcessor(RecordingFetch([], failing={"1"}), sleep=_no_sleep)

        result = await processor.run(refs(1))

        assert result.status == "failed"
        assert result.summary()["failures"][0]["res_id"] == "1"

    @pytest.mark.asyncio
    async def test_empty_input(self):
        processor = BatchProcessor(RecordingFetch([]), sleep=_no_sleep)

        result = await processor.run([])

        assert result.outcomes == []
        assert result.groups == 0
        assert result.timestamp.endswith("+00:00")

    @pytest.mark.asyncio
    async def test_sequential_mode_runs_one_at_a_time(self):
        fetch = RecordingFetch([], failing={"3"})
        processor = BatchProcessor(fetch, batch_size=5, mode="sequential", sleep=_no_sleep)

        result = await processor.run(refs(5))

        assert fetch.peak == 1
        assert result.successful == 4
        assert isinstance(result.outcomes[2], FetchFailure)

    def test_rejects_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown batch mode"):
            BatchProcessor(RecordingFetch([]), mode="threads")


class TestBatchWithBookingSystem:
    """Test the processor against the fake booking system."""

    @pytest.mark.asyncio
    async def test_mid_batch_expiry_relogs_once(self, booking, sleeper):
        client = httpx.AsyncClient(transport=booking.transport())
        sessions = SessionManager(client, "https://pms.test", "frontdesk", "secret", "ACME")
        fetcher = DocumentFetcher(
            client, sessions, "https://pms.test", retry_config=RetryConfig(), sleep=sleeper
        )
        processor = BatchProcessor(fetcher.fetch_document, batch_size=5, sleep=sleeper)
        booking.expire_after = 3

        result = await processor.run(refs(10))

        assert result.successful == 10
        assert booking.login_calls == 2
        # Only the inter-batch pause; no retry backoff was needed
        assert sleeper.delays == [0.2]
        assert all(isinstance(o, FetchSuccess) for o in result.outcomes)

    @pytest.mark.asyncio
    async def test_non_login_redirect_becomes_failure(self, booking, sleeper):
        client = httpx.AsyncClient(transport=booking.transport())
        sessions = SessionManager(client, "https://pms.test", "frontdesk", "secret", "ACME")
        fetcher = DocumentFetcher(
            client, sessions, "https://pms.test", retry_config=RetryConfig(), sleep=sleeper
        )
        processor = BatchProcessor(fetcher.fetch_document, sleep=sleeper)
        booking.documents = {"2": "redirect"}

        result = await processor.run(refs(3))

        assert result.successful == 2
        failure = result.outcomes[1]
        assert isinstance(failure, FetchFailure)
        assert "Failed after 3 attempts" in failure.reason
        assert "HTTP 302" in failure.reason
        assert [c[1] for c in booking.fetch_calls].count("2") == 3


async def _no_sleep(delay):
    return None
