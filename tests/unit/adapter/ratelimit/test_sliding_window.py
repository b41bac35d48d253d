"""Unit tests for SlidingWindowRateLimiter."""

import pytest

from tenantlink.adapter.ratelimit import SlidingWindowRateLimiter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(
        max_attempts=3, window_seconds=60, stale_after_seconds=3600, clock=clock
    )


class TestCheck:
    """Tests for check."""

    @pytest.mark.asyncio
    async def test_attempt_over_budget_is_throttled(self, limiter):
        """The (N+1)th attempt inside the window is refused."""
        for _ in range(3):
            assert (await limiter.check("validate-invite:1.2.3.4")).allowed

        decision = await limiter.check("validate-invite:1.2.3.4")

        assert not decision.allowed
        assert decision.retry_after_seconds == 60

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, limiter):
        """One caller's budget doesn't affect another's."""
        for _ in range(3):
            await limiter.check("validate-invite:1.2.3.4")

        assert (await limiter.check("validate-invite:5.6.7.8")).allowed

    @pytest.mark.asyncio
    async def test_window_slides(self, limiter, clock):
        """Attempts older than the window stop counting."""
        await limiter.check("k")
        clock.advance(30)
        await limiter.check("k")
        await limiter.check("k")

        clock.advance(20)
        throttled = await limiter.check("k")
        assert not throttled.allowed
        assert throttled.retry_after_seconds == 10

        clock.advance(10)
        assert (await limiter.check("k")).allowed

    @pytest.mark.asyncio
    async def test_denied_attempts_not_counted(self, limiter, clock):
        """Hammering while throttled doesn't extend the wait."""
        for _ in range(3):
            await limiter.check("k")
        for _ in range(10):
            await limiter.check("k")

        clock.advance(60)

        assert (await limiter.check("k")).allowed

    @pytest.mark.asyncio
    async def test_retry_after_is_at_least_one_second(self, limiter, clock):
        for _ in range(3):
            await limiter.check("k")
        clock.advance(59.9)

        decision = await limiter.check("k")

        assert decision.retry_after_seconds == 1


class TestPurgeStale:
    """Tests for purge_stale."""

    @pytest.mark.asyncio
    async def test_purge_removes_idle_keys_only(self, limiter, clock):
        await limiter.check("old")
        clock.advance(3000)
        await limiter.check("recent")
        clock.advance(700)

        pruned = await limiter.purge_stale()

        assert pruned == 1
        assert await limiter.purge_stale() == 0

    @pytest.mark.asyncio
    async def test_check_forgets_idle_keys_without_external_sweep(self, limiter, clock):
        """Idle callers don't accumulate when purge_stale is never called."""
        for i in range(10_000):
            await limiter.check(f"validate-invite:10.0.{i // 256}.{i % 256}")
        clock.advance(10 * 24 * 3600)

        await limiter.check("validate-invite:192.0.2.1")

        assert await limiter.purge_stale() == 0
        assert list(limiter._attempts) == ["validate-invite:192.0.2.1"]

    @pytest.mark.asyncio
    async def test_inline_sweep_keeps_recently_active_keys(self, limiter, clock):
        await limiter.check("idle")
        await limiter.check("active")
        clock.advance(1800)
        await limiter.check("active")
        clock.advance(1801)

        await limiter.check("other")

        assert set(limiter._attempts) == {"active", "other"}
