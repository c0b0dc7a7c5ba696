"""Tests for the Redis counter store and store selection."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from clock_api.adapters.rate_limit.factory import create_counter_store
from clock_api.adapters.rate_limit.in_memory import InMemoryCounterStore
from clock_api.adapters.rate_limit.limiter import FixedWindowRateLimiter
from clock_api.adapters.rate_limit.redis_store import RedisCounterStore
from clock_api.core.config import RedisSettings
from clock_api.core.errors import RateLimitBackendError


@pytest.fixture
def redis_client() -> MagicMock:
    client = MagicMock()
    client.incr = AsyncMock(return_value=1)
    client.pexpire = AsyncMock(return_value=True)
    client.get = AsyncMock(return_value=None)
    client.aclose = AsyncMock()
    return client


class TestRedisCounterStore:
    @pytest.mark.asyncio
    async def test_incr_returns_post_increment_count(self, redis_client: MagicMock) -> None:
        redis_client.incr.return_value = 4
        store = RedisCounterStore(redis_client)

        assert await store.incr("rate_limit:k") == 4
        redis_client.incr.assert_awaited_once_with("rate_limit:k")

    @pytest.mark.asyncio
    async def test_expire_forwards_ttl_in_milliseconds(self, redis_client: MagicMock) -> None:
        store = RedisCounterStore(redis_client)

        await store.expire("rate_limit:k", 9.5)

        redis_client.pexpire.assert_awaited_once_with("rate_limit:k", 9500)

    @pytest.mark.asyncio
    async def test_get_parses_integer(self, redis_client: MagicMock) -> None:
        redis_client.get.return_value = "7"

        assert await RedisCounterStore(redis_client).get("k") == 7

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, redis_client: MagicMock) -> None:
        assert await RedisCounterStore(redis_client).get("k") is None

    @pytest.mark.asyncio
    async def test_get_malformed_value_returns_none(self, redis_client: MagicMock) -> None:
        redis_client.get.return_value = "not-a-number"

        assert await RedisCounterStore(redis_client).get("k") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, command, args",
        [("incr", "incr", ("k",)), ("expire", "pexpire", ("k", 10)), ("get", "get", ("k",))],
    )
    async def test_redis_errors_are_wrapped(
        self, redis_client: MagicMock, method: str, command: str, args: tuple
    ) -> None:
        getattr(redis_client, command).side_effect = RedisConnectionError("refused")
        store = RedisCounterStore(redis_client)

        with pytest.raises(RateLimitBackendError) as exc_info:
            await getattr(store, method)(*args)

        assert exc_info.value.code == "rate_limit_backend_unavailable"
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    @pytest.mark.asyncio
    async def test_close_closes_client(self, redis_client: MagicMock) -> None:
        await RedisCounterStore(redis_client).close()

        redis_client.aclose.assert_awaited_once()

    def test_from_url_uses_token_as_password(self) -> None:
        with patch("clock_api.adapters.rate_limit.redis_store.Redis.from_url") as from_url:
            RedisCounterStore.from_url("redis://cache:6379", token="t0ken", timeout_seconds=2.0)

        from_url.assert_called_once_with(
            "redis://cache:6379",
            password="t0ken",
            decode_responses=True,
            socket_timeout=2.0,
            socket_connect_timeout=2.0,
        )

    @pytest.mark.asyncio
    async def test_limiter_fails_open_when_redis_is_down(self, redis_client: MagicMock, clock) -> None:
        redis_client.incr.side_effect = RedisConnectionError("refused")
        limiter = FixedWindowRateLimiter(RedisCounterStore(redis_client), clock=clock)

        result = await limiter.check("1.2.3.4", limit=5, window_seconds=10)

        assert result.success is True
        assert result.remaining == 4

    @pytest.mark.asyncio
    async def test_limiter_expires_counter_at_window_boundary(self, redis_client: MagicMock, clock) -> None:
        redis_client.incr.side_effect = [1, 2]
        limiter = FixedWindowRateLimiter(RedisCounterStore(redis_client), clock=clock)

        await limiter.check("1.2.3.4", limit=5, window_seconds=30)
        await limiter.check("1.2.3.4", limit=5, window_seconds=30)

        # 1000.5 s to the 1020 s boundary
        redis_client.pexpire.assert_awaited_once_with("rate_limit:1.2.3.4", 19500)


class TestCreateCounterStore:
    def test_redis_selected_when_both_credentials_present(self) -> None:
        cfg = RedisSettings(url="redis://cache:6379", token="secret")

        with patch("clock_api.adapters.rate_limit.redis_store.Redis.from_url"):
            store = create_counter_store(cfg)

        assert isinstance(store, RedisCounterStore)

    @pytest.mark.parametrize(
        "url, token",
        [(None, None), ("redis://cache:6379", None), (None, "secret"), ("", "secret")],
    )
    def test_memory_selected_when_credentials_missing(self, url, token) -> None:
        store = create_counter_store(RedisSettings(url=url, token=token))

        assert isinstance(store, InMemoryCounterStore)
