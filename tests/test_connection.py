"""Tests for core.connection.ConnectionRetrier."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock, call

import pytest

from core.connection import Connected, ConnectionRetrier, MAX_RETRIES, RETRY_DELAY
from core.exceptions import ConnectionExhaustedError, IdentityAlreadyBoundError


class FetchError(Exception):
    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


def failing_then(identity, failures):
    """Handshake mock failing ``failures`` times before returning ``identity``."""
    effects = [FetchError("timeout", code="ETIMEDOUT") for _ in range(failures)]
    return AsyncMock(side_effect=effects + [identity])


# ─── Construction ─────────────────────────────────────────────────────


class TestConstruction:

    def test_defaults(self):
        retrier = ConnectionRetrier(AsyncMock())
        assert retrier.max_attempts == MAX_RETRIES == 10
        assert retrier.delay == RETRY_DELAY == 5.0

    @pytest.mark.parametrize("max_attempts", [0, -1])
    def test_rejects_less_than_one_attempt(self, max_attempts):
        with pytest.raises(ValueError):
            ConnectionRetrier(AsyncMock(), max_attempts=max_attempts)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError):
            ConnectionRetrier(AsyncMock(), delay=-1)


# ─── Success paths ────────────────────────────────────────────────────


class TestSuccess:

    @pytest.mark.asyncio
    async def test_first_attempt_success_never_sleeps(self, identity, no_sleep, bot_context):
        handshake = AsyncMock(return_value=identity)
        retrier = ConnectionRetrier(handshake, sleep=no_sleep, context=bot_context)

        result = await retrier.connect()

        assert result == Connected(identity=identity, attempts=1)
        assert handshake.await_count == 1
        no_sleep.assert_not_awaited()
        assert bot_context.identity is identity

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_attempts, succeed_on", [(1, 1), (4, 2), (4, 4), (10, 7)])
    async def test_success_on_attempt_k_sleeps_k_minus_one_times(
        self, identity, no_sleep, max_attempts, succeed_on
    ):
        handshake = failing_then(identity, succeed_on - 1)
        retrier = ConnectionRetrier(handshake, max_attempts=max_attempts, delay=2.5, sleep=no_sleep)

        result = await retrier.connect()

        assert result.attempts == succeed_on
        assert handshake.await_count == succeed_on
        assert no_sleep.await_args_list == [call(2.5)] * (succeed_on - 1)

    @pytest.mark.asyncio
    async def test_works_without_context(self, identity, no_sleep):
        retrier = ConnectionRetrier(AsyncMock(return_value=identity), sleep=no_sleep)
        result = await retrier.connect()
        assert result.identity.username == "examplebot"

    @pytest.mark.asyncio
    async def test_second_connect_cannot_rebind_identity(self, identity, no_sleep, bot_context):
        retrier = ConnectionRetrier(AsyncMock(return_value=identity), sleep=no_sleep, context=bot_context)
        await retrier.connect()

        with pytest.raises(IdentityAlreadyBoundError):
            await retrier.connect()
        assert bot_context.identity is identity


# ─── Exhaustion ───────────────────────────────────────────────────────


class TestExhaustion:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_attempts", [1, 3, 5])
    async def test_exhaustion_makes_n_attempts_and_n_minus_one_sleeps(
        self, no_sleep, bot_context, max_attempts
    ):
        handshake = AsyncMock(side_effect=FetchError("timeout", code="ETIMEDOUT"))
        retrier = ConnectionRetrier(
            handshake, max_attempts=max_attempts, delay=0.1, sleep=no_sleep, context=bot_context
        )

        with pytest.raises(ConnectionExhaustedError) as exc_info:
            await retrier.connect()

        assert handshake.await_count == max_attempts
        assert no_sleep.await_count == max_attempts - 1
        assert exc_info.value.attempts == max_attempts
        assert exc_info.value.last_error_detail == "timeout | code: ETIMEDOUT"
        assert not bot_context.is_connected

    @pytest.mark.asyncio
    async def test_last_error_detail_is_from_final_attempt(self, no_sleep):
        handshake = AsyncMock(side_effect=[
            FetchError("timeout", code="ETIMEDOUT"),
            FetchError("Unauthorized"),
        ])
        retrier = ConnectionRetrier(handshake, max_attempts=2, sleep=no_sleep)

        with pytest.raises(ConnectionExhaustedError) as exc_info:
            await retrier.connect()

        assert exc_info.value.last_error_detail == "Unauthorized"
        assert "after 2 attempts" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_every_failure_is_retried_alike(self, identity, no_sleep):
        """Credential errors are not fast-failed."""
        handshake = AsyncMock(side_effect=[PermissionError("Unauthorized"), identity])
        retrier = ConnectionRetrier(handshake, max_attempts=2, sleep=no_sleep)

        result = await retrier.connect()
        assert result.attempts == 2


# ─── Logging scenario ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_two_failures_then_success_scenario(identity, no_sleep, bot_context, caplog):
    handshake = failing_then(identity, 2)
    retrier = ConnectionRetrier(handshake, max_attempts=3, delay=0.1, sleep=no_sleep, context=bot_context)

    with caplog.at_level(logging.INFO, logger="core.connection"):
        result = await retrier.connect()

    failures = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert failures == [
        "Connection attempt 1 failed: timeout | code: ETIMEDOUT",
        "Connection attempt 2 failed: timeout | code: ETIMEDOUT",
    ]
    assert no_sleep.await_args_list == [call(0.1), call(0.1)]
    assert "Connected to Telegram as @examplebot" in caplog.text
    assert "Connecting to Telegram API (attempt 3/3)..." in caplog.text
    assert result.identity.username == "examplebot"
    assert bot_context.identity.username == "examplebot"


@pytest.mark.asyncio
async def test_cancellation_is_not_swallowed(no_sleep):
    handshake = AsyncMock(side_effect=asyncio.CancelledError())
    retrier = ConnectionRetrier(handshake, sleep=no_sleep)

    with pytest.raises(asyncio.CancelledError):
        await retrier.connect()
    no_sleep.assert_not_awaited()
