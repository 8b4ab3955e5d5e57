"""Pruebas del wrapper de reintentos."""

import httpx
import openai
import pytest

from leadbot.conversations.retry import GenerationError, generate_with_retry, is_transient_overload


class Overloaded(Exception):
    status_code = 503


class Flaky:
    """Falla `failures` veces con el error indicado y luego responde."""

    def __init__(self, failures: int, error: Exception | None = None) -> None:
        self.failures = failures
        self.error = error or Overloaded("service unavailable")
        self.calls = 0

    async def __call__(self, prompt: str) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return f"ok:{prompt}"


@pytest.fixture(name="delays")
def fixture_delays() -> list[float]:
    return []


@pytest.fixture(name="sleep")
def fixture_sleep(delays: list[float]):
    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    return fake_sleep


@pytest.mark.parametrize(("failures", "expected_delays"), [(0, []), (1, [1.0]), (2, [1.0, 2.0])])
async def test_retries_transient_overload_then_succeeds(
    failures: int, expected_delays: list[float], delays: list[float], sleep
) -> None:
    call = Flaky(failures)

    result = await generate_with_retry(call, "hola", max_attempts=3, sleep=sleep)

    assert result == "ok:hola"
    assert call.calls == failures + 1
    assert delays == expected_delays


async def test_exhausted_retries_make_exactly_max_attempts_calls(
    delays: list[float], sleep
) -> None:
    call = Flaky(failures=10)

    with pytest.raises(GenerationError) as exc_info:
        await generate_with_retry(call, "hola", max_attempts=4, sleep=sleep)

    assert call.calls == 4
    assert delays == [1.0, 2.0, 4.0]
    assert exc_info.value.reason == "retries_exhausted"
    assert exc_info.value.attempts == 4
    assert isinstance(exc_info.value.__cause__, Overloaded)


async def test_non_retriable_error_short_circuits(delays: list[float], sleep) -> None:
    call = Flaky(failures=1, error=ValueError("bad request"))

    with pytest.raises(GenerationError) as exc_info:
        await generate_with_retry(call, "hola", sleep=sleep)

    assert call.calls == 1
    assert delays == []
    assert exc_info.value.reason == "non_retriable"


async def test_single_attempt_does_not_sleep(delays: list[float], sleep) -> None:
    with pytest.raises(GenerationError):
        await generate_with_retry(Flaky(failures=1), "hola", max_attempts=1, sleep=sleep)
    assert delays == []


async def test_custom_initial_delay_doubles(delays: list[float], sleep) -> None:
    await generate_with_retry(Flaky(failures=2), "x", initial_delay=0.5, sleep=sleep)
    assert delays == [0.5, 1.0]


async def test_rejects_non_positive_attempts(sleep) -> None:
    with pytest.raises(ValueError):
        await generate_with_retry(Flaky(0), "x", max_attempts=0, sleep=sleep)


def _status_error(status: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return openai.APIStatusError("error", response=response, body=None)


def test_openai_status_errors_are_classified_by_status_code() -> None:
    assert is_transient_overload(_status_error(503))
    assert not is_transient_overload(_status_error(500))
    assert not is_transient_overload(_status_error(429))
    assert not is_transient_overload(RuntimeError("boom"))


async def test_rejects_zero_initial_delay(sleep) -> None:
    with pytest.raises(ValueError):
        await generate_with_retry(Flaky(0), "x", initial_delay=0, sleep=sleep)
