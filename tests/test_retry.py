import pytest

from config import settings
from datasources.exceptions import DataSourceUnavailable, InvalidRecord
from datasources.retry import retry


@pytest.mark.asyncio
async def test_retry_async_success_after_failure():
    calls = []

    @retry(attempts=3, delay=0.01, backoff=1, exceptions=(ValueError,))
    async def flaky(x):
        calls.append(x)
        if len(calls) < 2:
            raise ValueError("temporary")
        return x * 2

    result = await flaky(5)
    assert result == 10
    assert len(calls) == 2


def test_retry_sync_success_after_failure():
    calls = []

    @retry(attempts=4, delay=0.01, backoff=1, exceptions=(ValueError,))
    def flaky(x):
        calls.append(x)
        if len(calls) < 3:
            raise ValueError("oops")
        return x + 1

    result = flaky(7)
    assert result == 8
    assert len(calls) == 3


def test_retry_exhausted():
    @retry(attempts=2, delay=0.01, backoff=1, exceptions=(ValueError,))
    def always_fail():
        raise ValueError("nope")

    with pytest.raises(ValueError):
        always_fail()


@pytest.mark.asyncio
async def test_retry_defaults_come_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "source_retry_attempts", 2)
    monkeypatch.setattr(settings, "source_retry_delay", 0)
    calls = []

    @retry()
    async def unavailable():
        calls.append(1)
        raise DataSourceUnavailable("down")

    with pytest.raises(DataSourceUnavailable):
        await unavailable()
    assert len(calls) == 2


def test_retry_ignores_non_transient_errors():
    calls = []

    @retry(attempts=3, delay=0)
    def malformed():
        calls.append(1)
        raise InvalidRecord("bad row")

    with pytest.raises(InvalidRecord):
        malformed()
    assert len(calls) == 1
