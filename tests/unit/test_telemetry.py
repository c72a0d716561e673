"""Tests for tracing helpers and telemetry setup."""

import pytest

from backoffice.shared.telemetry import TelemetryConfig, traced


class TestTraced:
    async def test_passes_result_through(self) -> None:
        @traced("test.ok")
        async def op(user_id: int) -> int:
            return user_id * 2

        assert await op(user_id=21) == 42

    async def test_reraises_errors(self) -> None:
        @traced("test.fail")
        async def op() -> None:
            raise LookupError("missing")

        with pytest.raises(LookupError):
            await op()

    def test_rejects_sync_functions(self) -> None:
        with pytest.raises(TypeError):

            @traced()
            def op() -> None:
                return None


def test_instrumentation_is_noop_without_provider() -> None:
    telemetry = TelemetryConfig(service_name="svc", service_version="0")
    telemetry.instrument_logging()
    telemetry.shutdown()
    assert telemetry.tracer_provider is None
