"""
Tests for OpenTelemetry setup
"""

from unittest.mock import patch

import pytest

from src.shared_utilities.telemetry import TelemetryManager


@pytest.fixture
def otel_mocks():
    """Patch the SDK pieces so no global provider or exporter is touched."""
    module = "src.shared_utilities.telemetry"
    with (
        patch(f"{module}.otel_trace") as mock_trace,
        patch(f"{module}.TracerProvider") as mock_provider,
        patch(f"{module}.BatchSpanProcessor") as mock_processor,
        patch(f"{module}.OTLPSpanExporter") as mock_exporter,
    ):
        yield {
            "trace": mock_trace,
            "provider": mock_provider,
            "processor": mock_processor,
            "exporter": mock_exporter,
        }


class TestTelemetryManager:
    """Test TelemetryManager setup."""

    def test_registers_global_provider(self, otel_mocks, monkeypatch):
        monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)

        manager = TelemetryManager()

        otel_mocks["trace"].set_tracer_provider.assert_called_once_with(
            otel_mocks["provider"].return_value
        )
        assert manager.provider is otel_mocks["provider"].return_value
        assert manager.tracer is otel_mocks["trace"].get_tracer.return_value
        otel_mocks["exporter"].assert_not_called()

    def test_otlp_exporter_when_endpoint_configured(self, otel_mocks, monkeypatch):
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")

        TelemetryManager()

        otel_mocks["exporter"].assert_called_once_with(
            endpoint="http://collector:4317"
        )
        otel_mocks["processor"].assert_called_once_with(
            otel_mocks["exporter"].return_value
        )
        otel_mocks["provider"].return_value.add_span_processor.assert_called_once_with(
            otel_mocks["processor"].return_value
        )

    def test_trace_operation_marks_errors(self, otel_mocks, monkeypatch):
        monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
        manager = TelemetryManager()
        tracer = otel_mocks["trace"].get_tracer.return_value
        span = tracer.start_as_current_span.return_value.__enter__.return_value

        with pytest.raises(RuntimeError):
            with manager.trace_operation("resolve", {"repo": "acme/widget"}):
                raise RuntimeError("boom")

        span.set_attribute.assert_called_once_with("repo", "acme/widget")
        span.set_status.assert_called_once()
        span.record_exception.assert_called_once()
