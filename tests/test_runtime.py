from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

import pytest

from linedit.document import Document
from linedit.runtime import EditorSettings, telemetry


@pytest.fixture
def restore_telemetry() -> Iterator[None]:
    yield
    telemetry.configure(config=telemetry.TelemetryConfig())


def test_record_event_emits_structured_record(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="linedit.tests")

    telemetry.record_event(
        "sample", data={"answer": 42}, logger_name="linedit.tests"
    )

    record = caplog.records[-1]
    assert record.getMessage() == "event::sample event=sample answer=42"
    assert record.fields == {"event": "sample", "answer": 42}


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("sample", level="shouting")


def test_span_logs_failure_and_reraises(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="linedit.tests")

    with pytest.raises(RuntimeError):
        with telemetry.span("work", logger_name="linedit.tests", component=True):
            raise RuntimeError("boom")

    failure = caplog.records[-1]
    assert failure.levelno == logging.ERROR
    assert failure.fields["reason"] == "boom"
    assert failure.fields["component"] == "work"


def test_span_logs_expected_errors_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="linedit.tests")

    with pytest.raises(KeyError):
        with telemetry.span(
            "lookup", logger_name="linedit.tests", expected=(KeyError,)
        ):
            raise KeyError("missing")

    record = caplog.records[-1]
    assert record.levelno == logging.DEBUG
    assert record.getMessage().startswith("span::abort")
    assert record.fields["reason"] == "'missing'"
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert not hasattr(telemetry.SpanHandle, "cancel")


def test_span_metadata_can_be_extended() -> None:
    with telemetry.span("work", metadata={"count": 3}) as handle:
        handle.add_metadata("extra", [1, 2])

    assert handle.metadata == {"count": "3", "extra": "[1, 2]"}
    assert handle.elapsed_ms() >= 0


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.TelemetryConfig(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(preset="unknown")


def test_configure_returns_active_config(restore_telemetry: None) -> None:
    config = telemetry.TelemetryConfig(min_level="INFO", console_output=False)

    installed = telemetry.configure(config=config)

    assert installed is config
    assert telemetry.active_config() is config


def test_performance_preset_writes_json_spans(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_telemetry: None
) -> None:
    log_file = tmp_path / "perf.log"
    monkeypatch.setenv("LINEDIT_LOG_FILE", str(log_file))
    telemetry.configure(preset="performance")

    Document(name="perf").insert_end("a")
    for handler in logging.getLogger("linedit").handlers:
        handler.flush()

    entries = [json.loads(line) for line in log_file.read_text().splitlines()]
    spans = [entry for entry in entries if entry.get("span") == "document::insert_end"]
    assert spans
    assert spans[-1]["component"] == "document"
    assert spans[-1]["document"] == "perf"
    assert telemetry.active_config().profiling is True


def test_default_config_reads_environment(
    monkeypatch: pytest.MonkeyPatch, restore_telemetry: None
) -> None:
    monkeypatch.setenv("LINEDIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("LINEDIT_DISABLE_CONSOLE", "1")
    monkeypatch.setenv("LINEDIT_LOG_JSON", "yes")

    telemetry.configure()
    config = telemetry.active_config()

    assert config.min_level == "DEBUG"
    assert config.console_output is False
    assert config.json_format is True
    assert logging.getLogger("linedit").level == logging.DEBUG


def test_settings_from_env() -> None:
    settings = EditorSettings.from_env(
        {
            "LINEDIT_ENCODING": "latin-1",
            "LINEDIT_ATOMIC_SAVE": "off",
            "LINEDIT_PROMPT": ": ",
            "LINEDIT_SHOW_MENU": "0",
        }
    )

    assert settings == EditorSettings(
        encoding="latin-1", atomic_save=False, prompt=": ", show_menu=False
    )
    assert EditorSettings.from_env({}) == EditorSettings()


def test_settings_validate_encoding() -> None:
    with pytest.raises(ValueError):
        EditorSettings.from_env({"LINEDIT_ENCODING": "klingon"})
    with pytest.raises(ValueError):
        EditorSettings().override(encoding="klingon")

    assert EditorSettings().override(encoding=None, prompt="$ ").prompt == "$ "
