"""Tests for the Logger facade."""

from __future__ import annotations

import pytest

from oplog import CloudLogAdapter, LocalLogAdapter, Logger, LogFormatError, OplogSettings, Severity, create_adapter, get_logger

from .conftest import RecordingAdapter


@pytest.mark.parametrize(
    ("method", "severity"),
    [
        ("trace", Severity.TRACE),
        ("debug", Severity.DEBUG),
        ("info", Severity.INFO),
        ("warn", Severity.WARN),
        ("warning", Severity.WARN),
        ("error", Severity.ERROR),
        ("fatal", Severity.FATAL),
        ("critical", Severity.FATAL),
    ],
)
def test_level_methods_delegate(logger: Logger, adapter: RecordingAdapter, method: str, severity: Severity) -> None:
    getattr(logger, method)("job %s took %dms", "sync", 40)
    getattr(logger, method)({"job": "sync"})

    assert [(e.severity, e.payload) for e in adapter.emissions] == [
        (severity, "job sync took 40ms"),
        (severity, {"job": "sync"}),
    ]


def test_error_keyword_attaches_exception(logger: Logger, adapter: RecordingAdapter) -> None:
    err = OSError("disk")
    logger.error("write failed", error=err)
    logger.warn({"path": "/tmp/x"}, error=err)

    assert [e.error for e in adapter.emissions] == [err, err]


def test_exception_uses_active_exception(logger: Logger, adapter: RecordingAdapter) -> None:
    try:
        raise LookupError("missing")
    except LookupError as e:
        logger.exception("lookup of %s failed", "k1")
        caught = e

    [emission] = adapter.emissions
    assert emission.severity is Severity.ERROR
    assert emission.payload == "lookup of k1 failed"
    assert emission.error is caught


def test_fields_with_positional_args_rejected(logger: Logger) -> None:
    with pytest.raises(TypeError):
        logger.info({"a": 1}, "extra")


def test_format_error_propagates(logger: Logger) -> None:
    with pytest.raises(LogFormatError):
        logger.info("%d items", "many")


def test_disabled_levels_do_not_emit(logger: Logger, adapter: RecordingAdapter) -> None:
    adapter.level = Severity.ERROR
    logger.info("ignored")
    logger.debug({"ignored": True})

    assert adapter.emissions == []
    assert not logger.is_enabled(Severity.WARN)
    assert logger.level is Severity.ERROR
    assert logger.get_level() is Severity.ERROR


def test_close_delegates(logger: Logger, adapter: RecordingAdapter) -> None:
    logger.close()
    assert adapter.closed


def test_adapter_selected_from_settings(settings: OplogSettings, remote_settings: OplogSettings) -> None:
    assert isinstance(create_adapter("svc", settings), LocalLogAdapter)
    assert isinstance(create_adapter("svc", remote_settings), CloudLogAdapter)
    assert isinstance(Logger("svc", remote_settings).adapter, CloudLogAdapter)
    assert isinstance(get_logger("svc", settings).adapter, LocalLogAdapter)


def test_default_settings_come_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPLOG_USE_REMOTE", "true")
    monkeypatch.setenv("OPLOG_REMOTE_SEVERITY_LEVEL", "ERROR")

    log = get_logger("svc")

    assert isinstance(log.adapter, CloudLogAdapter)
    assert log.level is Severity.INFO
    assert not log.is_enabled(Severity.WARN)
    assert log.is_enabled(Severity.ERROR)
