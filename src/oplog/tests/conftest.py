"""Shared fixtures: isolated settings, a recording backend and a fake Cloud Logging client."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from oplog import Logger, OplogSettings, Severity, clear_settings_cache
from oplog.foundation.config import RemoteSettings
from oplog.foundation.errors import Fields, format_message


@dataclass
class Emission:
    severity: Severity
    payload: str | dict[str, Any]
    error: BaseException | None = None


@dataclass
class RecordingAdapter:
    """In-memory LoggerAdapter with an adjustable level."""

    level: Severity = Severity.TRACE
    emissions: list[Emission] = field(default_factory=list)
    closed: bool = False

    def is_enabled(self, severity: Severity) -> bool:
        return severity >= self.level

    def log(
        self,
        severity: Severity,
        message: str,
        args: Sequence[object] = (),
        error: BaseException | None = None,
    ) -> None:
        if self.is_enabled(severity):
            self.emissions.append(Emission(severity, format_message(message, args), error))

    def log_fields(self, severity: Severity, fields: Fields, error: BaseException | None = None) -> None:
        if self.is_enabled(severity):
            self.emissions.append(Emission(severity, dict(fields), error))

    def close(self) -> None:
        self.closed = True


class FakeBatch:
    def __init__(self, client: FakeCloudClient, log_name: str) -> None:
        self._client = client
        self._log_name = log_name
        self._pending: list[dict[str, Any]] = []

    def log_struct(self, info: dict[str, Any], **kw: Any) -> None:
        self._pending.append({"log_name": self._log_name, "info": info, **kw})

    def commit(self) -> None:
        if self._client.fail_commit:
            raise ConnectionError("cloud logging unreachable")
        self._client.entries.extend(self._pending)
        self._pending.clear()


class FakeCloudLogger:
    def __init__(self, client: FakeCloudClient, name: str) -> None:
        self._client = client
        self.name = name

    def batch(self) -> FakeBatch:
        return FakeBatch(self._client, self.name)


class FakeCloudClient:
    """In-memory stand-in for google.cloud.logging.Client."""

    def __init__(self, project: str | None = None, credentials: object | None = None) -> None:
        self.project = project
        self.credentials = credentials
        self.entries: list[dict[str, Any]] = []
        self.fail_commit = False
        self.closed = False

    def logger(self, name: str) -> FakeCloudLogger:
        return FakeCloudLogger(self, name)

    def close(self) -> None:
        self.closed = True


@dataclass
class FakeClientFactory:
    """Client factory recording every client it builds."""

    clients: list[FakeCloudClient] = field(default_factory=list)

    def __call__(self, project: str | None, credentials: object | None) -> FakeCloudClient:
        client = FakeCloudClient(project, credentials)
        self.clients.append(client)
        return client

    @property
    def entries(self) -> list[dict[str, Any]]:
        return [e for c in self.clients for e in c.entries]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop OPLOG_* variables and the cached settings around each test."""
    for key in [k for k in os.environ if k.startswith("OPLOG_")]:
        monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> OplogSettings:
    return OplogSettings(_env_file=None)


@pytest.fixture
def remote_settings() -> OplogSettings:
    return OplogSettings(
        _env_file=None,
        use_remote=True,
        remote=RemoteSettings(severity_level="WARN", project_id="test-project"),
    )


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def logger(adapter: RecordingAdapter, settings: OplogSettings) -> Logger:
    return Logger("tests", settings, adapter=adapter)


@pytest.fixture
def client_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def stdlib_logger() -> Iterator[logging.Logger]:
    """A named stdlib logger whose level is restored afterwards."""
    log = logging.getLogger("oplog.tests.local")
    previous = log.level
    yield log
    log.setLevel(previous)
