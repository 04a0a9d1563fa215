"""Google Cloud Logging sink."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from google.cloud import logging as cloud_logging
from google.cloud.logging_v2.resource import Resource
from google.oauth2 import service_account

from oplog.core import Severity
from oplog.foundation import codec
from oplog.foundation.config import OplogSettings, get_settings
from oplog.foundation.errors import (
    MESSAGE_FIELD,
    STACK_TRACE_FIELD,
    Fields,
    JsonDict,
    format_message,
    format_stack_trace,
)

if TYPE_CHECKING:
    from google.auth.credentials import Credentials

_log = logging.getLogger(__name__)

_GLOBAL_RESOURCE = Resource(type="global", labels={})

CREDENTIALS_WARNING = "an error occurred during initializing cloud logging with service credentials"

ClientFactory = Callable[["str | None", "Credentials | None"], Any]
CredentialsLoader = Callable[[str], "Credentials"]


def _default_client(project: str | None, credentials: Credentials | None) -> cloud_logging.Client:
    return cloud_logging.Client(project=project, credentials=credentials)


@dataclass(slots=True)
class CloudLogAdapter:
    """Send every emission to Cloud Logging as a structured (jsonPayload) entry.

    Enablement is a fixed threshold from `settings.remote.severity_level`,
    matched case-sensitively against Severity names. An unknown name
    disables the adapter entirely.

    Each entry is written through a one-entry batch and committed at once, so
    the call returns after the client library accepted it. Delivery failures
    are dropped: the sink is best-effort and must never break the caller.

    Credentials come from the service account file at
    `settings.remote.credentials_path`. If loading fails, ambient credentials
    are used instead and a WARN entry describing the failure is emitted.

    Args:
        name: Log name in Cloud Logging (usually the module name)
        settings: Settings (default: get_settings())
        client_factory: Builds the Cloud Logging client from (project, credentials)
        credentials_loader: Loads credentials from a key file path

    Example:
        >>> adapter = CloudLogAdapter("billing.invoices")
        >>> adapter.log_fields(Severity.ERROR, {"invoice": "A-17"})
    """

    name: str
    settings: OplogSettings | None = None
    client_factory: ClientFactory = _default_client
    credentials_loader: CredentialsLoader = service_account.Credentials.from_service_account_file
    _threshold: Severity | None = field(default=None, init=False, repr=False)
    _credentials: Credentials | None = field(default=None, init=False, repr=False)
    _client: Any = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()
        self._threshold = Severity.parse(self.settings.remote.severity_level)
        path = self.settings.remote.credentials_path
        if path is None:
            return
        try:
            self._credentials = self.credentials_loader(path)
        except Exception as e:  # noqa: BLE001 - any key file problem falls back to ambient credentials
            self._credentials = None
            self.log(Severity.WARN, CREDENTIALS_WARNING, error=e)

    @property
    def level(self) -> Severity:
        """Configured threshold, capped at INFO (INFO when disabled).

        Operation-log bookkeeping fields are tagged INFO and are filtered
        against this level; they must survive any threshold.
        """
        if self._threshold is None:
            return Severity.INFO
        return min(self._threshold, Severity.INFO)

    def is_enabled(self, severity: Severity) -> bool:
        return self._threshold is not None and severity >= self._threshold

    def log(
        self,
        severity: Severity,
        message: str,
        args: Sequence[object] = (),
        error: BaseException | None = None,
    ) -> None:
        if not self.is_enabled(severity):
            return
        payload: JsonDict = {MESSAGE_FIELD: format_message(message, args)}
        if error is not None:
            payload[STACK_TRACE_FIELD] = format_stack_trace(error)
        self._write(severity, payload)

    def log_fields(self, severity: Severity, fields: Fields, error: BaseException | None = None) -> None:
        if not self.is_enabled(severity):
            return
        payload = dict(fields)
        if error is not None:
            payload[STACK_TRACE_FIELD] = format_stack_trace(error)
        self._write(severity, payload)

    def close(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    def _get_client(self) -> Any:
        """Create the client on first use; concurrent first writes build it once."""
        client = self._client
        if client is None:
            with self._lock:
                if self._client is None:
                    assert self.settings is not None  # Always set in __post_init__
                    self._client = self.client_factory(self.settings.remote.project_id, self._credentials)
                client = self._client
        return client

    def _write(self, severity: Severity, payload: JsonDict) -> None:
        try:
            # Round-trip through JSON so protobuf Struct only sees JSON types
            # (values orjson rejects, such as ints past 64 bits, become strings)
            info = orjson.loads(codec.dumps(payload))
            batch = self._get_client().logger(self.name).batch()
            batch.log_struct(info, severity=severity.cloud_severity, resource=_GLOBAL_RESOURCE)
            batch.commit()
        except Exception as e:  # noqa: BLE001 - delivery is best-effort
            _log.debug("dropped cloud log entry for %s: %s", self.name, e)
